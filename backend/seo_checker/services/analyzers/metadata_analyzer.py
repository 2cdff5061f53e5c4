"""
Metadata Analyzer - title, meta description and meta keywords.
"""

from dataclasses import dataclass, field
from typing import List

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160


@dataclass(frozen=True)
class MetadataResult(AnalyzerResult):
    title: SubScore = field(default_factory=SubScore)
    description: SubScore = field(default_factory=SubScore)
    keywords: SubScore = field(default_factory=SubScore)


def keyword_terms(keywords: str) -> List[str]:
    return [term.strip() for term in keywords.split(',') if term.strip()]


def _contains_keyword(text: str, terms: List[str]) -> bool:
    lowered = text.lower()
    return any(term.lower() in lowered for term in terms)


def _length_points(length: int, min_length: int, max_length: int) -> int:
    """50 inside the inclusive band, 25 when short, 10 when long."""
    if min_length <= length <= max_length:
        return 50
    if length < min_length:
        return 25
    return 10


def score_title(title: str, terms: List[str]) -> SubScore:
    if not title:
        return SubScore(exists=False, score=0, details={"length": 0, "maxLength": TITLE_MAX_LENGTH})
    
    score = 40 + _length_points(len(title), TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)
    has_keyword = _contains_keyword(title, terms)
    if has_keyword:
        score += 10
    
    return SubScore(
        exists=True,
        score=min(score, 100),
        details={
            "content": title,
            "length": len(title),
            "maxLength": TITLE_MAX_LENGTH,
            "containsKeyword": has_keyword,
        }
    )


def score_description(description: str, terms: List[str]) -> SubScore:
    if not description:
        return SubScore(exists=False, score=0, details={"length": 0, "maxLength": DESCRIPTION_MAX_LENGTH})
    
    score = 30 + _length_points(len(description), DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH)
    has_keyword = _contains_keyword(description, terms)
    if has_keyword:
        score += 20
    
    return SubScore(
        exists=True,
        score=min(score, 100),
        details={
            "content": description,
            "length": len(description),
            "maxLength": DESCRIPTION_MAX_LENGTH,
            "containsKeyword": has_keyword,
        }
    )


def score_keywords(keywords: str) -> SubScore:
    if not keywords:
        return SubScore(exists=False, score=0)
    
    terms = keyword_terms(keywords)
    score = 40 + (40 if 3 <= len(terms) <= 10 else 20)
    return SubScore(exists=True, score=score, details={"content": keywords, "count": len(terms)})


class MetadataAnalyzer(BaseAnalyzer):
    name = "metadata"
    result_type = MetadataResult
    
    def analyze(self, facts) -> MetadataResult:
        terms = keyword_terms(facts.meta.keywords)
        title = score_title(facts.meta.title, terms)
        description = score_description(facts.meta.description, terms)
        keywords = score_keywords(facts.meta.keywords)
        
        return MetadataResult(
            summary=SubScore(
                exists=title.exists or description.exists,
                score=mean_score([title.score, description.score, keywords.score]),
            ),
            title=title,
            description=description,
            keywords=keywords,
        )
