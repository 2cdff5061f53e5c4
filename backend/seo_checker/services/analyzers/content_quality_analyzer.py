"""
Content Quality Analyzer - readability, keyword density, structure,
multimedia and freshness of the visible text.
"""

import re
from collections import Counter
from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')
INTRO_RE = re.compile(r'소개|개요|서론|intro|introduction|overview', re.I)
CONCLUSION_RE = re.compile(r'결론|마무리|요약|conclusion|summary', re.I)
SECTION_WINDOW = 500
TOP_KEYWORDS = 5


@dataclass(frozen=True)
class ContentQualityResult(AnalyzerResult):
    readability: SubScore = field(default_factory=SubScore)
    keyword_density: SubScore = field(default_factory=SubScore)
    structure: SubScore = field(default_factory=SubScore)
    multimedia: SubScore = field(default_factory=SubScore)
    freshness: SubScore = field(default_factory=SubScore)


def score_readability(text: str) -> SubScore:
    sentences = [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]
    if not sentences:
        return SubScore(exists=False, score=70, details={"level": "medium", "averageSentenceLength": 0})
    
    avg_length = sum(len(s.split()) for s in sentences) / len(sentences)
    if avg_length < 15:
        level, score = "easy", 90
    elif avg_length > 25:
        level, score = "hard", 50
    else:
        level, score = "medium", 70
    
    return SubScore(
        exists=True,
        score=score,
        details={"level": level, "averageSentenceLength": round(avg_length, 1)}
    )


def score_keyword_density(text: str) -> SubScore:
    frequencies = Counter(word for word in text.lower().split() if len(word) > 2)
    top = frequencies.most_common(TOP_KEYWORDS)
    return SubScore(
        exists=bool(top),
        score=80 if top else 40,
        details={"mainKeywords": [word for word, _ in top], "density": dict(top)}
    )


def score_structure(text: str, paragraph_count: int, word_count: int) -> SubScore:
    has_introduction = bool(INTRO_RE.search(text[:SECTION_WINDOW]))
    has_conclusion = bool(CONCLUSION_RE.search(text[-SECTION_WINDOW:]))
    
    score = (30 if has_introduction else 0) + (30 if has_conclusion else 0) + (40 if paragraph_count > 5 else 20)
    return SubScore(
        exists=paragraph_count > 0,
        score=score,
        details={
            "hasIntroduction": has_introduction,
            "hasConclusion": has_conclusion,
            "paragraphCount": paragraph_count,
            "averageParagraphLength": round(word_count / paragraph_count, 1) if paragraph_count else 0,
        }
    )


class ContentQualityAnalyzer(BaseAnalyzer):
    name = "content_quality"
    result_type = ContentQualityResult
    
    def analyze(self, facts) -> ContentQualityResult:
        meta = facts.meta
        text = meta.text_content
        
        readability = score_readability(text)
        keyword_density = score_keyword_density(text)
        structure = score_structure(text, meta.paragraph_count, meta.word_count)
        multimedia = SubScore(
            exists=bool(meta.images_total or meta.video_count or meta.iframe_count),
            score=min(100, meta.images_total * 10 + meta.video_count * 20 + meta.iframe_count * 15),
            details={"images": meta.images_total, "videos": meta.video_count, "embeds": meta.iframe_count},
        )
        # 80 is the baseline when the page carries no date at all
        freshness = SubScore(
            exists=meta.has_date_signal,
            score=100 if meta.has_date_signal else 80,
            details={"hasDate": meta.has_date_signal},
        )
        
        parts = [readability, keyword_density, structure, multimedia, freshness]
        return ContentQualityResult(
            summary=SubScore(
                exists=meta.word_count > 0,
                score=mean_score(part.score for part in parts),
                details={"wordCount": meta.word_count},
            ),
            readability=readability,
            keyword_density=keyword_density,
            structure=structure,
            multimedia=multimedia,
            freshness=freshness,
        )
