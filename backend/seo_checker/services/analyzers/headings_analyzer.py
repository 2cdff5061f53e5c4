"""
Headings Analyzer - h1/h2/h3 presence and counts.
"""

from dataclasses import dataclass, field
from typing import Tuple

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


@dataclass(frozen=True)
class HeadingsResult(AnalyzerResult):
    h1: SubScore = field(default_factory=SubScore)
    h2: SubScore = field(default_factory=SubScore)
    h3: SubScore = field(default_factory=SubScore)


def score_h1(headings: Tuple[str, ...]) -> SubScore:
    # A second h1 is a defect, not a bonus
    count = len(headings)
    if count == 1:
        score = 100
    elif count == 0:
        score = 0
    else:
        score = 20
    return SubScore(exists=count > 0, score=score, details={"count": count, "content": list(headings)})


def score_subheading(headings: Tuple[str, ...]) -> SubScore:
    count = len(headings)
    if count >= 2:
        score = 100
    elif count == 1:
        score = 50
    else:
        score = 0
    return SubScore(exists=count > 0, score=score, details={"count": count, "content": list(headings)})


class HeadingsAnalyzer(BaseAnalyzer):
    name = "headings"
    result_type = HeadingsResult
    
    def analyze(self, facts) -> HeadingsResult:
        h1 = score_h1(facts.meta.heading_texts('h1'))
        h2 = score_subheading(facts.meta.heading_texts('h2'))
        h3 = score_subheading(facts.meta.heading_texts('h3'))
        
        deeper = {level: len(facts.meta.heading_texts(level)) for level in ('h4', 'h5', 'h6')}
        return HeadingsResult(
            summary=SubScore(
                exists=h1.exists or h2.exists or h3.exists,
                score=mean_score([h1.score, h2.score, h3.score]),
                details={"deeperCounts": deeper},
            ),
            h1=h1,
            h2=h2,
            h3=h3,
        )
