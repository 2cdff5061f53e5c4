"""
Analyzer building blocks.

Every analyzer is a pure function of ExtractedFacts returning a frozen
result record made of SubScores. Results never reference each other.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable

from pydantic.alias_generators import to_camel


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def mean_score(scores: Iterable[float]) -> int:
    scores = list(scores)
    if not scores:
        return 0
    return clamp_score(sum(scores) / len(scores))


@dataclass(frozen=True)
class SubScore:
    """0-100 rating for one facet of the document."""
    exists: bool = False
    score: int = 0
    details: Dict[str, Any] = field(default_factory=dict)
    
    def __post_init__(self):
        object.__setattr__(self, 'score', clamp_score(self.score))
    
    @classmethod
    def flag(cls, present: bool, **details) -> "SubScore":
        """Boolean probe: 100 when present, 0 otherwise."""
        return cls(exists=present, score=100 if present else 0, details=details)
    
    def to_dict(self) -> Dict[str, Any]:
        return {"exists": self.exists, "score": self.score, **self.details}


@dataclass(frozen=True)
class AnalyzerResult:
    """Base result. `summary` is the analyzer's own 0-100 score."""
    summary: SubScore = field(default_factory=SubScore)
    
    def sub_scores(self) -> Dict[str, SubScore]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if isinstance(getattr(self, f.name), SubScore)
        }
    
    def to_dict(self) -> Dict[str, Any]:
        return {to_camel(name): sub.to_dict() for name, sub in self.sub_scores().items()}


class BaseAnalyzer:
    """Base class for all analyzers.
    
    Subclasses set `name` and `result_type` and implement `analyze`.
    """
    name: str = ""
    result_type = AnalyzerResult
    
    def analyze(self, facts) -> AnalyzerResult:
        raise NotImplementedError
    
    def empty(self, error: str) -> AnalyzerResult:
        """Documented zero state, used when analyze() raised."""
        return self.result_type(summary=SubScore(details={"error": error}))
