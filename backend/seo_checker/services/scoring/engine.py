"""
Scoring Engine - combines analyzer sub-scores into five weighted
categories and one overall score.

    sub-scores -> category (rounded) -> overall (rounded, clamped 0-100)
"""

from dataclasses import dataclass, field
from typing import List

from seo_checker.logger import logger
from seo_checker.services.analyzers.base import clamp_score, mean_score
from seo_checker.services.scoring.models import AnalyzerResults, WeightedCategory
from seo_checker.services.scoring.weights import (
    CATEGORY_WEIGHTS,
    METADATA_WEIGHTS,
    SCORING_VERSION,
    SOCIAL_WEIGHTS,
    TECHNICAL_WEIGHTS,
    USER_EXPERIENCE_WEIGHTS,
)


GRADE_EXCELLENT = 80
GRADE_GOOD = 60


@dataclass(frozen=True)
class ScoringResult:
    """Complete scoring result."""
    overall: int
    grade: str
    categories: List[WeightedCategory] = field(default_factory=list)
    scoring_version: str = SCORING_VERSION


def _weighted(*pairs) -> int:
    """Sum of score x weight% for (score, weight) pairs, rounded."""
    return clamp_score(sum(score * weight for score, weight in pairs) / 100)


def grade_for(score: int) -> str:
    if score >= GRADE_EXCELLENT:
        return "excellent"
    if score >= GRADE_GOOD:
        return "good"
    return "poor"


class ScoringEngine:
    """Two-level weighted aggregation over analyzer results."""
    
    def score(self, results: AnalyzerResults) -> ScoringResult:
        """Compute category scores and the overall score.
        
        Args:
            results: one result per analyzer
            
        Returns:
            ScoringResult with five categories, overall score and grade
        """
        categories = [
            WeightedCategory(
                key="content_quality",
                label="Content Quality",
                score=self._content_quality(results),
                weight=CATEGORY_WEIGHTS.content_quality,
                description="Readability, keyword density, structure, multimedia and freshness",
            ),
            WeightedCategory(
                key="technical",
                label="Technical SEO",
                score=self._technical(results),
                weight=CATEGORY_WEIGHTS.technical,
                description="HTTPS, robots.txt, sitemap.xml and canonical URL",
            ),
            WeightedCategory(
                key="user_experience",
                label="User Experience",
                score=self._user_experience(results),
                weight=CATEGORY_WEIGHTS.user_experience,
                description="Estimated Core Web Vitals, performance and mobile optimization",
            ),
            WeightedCategory(
                key="metadata_structure",
                label="Metadata & Structure",
                score=self._metadata_structure(results),
                weight=CATEGORY_WEIGHTS.metadata_structure,
                description="Title, meta description, H1 and image alt text",
            ),
            WeightedCategory(
                key="social_other",
                label="Social & Other",
                score=self._social_other(results),
                weight=CATEGORY_WEIGHTS.social_other,
                description="Open Graph, Twitter card, structured data, security and accessibility",
            ),
        ]
        
        overall = clamp_score(sum(c.score * c.weight for c in categories) / 100)
        grade = grade_for(overall)
        
        logger.info(
            f"Scores - Overall: {overall} ({grade}) | "
            + " | ".join(f"{c.label}: {c.score}" for c in categories)
        )
        return ScoringResult(overall=overall, grade=grade, categories=categories)
    
    def _content_quality(self, r: AnalyzerResults) -> int:
        cq = r.content_quality
        return mean_score([
            cq.readability.score,
            cq.keyword_density.score,
            cq.structure.score,
            cq.multimedia.score,
            cq.freshness.score,
        ])
    
    def _technical(self, r: AnalyzerResults) -> int:
        w = TECHNICAL_WEIGHTS
        t = r.technical
        return _weighted(
            (t.ssl.score, w.ssl),
            (t.robots_txt.score, w.robots_txt),
            (t.sitemap_xml.score, w.sitemap_xml),
            (t.canonical.score, w.canonical),
        )
    
    def _user_experience(self, r: AnalyzerResults) -> int:
        w = USER_EXPERIENCE_WEIGHTS
        return _weighted(
            (r.performance.summary.score, w.performance),
            (r.mobile.summary.score, w.mobile),
        )
    
    def _metadata_structure(self, r: AnalyzerResults) -> int:
        w = METADATA_WEIGHTS
        return _weighted(
            (r.metadata.title.score, w.title),
            (r.metadata.description.score, w.description),
            (r.headings.h1.score, w.h1),
            (r.images.summary.score, w.images),
        )
    
    def _social_other(self, r: AnalyzerResults) -> int:
        w = SOCIAL_WEIGHTS
        return _weighted(
            (r.social.facebook_og.score, w.open_graph),
            (r.social.twitter_card.score, w.twitter_card),
            (r.structured_data.summary.score, w.structured_data),
            (r.security.summary.score, w.security),
            (r.accessibility.summary.score, w.accessibility),
        )
