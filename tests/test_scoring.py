"""Tests for weighted category and overall scoring."""

from dataclasses import fields, replace

import pytest

from seo_checker.services.analyzers.base import SubScore
from seo_checker.services.analyzers.headings_analyzer import HeadingsResult
from seo_checker.services.analyzers.metadata_analyzer import MetadataResult
from seo_checker.services.analyzers.technical_analyzer import TechnicalResult
from seo_checker.services.scoring.engine import ScoringEngine, grade_for
from seo_checker.services.scoring.models import AnalyzerResults
from seo_checker.services.scoring.weights import (
    CATEGORY_WEIGHTS,
    METADATA_WEIGHTS,
    SOCIAL_WEIGHTS,
    TECHNICAL_WEIGHTS,
    USER_EXPERIENCE_WEIGHTS,
)


def score_of(result, key):
    return next(c.score for c in result.categories if c.key == key)


# ===========================================================================
# 1. Weights
# ===========================================================================
class TestWeights:

    @pytest.mark.parametrize("weights", [
        CATEGORY_WEIGHTS, TECHNICAL_WEIGHTS, USER_EXPERIENCE_WEIGHTS, METADATA_WEIGHTS, SOCIAL_WEIGHTS,
    ])
    def test_each_group_sums_to_100(self, weights):
        assert sum(getattr(weights, f.name) for f in fields(weights)) == 100


# ===========================================================================
# 2. Grades
# ===========================================================================
class TestGrades:

    @pytest.mark.parametrize("score, grade", [
        (100, "excellent"), (80, "excellent"), (79, "good"), (60, "good"), (59, "poor"), (0, "poor"),
    ])
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade


# ===========================================================================
# 3. Engine
# ===========================================================================
class TestScoringEngine:

    def test_all_empty_results_score_zero(self):
        result = ScoringEngine().score(AnalyzerResults())
        assert result.overall == 0
        assert result.grade == "poor"
        assert [c.key for c in result.categories] == [
            "content_quality", "technical", "user_experience", "metadata_structure", "social_other",
        ]
        assert result.scoring_version == "1.0"

    def test_technical_category_uses_weights(self):
        results = replace(
            AnalyzerResults(),
            technical=TechnicalResult(
                ssl=SubScore(score=100),
                robots_txt=SubScore(score=100),
                sitemap_xml=SubScore(score=0),
                canonical=SubScore(score=100),
            ),
        )
        result = ScoringEngine().score(results)
        assert score_of(result, "technical") == 75
        # 75 * 25% = 18.75
        assert result.overall == 19

    def test_metadata_category(self):
        results = replace(
            AnalyzerResults(),
            metadata=MetadataResult(title=SubScore(score=90), description=SubScore(score=80)),
            headings=HeadingsResult(h1=SubScore(score=100)),
        )
        result = ScoringEngine().score(results)
        # 36 + 24 + 20 + 0
        assert score_of(result, "metadata_structure") == 80
        assert result.overall == 12

    def test_categories_are_rounded_before_overall(self):
        results = replace(
            AnalyzerResults(),
            metadata=MetadataResult(title=SubScore(score=65)),
        )
        result = ScoringEngine().score(results)
        # 65 * 40% = 26, 26 * 15% = 3.9
        assert score_of(result, "metadata_structure") == 26
        assert result.overall == 4

    def test_overall_stays_in_range(self):
        full = SubScore(exists=True, score=100)
        results = AnalyzerResults()
        for name, result in results.items():
            results = replace(results, **{name: replace(result, **{k: full for k in result.sub_scores()})})
        scored = ScoringEngine().score(results)
        assert scored.overall == 100
        assert scored.grade == "excellent"
        assert all(c.score == 100 for c in scored.categories)

    def test_failed_analyzer_detection(self):
        results = replace(AnalyzerResults(), technical=TechnicalResult(summary=SubScore(details={"error": "x"})))
        assert results.failed("technical") is True
        assert results.failed("metadata") is False
