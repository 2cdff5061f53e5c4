"""End-to-end tests for the analysis pipeline."""

import httpx
import pytest

from seo_checker.exceptions import FetchError, InternalError
from seo_checker.services.analysis_runner import SeoAnalysisRunner, default_analyzers
from seo_checker.services.analyzers.metadata_analyzer import MetadataAnalyzer
from seo_checker.services.analyzers.vitals import RandomVitalsEstimator
from seo_checker.services.improvements.engine import PRIORITY_RANK
from seo_checker.services.page_fetcher import PageFetcher

from conftest import SCENARIO_A_HEADERS, SCENARIO_A_HTML, SCENARIO_A_TITLE


class BrokenMetadataAnalyzer(MetadataAnalyzer):
    def analyze(self, facts):
        raise RuntimeError("boom")


class BrokenScoringEngine:
    def score(self, results):
        raise ZeroDivisionError("division by zero")


def category(report, key):
    return next(c.score for c in report.categories if c.key == key)


def score_leaves(node, path="report"):
    """Yield (path, value) for every "score" key in a serialized report."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "score":
                yield path, value
            else:
                yield from score_leaves(value, f"{path}.{key}")
    elif isinstance(node, list):
        for i, item in enumerate(node):
            yield from score_leaves(item, f"{path}[{i}]")


# ===========================================================================
# 1. Well-formed page
# ===========================================================================
class TestWellFormedPage:

    async def test_scores(self, runner, scenario_a):
        report = await runner.analyze_document(scenario_a)

        assert report.metadata["title"]["content"] == SCENARIO_A_TITLE
        assert report.metadata["title"]["score"] == 100
        assert report.headings["h1"]["score"] == 100
        assert report.images["summary"]["score"] == 100
        assert report.technical["summary"]["score"] == 100
        assert report.structured_data["summary"]["score"] >= 80
        assert report.overall_score >= 80
        assert report.grade == "excellent"

    async def test_report_shape(self, runner, scenario_a):
        report = await runner.analyze_document(scenario_a)

        assert report.url == "https://example.com/"
        assert report.scoring_version == "1.0"
        assert report.metrics_estimated is True
        assert report.performance["coreWebVitals"]["estimated"] is True
        assert [c.key for c in report.categories] == [
            "content_quality", "technical", "user_experience", "metadata_structure", "social_other",
        ]
        assert len(report.per_analyzer) == 13
        assert all(0 <= c.score <= 100 for c in report.categories)

    async def test_few_improvements(self, runner, scenario_a):
        report = await runner.analyze_document(scenario_a)
        ids = {tip.id for tip in report.improvements}
        assert not {"title-missing", "h1-missing", "ssl-missing", "canonical-missing", "structured-data-missing"} & ids

    async def test_every_score_in_range(self, runner, scenario_a):
        report = await runner.analyze_document(scenario_a)
        leaves = list(score_leaves(report.model_dump(mode="json", by_alias=True)))
        assert len(leaves) > 50
        assert [(path, value) for path, value in leaves if not (isinstance(value, int) and 0 <= value <= 100)] == []


# ===========================================================================
# 2. Minimal page
# ===========================================================================
class TestMinimalPage:

    async def test_scores(self, runner, scenario_b):
        report = await runner.analyze_document(scenario_b)

        assert report.metadata["title"]["exists"] is False
        assert report.metadata["title"]["score"] == 0
        assert report.technical["ssl"]["score"] == 0
        assert report.overall_score < 60
        assert report.grade == "poor"

    async def test_improvements(self, runner, scenario_b):
        report = await runner.analyze_document(scenario_b)
        tips = {tip.id: tip for tip in report.improvements}

        assert tips["title-missing"].priority == "high"
        assert tips["title-missing"].impact == 5
        assert {"ssl-missing", "h1-missing", "description-missing"} <= set(tips)

        keys = [(PRIORITY_RANK[t.priority], -t.impact) for t in report.improvements]
        assert keys == sorted(keys)

    async def test_every_score_in_range(self, runner, scenario_b):
        report = await runner.analyze_document(scenario_b)
        leaves = list(score_leaves(report.model_dump(mode="json", by_alias=True)))
        assert len(leaves) > 50
        assert [(path, value) for path, value in leaves if not (isinstance(value, int) and 0 <= value <= 100)] == []


# ===========================================================================
# 3. Determinism and failure handling
# ===========================================================================
class TestPipeline:

    async def test_same_document_same_report(self, scenario_a):
        runner = SeoAnalysisRunner(estimator=RandomVitalsEstimator(seed=7))
        first = await runner.analyze_document(scenario_a)
        second = await runner.analyze_document(scenario_a)
        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})

    async def test_failed_analyzer_uses_empty_result(self, scenario_a, fixed_estimator):
        analyzers = [a for a in default_analyzers(fixed_estimator) if a.name != "metadata"]
        runner = SeoAnalysisRunner(analyzers=[BrokenMetadataAnalyzer(), *analyzers])

        report = await runner.analyze_document(scenario_a)

        assert report.metadata["summary"]["score"] == 0
        assert "RuntimeError: boom" in report.metadata["summary"]["error"]
        assert report.metadata["title"]["score"] == 0
        assert report.technical["summary"]["score"] == 100
        assert "title-missing" not in {tip.id for tip in report.improvements}

    async def test_engine_failure_is_internal_error(self, runner, scenario_a):
        runner.scoring_engine = BrokenScoringEngine()
        with pytest.raises(InternalError, match="division by zero"):
            await runner.analyze_document(scenario_a)


# ===========================================================================
# 4. Full run through the fetcher
# ===========================================================================
class TestRun:

    def make_runner(self, handler, fixed_estimator):
        fetcher = PageFetcher(transport=httpx.MockTransport(handler), ssrf_check=False)
        return SeoAnalysisRunner(page_fetcher=fetcher, estimator=fixed_estimator)

    async def test_run(self, fixed_estimator):
        # the mock body is not actually brotli-encoded
        headers = {k: v for k, v in SCENARIO_A_HEADERS.items() if k != "content-encoding"}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path in ("/robots.txt", "/sitemap.xml"):
                return httpx.Response(200)
            return httpx.Response(200, html=SCENARIO_A_HTML, headers=headers)

        report = await self.make_runner(handler, fixed_estimator).run("example.com/?utm_source=x")

        assert report.url == "https://example.com/"
        assert report.technical["robotsTxt"]["exists"] is True
        assert report.technical["sitemapXml"]["exists"] is True
        assert report.grade == "excellent"

    async def test_fetch_error_propagates(self, fixed_estimator):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        with pytest.raises(FetchError) as exc_info:
            await self.make_runner(handler, fixed_estimator).run("https://example.com/missing")
        assert exc_info.value.upstream_status == 404
