"""Tests for the improvement rule table and tip ordering."""

from dataclasses import replace

import pytest

from seo_checker.services.analysis_runner import default_analyzers
from seo_checker.services.analyzers.base import SubScore
from seo_checker.services.analyzers.technical_analyzer import TechnicalAnalyzer
from seo_checker.services.improvements.engine import ImprovementEngine, sort_tips
from seo_checker.services.improvements.rules import RULES, ImprovementTip, Rule
from seo_checker.services.scoring.models import AnalyzerResults


def analyze_all(facts, estimator) -> AnalyzerResults:
    return AnalyzerResults(**{a.name: a.analyze(facts) for a in default_analyzers(estimator)})


def tip(id, priority, impact) -> ImprovementTip:
    return ImprovementTip(
        id=id, category="meta", title=id, description=id,
        priority=priority, impact=impact, difficulty="easy",
    )


@pytest.fixture()
def tips_for(extract, fixed_estimator):
    def _tips(html, **kwargs):
        facts = extract(html, **kwargs)
        return {t.id: t for t in ImprovementEngine().generate(facts, analyze_all(facts, fixed_estimator))}
    return _tips


# ===========================================================================
# 1. Ordering
# ===========================================================================
class TestSortTips:

    def test_priority_then_impact(self):
        tips = [tip("a", "low", 5), tip("b", "high", 3), tip("c", "medium", 4), tip("d", "high", 5)]
        assert [t.id for t in sort_tips(tips)] == ["d", "b", "c", "a"]

    def test_equal_keys_keep_input_order(self):
        tips = [tip("first", "medium", 3), tip("second", "medium", 3), tip("third", "medium", 3)]
        assert [t.id for t in sort_tips(tips)] == ["first", "second", "third"]

    def test_empty(self):
        assert sort_tips([]) == []


# ===========================================================================
# 2. Rule table
# ===========================================================================
class TestRuleTable:

    def test_ids_are_unique(self):
        ids = [rule.id for rule in RULES]
        assert len(ids) == len(set(ids))

    def test_rules_are_well_formed(self):
        analyzers = {name for name, _ in AnalyzerResults().items()}
        for rule in RULES:
            assert rule.priority in ("high", "medium", "low"), rule.id
            assert 1 <= rule.impact <= 5, rule.id
            assert rule.difficulty in ("easy", "medium", "hard"), rule.id
            assert rule.analyzer in analyzers, rule.id

    def test_no_rules_no_tips(self, extract, page, fixed_estimator):
        facts = extract(page())
        assert ImprovementEngine(rules=[]).generate(facts, analyze_all(facts, fixed_estimator)) == []


# ===========================================================================
# 3. Rule triggers
# ===========================================================================
class TestRuleTriggers:

    def test_missing_title_is_high_impact(self, tips_for, page):
        tips = tips_for(page())
        assert tips["title-missing"].priority == "high"
        assert tips["title-missing"].impact == 5
        assert "title-too-short" not in tips

    def test_short_title_reports_length(self, tips_for, page):
        tips = tips_for(page(head="<title>Widgets</title>"))
        assert "title-missing" not in tips
        assert "The title is 7 characters" in tips["title-too-short"].description

    def test_duplicated_h1(self, tips_for, page):
        tips = tips_for(page(body="<h1>A</h1><h1>B</h1>"))
        assert "h1-missing" not in tips
        assert tips["h1-duplicated"].description == "The page has 2 H1 headings. Keep exactly one."

    def test_image_alt(self, tips_for, page):
        tips = tips_for(page(body='<img src="a.png"><img src="b.png" alt="b">'))
        assert tips["image-alt-missing"].description.startswith("1 image(s)")
        assert "lazy-loading-missing" in tips

    def test_resource_tips_need_resources(self, tips_for, page):
        tips = tips_for(page())
        assert "css-not-minified" not in tips
        assert "js-not-minified" not in tips
        assert "lazy-loading-missing" not in tips

    def test_unminified_resources(self, tips_for, page):
        tips = tips_for(page(head='<link rel="stylesheet" href="/site.css"><script src="/app.js"></script>'))
        assert "css-not-minified" in tips
        assert "js-not-minified" in tips

    def test_structured_data_follow_ups_need_a_schema(self, tips_for, page):
        tips = tips_for(page())
        assert "structured-data-missing" in tips
        assert "structured-data-errors" not in tips
        assert "rich-snippets-missing" not in tips

    def test_structured_data_errors(self, tips_for, page):
        head = '<script type="application/ld+json">{"@type": "Article", "headline": "x"}</script>'
        tips = tips_for(page(head=head))
        assert "structured-data-missing" not in tips
        assert tips["structured-data-errors"].description == (
            "Structured data has 1 error(s): Article: missing required property: author"
        )
        assert "rich-snippets-missing" in tips
        assert "social-schema-missing" not in tips

    def test_slow_page(self, tips_for, page):
        tips = tips_for(page(), latency_ms=4000)
        assert tips["slow-page"].description == "The page took 4000 ms to load, over the 2 second target."
        assert "slow-mobile-load" in tips
        assert tips["slow-ttfb"].description == "Estimated TTFB is 1200 ms, over the 600 ms target."
        # LCP estimate is capped at the threshold
        assert "lcp-slow" not in tips

    def test_fast_page(self, tips_for, page):
        tips = tips_for(page(), latency_ms=300)
        assert not {"slow-page", "slow-mobile-load", "slow-ttfb", "fid-slow", "cls-high"} & set(tips)

    def test_deprecated_tags_listed(self, tips_for, page):
        tips = tips_for(page(body="<center>x</center><marquee>y</marquee>"))
        assert tips["deprecated-tags"].description.startswith("Deprecated tags found: center, marquee.")

    def test_noindex(self, tips_for, page):
        assert "noindex" not in tips_for(page())
        tip = tips_for(page(head='<meta name="robots" content="noindex">'))["noindex"]
        assert tip.priority == "high"
        assert tip.impact == 5

    def test_missing_lang(self, tips_for, page):
        assert "lang-missing" not in tips_for(page())
        tip = tips_for("<html><head></head><body></body></html>")["lang-missing"]
        assert tip.priority == "low"
        assert tip.code == '<html lang="en">'

    def test_output_is_sorted(self, tips_for, page):
        tips = list(tips_for(page()).values())
        assert tips == sort_tips(tips)


# ===========================================================================
# 4. Failed analyzers
# ===========================================================================
class TestFailedAnalyzer:

    def test_rules_for_failed_analyzer_are_skipped(self, extract, page, fixed_estimator):
        facts = extract(page(), url="http://example.com/", robots=False, sitemap=False)
        results = analyze_all(facts, fixed_estimator)
        ids = {t.id for t in ImprovementEngine().generate(facts, results)}
        assert {"ssl-missing", "robots-txt-missing", "canonical-missing"} <= ids

        failed = replace(results, technical=TechnicalAnalyzer().empty("technical: RuntimeError: boom"))
        ids = {t.id for t in ImprovementEngine().generate(facts, failed)}
        assert not {"ssl-missing", "robots-txt-missing", "canonical-missing", "doctype-missing"} & ids
        assert "title-missing" in ids

    def test_custom_rule(self, extract, page, fixed_estimator):
        rule = Rule(
            id="always", analyzer="metadata", category="meta", title="Always",
            description="Score is {score}", priority="low", impact=1, difficulty="easy",
            when=lambda f, r: True,
            context=lambda f, r: {"score": r.metadata.summary.score},
        )
        facts = extract(page())
        results = replace(AnalyzerResults(), metadata=replace(AnalyzerResults().metadata, summary=SubScore(score=42)))
        [generated] = ImprovementEngine(rules=[rule]).generate(facts, results)
        assert generated.description == "Score is 42"
