"""
Improvement rules.

Each rule is a predicate over (facts, results) plus a tip template.
Rules are independent; ordering for presentation happens in the engine.
A rule is skipped when the analyzer it reads from failed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from seo_checker.services.analyzers.base import SubScore
from seo_checker.services.analyzers.metadata_analyzer import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH


@dataclass(frozen=True)
class ImprovementTip:
    """Prioritized, human-readable recommendation."""
    id: str
    category: str
    title: str
    description: str
    priority: str      # high, medium, low
    impact: int        # 1-5
    difficulty: str    # easy, medium, hard
    code: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    id: str
    analyzer: str
    category: str
    title: str
    description: str
    priority: str
    impact: int
    difficulty: str
    when: Callable[[Any, Any], bool]
    code: Optional[str] = None
    context: Optional[Callable[[Any, Any], Dict[str, Any]]] = None
    
    def render(self, facts, results) -> ImprovementTip:
        values = self.context(facts, results) if self.context else {}
        return ImprovementTip(
            id=self.id,
            category=self.category,
            title=self.title,
            description=self.description.format(**values),
            priority=self.priority,
            impact=self.impact,
            difficulty=self.difficulty,
            code=self.code,
        )


def _detail(sub: SubScore, *path: str, default: Any = None) -> Any:
    value: Any = sub.details
    for key in path:
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return value


RULES: List[Rule] = [
    # --- Metadata ---
    Rule(
        id="title-missing", analyzer="metadata", category="meta",
        title="Add a title tag",
        description="The page has no <title>. Search results show it as the clickable headline.",
        priority="high", impact=5, difficulty="easy",
        when=lambda f, r: not r.metadata.title.exists,
        code="<title>Page title - Site name</title>",
    ),
    Rule(
        id="title-too-short", analyzer="metadata", category="meta",
        title="Lengthen the title tag",
        description=f"The title is {{length}} characters. Aim for {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters including your main keyword.",
        priority="high", impact=4, difficulty="easy",
        when=lambda f, r: r.metadata.title.exists and len(f.meta.title) < TITLE_MIN_LENGTH,
        context=lambda f, r: {"length": len(f.meta.title)},
    ),
    Rule(
        id="title-too-long", analyzer="metadata", category="meta",
        title="Shorten the title tag",
        description=f"The title is {{length}} characters and will be truncated in search results. Keep it under {TITLE_MAX_LENGTH}.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: len(f.meta.title) > TITLE_MAX_LENGTH,
        context=lambda f, r: {"length": len(f.meta.title)},
    ),
    Rule(
        id="description-missing", analyzer="metadata", category="meta",
        title="Add a meta description",
        description="The page has no meta description. Search results use it as the snippet under the title.",
        priority="high", impact=4, difficulty="easy",
        when=lambda f, r: not r.metadata.description.exists,
        code='<meta name="description" content="A 120-160 character summary of the page.">',
    ),
    # --- Headings / images ---
    Rule(
        id="h1-missing", analyzer="headings", category="headings",
        title="Add an H1 heading",
        description="The page has no <h1>. Wrap the main page heading in a single H1.",
        priority="high", impact=5, difficulty="easy",
        when=lambda f, r: _detail(r.headings.h1, "count", default=0) == 0,
        code="<h1>Main page heading</h1>",
    ),
    Rule(
        id="h1-duplicated", analyzer="headings", category="headings",
        title="Use a single H1 heading",
        description="The page has {count} H1 headings. Keep exactly one.",
        priority="high", impact=5, difficulty="medium",
        when=lambda f, r: _detail(r.headings.h1, "count", default=0) > 1,
        context=lambda f, r: {"count": _detail(r.headings.h1, "count")},
    ),
    Rule(
        id="image-alt-missing", analyzer="images", category="images",
        title="Add alt text to images",
        description="{count} image(s) have no alt attribute. Describe every meaningful image.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: f.meta.images_total > 0 and f.meta.images_without_alt > 0,
        code='<img src="image.jpg" alt="Description of the image">',
        context=lambda f, r: {"count": f.meta.images_without_alt},
    ),
    # --- Technical ---
    Rule(
        id="canonical-missing", analyzer="technical", category="technical",
        title="Add a canonical URL",
        description="No canonical link was found. Declare the preferred URL to avoid duplicate content.",
        priority="medium", impact=4, difficulty="easy",
        when=lambda f, r: not r.technical.canonical.exists,
        code='<link rel="canonical" href="https://example.com/page" />',
    ),
    Rule(
        id="ssl-missing", analyzer="technical", category="technical",
        title="Serve the page over HTTPS",
        description="The page is not served over HTTPS. Install a TLS certificate and redirect HTTP to HTTPS.",
        priority="high", impact=5, difficulty="medium",
        when=lambda f, r: not r.technical.ssl.exists,
    ),
    Rule(
        id="robots-txt-missing", analyzer="technical", category="technical",
        title="Create a robots.txt file",
        description="No robots.txt was found at the site root. Use it to guide crawlers and point to your sitemap.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not r.technical.robots_txt.exists,
        code="User-agent: *\nAllow: /\nSitemap: https://example.com/sitemap.xml",
    ),
    Rule(
        id="sitemap-xml-missing", analyzer="technical", category="technical",
        title="Create a sitemap.xml file",
        description="No sitemap.xml was found at the site root. A sitemap helps search engines discover every page.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: not r.technical.sitemap_xml.exists,
    ),
    Rule(
        id="doctype-missing", analyzer="technical", category="technical",
        title="Declare the HTML5 doctype",
        description="The document does not start with <!DOCTYPE html>, so browsers may render it in quirks mode.",
        priority="low", impact=2, difficulty="easy",
        when=lambda f, r: not r.technical.html5_doctype.exists,
        code="<!DOCTYPE html>",
    ),
    Rule(
        id="deprecated-tags", analyzer="technical", category="technical",
        title="Remove deprecated HTML tags",
        description="Deprecated tags found: {tags}. Replace them with CSS or semantic elements.",
        priority="low", impact=2, difficulty="medium",
        when=lambda f, r: bool(f.meta.deprecated_tags),
        context=lambda f, r: {"tags": ", ".join(f.meta.deprecated_tags)},
    ),
    Rule(
        id="noindex", analyzer="technical", category="technical",
        title="Allow the page to be indexed",
        description="The robots meta tag contains noindex, so search engines will drop this page from results.",
        priority="high", impact=5, difficulty="easy",
        when=lambda f, r: not r.technical.indexable.exists,
        code='<meta name="robots" content="index, follow">',
    ),
    # --- Social ---
    Rule(
        id="open-graph-missing", analyzer="social", category="social",
        title="Add Open Graph tags",
        description="No Open Graph tags were found. They control the preview when the page is shared.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not r.social.facebook_og.exists,
        code=(
            '<meta property="og:title" content="Page title" />\n'
            '<meta property="og:description" content="Page description" />\n'
            '<meta property="og:image" content="https://example.com/image.jpg" />\n'
            '<meta property="og:url" content="https://example.com/page" />'
        ),
    ),
    Rule(
        id="twitter-card-missing", analyzer="social", category="social",
        title="Add Twitter card tags",
        description="No Twitter card tags were found. Add them for rich previews on X/Twitter.",
        priority="low", impact=2, difficulty="easy",
        when=lambda f, r: not r.social.twitter_card.exists,
        code='<meta name="twitter:card" content="summary_large_image" />',
    ),
    # --- Content ---
    Rule(
        id="thin-content", analyzer="content_quality", category="content",
        title="Expand the page content",
        description="The page has {words} words. Aim for at least 300 words of useful content.",
        priority="high", impact=4, difficulty="medium",
        when=lambda f, r: f.meta.word_count < 300,
        context=lambda f, r: {"words": f.meta.word_count},
    ),
    Rule(
        id="poor-readability", analyzer="content_quality", category="content",
        title="Improve readability",
        description="Sentences are long and complex. Shorter sentences are easier to scan.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: r.content_quality.readability.score < 60,
    ),
    Rule(
        id="introduction-missing", analyzer="content_quality", category="content",
        title="Add an introduction",
        description="The content has no clear introduction or overview at the top.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.content_quality.structure, "hasIntroduction", default=False),
    ),
    Rule(
        id="conclusion-missing", analyzer="content_quality", category="content",
        title="Add a conclusion",
        description="The content has no conclusion or summary at the end.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.content_quality.structure, "hasConclusion", default=False),
    ),
    # --- Regional ---
    Rule(
        id="naver-blog-missing", analyzer="regional_optimization", category="naver",
        title="Link a Naver blog",
        description="No Naver blog presence was found. A Naver blog improves visibility in Naver search.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not r.regional_optimization.naver_blog.exists,
    ),
    Rule(
        id="naver-cafe-missing", analyzer="regional_optimization", category="naver",
        title="Share content in Naver cafes",
        description="No Naver cafe presence was found. Share content in related communities.",
        priority="low", impact=2, difficulty="easy",
        when=lambda f, r: not r.regional_optimization.naver_cafe.exists,
    ),
    # --- Structured data ---
    Rule(
        id="structured-data-missing", analyzer="structured_data", category="structuredData",
        title="Add structured data",
        description="No structured data was found. Add JSON-LD so search engines can show rich results.",
        priority="medium", impact=4, difficulty="medium",
        when=lambda f, r: not r.structured_data.summary.exists,
        code=(
            '<script type="application/ld+json">\n'
            '{\n'
            '  "@context": "https://schema.org",\n'
            '  "@type": "Organization",\n'
            '  "name": "Company name",\n'
            '  "url": "https://example.com"\n'
            '}\n'
            '</script>'
        ),
    ),
    Rule(
        id="structured-data-errors", analyzer="structured_data", category="structuredData",
        title="Fix structured data errors",
        description="Structured data has {count} error(s): {first}",
        priority="high", impact=4, difficulty="medium",
        when=lambda f, r: r.structured_data.summary.exists and bool(_detail(r.structured_data.summary, "errors")),
        context=lambda f, r: {
            "count": len(_detail(r.structured_data.summary, "errors")),
            "first": _detail(r.structured_data.summary, "errors")[0],
        },
    ),
    Rule(
        id="structured-data-quality", analyzer="structured_data", category="structuredData",
        title="Improve structured data quality",
        description="Add the required properties and use the expected value types in your schemas.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: r.structured_data.quality.exists and r.structured_data.quality.score < 70,
    ),
    Rule(
        id="rich-snippets-missing", analyzer="structured_data", category="structuredData",
        title="Add a rich-snippet schema",
        description="None of your schemas supports rich snippets. Consider Product, Review, Recipe, Event or Organization.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: r.structured_data.summary.exists and not r.structured_data.rich_snippets.exists,
    ),
    Rule(
        id="social-schema-missing", analyzer="structured_data", category="structuredData",
        title="Add a social profile schema",
        description="Add an Organization or Person schema with sameAs links to your social profiles.",
        priority="low", impact=2, difficulty="easy",
        when=lambda f, r: r.structured_data.summary.exists and not r.structured_data.social_schema.exists,
    ),
    # --- Security / accessibility ---
    Rule(
        id="security-weak", analyzer="security", category="security",
        title="Strengthen security signals",
        description="Add security headers (HSTS, X-Content-Type-Options, CSP) and link a privacy policy.",
        priority="high", impact=4, difficulty="medium",
        when=lambda f, r: r.security.summary.score < 60,
    ),
    Rule(
        id="accessibility-weak", analyzer="accessibility", category="accessibility",
        title="Improve accessibility",
        description="Add ARIA labels, keyboard focus order and alt text for assistive technology.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: r.accessibility.summary.score < 60,
    ),
    Rule(
        id="lang-missing", analyzer="accessibility", category="accessibility",
        title="Declare the page language",
        description="The <html> element has no lang attribute. Screen readers and search engines use it to pick the language.",
        priority="low", impact=2, difficulty="easy",
        when=lambda f, r: not r.accessibility.page_language.exists,
        code='<html lang="en">',
    ),
    # --- Mobile ---
    Rule(
        id="not-responsive", analyzer="mobile", category="mobile",
        title="Use a responsive layout",
        description="No media queries were found. Adapt the layout to small screens.",
        priority="high", impact=4, difficulty="hard",
        when=lambda f, r: not _detail(r.mobile.summary, "responsive", default=False),
    ),
    Rule(
        id="viewport-missing", analyzer="mobile", category="mobile",
        title="Add a viewport meta tag",
        description="No viewport meta tag was found, so mobile browsers render a zoomed-out desktop page.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.mobile.summary, "viewport", default=False),
        code='<meta name="viewport" content="width=device-width, initial-scale=1.0">',
    ),
    Rule(
        id="slow-mobile-load", analyzer="mobile", category="mobile",
        title="Speed up mobile loading",
        description="The page took {ms} ms to load. Keep mobile load time under 2 seconds.",
        priority="high", impact=5, difficulty="medium",
        when=lambda f, r: f.fetch_latency_ms > 2000,
        context=lambda f, r: {"ms": round(f.fetch_latency_ms)},
    ),
    Rule(
        id="touch-targets", analyzer="mobile", category="mobile",
        title="Enlarge touch targets",
        description="Buttons and links should be at least 48px so they are easy to tap.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.mobile.usability, "touchTargets", "buttonSize", default=False),
        code=".button { min-width: 48px; min-height: 48px; }",
    ),
    Rule(
        id="font-size", analyzer="mobile", category="mobile",
        title="Increase the base font size",
        description="Use at least 16px body text so it is readable on phones.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.mobile.usability, "readability", "fontSize", default=False),
        code="body { font-size: 16px; }",
    ),
    Rule(
        id="image-scaling", analyzer="mobile", category="mobile",
        title="Make images scale",
        description="Images should shrink to fit small screens.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: not _detail(r.mobile.content, "imageScaling", default=False),
        code="img { max-width: 100%; height: auto; }",
    ),
    Rule(
        id="interstitials", analyzer="mobile", category="mobile",
        title="Remove intrusive interstitials",
        description="Popups and modals were detected. They hurt the mobile experience and mobile rankings.",
        priority="high", impact=4, difficulty="medium",
        when=lambda f, r: not _detail(r.mobile.technical, "noInterstitials", default=True),
    ),
    # --- Performance ---
    Rule(
        id="slow-page", analyzer="performance", category="performance",
        title="Improve page load time",
        description="The page took {ms} ms to load, over the 2 second target.",
        priority="high", impact=4, difficulty="medium",
        when=lambda f, r: f.fetch_latency_ms > 2000,
        context=lambda f, r: {"ms": round(f.fetch_latency_ms)},
    ),
    Rule(
        id="lcp-slow", analyzer="performance", category="performance",
        title="Improve Largest Contentful Paint",
        description="Estimated LCP is {lcp} ms, over the 2500 ms target.",
        priority="high", impact=5, difficulty="medium",
        when=lambda f, r: _detail(r.performance.core_web_vitals, "lcp", default=0) > 2500,
        context=lambda f, r: {"lcp": _detail(r.performance.core_web_vitals, "lcp")},
    ),
    Rule(
        id="fid-slow", analyzer="performance", category="performance",
        title="Improve First Input Delay",
        description="Estimated FID is {fid} ms, over the 100 ms target.",
        priority="medium", impact=4, difficulty="hard",
        when=lambda f, r: _detail(r.performance.core_web_vitals, "fid", default=0) > 100,
        context=lambda f, r: {"fid": _detail(r.performance.core_web_vitals, "fid")},
    ),
    Rule(
        id="cls-high", analyzer="performance", category="performance",
        title="Reduce Cumulative Layout Shift",
        description="Estimated CLS is {cls}, over the 0.1 target.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: _detail(r.performance.core_web_vitals, "cls", default=0) > 0.1,
        context=lambda f, r: {"cls": _detail(r.performance.core_web_vitals, "cls")},
    ),
    Rule(
        id="css-not-minified", analyzer="performance", category="performance",
        title="Minify CSS",
        description="Stylesheets are not minified. Minify them at build time.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: bool(f.meta.stylesheet_hrefs)
        and not _detail(r.performance.optimization, "minifiedCss", default=False),
    ),
    Rule(
        id="js-not-minified", analyzer="performance", category="performance",
        title="Minify JavaScript",
        description="Scripts are not minified. Minify them at build time.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: bool(f.meta.script_sources)
        and not _detail(r.performance.optimization, "minifiedJs", default=False),
    ),
    Rule(
        id="lazy-loading-missing", analyzer="performance", category="performance",
        title="Lazy-load images",
        description="Images load eagerly. Add loading=\"lazy\" to images below the fold.",
        priority="medium", impact=3, difficulty="easy",
        when=lambda f, r: f.meta.images_total > 0
        and not _detail(r.performance.optimization, "lazyLoading", default=False),
        code='<img src="image.jpg" loading="lazy" alt="Description">',
    ),
    Rule(
        id="browser-cache-missing", analyzer="performance", category="performance",
        title="Enable browser caching",
        description="The response has no Cache-Control or Expires header.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: not _detail(r.performance.caching, "browserCache", default=False),
        code="Cache-Control: public, max-age=31536000",
    ),
    Rule(
        id="compression-disabled", analyzer="performance", category="performance",
        title="Enable compression",
        description="The response is not compressed. Enable Brotli or gzip on the server.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: not r.performance.compression.exists,
    ),
    Rule(
        id="too-many-requests", analyzer="performance", category="performance",
        title="Reduce HTTP requests",
        description="The page references {count} resources. Bundle or remove what you can.",
        priority="medium", impact=3, difficulty="medium",
        when=lambda f, r: _detail(r.performance.resources, "totalRequests", default=0) > 20,
        context=lambda f, r: {"count": _detail(r.performance.resources, "totalRequests")},
    ),
    Rule(
        id="slow-ttfb", analyzer="performance", category="performance",
        title="Improve Time to First Byte",
        description="Estimated TTFB is {ttfb} ms, over the 600 ms target.",
        priority="high", impact=4, difficulty="hard",
        when=lambda f, r: _detail(r.performance.server, "ttfb", default=0) > 600,
        context=lambda f, r: {"ttfb": _detail(r.performance.server, "ttfb")},
    ),
]
