"""Shared pytest fixtures for the SEO checker test suite."""

import pytest

from seo_checker.services.analysis_runner import SeoAnalysisRunner
from seo_checker.services.analyzers.vitals import FixedVitalsEstimator
from seo_checker.services.extractor import Extractor
from seo_checker.services.page_fetcher import PageFetcher, RawDocument


SCENARIO_A_TITLE = "Acme Widgets: Durable Tools for Professionals"

SCENARIO_A_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Acme Widgets: Durable Tools for Professionals</title>
  <meta name="description" content="Acme builds durable widgets and hand tools for professionals. Browse our catalog, compare models and order online with free shipping today.">
  <meta name="keywords" content="widgets, tools, hardware">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://example.com/">
  <link rel="stylesheet" href="/static/styles.min.css">
  <meta property="og:title" content="Acme Widgets">
  <meta property="og:image" content="https://example.com/og.jpg">
  <meta name="twitter:card" content="summary_large_image">
  <style>
    body { font-size: 16px; line-height: 1.5; color: #333333; }
    header { position: sticky; top: 0; }
    button { min-height: 48px; padding: 12px; }
    img { max-width: 100%; }
    @media (max-width: 600px) { nav { display: none; } }
  </style>
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Organization", "name": "Acme", "url": "https://example.com", "logo": "https://example.com/logo.png"}
  </script>
  <script src="/static/app.min.js"></script>
</head>
<body>
  <header>
    <button class="hamburger" aria-label="Open menu" tabindex="0">Menu</button>
    <nav class="breadcrumb" aria-label="Breadcrumb"><a href="/">Home</a></nav>
  </header>
  <main>
    <h1>Durable widgets for every job</h1>
    <p>Introduction. We make widgets. They last for years.</p>
    <h2>Our range</h2>
    <p>Every widget is tested. Each one ships fast.</p>
    <h2>Materials</h2>
    <p>We use steel. We use brass. Both resist rust.</p>
    <h3>Care</h3>
    <p>Clean them often. Oil the joints.</p>
    <h3>Warranty</h3>
    <p>All tools carry a warranty. Claims are simple.</p>
    <p>Updated <time datetime="2026-01-15">January 2026</time>.</p>
    <img src="/img/1.jpg" alt="Widget one" loading="lazy">
    <img src="/img/2.jpg" alt="Widget two" loading="lazy">
    <img src="/img/3.jpg" alt="Widget three" loading="lazy">
    <img src="/img/4.jpg" alt="Widget four" loading="lazy">
    <img src="/img/5.jpg" alt="Widget five" loading="lazy">
    <img src="/img/6.jpg" alt="Widget six" loading="lazy">
    <img src="/img/7.jpg" alt="Widget seven" loading="lazy">
    <img src="/img/8.jpg" alt="Widget eight" loading="lazy">
    <img src="/img/9.jpg" alt="Widget nine" loading="lazy">
    <img src="/img/10.jpg" alt="Widget ten" loading="lazy">
    <div class="video-responsive"><video src="/demo.mp4"></video></div>
    <div class="table-responsive"><table><tr><td>Size</td></tr></table></div>
    <p>Summary. Good tools save time.</p>
  </main>
  <footer>
    <a href="/privacy">Privacy Policy</a>
    <a href="/terms">Terms of Service</a>
    <a href="https://www.facebook.com/acme">Facebook</a>
  </footer>
</body>
</html>
"""

SCENARIO_A_HEADERS = {
    "content-type": "text/html; charset=utf-8",
    "content-encoding": "br",
    "cache-control": "public, max-age=600",
    "etag": '"abc123"',
    "cf-ray": "8a1b2c3d4e5f-ICN",
    "strict-transport-security": "max-age=31536000",
    "x-content-type-options": "nosniff",
}

SCENARIO_B_HTML = """<html>
<head><meta charset="utf-8"></head>
<body>
  <p>Hello world.</p>
</body>
</html>
"""


@pytest.fixture()
def make_document():
    """Factory for RawDocument with sensible defaults (HTTPS, both probes present)."""
    def _make(
        html: str,
        url: str = "https://example.com/",
        final_url: str = None,
        headers: dict = None,
        latency_ms: float = 120.0,
        robots: bool = True,
        sitemap: bool = True,
    ) -> RawDocument:
        return RawDocument(
            url=url,
            final_url=final_url or url,
            html=html,
            headers=headers or {},
            fetch_latency_ms=latency_ms,
            robots_txt_exists=robots,
            sitemap_xml_exists=sitemap,
        )
    return _make


@pytest.fixture()
def extract(make_document):
    """Run the extractor over an HTML string."""
    extractor = Extractor()
    
    def _extract(html: str, **kwargs):
        return extractor.extract(make_document(html, **kwargs))
    return _extract


@pytest.fixture()
def page():
    """Wrap head/body snippets in a minimal HTML5 document."""
    def _page(head: str = "", body: str = "", doctype: bool = True) -> str:
        prefix = "<!DOCTYPE html>\n" if doctype else ""
        return f"{prefix}<html lang=\"en\"><head>{head}</head><body>{body}</body></html>"
    return _page


@pytest.fixture()
def fixed_estimator():
    """Deterministic vitals: FID 50ms, CLS 0.05 (both inside the good band)."""
    return FixedVitalsEstimator(fid_ms=50.0, cls=0.05)


@pytest.fixture()
def runner(fixed_estimator):
    return SeoAnalysisRunner(page_fetcher=PageFetcher(ssrf_check=False), estimator=fixed_estimator)


@pytest.fixture()
def scenario_a(make_document):
    return make_document(SCENARIO_A_HTML, headers=SCENARIO_A_HEADERS)


@pytest.fixture()
def scenario_b(make_document):
    return make_document(SCENARIO_B_HTML, url="http://example.com/", robots=False, sitemap=False)
