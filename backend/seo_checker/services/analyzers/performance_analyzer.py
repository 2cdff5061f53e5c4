"""
Performance Analyzer - estimated Core Web Vitals, caching, compression,
resource count and server timing.

All timing numbers come from the single GET's wall-clock latency and the
vitals estimator; they are estimates and are flagged as such.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score
from seo_checker.services.analyzers.vitals import VitalsEstimate, VitalsEstimator, get_vitals_estimator


# Good / poor thresholds
LCP_GOOD_MS, LCP_POOR_MS = 2500, 4000
FID_GOOD_MS, FID_POOR_MS = 100, 300
CLS_GOOD, CLS_POOR = 0.1, 0.25

AVERAGE_REQUEST_KB = 50
TTFB_LATENCY_FACTOR = 0.3

CDN_HEADERS = ('cf-ray', 'x-cache', 'x-amz-cf-id', 'x-fastly-request-id', 'x-akamai-transformed', 'x-served-by')
CDN_PATTERN = re.compile(r'cloudflare|akamai|fastly|cloudfront|cdn', re.I)
IMAGE_EXTENSIONS = re.compile(r'\.(jpe?g|png|webp|avif)(\?|#|$)', re.I)


@dataclass(frozen=True)
class PerformanceResult(AnalyzerResult):
    core_web_vitals: SubScore = field(default_factory=SubScore)
    caching: SubScore = field(default_factory=SubScore)
    compression: SubScore = field(default_factory=SubScore)
    resources: SubScore = field(default_factory=SubScore)
    server: SubScore = field(default_factory=SubScore)
    optimization: SubScore = field(default_factory=SubScore)


def resource_optimization(meta) -> SubScore:
    """Minified CSS/JS, compressible images and lazy loading, 25 points each."""
    minified_css = any('.min.css' in href.lower() for href in meta.stylesheet_hrefs)
    minified_js = any('.min.js' in src.lower() for src in meta.script_sources)
    compressed_images = any(IMAGE_EXTENSIONS.search(src) for src in meta.image_sources)
    lazy_loading = meta.lazy_loading
    
    score = sum(25 for flag in (minified_css, minified_js, compressed_images, lazy_loading) if flag)
    return SubScore(
        exists=True,
        score=score,
        details={
            "minifiedCss": minified_css,
            "minifiedJs": minified_js,
            "compressedImages": compressed_images,
            "lazyLoading": lazy_loading,
        }
    )


def score_vitals(vitals: VitalsEstimate) -> SubScore:
    score = 100
    if vitals.lcp_ms > LCP_POOR_MS:
        score -= 50
    elif vitals.lcp_ms > LCP_GOOD_MS:
        score -= 30
    
    if vitals.fid_ms > FID_POOR_MS:
        score -= 40
    elif vitals.fid_ms > FID_GOOD_MS:
        score -= 20
    
    if vitals.cls > CLS_POOR:
        score -= 50
    elif vitals.cls > CLS_GOOD:
        score -= 30
    
    return SubScore(
        exists=True,
        score=max(0, score),
        details={
            "lcp": round(vitals.lcp_ms),
            "fid": round(vitals.fid_ms),
            "cls": round(vitals.cls, 3),
            "estimated": vitals.estimated,
        }
    )


def score_caching(facts) -> SubScore:
    browser_cache = bool(facts.header('cache-control') or facts.header('expires'))
    server_cache = bool(facts.header('etag') or facts.header('last-modified'))
    cdn_usage = (
        any(facts.header(name) for name in CDN_HEADERS)
        or bool(CDN_PATTERN.search(facts.header('server') + ' ' + facts.header('via')))
        or bool(CDN_PATTERN.search(facts.final_url))
    )
    
    score = (33 if browser_cache else 0) + (33 if server_cache else 0) + (34 if cdn_usage else 0)
    return SubScore(
        exists=browser_cache or server_cache or cdn_usage,
        score=score,
        details={"browserCache": browser_cache, "serverCache": server_cache, "cdnUsage": cdn_usage}
    )


def score_compression(facts) -> SubScore:
    encoding = facts.header('content-encoding').strip().lower()
    brotli_enabled = encoding == 'br'
    gzip_enabled = encoding == 'gzip'
    
    score = 100 if brotli_enabled else (50 if gzip_enabled else 0)
    return SubScore(
        exists=brotli_enabled or gzip_enabled,
        score=score,
        details={"gzipEnabled": gzip_enabled, "brotliEnabled": brotli_enabled}
    )


def score_resources(meta) -> SubScore:
    css_requests = len(meta.stylesheet_hrefs)
    js_requests = len(meta.script_sources)
    image_requests = len(meta.image_sources)
    total_requests = css_requests + js_requests + image_requests
    total_size_kb = total_requests * AVERAGE_REQUEST_KB
    critical_resources = css_requests + js_requests
    
    score = 100
    if total_requests > 20:
        score -= 20
    if total_requests > 30:
        score -= 30
    if total_size_kb > 1000:
        score -= 20
    if critical_resources > 10:
        score -= 20
    
    return SubScore(
        exists=True,
        score=max(0, score),
        details={
            "totalRequests": total_requests,
            "totalSize": total_size_kb,
            "criticalResources": critical_resources,
            "estimated": True,
        }
    )


def score_server(fetch_latency_ms: float) -> SubScore:
    response_time = fetch_latency_ms
    ttfb = fetch_latency_ms * TTFB_LATENCY_FACTOR
    
    score = 100
    if response_time > 2000:
        score -= 30
    if response_time > 3000:
        score -= 50
    if ttfb > 600:
        score -= 20
    if ttfb > 1000:
        score -= 40
    
    return SubScore(
        exists=True,
        score=max(0, score),
        details={"responseTime": round(response_time), "ttfb": round(ttfb), "estimated": True}
    )


class PerformanceAnalyzer(BaseAnalyzer):
    name = "performance"
    result_type = PerformanceResult
    
    def __init__(self, estimator: Optional[VitalsEstimator] = None):
        self.estimator = estimator or get_vitals_estimator()
    
    def analyze(self, facts) -> PerformanceResult:
        vitals = score_vitals(self.estimator.estimate(facts.fetch_latency_ms))
        caching = score_caching(facts)
        compression = score_compression(facts)
        resources = score_resources(facts.meta)
        server = score_server(facts.fetch_latency_ms)
        
        return PerformanceResult(
            summary=SubScore(
                exists=True,
                score=mean_score([vitals.score, caching.score, compression.score, resources.score, server.score]),
                details={"loadTime": round(facts.fetch_latency_ms), "estimated": True},
            ),
            core_web_vitals=vitals,
            caching=caching,
            compression=compression,
            resources=resources,
            server=server,
            optimization=resource_optimization(facts.meta),
        )
