"""
Mobile Analyzer - responsive design, mobile load time, usability,
content scaling and mobile-specific technical signals.

CSS checks run over <style> bodies and inline style attributes; naming
checks run over class and id tokens.
"""

import re
from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score
from seo_checker.services.analyzers.performance_analyzer import resource_optimization


BUTTON_SIZE_RE = re.compile(r'(min-width|min-height|width|height):\s*4[0-9]px', re.I)
LINK_SPACING_RE = re.compile(r'(padding|margin):\s*[0-9]+px', re.I)
FONT_SIZE_RE = re.compile(r'font-size:\s*(1[6-9]|[2-9][0-9])px', re.I)
LINE_HEIGHT_RE = re.compile(r'line-height:\s*(1\.[2-9]|[2-9][0-9]%)', re.I)
COLOR_RE = re.compile(r'color:\s*(#[0-9a-f]{6}|rgb\()', re.I)
STICKY_RE = re.compile(r'position:\s*(sticky|fixed)', re.I)
IMAGE_SCALING_RE = re.compile(r'max-width:\s*100%|width:\s*100%|object-fit', re.I)
OVERFLOW_X_RE = re.compile(r'overflow-x:\s*(scroll|auto)', re.I)
TABLE_SCROLL_RE = re.compile(r'overflow-x:\s*auto', re.I)
PROPER_VIEWPORT_RE = re.compile(r'width\s*=\s*device-width|initial-scale', re.I)


@dataclass(frozen=True)
class MobileResult(AnalyzerResult):
    performance: SubScore = field(default_factory=SubScore)
    usability: SubScore = field(default_factory=SubScore)
    content: SubScore = field(default_factory=SubScore)
    technical: SubScore = field(default_factory=SubScore)


def _has_token(tokens, *needles: str) -> bool:
    return any(needle in token for token in tokens for needle in needles)


def load_time_score(load_time_ms: float) -> int:
    if load_time_ms > 3000:
        return 20
    if load_time_ms > 2000:
        return 40
    if load_time_ms > 1000:
        return 60
    if load_time_ms > 500:
        return 80
    return 100


def _points(flags, weights) -> int:
    return sum(weight for flag, weight in zip(flags, weights) if flag)


class MobileAnalyzer(BaseAnalyzer):
    name = "mobile"
    result_type = MobileResult
    
    def analyze(self, facts) -> MobileResult:
        meta = facts.meta
        css = meta.style_text
        
        responsive = '@media' in css.lower() or any(media.strip() for media in meta.link_media)
        viewport = bool(meta.viewport)
        touch_friendly = 'touch-action' in css.lower()
        
        performance = self._performance(facts)
        usability = self._usability(css, meta.class_tokens)
        content = self._content(css, meta.class_tokens)
        technical = self._technical(css, meta)
        
        return MobileResult(
            summary=SubScore(
                exists=responsive or viewport,
                score=mean_score([performance.score, usability.score, content.score, technical.score]),
                details={"responsive": responsive, "viewport": viewport, "touchFriendly": touch_friendly},
            ),
            performance=performance,
            usability=usability,
            content=content,
            technical=technical,
        )
    
    def _performance(self, facts) -> SubScore:
        optimization = resource_optimization(facts.meta)
        load_score = load_time_score(facts.fetch_latency_ms)
        return SubScore(
            exists=True,
            score=mean_score([load_score, optimization.score]),
            details={
                "loadTime": round(facts.fetch_latency_ms),
                "loadTimeScore": load_score,
                "optimization": optimization.to_dict(),
            }
        )
    
    def _usability(self, css: str, tokens) -> SubScore:
        button_size = bool(BUTTON_SIZE_RE.search(css))
        link_spacing = bool(LINK_SPACING_RE.search(css))
        touch_targets = _points((button_size, link_spacing), (50, 50))
        
        font_size = bool(FONT_SIZE_RE.search(css))
        line_height = bool(LINE_HEIGHT_RE.search(css))
        color_contrast = bool(COLOR_RE.search(css))
        readability = _points((font_size, line_height, color_contrast), (33, 33, 34))
        
        hamburger_menu = _has_token(tokens, 'hamburger', 'menu-toggle', 'nav-toggle')
        sticky_header = bool(STICKY_RE.search(css))
        breadcrumbs = _has_token(tokens, 'breadcrumb', 'bread-crumb')
        navigation = _points((hamburger_menu, sticky_header, breadcrumbs), (33, 33, 34))
        
        return SubScore(
            exists=True,
            score=mean_score([touch_targets, readability, navigation]),
            details={
                "touchTargets": {"score": touch_targets, "buttonSize": button_size, "linkSpacing": link_spacing},
                "readability": {
                    "score": readability,
                    "fontSize": font_size,
                    "lineHeight": line_height,
                    "colorContrast": color_contrast,
                },
                "navigation": {
                    "score": navigation,
                    "hamburgerMenu": hamburger_menu,
                    "stickyHeader": sticky_header,
                    "breadcrumbs": breadcrumbs,
                },
            }
        )
    
    def _content(self, css: str, tokens) -> SubScore:
        text_size = bool(FONT_SIZE_RE.search(css))
        image_scaling = bool(IMAGE_SCALING_RE.search(css))
        video_responsive = any(
            'video' in token and ('responsive' in token or 'fluid' in token) for token in tokens
        ) or _has_token(tokens, 'embed-responsive')
        table_responsive = any(
            'table' in token and 'responsive' in token for token in tokens
        ) or bool(TABLE_SCROLL_RE.search(css))
        
        flags = (text_size, image_scaling, video_responsive, table_responsive)
        return SubScore(
            exists=True,
            score=_points(flags, (25, 25, 25, 25)),
            details={
                "textSize": text_size,
                "imageScaling": image_scaling,
                "videoResponsive": video_responsive,
                "tableResponsive": table_responsive,
            }
        )
    
    def _technical(self, css: str, meta) -> SubScore:
        no_interstitials = not _has_token(meta.class_tokens, 'popup', 'modal', 'interstitial')
        no_horizontal_scroll = not OVERFLOW_X_RE.search(css)
        proper_meta_tags = bool(PROPER_VIEWPORT_RE.search(meta.viewport))
        amp_support = meta.has_amp
        
        flags = (no_interstitials, no_horizontal_scroll, proper_meta_tags, amp_support)
        return SubScore(
            exists=True,
            score=_points(flags, (25, 25, 25, 25)),
            details={
                "noInterstitials": no_interstitials,
                "noHorizontalScroll": no_horizontal_scroll,
                "properMetaTags": proper_meta_tags,
                "ampSupport": amp_support,
            }
        )
