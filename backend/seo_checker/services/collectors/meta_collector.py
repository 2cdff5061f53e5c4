"""
Meta Collector - Extract structural facts from a parsed HTML tree.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple
from bs4 import BeautifulSoup, Doctype


DEPRECATED_TAGS = (
    'applet', 'basefont', 'center', 'dir', 'font', 'isindex', 'strike',
    'big', 'tt', 'frame', 'frameset', 'noframes', 'acronym', 'bgsound',
    'listing', 'nextid', 'spacer', 'xmp', 'blink', 'marquee',
)

SOCIAL_PLATFORMS = (
    'facebook.com', 'twitter.com', 'x.com', 'instagram.com', 'linkedin.com',
    'youtube.com', 'tiktok.com', 'pinterest.com', 'snapchat.com',
)

ANALYTICS_SIGNATURES = {
    'ga4': [r"gtag\(\s*['\"]config['\"]\s*,\s*['\"][^'\"]*['\"]", r"googletagmanager\.com/gtag/js"],
    'universal_analytics': [r"ga\(\s*['\"]create['\"]\s*,\s*['\"][^'\"]*['\"]", r"google-analytics\.com/analytics\.js"],
    'google_tag_manager': [r"googletagmanager\.com/gtm\.js"],
    'naver_analytics': [r"wcs\.naver\.net", r"naver\.com/analytics"],
}

_INVISIBLE_TAGS = ['script', 'style', 'noscript', 'template']


@dataclass(frozen=True)
class MetaData:
    """Structural facts pulled from the markup (everything except structured data)."""
    title: str = ""
    description: str = ""
    keywords: str = ""
    viewport: str = ""
    lang: str = ""
    robots_meta: str = ""
    canonical: str = ""
    has_html5_doctype: bool = False
    deprecated_tags: Tuple[str, ...] = ()
    headings: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    images_total: int = 0
    images_with_alt: int = 0
    image_sources: Tuple[str, ...] = ()
    alt_attribute_count: int = 0
    lazy_loading: bool = False
    video_count: int = 0
    iframe_count: int = 0
    paragraph_count: int = 0
    og_tags: Dict[str, str] = field(default_factory=dict)
    twitter_tags: Dict[str, str] = field(default_factory=dict)
    social_platforms: Tuple[str, ...] = ()
    link_hrefs: Tuple[str, ...] = ()
    script_sources: Tuple[str, ...] = ()
    stylesheet_hrefs: Tuple[str, ...] = ()
    link_media: Tuple[str, ...] = ()
    style_text: str = ""
    class_tokens: FrozenSet[str] = frozenset()
    analytics_signatures: Tuple[str, ...] = ()
    aria_count: int = 0
    tabindex_count: int = 0
    has_amp: bool = False
    has_date_signal: bool = False
    text_content: str = ""
    word_count: int = 0
    
    @property
    def images_without_alt(self) -> int:
        return self.images_total - self.images_with_alt
    
    def heading_texts(self, level: str) -> Tuple[str, ...]:
        return self.headings.get(level, ())


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find('meta', attrs={'name': re.compile(f'^{re.escape(name)}$', re.I)})
    if tag is None:
        return ""
    return (tag.get('content') or "").strip()


def _prefixed_meta(soup: BeautifulSoup, prefix: str) -> Dict[str, str]:
    """Collect <meta property|name="prefix:*"> into a dict keyed without the prefix."""
    tags: Dict[str, str] = {}
    pattern = re.compile(f'^{prefix}:', re.I)
    for attr in ('property', 'name'):
        for tag in soup.find_all('meta', attrs={attr: pattern}):
            key = tag.get(attr, '')[len(prefix) + 1:].lower()
            tags.setdefault(key, (tag.get('content') or '').strip())
    return tags


def _attr_values(soup: BeautifulSoup, tag_name: str, attr: str) -> Tuple[str, ...]:
    return tuple(t[attr].strip() for t in soup.find_all(tag_name, attrs={attr: True}))


class MetaCollector:
    """Collects structural facts from HTML content."""
    
    def collect(self, soup: BeautifulSoup) -> MetaData:
        """Extract structural facts from a parsed document.
        
        Absent elements yield empty values, never exceptions.
        """
        # Title
        title_tag = soup.find('title')
        title = title_tag.get_text(strip=True) if title_tag else ""
        
        # Canonical
        canonical_tag = soup.find('link', rel='canonical')
        canonical = (canonical_tag.get('href') or '').strip() if canonical_tag else ""
        
        # Headings (counted, not deduplicated)
        headings = {}
        for level in range(1, 7):
            texts = (h.get_text(' ', strip=True) for h in soup.find_all(f'h{level}'))
            headings[f'h{level}'] = tuple(t for t in texts if t)
        
        # Images
        images = soup.find_all('img')
        images_with_alt = sum(1 for img in images if img.has_attr('alt'))
        
        # Links / resources
        link_hrefs = _attr_values(soup, 'a', 'href')
        script_sources = _attr_values(soup, 'script', 'src')
        stylesheet_hrefs = tuple(
            (link.get('href') or '').strip()
            for link in soup.find_all('link', rel='stylesheet')
        )
        
        # Styles: <style> bodies and inline style attributes
        style_chunks = [s.get_text() for s in soup.find_all('style')]
        style_chunks.extend(t['style'] for t in soup.find_all(style=True))
        
        # class / id tokens
        class_tokens = set()
        for tag in soup.find_all(True):
            class_tokens.update(c.lower() for c in tag.get('class', []))
            if tag.get('id'):
                class_tokens.add(tag['id'].lower())
        
        html_tag = soup.find('html')
        inline_scripts = [s.get_text() for s in soup.find_all('script') if not s.get('src')]
        
        text = self._visible_text(soup)
        
        return MetaData(
            title=title,
            description=_meta_content(soup, 'description'),
            keywords=_meta_content(soup, 'keywords'),
            viewport=_meta_content(soup, 'viewport'),
            lang=(html_tag.get('lang') or '').strip() if html_tag else '',
            robots_meta=_meta_content(soup, 'robots'),
            canonical=canonical,
            has_html5_doctype=self._has_html5_doctype(soup),
            deprecated_tags=tuple(tag for tag in DEPRECATED_TAGS if soup.find(tag) is not None),
            headings=headings,
            images_total=len(images),
            images_with_alt=images_with_alt,
            image_sources=_attr_values(soup, 'img', 'src'),
            alt_attribute_count=len(soup.find_all(alt=True)),
            lazy_loading=soup.find(attrs={'loading': re.compile(r'^lazy$', re.I)}) is not None,
            video_count=len(soup.find_all('video')),
            iframe_count=len(soup.find_all('iframe')),
            paragraph_count=len(soup.find_all('p')),
            og_tags=_prefixed_meta(soup, 'og'),
            twitter_tags=_prefixed_meta(soup, 'twitter'),
            social_platforms=self._social_platforms(link_hrefs),
            link_hrefs=link_hrefs,
            script_sources=script_sources,
            stylesheet_hrefs=stylesheet_hrefs,
            link_media=_attr_values(soup, 'link', 'media'),
            style_text='\n'.join(style_chunks),
            class_tokens=frozenset(class_tokens),
            analytics_signatures=self._analytics_signatures(inline_scripts, script_sources),
            aria_count=sum(
                len(soup.find_all(attrs={attr: True}))
                for attr in ('aria-label', 'aria-describedby', 'aria-labelledby')
            ),
            tabindex_count=len(soup.find_all(attrs={'tabindex': True})),
            has_amp=self._has_amp(soup, html_tag),
            has_date_signal=self._has_date(soup, inline_scripts),
            text_content=text,
            word_count=len(text.split()),
        )
    
    def _visible_text(self, soup: BeautifulSoup) -> str:
        root = soup.find('body') or soup
        # Work on a copy so the shared tree stays intact for other collectors
        root = BeautifulSoup(str(root), 'html.parser')
        for tag in root.find_all(_INVISIBLE_TAGS):
            tag.decompose()
        return root.get_text(separator=' ', strip=True)
    
    def _has_html5_doctype(self, soup: BeautifulSoup) -> bool:
        for item in soup.contents:
            if isinstance(item, Doctype):
                parts = str(item).strip().lower().split()
                return bool(parts) and parts[0] == 'html'
        return False
    
    def _social_platforms(self, hrefs: Tuple[str, ...]) -> Tuple[str, ...]:
        found = []
        for platform in SOCIAL_PLATFORMS:
            pattern = re.compile(rf'^https?://([^/?#]*\.)?{re.escape(platform)}([/:?#]|$)', re.I)
            if any(pattern.search(href) for href in hrefs):
                found.append(platform)
        return tuple(found)
    
    def _analytics_signatures(self, inline_scripts, script_sources) -> Tuple[str, ...]:
        haystack = '\n'.join(list(inline_scripts) + list(script_sources))
        return tuple(
            name for name, patterns in ANALYTICS_SIGNATURES.items()
            if any(re.search(p, haystack, re.I) for p in patterns)
        )
    
    def _has_amp(self, soup: BeautifulSoup, html_tag) -> bool:
        if html_tag is not None and (html_tag.has_attr('amp') or html_tag.has_attr('⚡')):
            return True
        if soup.find('link', rel='amphtml') is not None:
            return True
        return soup.find(lambda tag: tag.name.startswith('amp-')) is not None
    
    def _has_date(self, soup: BeautifulSoup, inline_scripts) -> bool:
        """Check if page has a published/updated date."""
        if any('"datePublished"' in s or '"dateModified"' in s for s in inline_scripts):
            return True
        
        if soup.find('meta', attrs={'property': re.compile(r'^article:(published|modified)_time$', re.I)}):
            return True
        
        return soup.find('time') is not None
