"""
Page Fetcher - The only component that talks to the network.

Architecture:
1. URL normalization / validation (InputError)
2. SSRF protection check (InputError)
3. HEAD probes for robots.txt and sitemap.xml, started alongside the GET
4. Single GET with a hard timeout and wall-clock latency (FetchError)
"""

import asyncio
import contextlib
import re
import time
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

import httpx

from seo_checker.config import settings
from seo_checker.exceptions import FetchError, InputError
from seo_checker.logger import logger
from seo_checker.services.collectors.probe_collector import ProbeCollector, SiteFilesData
from seo_checker.services.ssrf_protection import SSRFProtection


TRACKING_PARAMS = {
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'fbclid', 'gclid', 'msclkid', 'mc_cid', 'mc_eid',
    '_ga', '_gl', 'gad_source', 'gbraid', 'wbraid'
}

_HOSTNAME_RE = re.compile(r"^[\w-]+(\.[\w-]+)*\.?$")
MAX_LABEL_LENGTH = 63


@dataclass(frozen=True)
class RawDocument:
    """Fetched page, owned by a single pipeline invocation."""
    url: str
    final_url: str
    html: str
    headers: Dict[str, str] = field(default_factory=dict)  # lower-cased names
    status_code: int = 200
    fetch_latency_ms: float = 0.0
    robots_txt_exists: bool = False
    sitemap_xml_exists: bool = False


class PageFetcher:
    """Fetches the target page plus its robots.txt / sitemap.xml probes."""
    
    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        ssrf_check: Optional[bool] = None,
    ):
        self.http_timeout = settings.HTTP_TIMEOUT
        self.max_redirects = settings.HTTP_MAX_REDIRECTS
        self.transport = transport
        self.ssrf_check = settings.SSRF_PROTECTION_ENABLED if ssrf_check is None else ssrf_check
        self.probe_collector = ProbeCollector(transport=transport)
    
    @staticmethod
    def normalize_url(url: str) -> str:
        """Normalize and validate a user-supplied URL.
        
        Handles:
        - Scheme defaulting (https if missing)
        - Scheme/domain lowercasing
        - utm/tracking params removal
        - Fragment removal
        
        Raises:
            InputError: if the result is not an absolute http(s) URL
        """
        if not isinstance(url, str) or not url.strip():
            raise InputError("URL is required")
        
        url = url.strip()
        if any(ch.isspace() for ch in url):
            raise InputError(f"Invalid URL: {url}")
        
        # Add scheme if missing
        if not re.match(r'^[a-zA-Z][a-zA-Z0-9+.-]*://', url):
            url = 'https://' + url
        
        try:
            parsed = urlparse(url)
            port = parsed.port
        except ValueError:
            raise InputError(f"Invalid URL: {url}")

        scheme = parsed.scheme.lower()
        if scheme not in ("http", "https"):
            raise InputError(f"Unsupported scheme: {parsed.scheme}")

        hostname = parsed.hostname or ""
        is_ipv6 = ":" in hostname
        if not hostname or (not is_ipv6 and not _HOSTNAME_RE.match(hostname)):
            raise InputError(f"Invalid hostname in URL: {url}")
        
        netloc = f"[{hostname}]" if is_ipv6 else hostname
        if port is not None:
            netloc = f"{netloc}:{port}"
        
        # Remove tracking params
        query = urlencode(
            [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k not in TRACKING_PARAMS],
            doseq=True
        )
        
        normalized = urlunparse((scheme, netloc, parsed.path or '/', parsed.params, query, ''))
        
        # The regex accepts labels that DNS and IDNA reject
        try:
            host = httpx.URL(normalized).raw_host.decode("ascii")
        except (httpx.InvalidURL, UnicodeError):
            raise InputError(f"Invalid hostname in URL: {url}")
        if not is_ipv6 and any(len(label) > MAX_LABEL_LENGTH for label in host.rstrip('.').split('.')):
            raise InputError(f"Invalid hostname in URL: {url}")
        
        return normalized
    
    @staticmethod
    def base_url(url: str) -> str:
        """Extract base URL (scheme + host)."""
        parsed = urlparse(url)
        return f"{parsed.scheme}://{parsed.netloc}"
    
    async def fetch(self, url: str) -> RawDocument:
        """Fetch the page and probe its site files.
        
        Args:
            url: URL as submitted by the caller
            
        Returns:
            RawDocument with HTML, headers, latency and probe results
            
        Raises:
            InputError: malformed or blocked URL
            FetchError: network failure or non-2xx response
        """
        normalized_url = self.normalize_url(url)
        
        if self.ssrf_check:
            is_safe, ssrf_reason = await asyncio.to_thread(SSRFProtection.validate_url, normalized_url)
            if not is_safe:
                logger.warning(f"SSRF protection blocked {normalized_url}: {ssrf_reason}")
                raise InputError(f"URL not allowed: {ssrf_reason}")
        
        logger.info(f"Fetching {normalized_url}")
        
        probes_task = asyncio.create_task(self.probe_collector.collect(self.base_url(normalized_url)))
        try:
            response, latency_ms = await self._get(normalized_url)
        except BaseException:
            probes_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await probes_task
            raise
        
        site_files: SiteFilesData = await probes_task
        
        return RawDocument(
            url=normalized_url,
            final_url=str(response.url),
            html=response.text,
            headers={k.lower(): v for k, v in response.headers.items()},
            status_code=response.status_code,
            fetch_latency_ms=latency_ms,
            robots_txt_exists=site_files.robots_txt.exists,
            sitemap_xml_exists=site_files.sitemap_xml.exists,
        )
    
    async def _get(self, url: str) -> tuple[httpx.Response, float]:
        """Single GET, no retries. Latency is wall-clock around the request."""
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                max_redirects=self.max_redirects,
                timeout=self.http_timeout,
                transport=self.transport
            ) as client:
                started = time.perf_counter()
                response = await client.get(
                    url,
                    headers={
                        "User-Agent": settings.USER_AGENT,
                        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    }
                )
                latency_ms = (time.perf_counter() - started) * 1000
        
        except httpx.TimeoutException:
            logger.warning(f"Timed out fetching {url} after {self.http_timeout}s")
            raise FetchError(f"Timed out after {self.http_timeout}s fetching {url}")
        except httpx.InvalidURL as e:
            raise FetchError(f"Could not fetch {url}: {e}")
        except httpx.TooManyRedirects:
            raise FetchError(f"Too many redirects fetching {url}")
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error fetching {url}: {e}")
            raise FetchError(f"Could not fetch {url}: {e}")
        
        if not response.is_success:
            logger.warning(f"Fetching {url} returned HTTP {response.status_code}")
            raise FetchError(
                f"Could not fetch {url}: HTTP {response.status_code}",
                upstream_status=response.status_code
            )
        
        return response, round(latency_ms, 1)
