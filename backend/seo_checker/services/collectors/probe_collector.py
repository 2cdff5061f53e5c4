"""
Probe Collector - HEAD probes for robots.txt and sitemap.xml.

A probe never fails the analysis: timeouts, 4xx/5xx and network errors
all mean "file absent".
"""
import asyncio
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

import httpx

from seo_checker.config import settings
from seo_checker.exceptions import ProbeError
from seo_checker.logger import logger


@dataclass
class ProbeData:
    """Result of a single HEAD probe."""
    url: str
    exists: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass
class SiteFilesData:
    """robots.txt + sitemap.xml probe results."""
    robots_txt: ProbeData
    sitemap_xml: ProbeData


class ProbeCollector:
    """Issues best-effort HEAD probes against the target origin."""
    
    ROBOTS_PATH = "/robots.txt"
    SITEMAP_PATH = "/sitemap.xml"
    
    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout if timeout is not None else settings.PROBE_TIMEOUT
        self.transport = transport
    
    async def collect(self, base_url: str) -> SiteFilesData:
        """Probe robots.txt and sitemap.xml concurrently."""
        robots, sitemap = await asyncio.gather(
            self.probe(urljoin(base_url, self.ROBOTS_PATH)),
            self.probe(urljoin(base_url, self.SITEMAP_PATH)),
        )
        return SiteFilesData(robots_txt=robots, sitemap_xml=sitemap)
    
    async def probe(self, url: str) -> ProbeData:
        """HEAD a single URL. Any failure is recorded as absent."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
                headers={"User-Agent": settings.USER_AGENT}
            ) as client:
                response = await client.head(url)
            
            if response.is_success:
                return ProbeData(url=url, exists=True, status_code=response.status_code)
            
            logger.info(f"Probe {url} returned {response.status_code}, treating as absent")
            return ProbeData(url=url, exists=False, status_code=response.status_code)
        
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = ProbeError(f"{type(e).__name__}: {e}")
            logger.warning(f"Probe {url} failed ({error.message}), treating as absent")
            return ProbeData(url=url, exists=False, error=error.message)
