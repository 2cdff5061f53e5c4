"""
Extractor - Turns a RawDocument into the read-only facts every analyzer consumes.

The HTML is parsed once with BeautifulSoup; MetaCollector and
SchemaCollector query the same tree. Nothing in ExtractedFacts depends
on analyzer output.
"""

from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from seo_checker.logger import logger
from seo_checker.services.collectors.meta_collector import MetaCollector, MetaData
from seo_checker.services.collectors.schema_collector import SchemaCollector, SchemaData
from seo_checker.services.page_fetcher import RawDocument


@dataclass(frozen=True)
class ExtractedFacts:
    """Structural signals of one fetched document."""
    url: str
    final_url: str
    is_https: bool
    headers: Dict[str, str] = field(default_factory=dict)
    fetch_latency_ms: float = 0.0
    robots_txt_exists: bool = False
    sitemap_xml_exists: bool = False
    meta: MetaData = field(default_factory=MetaData)
    schema: SchemaData = field(default_factory=SchemaData)
    
    def header(self, name: str) -> str:
        return self.headers.get(name.lower(), "")


class Extractor:
    """Parses HTML and runs the collectors."""
    
    def __init__(self):
        self.meta_collector = MetaCollector()
        self.schema_collector = SchemaCollector()
    
    def extract(self, document: RawDocument) -> ExtractedFacts:
        soup = BeautifulSoup(document.html or "", 'html.parser')
        
        meta = self.meta_collector.collect(soup)
        schema = self.schema_collector.collect(soup)
        
        final_url = document.final_url or document.url
        facts = ExtractedFacts(
            url=document.url,
            final_url=final_url,
            is_https=urlparse(final_url).scheme.lower() == 'https',
            headers={k.lower(): v for k, v in document.headers.items()},
            fetch_latency_ms=document.fetch_latency_ms,
            robots_txt_exists=document.robots_txt_exists,
            sitemap_xml_exists=document.sitemap_xml_exists,
            meta=meta,
            schema=schema,
        )
        
        logger.debug(
            f"Extracted {final_url}: title={bool(meta.title)}, "
            f"h1={len(meta.heading_texts('h1'))}, images={meta.images_total}, "
            f"schemas={len(schema.types)}, words={meta.word_count}"
        )
        return facts
