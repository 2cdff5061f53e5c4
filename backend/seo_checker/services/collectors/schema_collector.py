"""
Schema Collector - Extract structured data from HTML.

Extracts:
- Schema.org JSON-LD blocks (including @graph arrays)
- Microdata itemtype attributes
- RDFa vocab attributes

A malformed JSON-LD block is recorded as an extraction error string and
never aborts extraction of the rest of the document.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple
from bs4 import BeautifulSoup

from seo_checker.exceptions import ExtractionError
from seo_checker.logger import logger


@dataclass(frozen=True)
class JsonLdBlock:
    """Single JSON-LD schema object with a declared @type."""
    type: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SchemaData:
    """All structured data from page."""
    json_ld: Tuple[JsonLdBlock, ...] = ()
    microdata_types: Tuple[str, ...] = ()
    rdfa_vocabs: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    
    @property
    def types(self) -> list[str]:
        """Get all schema types found, JSON-LD first."""
        return (
            [block.type for block in self.json_ld]
            + list(self.microdata_types)
            + [f"RDFa: {vocab}" for vocab in self.rdfa_vocabs]
        )


class SchemaCollector:
    """Collector for JSON-LD, microdata and RDFa."""
    
    def collect(self, soup: BeautifulSoup) -> SchemaData:
        """Extract all structured data from a parsed document.
        
        Args:
            soup: parsed HTML
            
        Returns:
            SchemaData with all found schemas and extraction errors
        """
        blocks = []
        errors = []
        
        scripts = soup.find_all('script', attrs={'type': re.compile(r'^\s*application/ld\+json\s*$', re.I)})
        for index, script in enumerate(scripts, start=1):
            content = script.get_text().strip()
            if not content:
                continue
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                error = ExtractionError(f"JSON-LD parse error (script {index}): {str(e)[:100]}")
                logger.warning(error.message)
                errors.append(error.message)
                continue
            
            blocks.extend(self._parse_schemas(data))
        
        microdata_types = tuple(
            tag['itemtype'].strip() for tag in soup.find_all(attrs={'itemtype': True})
            if tag['itemtype'].strip()
        )
        rdfa_vocabs = tuple(
            tag['vocab'].strip() for tag in soup.find_all(attrs={'vocab': True})
            if tag['vocab'].strip()
        )
        
        schema_data = SchemaData(
            json_ld=tuple(blocks),
            microdata_types=microdata_types,
            rdfa_vocabs=rdfa_vocabs,
            errors=tuple(errors)
        )
        logger.debug(f"Found {len(schema_data.types)} schemas: {schema_data.types}")
        return schema_data
    
    def _parse_schemas(self, data: Any) -> list[JsonLdBlock]:
        """Flatten @graph arrays and top-level lists into typed blocks."""
        if isinstance(data, dict) and isinstance(data.get("@graph"), list):
            items = data["@graph"]
        elif isinstance(data, list):
            items = data
        else:
            items = [data]
        
        blocks = []
        for item in items:
            if not isinstance(item, dict):
                continue
            
            schema_type = item.get("@type")
            # Handle array of types
            if isinstance(schema_type, list):
                schema_type = schema_type[0] if schema_type else None
            
            if schema_type:
                blocks.append(JsonLdBlock(type=str(schema_type), data=item))
        
        return blocks
