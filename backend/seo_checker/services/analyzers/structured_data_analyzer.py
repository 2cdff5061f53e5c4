"""
Structured Data Analyzer - validates JSON-LD, microdata and RDFa.

JSON-LD blocks are checked against a small per-@type table:
- missing required property  -> error (names the property)
- wrong primitive type        -> warning
Microdata outside schema.org -> warning.

Score (only when any schema exists):
    30 existence + 20 analyzed schema + 30 no errors + 20 no warnings
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


NO_STRUCTURED_DATA = "No structured data found"

REQUIRED_PROPERTIES = {
    'Organization': ['name'],
    'WebSite': ['name', 'url'],
    'WebPage': ['name'],
    'Article': ['headline', 'author'],
    'Product': ['name'],
    'Review': ['reviewBody', 'author'],
    'LocalBusiness': ['name', 'address'],
}

EXPECTED_TYPES = {
    'Organization': {'name': 'string', 'url': 'string', 'logo': 'string'},
    'Product': {'name': 'string', 'price': 'number', 'description': 'string'},
}

TYPE_COMPLETENESS = {
    'Organization': 80,
    'WebSite': 70,
    'WebPage': 60,
    'Article': 75,
    'Product': 85,
    'Review': 70,
    'LocalBusiness': 90,
}
DEFAULT_COMPLETENESS = 50

RICH_SNIPPET_TYPES = ('Product', 'Review', 'Recipe', 'Event', 'Organization')
SOCIAL_TYPES = ('Organization', 'Person', 'Article', 'WebPage')
LOCAL_BUSINESS_TYPES = ('LocalBusiness', 'Restaurant', 'Store', 'Service')


@dataclass(frozen=True)
class StructuredDataResult(AnalyzerResult):
    quality: SubScore = field(default_factory=SubScore)
    completeness: SubScore = field(default_factory=SubScore)
    validity: SubScore = field(default_factory=SubScore)
    rich_snippets: SubScore = field(default_factory=SubScore)
    social_schema: SubScore = field(default_factory=SubScore)
    local_business: SubScore = field(default_factory=SubScore)


def _matches_type(value: Any, expected: str) -> bool:
    if expected == 'string':
        return isinstance(value, str)
    if expected == 'number':
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return True


def short_type(schema_type: str) -> str:
    """'https://schema.org/Product' -> 'Product'."""
    return schema_type.rstrip('/').rsplit('/', 1)[-1]


def validate_json_ld(schema_type: str, data: Dict[str, Any]) -> Dict[str, List[str]]:
    errors = [
        f"{schema_type}: missing required property: {prop}"
        for prop in REQUIRED_PROPERTIES.get(schema_type, [])
        if not data.get(prop)
    ]
    
    warnings = []
    for prop, expected in EXPECTED_TYPES.get(schema_type, {}).items():
        if prop in data and not _matches_type(data[prop], expected):
            warnings.append(f"{schema_type}: unexpected type for {prop} (expected {expected})")
    
    return {"errors": errors, "warnings": warnings}


def validate_microdata(itemtype: str) -> Dict[str, List[str]]:
    warnings = []
    if 'schema.org' not in itemtype.lower():
        warnings.append(f"{itemtype}: non-standard vocabulary (not schema.org)")
    return {"errors": [], "warnings": warnings}


def _support(types: List[str], supported, points: int) -> SubScore:
    found = [t for t in types if t in supported]
    return SubScore(exists=bool(found), score=min(100, points * len(found)), details={"types": found})


class StructuredDataAnalyzer(BaseAnalyzer):
    name = "structured_data"
    result_type = StructuredDataResult
    
    def empty(self, error: str) -> StructuredDataResult:
        return StructuredDataResult(summary=SubScore(details={"error": error, "errors": [error], "warnings": []}))
    
    def analyze(self, facts) -> StructuredDataResult:
        schema = facts.schema
        
        detailed = []
        for block in schema.json_ld:
            detailed.append({"type": block.type, "source": "json-ld", **validate_json_ld(block.type, block.data)})
        for itemtype in schema.microdata_types:
            detailed.append({"type": short_type(itemtype), "source": "microdata", **validate_microdata(itemtype)})
        
        errors = list(schema.errors)
        warnings = []
        for entry in detailed:
            errors.extend(entry["errors"])
            warnings.extend(entry["warnings"])
        
        types = schema.types
        if not types:
            return StructuredDataResult(
                summary=SubScore(
                    exists=False,
                    score=0,
                    details={"types": [], "errors": [NO_STRUCTURED_DATA, *errors], "warnings": warnings},
                )
            )
        
        score = 30
        if detailed:
            score += 20
        if not errors:
            score += 30
        if not warnings:
            score += 20
        
        analyzed_types = [entry["type"] for entry in detailed]
        quality = mean_score(
            max(0, 100 - 20 * len(entry["errors"]) - 5 * len(entry["warnings"])) for entry in detailed
        )
        completeness = mean_score(TYPE_COMPLETENESS.get(t, DEFAULT_COMPLETENESS) for t in analyzed_types)
        validity = max(0, 100 - 15 * len(errors) - 5 * len(warnings))
        
        return StructuredDataResult(
            summary=SubScore(
                exists=True,
                score=score,
                details={
                    "types": types,
                    "errors": errors,
                    "warnings": warnings,
                    "detailedSchemas": detailed,
                },
            ),
            quality=SubScore(exists=bool(detailed), score=quality),
            completeness=SubScore(exists=bool(detailed), score=completeness),
            validity=SubScore(exists=True, score=validity),
            rich_snippets=_support(analyzed_types, RICH_SNIPPET_TYPES, 20),
            social_schema=_support(analyzed_types, SOCIAL_TYPES, 15),
            local_business=_support(analyzed_types, LOCAL_BUSINESS_TYPES, 25),
        )
