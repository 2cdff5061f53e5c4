"""
Technical Analyzer - SSL, robots.txt, sitemap.xml, canonical, indexability,
doctype, deprecated tags.

The summary uses the technical weighting: SSL 40%, robots.txt 25%,
sitemap.xml 25%, canonical 10%. Indexability, doctype and deprecated tags
are reported but do not move the summary.
"""

from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, clamp_score
from seo_checker.services.scoring.weights import TECHNICAL_WEIGHTS


DEPRECATED_TAG_PENALTY = 20


@dataclass(frozen=True)
class TechnicalResult(AnalyzerResult):
    ssl: SubScore = field(default_factory=SubScore)
    robots_txt: SubScore = field(default_factory=SubScore)
    sitemap_xml: SubScore = field(default_factory=SubScore)
    canonical: SubScore = field(default_factory=SubScore)
    indexable: SubScore = field(default_factory=SubScore)
    html5_doctype: SubScore = field(default_factory=SubScore)
    deprecated_tags: SubScore = field(default_factory=SubScore)


def technical_total(ssl: int, robots_txt: int, sitemap_xml: int, canonical: int) -> int:
    w = TECHNICAL_WEIGHTS
    return clamp_score(
        (ssl * w.ssl + robots_txt * w.robots_txt + sitemap_xml * w.sitemap_xml + canonical * w.canonical) / 100
    )


class TechnicalAnalyzer(BaseAnalyzer):
    name = "technical"
    result_type = TechnicalResult
    
    def analyze(self, facts) -> TechnicalResult:
        meta = facts.meta
        
        ssl = SubScore.flag(facts.is_https, finalUrl=facts.final_url)
        robots_txt = SubScore.flag(facts.robots_txt_exists)
        sitemap_xml = SubScore.flag(facts.sitemap_xml_exists)
        canonical = SubScore.flag(bool(meta.canonical), content=meta.canonical or None)
        indexable = SubScore.flag('noindex' not in meta.robots_meta.lower(), robots=meta.robots_meta or None)
        doctype = SubScore.flag(meta.has_html5_doctype)
        deprecated = SubScore(
            exists=bool(meta.deprecated_tags),
            score=max(0, 100 - DEPRECATED_TAG_PENALTY * len(meta.deprecated_tags)),
            details={"tags": list(meta.deprecated_tags)},
        )
        
        return TechnicalResult(
            summary=SubScore(
                exists=True,
                score=technical_total(ssl.score, robots_txt.score, sitemap_xml.score, canonical.score),
            ),
            ssl=ssl,
            robots_txt=robots_txt,
            sitemap_xml=sitemap_xml,
            canonical=canonical,
            indexable=indexable,
            html5_doctype=doctype,
            deprecated_tags=deprecated,
        )
