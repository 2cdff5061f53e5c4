"""
Regional Analyzer - presence on Naver properties (blog, cafe, knowledge, news).
"""

import re
from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


NAVER_PROPERTIES = {
    'naver_blog': re.compile(r'blog\.naver\.com', re.I),
    'naver_cafe': re.compile(r'cafe\.naver\.com', re.I),
    'naver_knowledge': re.compile(r'kin\.naver\.com', re.I),
    'naver_news': re.compile(r'news\.naver\.com', re.I),
}


@dataclass(frozen=True)
class RegionalResult(AnalyzerResult):
    naver_blog: SubScore = field(default_factory=SubScore)
    naver_cafe: SubScore = field(default_factory=SubScore)
    naver_knowledge: SubScore = field(default_factory=SubScore)
    naver_news: SubScore = field(default_factory=SubScore)


class RegionalAnalyzer(BaseAnalyzer):
    name = "regional_optimization"
    result_type = RegionalResult
    
    def analyze(self, facts) -> RegionalResult:
        haystack = '\n'.join([facts.url, facts.final_url, *facts.meta.link_hrefs, *facts.meta.script_sources])
        parts = {
            key: SubScore.flag(bool(pattern.search(haystack)))
            for key, pattern in NAVER_PROPERTIES.items()
        }
        return RegionalResult(
            summary=SubScore(
                exists=any(part.exists for part in parts.values()),
                score=mean_score(part.score for part in parts.values()),
            ),
            **parts
        )
