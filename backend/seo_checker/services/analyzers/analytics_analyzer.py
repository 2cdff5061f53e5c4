"""
Analytics Analyzer - detects Google and Naver analytics tooling.
"""

from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


GOOGLE_VERSIONS = (
    ('ga4', 'GA4'),
    ('universal_analytics', 'Universal Analytics'),
    ('google_tag_manager', 'Google Tag Manager'),
)


@dataclass(frozen=True)
class AnalyticsResult(AnalyzerResult):
    google_analytics: SubScore = field(default_factory=SubScore)
    naver_analytics: SubScore = field(default_factory=SubScore)


class AnalyticsAnalyzer(BaseAnalyzer):
    name = "analytics"
    result_type = AnalyticsResult
    
    def analyze(self, facts) -> AnalyticsResult:
        signatures = set(facts.meta.analytics_signatures)
        
        # First match wins, GA4 preferred over the legacy tags
        version = next((label for key, label in GOOGLE_VERSIONS if key in signatures), None)
        google = SubScore.flag(version is not None, version=version)
        naver = SubScore.flag('naver_analytics' in signatures)
        
        return AnalyticsResult(
            summary=SubScore(
                exists=google.exists or naver.exists,
                score=mean_score([google.score, naver.score]),
            ),
            google_analytics=google,
            naver_analytics=naver,
        )
