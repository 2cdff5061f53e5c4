from dataclasses import dataclass, field, fields

from seo_checker.services.analyzers.accessibility_analyzer import AccessibilityResult
from seo_checker.services.analyzers.analytics_analyzer import AnalyticsResult
from seo_checker.services.analyzers.base import AnalyzerResult
from seo_checker.services.analyzers.content_quality_analyzer import ContentQualityResult
from seo_checker.services.analyzers.headings_analyzer import HeadingsResult
from seo_checker.services.analyzers.metadata_analyzer import MetadataResult
from seo_checker.services.analyzers.mobile_analyzer import MobileResult
from seo_checker.services.analyzers.performance_analyzer import PerformanceResult
from seo_checker.services.analyzers.regional_analyzer import RegionalResult
from seo_checker.services.analyzers.security_analyzer import SecurityResult
from seo_checker.services.analyzers.social_analyzer import SocialResult
from seo_checker.services.analyzers.structured_data_analyzer import StructuredDataResult
from seo_checker.services.analyzers.technical_analyzer import TechnicalResult


@dataclass(frozen=True)
class AnalyzerResults:
    """One result per analyzer, keyed by analyzer name."""
    metadata: MetadataResult = field(default_factory=MetadataResult)
    headings: HeadingsResult = field(default_factory=HeadingsResult)
    images: AnalyzerResult = field(default_factory=AnalyzerResult)
    technical: TechnicalResult = field(default_factory=TechnicalResult)
    social: SocialResult = field(default_factory=SocialResult)
    analytics: AnalyticsResult = field(default_factory=AnalyticsResult)
    performance: PerformanceResult = field(default_factory=PerformanceResult)
    mobile: MobileResult = field(default_factory=MobileResult)
    content_quality: ContentQualityResult = field(default_factory=ContentQualityResult)
    regional_optimization: RegionalResult = field(default_factory=RegionalResult)
    structured_data: StructuredDataResult = field(default_factory=StructuredDataResult)
    security: SecurityResult = field(default_factory=SecurityResult)
    accessibility: AccessibilityResult = field(default_factory=AccessibilityResult)
    
    def items(self):
        return [(f.name, getattr(self, f.name)) for f in fields(self)]
    
    def failed(self, name: str) -> bool:
        """True when the analyzer raised and its result is the empty state."""
        return "error" in getattr(self, name).summary.details


@dataclass(frozen=True)
class WeightedCategory:
    """One of the five top-level groupings."""
    key: str
    label: str
    score: int
    weight: int
    description: str = ""
