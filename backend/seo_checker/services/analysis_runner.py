"""
Analysis Runner - Main orchestrator for SEO analysis.

Pipeline (one way, nothing mutated downstream):
    PageFetcher -> Extractor -> analyzers (parallel) -> ScoringEngine
    -> ImprovementEngine -> AnalysisReport
"""
import asyncio
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from seo_checker.config import settings
from seo_checker.exceptions import AnalyzerError, InternalError, SeoAnalysisError
from seo_checker.logger import logger
from seo_checker.schemas.analysis_report import (
    AnalysisReport,
    AnalyzerScore,
    CategoryScore,
    ImprovementTipModel,
)
from seo_checker.services.analyzers.accessibility_analyzer import AccessibilityAnalyzer
from seo_checker.services.analyzers.analytics_analyzer import AnalyticsAnalyzer
from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer
from seo_checker.services.analyzers.content_quality_analyzer import ContentQualityAnalyzer
from seo_checker.services.analyzers.headings_analyzer import HeadingsAnalyzer
from seo_checker.services.analyzers.images_analyzer import ImagesAnalyzer
from seo_checker.services.analyzers.metadata_analyzer import MetadataAnalyzer
from seo_checker.services.analyzers.mobile_analyzer import MobileAnalyzer
from seo_checker.services.analyzers.performance_analyzer import PerformanceAnalyzer
from seo_checker.services.analyzers.regional_analyzer import RegionalAnalyzer
from seo_checker.services.analyzers.security_analyzer import SecurityAnalyzer
from seo_checker.services.analyzers.social_analyzer import SocialAnalyzer
from seo_checker.services.analyzers.structured_data_analyzer import StructuredDataAnalyzer
from seo_checker.services.analyzers.technical_analyzer import TechnicalAnalyzer
from seo_checker.services.analyzers.vitals import VitalsEstimator
from seo_checker.services.extractor import ExtractedFacts, Extractor
from seo_checker.services.improvements.engine import ImprovementEngine
from seo_checker.services.improvements.rules import ImprovementTip
from seo_checker.services.page_fetcher import PageFetcher, RawDocument
from seo_checker.services.scoring.engine import ScoringEngine, ScoringResult
from seo_checker.services.scoring.models import AnalyzerResults


_analyzer_pool: Optional[ThreadPoolExecutor] = None


def get_analyzer_pool() -> ThreadPoolExecutor:
    """Get the bounded analyzer worker pool (singleton)."""
    global _analyzer_pool
    if _analyzer_pool is None:
        _analyzer_pool = ThreadPoolExecutor(
            max_workers=max(1, settings.ANALYZER_WORKERS),
            thread_name_prefix="analyzer"
        )
    return _analyzer_pool


def default_analyzers(estimator: Optional[VitalsEstimator] = None) -> List[BaseAnalyzer]:
    return [
        MetadataAnalyzer(),
        HeadingsAnalyzer(),
        ImagesAnalyzer(),
        TechnicalAnalyzer(),
        SocialAnalyzer(),
        AnalyticsAnalyzer(),
        PerformanceAnalyzer(estimator),
        MobileAnalyzer(),
        ContentQualityAnalyzer(),
        RegionalAnalyzer(),
        StructuredDataAnalyzer(),
        SecurityAnalyzer(),
        AccessibilityAnalyzer(),
    ]


class SeoAnalysisRunner:
    """Orchestrates the complete analysis process."""
    
    def __init__(
        self,
        page_fetcher: Optional[PageFetcher] = None,
        estimator: Optional[VitalsEstimator] = None,
        analyzers: Optional[List[BaseAnalyzer]] = None,
        executor: Optional[Executor] = None,
    ):
        self.page_fetcher = page_fetcher or PageFetcher()
        self.extractor = Extractor()
        self.analyzers = analyzers if analyzers is not None else default_analyzers(estimator)
        self.scoring_engine = ScoringEngine()
        self.improvement_engine = ImprovementEngine()
        self.executor = executor
    
    async def run(self, url: str) -> AnalysisReport:
        """
        Run complete analysis on a URL.
        
        Args:
            url: The URL to analyze, as submitted
            
        Returns:
            AnalysisReport with scores, sub-reports and improvements
            
        Raises:
            InputError: malformed or blocked URL
            FetchError: target unreachable or non-2xx
            InternalError: aggregation failure
        """
        logger.info(f"Starting analysis for {url}")
        document = await self.page_fetcher.fetch(url)
        logger.info(
            f"Fetched {document.final_url} (HTTP {document.status_code}, "
            f"{document.fetch_latency_ms}ms, robots={document.robots_txt_exists}, "
            f"sitemap={document.sitemap_xml_exists})"
        )
        return await self.analyze_document(document)
    
    async def analyze_document(self, document: RawDocument) -> AnalysisReport:
        """Analyze an already fetched document. Same document, same report (timestamp aside)."""
        try:
            facts = self.extractor.extract(document)
            results = await self._run_analyzers(facts)
            scoring = self.scoring_engine.score(results)
            tips = self.improvement_engine.generate(facts, results)
            report = self._build_report(facts, results, scoring, tips)
        except SeoAnalysisError:
            raise
        except Exception as e:
            logger.exception(f"Analysis failed for {document.url}: {e}")
            raise InternalError(f"Analysis failed: {e}") from e
        
        logger.info(f"Completed analysis for {document.url}: {report.overall_score} ({report.grade})")
        return report
    
    async def _run_analyzers(self, facts: ExtractedFacts) -> AnalyzerResults:
        """Fan out over the worker pool and join once."""
        loop = asyncio.get_running_loop()
        executor = self.executor or get_analyzer_pool()
        
        outcomes = await asyncio.gather(*[
            loop.run_in_executor(executor, self._run_analyzer, analyzer, facts)
            for analyzer in self.analyzers
        ])
        return AnalyzerResults(**dict(outcomes))
    
    @staticmethod
    def _run_analyzer(analyzer: BaseAnalyzer, facts: ExtractedFacts) -> Tuple[str, AnalyzerResult]:
        try:
            return analyzer.name, analyzer.analyze(facts)
        except Exception as e:
            error = AnalyzerError(analyzer.name, f"{type(e).__name__}: {e}")
            logger.warning(f"Analyzer failed, using empty result: {error.message}")
            return analyzer.name, analyzer.empty(error.message)
    
    def _build_report(
        self,
        facts: ExtractedFacts,
        results: AnalyzerResults,
        scoring: ScoringResult,
        tips: List[ImprovementTip],
    ) -> AnalysisReport:
        sub_reports = {name: result.to_dict() for name, result in results.items()}
        
        return AnalysisReport(
            url=facts.url,
            final_url=facts.final_url,
            timestamp=datetime.now(timezone.utc),
            overall_score=scoring.overall,
            grade=scoring.grade,
            scoring_version=scoring.scoring_version,
            metrics_estimated=True,
            fetch_latency_ms=facts.fetch_latency_ms,
            per_analyzer=[
                AnalyzerScore(
                    name=name,
                    exists=result.summary.exists,
                    score=result.summary.score,
                    details=result.summary.details,
                )
                for name, result in results.items()
            ],
            categories=[
                CategoryScore(
                    key=c.key,
                    label=c.label,
                    score=c.score,
                    weight=c.weight,
                    description=c.description,
                )
                for c in scoring.categories
            ],
            improvements=[
                ImprovementTipModel(
                    id=tip.id,
                    category=tip.category,
                    title=tip.title,
                    description=tip.description,
                    priority=tip.priority,
                    impact=tip.impact,
                    difficulty=tip.difficulty,
                    code=tip.code,
                )
                for tip in tips
            ],
            **sub_reports,
        )
