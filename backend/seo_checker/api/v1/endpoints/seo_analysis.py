"""
SEO analysis API endpoint.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from seo_checker.logger import logger
from seo_checker.schemas.analysis_report import AnalysisReport, ErrorResponse
from seo_checker.schemas.analysis_request import AnalysisRequest
from seo_checker.services.analysis_runner import SeoAnalysisRunner

router = APIRouter(tags=["SEO Analysis"])

_runner: Optional[SeoAnalysisRunner] = None


def get_analysis_runner() -> SeoAnalysisRunner:
    """Get global analysis runner instance (singleton)."""
    global _runner
    if _runner is None:
        _runner = SeoAnalysisRunner()
    return _runner


@router.post(
    "/seo-analysis",
    response_model=AnalysisReport,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(request: AnalysisRequest, runner: SeoAnalysisRunner = Depends(get_analysis_runner)):
    """Fetch a URL and return its full SEO report.
    
    Errors are handled by the application-level exception handlers.
    """
    logger.info(f"Analysis requested for {request.url}")
    return await runner.run(request.url)
