"""
Images Analyzer - alt attribute coverage.
"""

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore


def alt_coverage_score(total: int, with_alt: int) -> int:
    """Step function of alt coverage. No images is vacuously compliant."""
    if total == 0:
        return 100
    
    percentage = with_alt / total * 100
    if percentage >= 90:
        return 100
    if percentage >= 70:
        return 70
    if percentage >= 50:
        return 50
    return 20


class ImagesAnalyzer(BaseAnalyzer):
    name = "images"
    result_type = AnalyzerResult
    
    def analyze(self, facts) -> AnalyzerResult:
        meta = facts.meta
        return AnalyzerResult(
            summary=SubScore(
                exists=meta.images_total > 0,
                score=alt_coverage_score(meta.images_total, meta.images_with_alt),
                details={
                    "total": meta.images_total,
                    "withAlt": meta.images_with_alt,
                    "withoutAlt": meta.images_without_alt,
                }
            )
        )
