"""
Accessibility Analyzer - ARIA usage, keyboard navigation, screen reader hints
and the document language.

Color contrast needs computed styles, which a static fetch does not have,
so it is a fixed baseline.
"""

from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


COLOR_CONTRAST_BASELINE = 70


@dataclass(frozen=True)
class AccessibilityResult(AnalyzerResult):
    aria_labels: SubScore = field(default_factory=SubScore)
    color_contrast: SubScore = field(default_factory=SubScore)
    keyboard_navigation: SubScore = field(default_factory=SubScore)
    screen_reader: SubScore = field(default_factory=SubScore)
    page_language: SubScore = field(default_factory=SubScore)


class AccessibilityAnalyzer(BaseAnalyzer):
    name = "accessibility"
    result_type = AccessibilityResult
    
    def analyze(self, facts) -> AccessibilityResult:
        meta = facts.meta
        total_aria = meta.aria_count
        
        aria = SubScore.flag(total_aria > 0, count=total_aria)
        contrast = SubScore(exists=False, score=COLOR_CONTRAST_BASELINE, details={"estimated": True})
        keyboard = SubScore(
            exists=meta.tabindex_count > 0,
            score=80 if meta.tabindex_count > 0 else 60,
            details={"tabindexCount": meta.tabindex_count},
        )
        screen_reader = SubScore(
            exists=True,
            score=90 if meta.alt_attribute_count + total_aria > 5 else 60,
            details={"altCount": meta.alt_attribute_count},
        )
        
        # Reported only; the summary keeps its four terms
        language = SubScore.flag(bool(meta.lang), lang=meta.lang or None)
        
        aria_points = 80 if total_aria > 0 else 40
        return AccessibilityResult(
            summary=SubScore(
                exists=True,
                score=mean_score([aria_points, contrast.score, keyboard.score, screen_reader.score]),
            ),
            aria_labels=aria,
            color_contrast=contrast,
            keyboard_navigation=keyboard,
            screen_reader=screen_reader,
            page_language=language,
        )
