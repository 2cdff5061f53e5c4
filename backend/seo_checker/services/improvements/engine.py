"""
Improvement Engine - evaluates the rule table and orders the tips.

Order: priority (high > medium > low), then impact descending. Python's
sort is stable, so equal keys keep rule-table order.
"""

from typing import List, Optional

from seo_checker.logger import logger
from seo_checker.services.improvements.rules import RULES, ImprovementTip, Rule
from seo_checker.services.scoring.models import AnalyzerResults


PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


def sort_tips(tips: List[ImprovementTip]) -> List[ImprovementTip]:
    return sorted(tips, key=lambda tip: (PRIORITY_RANK[tip.priority], -tip.impact))


class ImprovementEngine:
    """Maps findings to prioritized tips."""
    
    def __init__(self, rules: Optional[List[Rule]] = None):
        self.rules = RULES if rules is None else rules
    
    def generate(self, facts, results: AnalyzerResults) -> List[ImprovementTip]:
        tips = [
            rule.render(facts, results)
            for rule in self.rules
            if not results.failed(rule.analyzer) and rule.when(facts, results)
        ]
        logger.info(f"Generated {len(tips)} improvement tips")
        return sort_tips(tips)
