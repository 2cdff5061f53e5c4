"""
Core Web Vitals estimation.

Nothing here is measured in a browser. LCP is derived from fetch latency,
FID and CLS are drawn from realistic "good" ranges. The random part lives
behind VitalsEstimator so it can be seeded or replaced.
"""

import random
from dataclasses import dataclass
from typing import Optional

from seo_checker.config import settings


LCP_LATENCY_FACTOR = 0.8
LCP_CAP_MS = 2500.0
FID_MAX_MS = 100.0
CLS_MAX = 0.1


@dataclass(frozen=True)
class VitalsEstimate:
    lcp_ms: float
    fid_ms: float
    cls: float
    estimated: bool = True


class VitalsEstimator:
    """Interface for Core Web Vitals estimators."""
    
    def estimate(self, fetch_latency_ms: float) -> VitalsEstimate:
        raise NotImplementedError


def estimate_lcp(fetch_latency_ms: float) -> float:
    return min(fetch_latency_ms * LCP_LATENCY_FACTOR, LCP_CAP_MS)


class RandomVitalsEstimator(VitalsEstimator):
    """Default estimator: FID in [0, 100] ms, CLS in [0, 0.1].
    
    With a seed, every estimate uses a fresh generator so the same
    document always gets the same numbers.
    """
    
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
    
    def estimate(self, fetch_latency_ms: float) -> VitalsEstimate:
        rng = random.Random(self.seed) if self.seed is not None else random.Random()
        return VitalsEstimate(
            lcp_ms=estimate_lcp(fetch_latency_ms),
            fid_ms=rng.uniform(0, FID_MAX_MS),
            cls=rng.uniform(0, CLS_MAX),
        )


class FixedVitalsEstimator(VitalsEstimator):
    """Deterministic estimator with constant FID/CLS. LCP still follows latency."""
    
    def __init__(self, fid_ms: float = 50.0, cls: float = 0.05):
        self.fid_ms = fid_ms
        self.cls = cls
    
    def estimate(self, fetch_latency_ms: float) -> VitalsEstimate:
        return VitalsEstimate(
            lcp_ms=estimate_lcp(fetch_latency_ms),
            fid_ms=self.fid_ms,
            cls=self.cls,
        )


_default_estimator: Optional[VitalsEstimator] = None


def get_vitals_estimator() -> VitalsEstimator:
    """Get the process-wide estimator, seeded from VITALS_SEED when set."""
    global _default_estimator
    if _default_estimator is None:
        _default_estimator = RandomVitalsEstimator(seed=settings.VITALS_SEED)
    return _default_estimator
