"""
Scoring Weights Configuration - v1.0

Two levels: analyzer sub-scores roll up into five categories, the five
categories roll up into the overall score. Every group sums to 100.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class CategoryWeights:
    """Overall category weights (must sum to 100)."""
    content_quality: int = 30
    technical: int = 25
    user_experience: int = 20
    metadata_structure: int = 15
    social_other: int = 10


@dataclass(frozen=True)
class TechnicalWeights:
    """Technical SEO weights (must sum to 100)."""
    ssl: int = 40         # Highest: HTTPS is a ranking signal
    robots_txt: int = 25
    sitemap_xml: int = 25
    canonical: int = 10


@dataclass(frozen=True)
class UserExperienceWeights:
    """User experience weights (must sum to 100)."""
    performance: int = 60
    mobile: int = 40


@dataclass(frozen=True)
class MetadataWeights:
    """Metadata & structure weights (must sum to 100)."""
    title: int = 40
    description: int = 30
    h1: int = 20
    images: int = 10


@dataclass(frozen=True)
class SocialWeights:
    """Social & other weights (must sum to 100)."""
    open_graph: int = 30
    twitter_card: int = 20
    structured_data: int = 30
    security: int = 10
    accessibility: int = 10


# Default weight instances
CATEGORY_WEIGHTS = CategoryWeights()
TECHNICAL_WEIGHTS = TechnicalWeights()
USER_EXPERIENCE_WEIGHTS = UserExperienceWeights()
METADATA_WEIGHTS = MetadataWeights()
SOCIAL_WEIGHTS = SocialWeights()

# Scoring version
SCORING_VERSION = "1.0"


# --- Validation (Prevent Drift) ---
def _validate_weights():
    """Ensure all weight groups sum to exactly 100."""
    groups = {
        "Category": CATEGORY_WEIGHTS,
        "Technical": TECHNICAL_WEIGHTS,
        "User experience": USER_EXPERIENCE_WEIGHTS,
        "Metadata": METADATA_WEIGHTS,
        "Social": SOCIAL_WEIGHTS,
    }
    for label, weights in groups.items():
        total = sum(getattr(weights, f.name) for f in fields(weights))
        if total != 100:
            raise ValueError(f"CRITICAL: {label} weights sum to {total}, expected 100")

_validate_weights()
