from .quick_score import generate_quick_score
from .role_insights import (
    enrich_with_role_insights,
    find_missing_role_skills,
    generate_role_recommendations,
)

__all__ = [
    "generate_quick_score",
    "enrich_with_role_insights",
    "find_missing_role_skills",
    "generate_role_recommendations",
]
