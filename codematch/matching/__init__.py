"""
CodeMatch Matching Layer

Answers: "Given everyone who opted in, who should this user pair up with?"

- compute_score: language/preference overlap, 0-100
- weighted_score: six-feature weighted model, 0-100
- recommend / resolve_recommendations: filter, score and rank candidates

Lifecycle operations and HTTP endpoints live in lifecycle.py and admin.py.
"""

from .models import (
    DiscoveryFilters,
    Match,
    MatchPreferences,
    MatchProfile,
    MatchStatus,
    Recommendation,
    RecommendationResult,
    ScoreStrategy,
    SkillLevel,
)
from .score import compute_score, language_overlap, preference_overlap
from .features import extract_features, compute_weighted_score, weighted_score
from .recommend import recommend, resolve_recommendations

__all__ = [
    "DiscoveryFilters",
    "Match",
    "MatchPreferences",
    "MatchProfile",
    "MatchStatus",
    "Recommendation",
    "RecommendationResult",
    "ScoreStrategy",
    "SkillLevel",
    "compute_score",
    "language_overlap",
    "preference_overlap",
    "extract_features",
    "compute_weighted_score",
    "weighted_score",
    "recommend",
    "resolve_recommendations",
]
