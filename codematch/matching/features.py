"""
Weighted Feature Scorer

Alternative compatibility model built from six pairwise features, each in
[0, 1], combined with fixed weights. Used when a caller asks for the
"weighted" strategy; the overlap scorer in score.py stays the default.

Feature order:
    0: skill_overlap             Jaccard of language sets
    1: level_similarity          distance on BEGINNER -> INTERMEDIATE -> ADVANCED
    2: preferred_language_match  any of a's languages in b's preferences
    3: goal_similarity           token overlap of onboarding goals
    4: personality_similarity    token overlap of onboarding personality
    5: project_type_similarity   token overlap of onboarding project type
"""

import re
from typing import List, Optional, Set, Tuple

from .models import MatchProfile, SkillLevel

FEATURE_NAMES = [
    "skill_overlap",
    "level_similarity",
    "preferred_language_match",
    "goal_similarity",
    "personality_similarity",
    "project_type_similarity",
]

FEATURE_WEIGHTS = [0.35, 0.2, 0.15, 0.1, 0.1, 0.1]

LEVEL_ORDER = [SkillLevel.BEGINNER, SkillLevel.INTERMEDIATE, SkillLevel.ADVANCED]

_TOKEN_SPLIT = re.compile(r"\W+")


def jaccard(a: Set[str], b: Set[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def level_similarity(a: Optional[SkillLevel], b: Optional[SkillLevel]) -> float:
    """1.0 for equal levels, 0.5 one step apart, 0.0 at the extremes."""
    if a is None or b is None:
        return 0.5
    diff = abs(LEVEL_ORDER.index(a) - LEVEL_ORDER.index(b))
    return 1 - diff / 2


def preferred_language_match(a: MatchProfile, b: MatchProfile) -> float:
    return 1.0 if a.language_set() & b.preferred_language_set() else 0.0


def _tokens(text: str) -> Set[str]:
    return {t for t in _TOKEN_SPLIT.split(text.lower()) if t}


def text_similarity(a: Optional[str], b: Optional[str]) -> float:
    """Shared unique tokens over the larger token set."""
    if not a or not b:
        return 0.0
    tokens_a = _tokens(a)
    tokens_b = _tokens(b)
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / max(len(tokens_a), len(tokens_b))


def extract_features(a: MatchProfile, b: MatchProfile) -> List[float]:
    answers_a = a.onboarding_answers
    answers_b = b.onboarding_answers
    return [
        jaccard(a.language_set(), b.language_set()),
        level_similarity(a.level, b.level),
        preferred_language_match(a, b),
        text_similarity(answers_a.goals, answers_b.goals),
        text_similarity(answers_a.personality, answers_b.personality),
        text_similarity(answers_a.project_type, answers_b.project_type),
    ]


def compute_weighted_score(features: List[float]) -> float:
    """Weighted mean of the feature vector, normalized to [0, 1]."""
    total_weight = sum(FEATURE_WEIGHTS)
    raw = sum(
        value * weight for value, weight in zip(features, FEATURE_WEIGHTS)
    )
    return raw / total_weight


def score_features(a: MatchProfile, b: MatchProfile) -> Tuple[List[float], int]:
    """Feature vector and its weighted score on the 0-100 integer scale."""
    features = extract_features(a, b)
    return features, int(round(compute_weighted_score(features) * 100))


def weighted_score(a: MatchProfile, b: MatchProfile) -> int:
    """Weighted compatibility on the same 0-100 integer scale as compute_score."""
    return score_features(a, b)[1]
