"""
Recommendation Assembler

Builds a scored, sorted candidate list for one user from a snapshot of
profiles and matches passed in by the caller.

Pipeline:
1. Drop the subject's own profile
2. Drop inactive profiles
3. Drop anyone already linked to the subject by a match (any status)
4. Apply optional hard filters (level, location, free text)
5. Weighted strategy only: drop candidates sharing no language
6. Score what remains
7. Stable sort, highest score first

Pure and synchronous: no I/O, same input -> same output.
"""

import hashlib
import json
import logging
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .features import jaccard, weighted_score
from .models import (
    DiscoveryFilters,
    Match,
    MatchProfile,
    Recommendation,
    RecommendationAudit,
    RecommendationResult,
    ScoreStrategy,
)
from .score import compute_score

logger = logging.getLogger(__name__)

Scorer = Callable[[MatchProfile, MatchProfile], int]

SCORERS: Dict[ScoreStrategy, Scorer] = {
    ScoreStrategy.OVERLAP: compute_score,
    ScoreStrategy.WEIGHTED: weighted_score,
}


def matched_user_ids(subject_id: str, matches: Iterable[Match]) -> Set[str]:
    """Users linked to subject_id by any match, regardless of status."""
    linked = set()
    for match in matches:
        if match.involves(subject_id):
            linked.add(match.other_user(subject_id))
    return linked


def passes_filters(profile: MatchProfile, filters: Optional[DiscoveryFilters]) -> bool:
    """Level and location are exact (location case-insensitive); text is a substring search."""
    if filters is None:
        return True

    if filters.level is not None and profile.level != filters.level:
        return False

    if filters.location:
        if (profile.location or "").strip().lower() != filters.location.strip().lower():
            return False

    if filters.text:
        needle = filters.text.strip().lower()
        haystack = f"{profile.biography} {profile.location or ''}".lower()
        if needle and needle not in haystack:
            return False

    return True


def _select_candidates(
    subject_id: str,
    all_profiles: Iterable[MatchProfile],
    existing_matches: Iterable[Match],
    filters: Optional[DiscoveryFilters],
    audit: RecommendationAudit,
) -> Tuple[Optional[MatchProfile], List[MatchProfile]]:
    linked = matched_user_ids(subject_id, existing_matches)
    subject: Optional[MatchProfile] = None
    candidates: List[MatchProfile] = []

    for profile in all_profiles:
        audit.total_profiles += 1
        if profile.user_id == subject_id:
            subject = profile
            audit.excluded_self += 1
            continue
        if not profile.is_active:
            audit.excluded_inactive += 1
            continue
        if profile.user_id in linked:
            audit.excluded_matched += 1
            continue
        if not passes_filters(profile, filters):
            audit.excluded_filtered += 1
            continue
        candidates.append(profile)

    return subject, candidates


def recommend(
    subject_id: str,
    all_profiles: Iterable[MatchProfile],
    existing_matches: Iterable[Match],
    scorer: Scorer = compute_score,
    filters: Optional[DiscoveryFilters] = None,
) -> List[Recommendation]:
    """
    Score every eligible candidate for subject_id, best first.

    Returns an empty list when subject_id has no profile in all_profiles.
    Ties keep their input order.
    """
    audit = RecommendationAudit(total_profiles=0)
    return _recommend(subject_id, all_profiles, existing_matches, scorer, filters, audit)


def _recommend(
    subject_id: str,
    all_profiles: Iterable[MatchProfile],
    existing_matches: Iterable[Match],
    scorer: Scorer,
    filters: Optional[DiscoveryFilters],
    audit: RecommendationAudit,
    require_shared_language: bool = False,
) -> List[Recommendation]:
    subject, candidates = _select_candidates(
        subject_id, all_profiles, existing_matches, filters, audit
    )
    if subject is None:
        logger.debug(f"No match profile for {subject_id}, nothing to recommend")
        return []

    recommendations = []
    for candidate in candidates:
        if require_shared_language and jaccard(subject.language_set(), candidate.language_set()) == 0:
            audit.excluded_no_shared_language += 1
            continue
        score = scorer(subject, candidate)
        audit.scored += 1
        if filters is not None and filters.min_score is not None and score < filters.min_score:
            audit.excluded_below_min_score += 1
            continue
        recommendations.append(Recommendation(
            user_id=candidate.user_id,
            score=score,
            profile=candidate,
        ))

    # list.sort is stable, so equal scores keep input order
    recommendations.sort(key=lambda r: r.score, reverse=True)
    return recommendations


def compute_recommendation_hash(recommendations: List[Recommendation]) -> str:
    """
    "sha256:<hex>" of the ordered (user_id, score) pairs as compact,
    key-sorted JSON. Same ranking, same hash.
    """
    pairs = [{"user_id": r.user_id, "score": r.score} for r in recommendations]
    canonical = json.dumps(pairs, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def resolve_recommendations(
    subject_id: str,
    profiles: Iterable[MatchProfile],
    matches: Iterable[Match],
    filters: Optional[DiscoveryFilters] = None,
    strategy: ScoreStrategy = ScoreStrategy.OVERLAP,
) -> RecommendationResult:
    """
    Recommendations for subject_id with an audit of what was excluded.

    strategy picks the scorer: "overlap" (compute_score) or "weighted"
    (the feature model). The weighted strategy only ranks candidates that
    share at least one language with the subject.
    """
    strategy = ScoreStrategy(strategy)
    audit = RecommendationAudit(total_profiles=0, strategy=strategy)

    recommendations = _recommend(
        subject_id,
        profiles,
        matches,
        SCORERS[strategy],
        filters,
        audit,
        require_shared_language=strategy == ScoreStrategy.WEIGHTED,
    )

    logger.info(
        f"Recommendations for {subject_id}: {len(recommendations)} of "
        f"{audit.total_profiles} profiles (strategy={strategy.value})"
    )

    return RecommendationResult(
        subject_id=subject_id,
        recommendations=recommendations,
        recommendation_hash=compute_recommendation_hash(recommendations),
        audit=audit,
    )
