"""
Compatibility Scorer

Scores a candidate profile against a subject profile:

    score = min(shared_languages * 20 + preferred_languages_known * 15, 100)

The score is asymmetric. Only the subject's preferences are checked
against the candidate's languages, so compute_score(a, b) and
compute_score(b, a) can differ. Level and location never enter the score;
they are hard filters in the recommendation step.
"""

from .models import MatchProfile

LANGUAGE_WEIGHT = 20
PREFERENCE_WEIGHT = 15
MAX_SCORE = 100


def language_overlap(subject: MatchProfile, candidate: MatchProfile) -> int:
    """Number of distinct languages both profiles know."""
    return len(subject.language_set() & candidate.language_set())


def preference_overlap(subject: MatchProfile, candidate: MatchProfile) -> int:
    """Number of the candidate's languages the subject asked for."""
    return len(candidate.language_set() & subject.preferred_language_set())


def compute_score(subject: MatchProfile, candidate: MatchProfile) -> int:
    """
    Compatibility of candidate for subject, as an integer in [0, 100].

    Empty or missing language lists score 0; this never raises for a
    well-formed MatchProfile.
    """
    score = language_overlap(subject, candidate) * LANGUAGE_WEIGHT
    score += preference_overlap(subject, candidate) * PREFERENCE_WEIGHT
    return min(score, MAX_SCORE)
