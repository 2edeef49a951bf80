"""
Matching Models

Pydantic models for match profiles, match records and recommendation
outputs.

Profiles arrive from the store or straight from request bodies, so list and
object fields are coerced to empty defaults instead of failing validation.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class MatchStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ScoreStrategy(str, Enum):
    OVERLAP = "overlap"
    WEIGHTED = "weighted"


def normalize_languages(value: Any) -> List[str]:
    """
    Coerce a language list into plain names.

    Accepts None, a list of strings, or a list of {"name": ...} objects
    (populated language documents). Anything else is dropped.
    """
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return []

    names = []
    for entry in value:
        if isinstance(entry, str):
            name = entry.strip()
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
            name = entry["name"].strip()
        else:
            continue
        if name:
            names.append(name)
    return names


class OnboardingAnswers(BaseModel):
    """Free-text onboarding answers, used only by the weighted scorer."""
    goals: Optional[str] = None
    personality: Optional[str] = None
    project_type: Optional[str] = None

    class Config:
        extra = "ignore"


class MatchPreferences(BaseModel):
    """What a user is looking for in a partner."""
    preferred_languages: List[str] = Field(
        default_factory=list,
        description="Languages the user wants a partner to know"
    )
    preferred_level: Optional[SkillLevel] = Field(
        default=None,
        description="Desired partner level; None means no preference"
    )

    class Config:
        extra = "ignore"

    @field_validator("preferred_languages", mode="before")
    @classmethod
    def _coerce_languages(cls, v):
        return normalize_languages(v)

    @field_validator("preferred_level", mode="before")
    @classmethod
    def _coerce_level(cls, v):
        if v in ("", "ANY", "NO_PREFERENCE"):
            return None
        return v


class MatchProfile(BaseModel):
    """
    A user's self-reported profile for coding-partner discovery.

    programming_language and preferences.preferred_languages are
    treated as sets by every scorer.
    """
    user_id: str
    is_active: bool = False
    age: Optional[int] = Field(default=None, ge=0, le=120)
    gender: Optional[str] = None
    location: Optional[str] = None
    programming_language: List[str] = Field(default_factory=list)
    level: Optional[SkillLevel] = SkillLevel.BEGINNER
    preferences: MatchPreferences = Field(default_factory=MatchPreferences)
    onboarding_answers: OnboardingAnswers = Field(default_factory=OnboardingAnswers)
    biography: str = ""
    profile_image_url: str = ""
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("programming_language", mode="before")
    @classmethod
    def _coerce_languages(cls, v):
        return normalize_languages(v)

    @field_validator("preferences", mode="before")
    @classmethod
    def _coerce_preferences(cls, v):
        return v if v is not None else {}

    @field_validator("onboarding_answers", mode="before")
    @classmethod
    def _coerce_answers(cls, v):
        return v if v is not None else {}

    @field_validator("biography", "profile_image_url", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return v if v is not None else ""

    def language_set(self) -> set:
        return set(self.programming_language)

    def preferred_language_set(self) -> set:
        return set(self.preferences.preferred_languages)


class Match(BaseModel):
    """
    A pairwise relationship between two users.

    Created as pending by the initiator, accepted or rejected by the
    recipient, deleted by either participant.
    """
    match_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_a: str
    user_b: str
    status: MatchStatus = MatchStatus.PENDING
    score: int = Field(default=0, ge=0, le=100)
    initiated_by: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        extra = "forbid"

    def involves(self, user_id: str) -> bool:
        return user_id in (self.user_a, self.user_b)

    def other_user(self, user_id: str) -> str:
        return self.user_b if self.user_a == user_id else self.user_a


class MatchWithProfile(Match):
    """A match plus the profile of the participant that isn't the caller."""
    other_user_profile: Optional[MatchProfile] = None


class DiscoveryFilters(BaseModel):
    """
    Hard filters applied before scoring.

    Every field is optional; an unset field does not filter.
    """
    level: Optional[SkillLevel] = None
    location: Optional[str] = None
    text: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring searched in biography and location"
    )
    min_score: Optional[int] = Field(default=None, ge=0, le=100)

    class Config:
        extra = "forbid"


class Recommendation(BaseModel):
    """A scored candidate."""
    user_id: str
    score: int = Field(ge=0, le=100)
    profile: MatchProfile


class RecommendationAudit(BaseModel):
    """Counters for how the candidate pool was narrowed."""
    total_profiles: int
    excluded_self: int = 0
    excluded_inactive: int = 0
    excluded_matched: int = 0
    excluded_filtered: int = 0
    excluded_below_min_score: int = 0
    excluded_no_shared_language: int = Field(
        default=0,
        description="Weighted strategy only: candidates sharing no language with the subject",
    )
    scored: int = 0
    strategy: ScoreStrategy = ScoreStrategy.OVERLAP
    processed_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat()
    )


class RecommendationResult(BaseModel):
    """Complete output of the recommendation assembler."""
    subject_id: str
    recommendations: List[Recommendation]
    recommendation_hash: str = Field(
        description="Deterministic hash of the ordered (user_id, score) list"
    )
    audit: RecommendationAudit


class MatchingHealthResponse(BaseModel):
    """Health check response for matching module."""
    status: str = "ok"
    module: str = "matching"
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
