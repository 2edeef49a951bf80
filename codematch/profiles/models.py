"""
Match Profile request/response models.

The MatchProfile itself lives in codematch.matching.models since the
scorers read it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from codematch.matching.models import (
    MatchPreferences,
    OnboardingAnswers,
    SkillLevel,
)


class UpdateMatchProfileRequest(BaseModel):
    """Partial update; only fields that are present are applied."""
    is_active: Optional[bool] = None
    age: Optional[int] = Field(default=None, ge=0, le=120)
    gender: Optional[str] = None
    location: Optional[str] = None
    programming_language: Optional[List[str]] = None
    level: Optional[SkillLevel] = None
    preferences: Optional[MatchPreferences] = None
    onboarding_answers: Optional[OnboardingAnswers] = None
    biography: Optional[str] = None
    profile_image_url: Optional[str] = None

    class Config:
        extra = "forbid"


class ToggleActiveRequest(BaseModel):
    is_active: bool


class OnboardingStatus(BaseModel):
    exists: bool
    is_active: bool
