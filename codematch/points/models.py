"""
Reputation Points Models

A PointsEvent is recorded for every change; DailyPoints keeps the running
per-day totals that the daily cap is enforced against.
"""

from datetime import date, datetime
from enum import Enum
import uuid

from pydantic import BaseModel, Field


class PointsReason(str, Enum):
    ACCEPT_ANSWER = "ACCEPT_ANSWER"
    UPVOTE_OTHERS = "UPVOTE_OTHERS"
    POST_QUESTION = "POST_QUESTION"
    HATEFUL_LANGUAGE = "HATEFUL_LANGUAGE"
    RECEIVE_DOWNVOTES = "RECEIVE_DOWNVOTES"


class PointsEvent(BaseModel):
    """One registered gain or loss. Positive change_amount = gained."""
    event_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    username: str
    change_amount: int
    reason: PointsReason
    created_at: datetime = Field(default_factory=datetime.utcnow)


class DailyPoints(BaseModel):
    """Running totals for one user on one calendar day."""
    username: str
    day: date
    total_gained: int = Field(default=0, ge=0)
    total_lost: int = Field(default=0, ge=0)
    net_change: int = 0


class PointsApplication(BaseModel):
    """How much of a requested change went through and how much the cap blocked."""
    applied: int = Field(ge=0)
    blocked: int = Field(ge=0)


class RegisterPointsRequest(BaseModel):
    username: str = Field(min_length=1)
    change_amount: int
    reason: PointsReason

    class Config:
        extra = "forbid"


class RegisterPointsResponse(BaseModel):
    success: bool = True
    event: PointsEvent
    applied: int
    blocked: int
    daily: DailyPoints
