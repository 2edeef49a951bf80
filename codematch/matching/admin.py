"""
Matching Endpoints

GET    /api/v1/match/health                   - Health check
GET    /api/v1/match/getMatch/{match_id}      - One match
GET    /api/v1/match/getUserMatches/{user_id} - All matches for a user
POST   /api/v1/match/create                   - Send a match request
PATCH  /api/v1/match/updateStatus/{match_id}  - Accept or reject
DELETE /api/v1/match/delete/{match_id}        - Remove a match
GET    /api/v1/match/recommend/{user_id}      - Ranked recommendations
POST   /api/v1/match/score                    - Score two profiles
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from codematch.storage import MatchStore, get_store

from .features import FEATURE_NAMES, score_features
from .lifecycle import (
    InvalidMatchError,
    MatchNotFoundError,
    UnauthorizedMatchError,
    create_match,
    delete_match,
    get_match,
    get_user_matches,
    update_match_status,
)
from .models import (
    DiscoveryFilters,
    Match,
    MatchingHealthResponse,
    MatchProfile,
    MatchStatus,
    MatchWithProfile,
    RecommendationResult,
    ScoreStrategy,
    SkillLevel,
)
from .recommend import resolve_recommendations
from .score import compute_score, language_overlap, preference_overlap

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/v1/match",
    tags=["match"],
)


# Request / response models

class CreateMatchRequest(BaseModel):
    user_a: str = Field(min_length=1)
    user_b: str = Field(min_length=1)
    initiated_by: str = Field(min_length=1)
    status: MatchStatus = MatchStatus.PENDING
    score: Optional[int] = Field(
        default=None,
        ge=0,
        le=100,
        description="Score snapshot; computed from the profiles when omitted"
    )


class UpdateMatchStatusRequest(BaseModel):
    user_id: str
    status: MatchStatus


class DeleteMatchRequest(BaseModel):
    user_id: str


class DeleteMatchResponse(BaseModel):
    match: Match
    message: str = "Match deleted successfully"


class RecommendResponse(BaseModel):
    success: bool = True
    message: str
    result: RecommendationResult
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class ScoreRequest(BaseModel):
    subject: MatchProfile
    candidate: MatchProfile


class ScoreResponse(BaseModel):
    score: int
    weighted_score: int
    language_overlap: int
    preference_overlap: int
    features: dict


# Endpoints

@router.get("/health", response_model=MatchingHealthResponse)
async def matching_health():
    """Health check for the matching module."""
    return MatchingHealthResponse(
        status="ok",
        module="matching",
        timestamp=datetime.utcnow().isoformat(),
    )


@router.get("/getMatch/{match_id}", response_model=Match)
def get_match_endpoint(match_id: str, store: MatchStore = Depends(get_store)):
    try:
        return get_match(store, match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error retrieving match {match_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error retrieving match: {str(e)}")


@router.get("/getUserMatches/{user_id}", response_model=List[MatchWithProfile])
def get_user_matches_endpoint(user_id: str, store: MatchStore = Depends(get_store)):
    try:
        return get_user_matches(store, user_id)
    except Exception as e:
        logger.error(f"Error retrieving matches for {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error retrieving user matches: {str(e)}")


@router.post("/create", response_model=Match)
def create_match_endpoint(request: CreateMatchRequest, store: MatchStore = Depends(get_store)):
    """
    Create a match request between two users.

    The score snapshot defaults to compute_score(user_a, user_b) when both
    profiles exist.
    """
    try:
        return create_match(
            store,
            user_a=request.user_a,
            user_b=request.user_b,
            initiated_by=request.initiated_by,
            score=request.score,
            status=request.status,
        )
    except InvalidMatchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating match: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error creating a match: {str(e)}")


@router.patch("/updateStatus/{match_id}", response_model=Match)
def update_match_status_endpoint(
    match_id: str,
    request: UpdateMatchStatusRequest,
    store: MatchStore = Depends(get_store),
):
    """Accept or reject a match. Only participants may do this."""
    try:
        return update_match_status(store, match_id, request.user_id, request.status)
    except InvalidMatchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnauthorizedMatchError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating match {match_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error updating match status: {str(e)}")


@router.delete("/delete/{match_id}", response_model=DeleteMatchResponse)
def delete_match_endpoint(
    match_id: str,
    request: DeleteMatchRequest,
    store: MatchStore = Depends(get_store),
):
    """Delete a match. Only participants may do this."""
    try:
        deleted = delete_match(store, match_id, request.user_id)
        return DeleteMatchResponse(match=deleted)
    except UnauthorizedMatchError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting match {match_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deleting match: {str(e)}")


@router.get("/recommend/{user_id}", response_model=RecommendResponse)
def recommend_endpoint(
    user_id: str,
    level: Optional[SkillLevel] = None,
    location: Optional[str] = None,
    text: Optional[str] = None,
    min_score: Optional[int] = Query(default=None, ge=0, le=100),
    strategy: ScoreStrategy = ScoreStrategy.OVERLAP,
    store: MatchStore = Depends(get_store),
):
    """
    Ranked partner recommendations for a user.

    Excludes the user, inactive profiles and anyone the user already has a
    match with. level/location/text are hard filters applied before
    scoring; min_score drops low scores afterwards.
    """
    try:
        filters = DiscoveryFilters(
            level=level,
            location=location,
            text=text,
            min_score=min_score,
        )
        result = resolve_recommendations(
            user_id,
            store.list_profiles(),
            store.list_matches_for_user(user_id),
            filters=filters,
            strategy=strategy,
        )

        if not result.recommendations:
            message = "No recommendations found"
        else:
            message = "Recommendations generated successfully"

        return RecommendResponse(message=message, result=result)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating recommendations for {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error generating recommendations: {str(e)}")


@router.post("/score", response_model=ScoreResponse)
async def score_endpoint(request: ScoreRequest):
    """Score candidate for subject with both strategies."""
    features, weighted = score_features(request.subject, request.candidate)
    return ScoreResponse(
        score=compute_score(request.subject, request.candidate),
        weighted_score=weighted,
        language_overlap=language_overlap(request.subject, request.candidate),
        preference_overlap=preference_overlap(request.subject, request.candidate),
        features=dict(zip(FEATURE_NAMES, features)),
    )
