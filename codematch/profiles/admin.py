"""
Match Profile Endpoints

POST  /api/v1/matchProfile/create
GET   /api/v1/matchProfile/getMatchProfile/{user_id}
GET   /api/v1/matchProfile/getAllMatchProfiles
GET   /api/v1/matchProfile/checkOnboardingStatus/{user_id}
PATCH /api/v1/matchProfile/toggleMatchProfileActive/{user_id}
PATCH /api/v1/matchProfile/updateMatchProfile/{user_id}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from codematch.matching.models import MatchProfile
from codematch.storage import MatchStore, get_store

from .models import OnboardingStatus, ToggleActiveRequest, UpdateMatchProfileRequest
from .service import (
    InvalidProfileUpdateError,
    ProfileExistsError,
    ProfileNotFoundError,
    check_onboarding_status,
    create_match_profile,
    get_match_profile,
    list_match_profiles,
    toggle_match_profile_active,
    update_match_profile,
)

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/v1/matchProfile",
    tags=["match-profile"],
)


@router.post("/create", response_model=MatchProfile)
def create_match_profile_endpoint(profile: MatchProfile, store: MatchStore = Depends(get_store)):
    try:
        return create_match_profile(store, profile)
    except ProfileExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating match profile: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error creating match profile: {str(e)}")


@router.get("/getMatchProfile/{user_id}", response_model=MatchProfile)
def get_match_profile_endpoint(user_id: str, store: MatchStore = Depends(get_store)):
    try:
        return get_match_profile(store, user_id)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error retrieving match profile {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error retrieving match profile: {str(e)}")


@router.get("/getAllMatchProfiles", response_model=List[MatchProfile])
def get_all_match_profiles_endpoint(store: MatchStore = Depends(get_store)):
    try:
        return list_match_profiles(store)
    except Exception as e:
        logger.error(f"Error listing match profiles: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error retrieving match profiles: {str(e)}")


@router.get("/checkOnboardingStatus/{user_id}", response_model=OnboardingStatus)
def check_onboarding_status_endpoint(user_id: str, store: MatchStore = Depends(get_store)):
    """Whether the user has a match profile, and whether it is active."""
    try:
        return check_onboarding_status(store, user_id)
    except Exception as e:
        logger.error(f"Error checking onboarding status for {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error checking onboarding status: {str(e)}")


@router.patch("/toggleMatchProfileActive/{user_id}", response_model=MatchProfile)
def toggle_match_profile_active_endpoint(
    user_id: str,
    request: ToggleActiveRequest,
    store: MatchStore = Depends(get_store),
):
    try:
        return toggle_match_profile_active(store, user_id, request.is_active)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error toggling match profile {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error updating match profile: {str(e)}")


@router.patch("/updateMatchProfile/{user_id}", response_model=MatchProfile)
def update_match_profile_endpoint(
    user_id: str,
    request: UpdateMatchProfileRequest,
    store: MatchStore = Depends(get_store),
):
    """Partial update: only fields present in the body change."""
    try:
        updates = request.model_dump(exclude_unset=True)
        return update_match_profile(store, user_id, updates)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidProfileUpdateError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating match profile {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error updating match profile: {str(e)}")
