"""
Reputation Points Endpoints

POST /api/v1/points/register          - Record a gain or loss
GET  /api/v1/points/daily/{username}  - Today's capped totals
GET  /api/v1/points/events/{username} - Every recorded change
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from codematch.storage import MatchStore, get_store

from .ledger import get_daily_points, register_points
from .models import DailyPoints, PointsEvent, RegisterPointsRequest, RegisterPointsResponse

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/v1/points",
    tags=["points"],
)


@router.post("/register", response_model=RegisterPointsResponse)
def register_points_endpoint(request: RegisterPointsRequest, store: MatchStore = Depends(get_store)):
    """
    Record a point change for a user.

    The change is applied up to the daily cap; the response says how much
    went through and how much was blocked.
    """
    try:
        event, result, daily = register_points(
            store,
            request.username,
            request.change_amount,
            request.reason,
        )
        return RegisterPointsResponse(
            event=event,
            applied=result.applied,
            blocked=result.blocked,
            daily=daily,
        )
    except Exception as e:
        logger.error(f"Error registering points for {request.username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Points error: {str(e)}")


@router.get("/daily/{username}", response_model=DailyPoints)
def daily_points_endpoint(username: str, store: MatchStore = Depends(get_store)):
    try:
        return get_daily_points(store, username)
    except Exception as e:
        logger.error(f"Error loading daily points for {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Points error: {str(e)}")


@router.get("/events/{username}", response_model=List[PointsEvent])
def points_events_endpoint(username: str, store: MatchStore = Depends(get_store)):
    try:
        return store.list_points_events(username)
    except Exception as e:
        logger.error(f"Error loading point events for {username}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Points error: {str(e)}")
