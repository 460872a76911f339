# pickup_routes.py
from fastapi import APIRouter, Depends, status
from typing import List
from sqlalchemy.orm import Session
from config.database import get_db
from config.rewards_config import UserRole
from middlewares.session_middleware import require_role
from api.pickups.pickup_controller import (
    schedule,
    list_mine,
    list_available,
    accept,
    complete,
    rate,
)
from api.pickups.pickup_schema import (
    PickupCreate,
    PickupComplete,
    PickupRate,
    PickupRead,
    PickupScheduled,
    PickupCompletion,
    PickupRating,
)
from utils.session_context import SessionContext

router = APIRouter(prefix="/pickups", tags=["Pickups"])

@router.post(
    "",
    response_model=PickupScheduled,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a pickup for the session customer"
)
def post_pickup(
    data: PickupCreate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
):
    return schedule(data, db, session)

@router.get(
    "/mine",
    response_model=List[PickupScheduled],
    summary="Pickups booked by the session customer"
)
def get_my_pickups(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
):
    return list_mine(db, session)

@router.get(
    "/available",
    response_model=List[PickupRead],
    summary="Open pickups plus the session agent's in-progress ones"
)
def get_available_pickups(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
):
    return list_available(db, session)

@router.post(
    "/{pickup_id}/accept",
    response_model=PickupRead,
    summary="Claim a scheduled pickup"
)
def post_accept(
    pickup_id: str,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
):
    return accept(pickup_id, db, session)

@router.post(
    "/{pickup_id}/complete",
    response_model=PickupCompletion,
    summary="Verify the customer's code and complete the pickup"
)
def post_complete(
    pickup_id: str,
    data: PickupComplete,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
):
    return complete(pickup_id, data, db, session)

@router.post(
    "/{pickup_id}/rate",
    response_model=PickupRating,
    summary="Rate a completed pickup"
)
def post_rate(
    pickup_id: str,
    data: PickupRate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
):
    return rate(pickup_id, data, db, session)
