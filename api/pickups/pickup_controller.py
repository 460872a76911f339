# pickup_controller.py
from fastapi import Depends
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from config.rewards_config import UserRole
from middlewares.session_middleware import require_role
from api.pickups.pickup_schema import (
    PickupCreate,
    PickupComplete,
    PickupRate,
    PickupRead,
    PickupScheduled,
    PickupCompletion,
    PickupRating,
)
from api.pickups.pickup_service import PickupService
from utils.session_context import SessionContext

service = PickupService

def schedule(
    data: PickupCreate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
) -> PickupScheduled:
    pickup = service(db).schedule_pickup(session.user_id, data)
    return PickupScheduled.model_validate(pickup)

def list_mine(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
) -> List[PickupScheduled]:
    return [PickupScheduled.model_validate(p) for p in service(db).list_for_customer(session.user_id)]

def list_available(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
) -> List[PickupRead]:
    return [PickupRead.model_validate(p) for p in service(db).list_available(session.user_id)]

def accept(
    pickup_id: str,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
) -> PickupRead:
    return PickupRead.model_validate(service(db).accept_pickup(pickup_id, session.user_id))

def complete(
    pickup_id: str,
    data: PickupComplete,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.agent))
) -> PickupCompletion:
    pickup, reward, streak = service(db).complete_pickup(
        pickup_id, session.user_id, data.verification_code, session=session
    )
    return PickupCompletion(
        pickup=PickupRead.model_validate(pickup),
        agent_reward=reward,
        customer_streak=streak,
    )

def rate(
    pickup_id: str,
    data: PickupRate,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
) -> PickupRating:
    pickup, bonus = service(db).rate_pickup(pickup_id, session.user_id, data.rating)
    return PickupRating(pickup=PickupRead.model_validate(pickup), bonus_awarded=bonus)
