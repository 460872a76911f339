from fastapi import APIRouter, Depends, Query
from typing import List
from sqlalchemy.orm import Session
from config.database import get_db
from config.rewards_config import UserRole
from config.settings import settings
from middlewares.session_middleware import require_role
from api.rewards.rewards_controller import (
    get_leaderboard_controller,
    get_history_controller,
    award_controller,
    classification_controller,
    streak_controller,
    badge_controller,
)
from api.rewards.rewards_schema import (
    AwardRequest,
    AwardResult,
    BadgeProgress,
    ClassificationRequest,
    ClassificationResult,
    LeaderboardEntry,
    RewardsHistory,
    StreakRead,
)
from utils.session_context import SessionContext

router = APIRouter(prefix="/rewards", tags=["Rewards"])

@router.get(
    "/leaderboard",
    response_model=List[LeaderboardEntry],
    summary="Top users of a role by reward points"
)
def read_leaderboard(
    role: UserRole = Query(UserRole.customer, description="customer or agent"),
    limit: int = Query(settings.LEADERBOARD_DEFAULT_LIMIT, ge=1, le=settings.LEADERBOARD_MAX_LIMIT),
    db: Session = Depends(get_db)
):
    return get_leaderboard_controller(role, limit, db)

@router.get(
    "/users/{user_id}/history",
    response_model=RewardsHistory,
    summary="Reward total and every award, oldest first"
)
def read_history(
    user_id: str,
    db: Session = Depends(get_db)
):
    return get_history_controller(user_id, db)

@router.post(
    "/users/{user_id}/award",
    response_model=AwardResult,
    summary="Award (or deduct) points manually; needs a signed-in user"
)
def post_award(
    user_id: str,
    req: AwardRequest,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role())
):
    return award_controller(user_id, req, db, session)

@router.post(
    "/classifications",
    response_model=ClassificationResult,
    summary="Reward the session customer for a classified item"
)
def post_classification(
    req: ClassificationRequest,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
):
    return classification_controller(req, db, session)

@router.get(
    "/customers/{customer_id}/streak",
    response_model=StreakRead,
    summary="Consecutive days with a completed pickup"
)
def read_streak(
    customer_id: str,
    db: Session = Depends(get_db)
):
    return streak_controller(customer_id, db)

@router.get(
    "/users/{user_id}/badge",
    response_model=BadgeProgress,
    summary="Current badge level and progress to the next"
)
def read_badge(
    user_id: str,
    db: Session = Depends(get_db)
):
    return badge_controller(user_id, db)
