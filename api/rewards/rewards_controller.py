from fastapi import Depends
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from config.rewards_config import UserRole
from config.settings import settings
from middlewares.session_middleware import require_role
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
from api.rewards.rewards_service import (
    award_reward,
    get_badge_progress,
    get_customer_streak,
    get_leaderboard,
    get_rewards_history,
    record_classification,
)
from api.user.user_schema import RewardHistoryEntry
from api.user.user_service import get_user_or_404
from utils.session_context import SessionContext


def get_leaderboard_controller(
    role: UserRole = UserRole.customer,
    limit: int = settings.LEADERBOARD_DEFAULT_LIMIT,
    db: Session = Depends(get_db)
) -> List[LeaderboardEntry]:
    return get_leaderboard(db, role, limit)

def get_history_controller(
    user_id: str,
    db: Session = Depends(get_db)
) -> RewardsHistory:
    user = get_user_or_404(db, user_id)
    return RewardsHistory(
        user_id=user.user_id,
        rewards=user.rewards,
        history=[RewardHistoryEntry.model_validate(e) for e in get_rewards_history(db, user_id)],
    )

# award points endpoint for manual/admin use
def award_controller(
    user_id: str,
    req: AwardRequest,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role())
) -> AwardResult:
    """
    Unknown users are not an error: the result just reports awarded=False.
    """
    entry = award_reward(db, user_id, req.amount, req.reason, session=session)
    if entry is None:
        return AwardResult(user_id=user_id, awarded=False)
    return AwardResult(
        user_id=user_id,
        awarded=True,
        rewards=entry.user.rewards,
        entry=RewardHistoryEntry.model_validate(entry),
    )

def classification_controller(
    req: ClassificationRequest,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_role(UserRole.customer))
) -> ClassificationResult:
    return record_classification(
        db,
        session.user_id,
        req.category,
        item_count=req.item_count,
        weight_kg=req.weight_kg,
        label=req.label,
        session=session,
    )

def streak_controller(
    customer_id: str,
    db: Session = Depends(get_db)
) -> StreakRead:
    get_user_or_404(db, customer_id)
    return StreakRead(customer_id=customer_id, streak=get_customer_streak(db, customer_id))

def badge_controller(
    user_id: str,
    db: Session = Depends(get_db)
) -> BadgeProgress:
    return get_badge_progress(db, user_id)
