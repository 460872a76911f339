import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.user.user_model import User
from api.user.user_rewards_model import RewardHistory
from api.user.user_store import UserStore
from api.user.user_service import get_user_or_404
from api.pickups.pickup_store import PickupStore
from api.rewards.rewards_calculator import (
    build_leaderboard,
    compute_co2_saved,
    compute_customer_reward,
    compute_streak,
    badge_level_for,
    next_badge_level,
)
from api.rewards.rewards_schema import (
    BadgeProgress,
    ClassificationResult,
    LeaderboardEntry,
)
from config.rewards_config import RewardReason, UserRole
from utils.date_utils import utcnow
from utils.session_context import SessionContext

logger = logging.getLogger("RewardLedger")


# ─── Ledger ────────────────────────────────────────────────────────────────────

def award_reward(
    db: Session,
    user_id: str,
    amount: int,
    reason: str = RewardReason.manual.value,
    session: Optional[SessionContext] = None,
    commit: bool = True
) -> Optional[RewardHistory]:
    """
    Add `amount` to the user's running total and append it to their history.

    The increment is a single UPDATE so concurrent awards cannot lose each
    other. Unknown users are a silent no-op and return None. Negative
    amounts are allowed and may take the total below zero.
    With commit=False the caller owns the transaction.
    """
    # pending changes must hit the database before the user row is reloaded
    db.flush()

    updated = (
        db.query(User)
        .filter(User.user_id == user_id)
        .update({User.rewards: User.rewards + amount}, synchronize_session=False)
    )
    if not updated:
        logger.warning("Award of %s skipped: user %s not found", amount, user_id)
        return None

    entry = RewardHistory(user_id=user_id, amount=amount, reason=reason, timestamp=utcnow())
    db.add(entry)
    if commit:
        db.commit()
    else:
        db.flush()

    user = UserStore(db).get_user(user_id)
    db.refresh(user)
    if session is not None:
        session.refresh_from(user)

    logger.info("Awarded %s points to %s (%s), total now %s", amount, user_id, reason, user.rewards)
    return entry


def get_rewards_history(db: Session, user_id: str) -> List[RewardHistory]:
    """Oldest first, in the order the awards were made."""
    return (
        db.query(RewardHistory)
        .filter(RewardHistory.user_id == user_id)
        .order_by(RewardHistory.id.asc())
        .all()
    )


# ─── Classification flow ───────────────────────────────────────────────────────

def record_classification(
    db: Session,
    user_id: str,
    category: str,
    item_count: int = 1,
    weight_kg: float = 1.0,
    label: Optional[str] = None,
    session: Optional[SessionContext] = None
) -> ClassificationResult:
    """
    Reward a customer for a successful classification and update their stats.

    Points come from the stats as they were before this event, so the
    first-time bonus fires only on a customer's very first classification.
    The award and the stat increments commit together.
    """
    user = get_user_or_404(db, user_id)
    if user.role != UserRole.customer:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only customers earn classification rewards"
        )

    points = compute_customer_reward(category, item_count, user.stats)
    co2_saved = compute_co2_saved(category, weight_kg)

    try:
        reason = RewardReason.classification.describe(label=label or category)
        award_reward(db, user_id, points, reason, commit=False)
        db.query(User).filter(User.user_id == user_id).update(
            {
                User.total_items: User.total_items + item_count,
                User.total_co2_saved: User.total_co2_saved + co2_saved,
            },
            synchronize_session=False
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Classification reward for %s failed", user_id)
        raise

    db.refresh(user)
    if session is not None:
        session.refresh_from(user)

    logger.info("Classified %s x%s for %s: +%s points, %.2f kg CO2", category, item_count, user_id, points, co2_saved)
    return ClassificationResult(
        user_id=user.user_id,
        category=category,
        points_awarded=points,
        co2_saved=co2_saved,
        rewards=user.rewards,
        stats=user.stats,
        badge_level=badge_level_for(user.total_items),
    )


# ─── Read models ───────────────────────────────────────────────────────────────

def get_leaderboard(db: Session, role: UserRole = UserRole.customer, limit: int = 10) -> List[LeaderboardEntry]:
    return build_leaderboard(UserStore(db).get_all_users(), role, limit)


def get_customer_streak(db: Session, customer_id: str) -> int:
    return compute_streak(PickupStore(db).completed_for_customer(customer_id), customer_id)


def get_badge_progress(db: Session, user_id: str) -> BadgeProgress:
    user = get_user_or_404(db, user_id)
    total_items = user.total_items or 0
    upcoming = next_badge_level(total_items)
    return BadgeProgress(
        user_id=user.user_id,
        total_items=total_items,
        badge_level=badge_level_for(total_items),
        next_level=upcoming[0] if upcoming else None,
        items_to_next_level=upcoming[1] - total_items if upcoming else None,
    )
