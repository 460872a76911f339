"""
Reward arithmetic for customers and agents.

Everything here is a pure function over plain records: ORM rows, pydantic
models and dicts are all accepted wherever a record is expected. Nothing
reads or writes the database; the ledger in rewards_service does that.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional

from config.rewards_config import (
    AGENT_BASE_PICKUP,
    AGENT_PERFORMANCE_MULTIPLIER,
    AGENT_PERFORMANCE_THRESHOLD,
    AGENT_RATING_BONUS,
    AGENT_SPEED_BONUS,
    BADGE_LEVELS,
    BULK_BONUS,
    BULK_THRESHOLD,
    CO2_PER_KG,
    CUSTOMER_POINTS,
    DEFAULT_CO2_PER_KG,
    DEFAULT_CUSTOMER_POINTS,
    FIRST_TIME_BONUS,
    PERFORMANCE_LEVELS,
    SPEED_BONUS_WINDOW,
    STREAK_BONUS,
    STREAK_THRESHOLD,
    TOP_RATING,
    UserRole,
    resolve_category,
)
from api.rewards.rewards_schema import LeaderboardEntry
from utils.date_utils import as_utc

COMPLETED = "completed"


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def customer_base_points(category: str) -> int:
    known = resolve_category(category)
    if known is None:
        return DEFAULT_CUSTOMER_POINTS
    return CUSTOMER_POINTS[known]


def compute_customer_reward(category: str, item_count: int, prior_stats: Any) -> int:
    """
    Points earned by a customer for one classification event.

    `prior_stats` are the customer's stats *before* this event; only
    `total_items` and `current_streak` are read. Bonuses stack
    multiplicatively in a fixed order: first-time, bulk, streak.
    """
    reward = customer_base_points(category) * item_count

    if _field(prior_stats, "total_items") == 0:
        reward *= FIRST_TIME_BONUS

    if item_count >= BULK_THRESHOLD:
        reward *= BULK_BONUS

    if (_field(prior_stats, "current_streak") or 0) >= STREAK_THRESHOLD:
        reward *= STREAK_BONUS

    return round_half_up(reward)


def compute_agent_reward(pickup: Any, agent_stats: Any) -> int:
    """
    Points earned by an agent for completing `pickup`.

    Speed and rating bonuses are added to the base; the performance bonus
    then scales the whole total.
    """
    reward = AGENT_BASE_PICKUP

    accepted_at = as_utc(_field(pickup, "accepted_at"))
    completed_at = as_utc(_field(pickup, "completed_at"))
    if accepted_at and completed_at and completed_at - accepted_at <= SPEED_BONUS_WINDOW:
        reward += AGENT_SPEED_BONUS

    if _field(pickup, "rating") == TOP_RATING:
        reward += AGENT_RATING_BONUS

    if (_field(agent_stats, "completed_pickups") or 0) >= AGENT_PERFORMANCE_THRESHOLD:
        reward *= AGENT_PERFORMANCE_MULTIPLIER

    return round_half_up(reward)


def compute_co2_saved(category: str, weight_kg: float) -> float:
    known = resolve_category(category)
    factor = DEFAULT_CO2_PER_KG if known is None else CO2_PER_KG[known]
    return factor * weight_kg


def compute_streak(pickups: Iterable[Any], customer_id: str) -> int:
    """
    Consecutive calendar days (UTC), counted back from the customer's most
    recent completed pickup, with at least one completion each.

    Several completions on the same day count once and never break the
    streak; the first gap of more than one day ends it.
    """
    days = sorted(
        {
            as_utc(_field(p, "completed_at")).date()
            for p in pickups
            if _field(p, "customer_id") == customer_id
            and _field(p, "status") == COMPLETED
            and _field(p, "completed_at") is not None
        },
        reverse=True,
    )
    if not days:
        return 0

    streak = 1
    current = days[0]
    for day in days[1:]:
        if (current - day).days != 1:
            break
        streak += 1
        current = day
    return streak


def build_leaderboard(users: Iterable[Any], role: str, limit: int) -> List[LeaderboardEntry]:
    """
    Rank users of one role by reward total, highest first.
    Ties keep their input order.
    """
    role = UserRole(role)
    candidates = [u for u in users if _field(u, "role") == role]
    ranked = sorted(candidates, key=lambda u: _field(u, "rewards") or 0, reverse=True)

    return [
        LeaderboardEntry(
            rank=position,
            user_id=_field(user, "user_id"),
            name=_field(user, "name"),
            rewards=_field(user, "rewards") or 0,
            stats=_field(user, "stats") or {},
        )
        for position, user in enumerate(ranked[:limit], start=1)
    ]


def badge_level_for(total_items: int) -> str:
    for name, threshold in BADGE_LEVELS:
        if total_items >= threshold:
            return name
    return BADGE_LEVELS[-1][0]


def performance_level_for(completed_pickups: int) -> str:
    for level, threshold in PERFORMANCE_LEVELS:
        if completed_pickups >= threshold:
            return level
    return PERFORMANCE_LEVELS[-1][0]


def next_badge_level(total_items: int) -> Optional[tuple]:
    """(name, threshold) of the next badge still to earn, None at the top."""
    upcoming = [level for level in BADGE_LEVELS if level[1] > total_items]
    return upcoming[-1] if upcoming else None
