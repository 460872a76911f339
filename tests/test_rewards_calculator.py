"""Tests for the pure reward, CO2, streak and leaderboard calculators."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from api.rewards.rewards_calculator import (
    badge_level_for,
    build_leaderboard,
    compute_agent_reward,
    compute_co2_saved,
    compute_customer_reward,
    compute_streak,
    next_badge_level,
    performance_level_for,
    round_half_up,
)
from api.user.user_schema import UserStats
from config.rewards_config import CO2_PER_KG, CUSTOMER_POINTS, UserRole, WasteCategory

T0 = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
RETURNING = {"total_items": 5, "current_streak": 0}


class TestCustomerReward:
    """compute_customer_reward."""

    @pytest.mark.parametrize("category", list(WasteCategory))
    @pytest.mark.parametrize("item_count", [1, 3, 9])
    def test_no_bonus_is_table_value_times_items(self, category, item_count):
        expected = round(CUSTOMER_POINTS[category] * item_count)
        assert compute_customer_reward(category.value, item_count, RETURNING) == expected

    def test_first_time_bonus(self):
        assert compute_customer_reward("plastic", 1, {"total_items": 0, "current_streak": 0}) == 20

    def test_all_bonuses_stack_multiplicatively(self):
        """15 * 12 * 2.0 * 1.5 * 1.2"""
        assert compute_customer_reward("metal", 12, {"total_items": 0, "current_streak": 7}) == 648

    def test_unknown_category_uses_default_points(self):
        assert compute_customer_reward("unknown-stuff", 3, RETURNING) == 30

    def test_category_match_is_exact(self):
        """'Metal' is not in the table, so it earns the default 10 rather than 15."""
        assert compute_customer_reward("Metal", 1, RETURNING) == 10

    def test_bulk_bonus_from_ten_items(self):
        assert compute_customer_reward("paper", 10, RETURNING) == 120
        assert compute_customer_reward("paper", 9, RETURNING) == 72

    def test_streak_bonus_from_seven_days(self):
        assert compute_customer_reward("glass", 1, {"total_items": 5, "current_streak": 7}) == 14
        assert compute_customer_reward("glass", 1, {"total_items": 5, "current_streak": 6}) == 12

    def test_rounds_half_up(self):
        """5 * 11 * 1.5 = 82.5, which rounds to 83 (not banker's 82)."""
        assert compute_customer_reward("organic", 11, RETURNING) == 83

    def test_missing_total_items_gets_no_first_time_bonus(self):
        assert compute_customer_reward("plastic", 1, {}) == 10

    def test_accepts_stats_model(self):
        stats = UserStats(total_items=0, current_streak=8)
        assert compute_customer_reward("electronic", 1, stats) == 60


class TestAgentReward:
    """compute_agent_reward."""

    def test_speed_bonus(self):
        pickup = {"accepted_at": T0, "completed_at": T0 + timedelta(minutes=30)}
        assert compute_agent_reward(pickup, {"completed_pickups": 0}) == 60

    def test_full_stack(self):
        """(50 + 10 + 20) * 1.10"""
        pickup = {"accepted_at": T0, "completed_at": T0 + timedelta(minutes=30), "rating": 5}
        assert compute_agent_reward(pickup, {"completed_pickups": 60}) == 88

    def test_speed_window_is_inclusive(self):
        on_time = {"accepted_at": T0, "completed_at": T0 + timedelta(hours=1)}
        late = {"accepted_at": T0, "completed_at": T0 + timedelta(hours=1, seconds=1)}
        assert compute_agent_reward(on_time, {"completed_pickups": 0}) == 60
        assert compute_agent_reward(late, {"completed_pickups": 0}) == 50

    def test_no_timestamps_means_no_speed_bonus(self):
        assert compute_agent_reward({"completed_at": T0}, {"completed_pickups": 0}) == 50
        assert compute_agent_reward({}, {}) == 50

    def test_only_top_rating_earns_bonus(self):
        assert compute_agent_reward({"rating": 4}, {"completed_pickups": 0}) == 50
        assert compute_agent_reward({"rating": 5}, {"completed_pickups": 0}) == 70

    def test_performance_bonus_applies_after_additive_bonuses(self):
        assert compute_agent_reward({}, {"completed_pickups": 50}) == 55
        assert compute_agent_reward({}, {"completed_pickups": 49}) == 50
        assert compute_agent_reward({"rating": 5}, {"completed_pickups": 50}) == 77

    def test_accepts_iso_strings_and_objects(self):
        pickup = SimpleNamespace(
            accepted_at="2026-03-10T09:00:00Z",
            completed_at="2026-03-10T09:45:00Z",
            rating=None,
        )
        assert compute_agent_reward(pickup, SimpleNamespace(completed_pickups=0)) == 60

    def test_naive_and_aware_timestamps_mix(self):
        pickup = {"accepted_at": T0.replace(tzinfo=None), "completed_at": T0 + timedelta(minutes=5)}
        assert compute_agent_reward(pickup, {"completed_pickups": 0}) == 60


class TestCO2Saved:
    """compute_co2_saved."""

    @pytest.mark.parametrize("category", list(WasteCategory))
    def test_table_factor_times_weight(self, category):
        assert compute_co2_saved(category.value, 2) == pytest.approx(CO2_PER_KG[category] * 2)

    def test_unknown_category_defaults_to_one(self):
        assert compute_co2_saved("styrofoam", 3) == pytest.approx(3.0)

    def test_not_rounded(self):
        assert compute_co2_saved("organic", 0.5) == pytest.approx(0.15)


def _completed(customer_id, at, status="completed"):
    return {"customer_id": customer_id, "status": status, "completed_at": at}


class TestStreak:
    """compute_streak."""

    def test_breaks_at_first_gap(self):
        pickups = [_completed("c1", T0 - timedelta(days=d)) for d in (0, 1, 2, 5)]
        assert compute_streak(pickups, "c1") == 3

    def test_no_completions(self):
        assert compute_streak([], "c1") == 0

    def test_single_completion(self):
        assert compute_streak([_completed("c1", T0)], "c1") == 1

    def test_only_counts_that_customer(self):
        pickups = [
            _completed("c1", T0),
            _completed("c2", T0 - timedelta(days=1)),
            _completed("c1", T0 - timedelta(days=2)),
        ]
        assert compute_streak(pickups, "c1") == 1
        assert compute_streak(pickups, "c2") == 1

    def test_ignores_unfinished_pickups(self):
        pickups = [
            _completed("c1", T0),
            _completed("c1", T0 - timedelta(days=1), status="in-progress"),
            {"customer_id": "c1", "status": "completed", "completed_at": None},
        ]
        assert compute_streak(pickups, "c1") == 1

    def test_same_day_completions_do_not_break_streak(self):
        pickups = [
            _completed("c1", T0),
            _completed("c1", T0 - timedelta(hours=2)),
            _completed("c1", T0 - timedelta(days=1)),
            _completed("c1", T0 - timedelta(days=1, hours=3)),
            _completed("c1", T0 - timedelta(days=2)),
        ]
        assert compute_streak(pickups, "c1") == 3

    def test_counts_calendar_days_not_24h_periods(self):
        """23:30 then 00:30 next day is a one-day step."""
        late = datetime(2026, 3, 9, 23, 30, tzinfo=timezone.utc)
        early = datetime(2026, 3, 10, 0, 30, tzinfo=timezone.utc)
        assert compute_streak([_completed("c1", early), _completed("c1", late)], "c1") == 2

    def test_input_order_does_not_matter(self):
        days = [T0 - timedelta(days=d) for d in (3, 0, 2, 1)]
        assert compute_streak([_completed("c1", at) for at in days], "c1") == 4


def _user(name, rewards, role=UserRole.customer):
    return SimpleNamespace(
        user_id=f"USER-{name}",
        name=name,
        role=role,
        rewards=rewards,
        stats={"total_items": 0, "total_co2_saved": 0.0, "current_streak": 0, "total_pickups": 0},
    )


class TestLeaderboard:
    """build_leaderboard."""

    def test_top_n_descending_with_ranks(self):
        users = [_user("a", 30), _user("b", 90), _user("c", 10)]
        board = build_leaderboard(users, UserRole.customer, 2)

        assert [(e.rank, e.name, e.rewards) for e in board] == [(1, "b", 90), (2, "a", 30)]

    def test_filters_by_role(self):
        users = [_user("a", 30), _user("agent", 500, role=UserRole.agent), _user("c", 10)]
        assert [e.name for e in build_leaderboard(users, "customer", 10)] == ["a", "c"]
        assert [e.name for e in build_leaderboard(users, "agent", 10)] == ["agent"]

    def test_ties_keep_input_order(self):
        users = [_user("first", 40), _user("second", 40), _user("third", 40)]
        assert [e.name for e in build_leaderboard(users, UserRole.customer, 3)] == ["first", "second", "third"]

    def test_zero_never_ahead_of_positive(self):
        users = [_user("idle", 0), _user("busy", 1)]
        assert [e.name for e in build_leaderboard(users, UserRole.customer, 2)] == ["busy", "idle"]

    def test_is_idempotent(self):
        users = [_user("a", 30), _user("b", 90), _user("c", 10)]
        first = build_leaderboard(users, UserRole.customer, 3)
        second = build_leaderboard(users, UserRole.customer, 3)
        assert [e.model_dump() for e in first] == [e.model_dump() for e in second]

    def test_limit_larger_than_population(self):
        assert len(build_leaderboard([_user("a", 1)], UserRole.customer, 10)) == 1


class TestLevels:
    """Badge and agent performance levels."""

    @pytest.mark.parametrize("items, expected", [
        (0, "Eco Starter"),
        (9, "Eco Starter"),
        (10, "Green Warrior"),
        (50, "Sustainability Champion"),
        (100, "Planet Hero"),
        (1000, "Eco Legend"),
    ])
    def test_badge_level(self, items, expected):
        assert badge_level_for(items) == expected

    def test_next_badge_level(self):
        assert next_badge_level(47) == ("Sustainability Champion", 50)
        assert next_badge_level(250) is None

    @pytest.mark.parametrize("completed, expected", [
        (0, "Beginner"),
        (5, "Intermediate"),
        (20, "Professional"),
        (50, "Expert"),
        (100, "Elite"),
    ])
    def test_performance_level(self, completed, expected):
        assert performance_level_for(completed) == expected

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(88.00000000000001) == 88
        assert round_half_up(2.4999) == 2
