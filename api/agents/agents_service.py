from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.pickups.pickup_model import PickupStatus
from api.pickups.pickup_store import PickupStore
from api.rewards.rewards_calculator import performance_level_for, round_half_up
from api.rewards.rewards_schema import AgentEarnings, AgentPerformance
from api.rewards.rewards_service import get_rewards_history
from api.user.user_schema import RewardHistoryEntry
from api.user.user_service import get_user_or_404
from config.rewards_config import UserRole
from utils.date_utils import (
    as_utc,
    start_of_day,
    start_of_month,
    start_of_previous_month,
    start_of_week,
    utcnow,
)

RECENT_TRANSACTIONS = 20


class AgentsService:
    def __init__(self, db: Session):
        self.db = db
        self.pickups = PickupStore(db)

    def _agent_or_404(self, agent_id: str):
        agent = get_user_or_404(self.db, agent_id)
        if agent.role != UserRole.agent:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agent not found")
        return agent

    def get_performance(self, agent_id: str, now: Optional[datetime] = None) -> AgentPerformance:
        self._agent_or_404(agent_id)
        now = as_utc(now) or utcnow()

        assigned = self.pickups.for_agent(agent_id)
        completed = [as_utc(p.completed_at) for p in assigned if p.status == PickupStatus.completed]
        this_month = start_of_month(now)
        last_month = start_of_previous_month(now)

        rate = round_half_up(len(completed) / len(assigned) * 100) if assigned else 0
        return AgentPerformance(
            agent_id=agent_id,
            total_pickups=len(assigned),
            completed_pickups=len(completed),
            completion_rate=rate,
            this_month_pickups=sum(1 for at in completed if at >= this_month),
            last_month_pickups=sum(1 for at in completed if last_month <= at < this_month),
            level=performance_level_for(len(completed)),
        )

    def get_earnings(self, agent_id: str, now: Optional[datetime] = None) -> AgentEarnings:
        """Point totals from the agent's ledger, bucketed by when they were awarded."""
        self._agent_or_404(agent_id)
        now = as_utc(now) or utcnow()
        history = get_rewards_history(self.db, agent_id)

        def earned_since(start: datetime) -> int:
            return sum(entry.amount for entry in history if as_utc(entry.timestamp) >= start)

        recent = sorted(history, key=lambda entry: (as_utc(entry.timestamp), entry.id), reverse=True)
        return AgentEarnings(
            agent_id=agent_id,
            total=sum(entry.amount for entry in history),
            today=earned_since(start_of_day(now)),
            this_week=earned_since(start_of_week(now)),
            this_month=earned_since(start_of_month(now)),
            transactions=[RewardHistoryEntry.model_validate(e) for e in recent[:RECENT_TRANSACTIONS]],
            generated_at=now,
        )
