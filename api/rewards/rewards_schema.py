from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from api.user.user_schema import UserStats, RewardHistoryEntry
from config.rewards_config import RewardReason


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: Optional[str] = None
    name: str
    rewards: int
    stats: UserStats

    model_config = ConfigDict(from_attributes=True)


class AwardRequest(BaseModel):
    amount: int = Field(..., description="May be negative")
    reason: str = Field(RewardReason.manual.value, min_length=1, max_length=255)

    model_config = ConfigDict(extra="forbid")


class AwardResult(BaseModel):
    user_id: str
    awarded: bool
    rewards: Optional[int] = None
    entry: Optional[RewardHistoryEntry] = None


class ClassificationRequest(BaseModel):
    category: str = Field(..., min_length=1, description="Waste category from the classifier")
    label: Optional[str] = Field(None, description="Human readable classifier label")
    item_count: int = Field(1, ge=1)
    weight_kg: float = Field(1.0, gt=0)

    model_config = ConfigDict(extra="forbid")


class ClassificationResult(BaseModel):
    user_id: str
    category: str
    points_awarded: int
    co2_saved: float
    rewards: int
    stats: UserStats
    badge_level: str


class RewardsHistory(BaseModel):
    user_id: str
    rewards: int
    history: List[RewardHistoryEntry]


class StreakRead(BaseModel):
    customer_id: str
    streak: int


class BadgeProgress(BaseModel):
    user_id: str
    total_items: int
    badge_level: str
    next_level: Optional[str] = None
    items_to_next_level: Optional[int] = None


class AgentPerformance(BaseModel):
    agent_id: str
    total_pickups: int
    completed_pickups: int
    completion_rate: int
    this_month_pickups: int
    last_month_pickups: int
    level: str


class AgentEarnings(BaseModel):
    agent_id: str
    total: int
    today: int
    this_week: int
    this_month: int
    transactions: List[RewardHistoryEntry]
    generated_at: datetime
