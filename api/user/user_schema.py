from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from config.rewards_config import UserRole

# ----- Shared Schemas -----
class UserStats(BaseModel):
    total_items: int = Field(0, ge=0)
    total_co2_saved: float = Field(0.0, ge=0)
    current_streak: int = Field(0, ge=0)
    total_pickups: int = Field(0, ge=0)

    model_config = ConfigDict(from_attributes=True)

# ----- Registration Schema -----
class UserRegister(BaseModel):
    name: str = Field(
        ...,
        min_length=1, max_length=100,
        description="Display name shown on leaderboards"
    )
    email: EmailStr = Field(
        ...,
        description="A valid email address"
    )
    role: UserRole = Field(
        UserRole.customer,
        description="customer or agent"
    )
    phone: str = Field(
        "",
        max_length=32
    )
    vehicle_info: Optional[str] = Field(
        None,
        max_length=255,
        description="Only kept for agents"
    )

    model_config = ConfigDict(extra="forbid")

# ----- Response Schema -----
class RewardHistoryEntry(BaseModel):
    amount: int
    reason: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)

class UserResponse(BaseModel):
    user_id: str
    name: str
    email: EmailStr
    phone: str
    role: UserRole
    vehicle_info: Optional[str] = None
    rewards: int
    stats: UserStats
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True
    )

class UserDetailResponse(UserResponse):
    rewards_history: List[RewardHistoryEntry] = []

# ----- Generic Response -----
class Message(BaseModel):
    message: str
