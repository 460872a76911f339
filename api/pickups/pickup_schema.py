# api/pickups/pickup_schema.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import date as date_type, datetime

from api.pickups.pickup_model import PickupStatus, TimeSlot


# ─── Create / Actions ──────────────────────────────────────────────────────────
class PickupCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: date_type
    time_slot: TimeSlot
    address: str = Field(..., min_length=1)
    items: str = ""

class PickupComplete(BaseModel):
    verification_code: str = Field(..., min_length=1, max_length=12)

class PickupRate(BaseModel):
    rating: int = Field(..., ge=1, le=5)


# ─── Read ──────────────────────────────────────────────────────────────────────
class PickupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    pickup_id: str
    customer_id: str
    agent_id: Optional[str] = None
    status: PickupStatus
    date: str
    time_slot: TimeSlot
    address: str
    items: str
    created_at: datetime
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    rating: Optional[int] = None

class PickupScheduled(PickupRead):
    # only handed back to the customer who booked it
    verification_code: str

class PickupCompletion(BaseModel):
    pickup: PickupRead
    agent_reward: int
    customer_streak: int

class PickupRating(BaseModel):
    pickup: PickupRead
    bonus_awarded: int
