import enum
import random
import string
import time

from sqlalchemy import Column, Integer, String, Text, Enum, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from config.database import Base
from utils.date_utils import utcnow


class PickupStatus(str, enum.Enum):
    scheduled   = 'scheduled'
    in_progress = 'in-progress'
    completed   = 'completed'


class TimeSlot(str, enum.Enum):
    morning   = 'morning'     # 08:00-12:00
    afternoon = 'afternoon'   # 12:00-16:00
    evening   = 'evening'     # 16:00-20:00


def generate_pickup_id() -> str:
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=4))
    return f"PICKUP-{int(time.time() * 1000)}-{suffix}"


def generate_verification_code() -> str:
    return "".join(random.choices(string.ascii_uppercase + string.digits, k=6))


class Pickup(Base):
    __tablename__ = 'pickups'
    __table_args__ = (
        CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_pickup_rating'),
    )

    pickup_id         = Column(String(64), primary_key=True, default=generate_pickup_id)
    verification_code = Column(String(12), nullable=False, default=generate_verification_code)
    customer_id       = Column(String(64), ForeignKey('users.user_id'), nullable=False, index=True)
    agent_id          = Column(String(64), ForeignKey('users.user_id'), nullable=True, index=True)
    status            = Column(
        Enum(PickupStatus, values_callable=lambda e: [m.value for m in e], name='pickup_status_enum'),
        nullable=False,
        default=PickupStatus.scheduled
    )
    date              = Column(String(10), nullable=False)   # YYYY-MM-DD
    time_slot         = Column(
        Enum(TimeSlot, values_callable=lambda e: [m.value for m in e], name='pickup_time_slot_enum'),
        nullable=False
    )
    address           = Column(Text, nullable=False)
    items             = Column(Text, nullable=False, default="")
    created_at        = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    accepted_at       = Column(DateTime(timezone=True), nullable=True)
    completed_at      = Column(DateTime(timezone=True), nullable=True)
    rating            = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<Pickup(pickup_id='{self.pickup_id}', status='{self.status}')>"
