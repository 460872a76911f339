# api/user/user_model.py
import random
import string
import time

from sqlalchemy import Column, Integer, String, Float, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
from config.rewards_config import UserRole
from api.user.user_rewards_model import RewardHistory
from utils.date_utils import utcnow


def generate_user_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"USER-{int(time.time() * 1000)}-{suffix}"


class User(Base):
    __tablename__ = 'users'

    # registration order; ties on created_at fall back to this
    id           = Column(Integer, primary_key=True, autoincrement=True)
    user_id      = Column(String(64), nullable=False, unique=True, index=True, default=generate_user_id)
    name         = Column(String(100), nullable=False)
    email        = Column(String(255), nullable=False, unique=True, index=True)
    phone        = Column(String(32), nullable=False, default="")
    role         = Column(Enum(UserRole), nullable=False, default=UserRole.customer, index=True)
    vehicle_info = Column(String(255), nullable=True)
    created_at   = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # running total, equals the sum of rewards_history amounts
    rewards      = Column(Integer, nullable=False, default=0)

    # aggregate stats
    total_items     = Column(Integer, nullable=False, default=0)
    total_co2_saved = Column(Float, nullable=False, default=0.0)
    current_streak  = Column(Integer, nullable=False, default=0)
    total_pickups   = Column(Integer, nullable=False, default=0)

    rewards_history = relationship(
        RewardHistory,
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=RewardHistory.id
    )

    @property
    def stats(self) -> dict:
        return {
            "total_items": self.total_items or 0,
            "total_co2_saved": self.total_co2_saved or 0.0,
            "current_streak": self.current_streak or 0,
            "total_pickups": self.total_pickups or 0,
        }

    def __repr__(self):
        return f"<User(user_id='{self.user_id}', role='{self.role}', rewards={self.rewards})>"
