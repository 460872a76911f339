from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from config.database import Base
from utils.date_utils import utcnow

class RewardHistory(Base):
    __tablename__ = "reward_history"

    id        = Column(Integer, primary_key=True, autoincrement=True)
    user_id   = Column(String(64), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    amount    = Column(Integer, nullable=False)
    reason    = Column(String(255), nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="rewards_history")

    def __repr__(self):
        return f"<RewardHistory(user_id='{self.user_id}', amount={self.amount}, reason='{self.reason}')>"
