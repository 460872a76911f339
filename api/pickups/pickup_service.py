import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.pickups.pickup_model import Pickup, PickupStatus
from api.pickups.pickup_schema import PickupCreate
from api.pickups.pickup_store import PickupStore
from api.rewards.rewards_calculator import compute_agent_reward, compute_streak
from api.rewards.rewards_service import award_reward
from api.user.user_model import User
from api.user.user_service import get_user_or_404
from api.user.user_store import UserStore
from config.rewards_config import RewardReason, UserRole
from utils.date_utils import utcnow
from utils.session_context import SessionContext

logger = logging.getLogger("PickupService")


class PickupService:
    def __init__(self, db: Session):
        self.db = db
        self.store = PickupStore(db)

    # ─── helpers ───────────────────────────────────────────────────────────────
    def _require_role(self, user_id: str, role: UserRole) -> User:
        user = get_user_or_404(self.db, user_id)
        if user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only a {role.value} can do this"
            )
        return user

    def _transition_error(self, pickup: Pickup, action: str) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action} pickup in status '{PickupStatus(pickup.status).value}'"
        )

    def get_pickup(self, pickup_id: str) -> Pickup:
        return self.store.get_or_404(pickup_id)

    # ─── scheduling ────────────────────────────────────────────────────────────
    def schedule_pickup(self, customer_id: str, data: PickupCreate) -> Pickup:
        self._require_role(customer_id, UserRole.customer)
        pickup = Pickup(
            customer_id=customer_id,
            agent_id=None,
            status=PickupStatus.scheduled,
            date=data.date.isoformat(),
            time_slot=data.time_slot,
            address=data.address,
            items=data.items,
        )
        self.store.add(pickup)
        logger.info("Pickup %s scheduled by %s", pickup.pickup_id, customer_id)
        return pickup

    def list_for_customer(self, customer_id: str) -> List[Pickup]:
        return self.store.for_customer(customer_id)

    def list_available(self, agent_id: str) -> List[Pickup]:
        self._require_role(agent_id, UserRole.agent)
        return self.store.available_for_agent(agent_id)

    # ─── transitions ───────────────────────────────────────────────────────────
    def _claim(self, pickup: Pickup, action: str, criteria: list, values: dict) -> Pickup:
        """
        Apply a transition as one conditional UPDATE on the stored row.
        Zero rows means another request moved the pickup first: 409.
        """
        updated = (
            self.db.query(Pickup)
            .filter(Pickup.pickup_id == pickup.pickup_id, *criteria)
            .update(values, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            self.db.refresh(pickup)
            raise self._transition_error(pickup, action)
        self.db.refresh(pickup)
        return pickup

    def accept_pickup(self, pickup_id: str, agent_id: str) -> Pickup:
        """scheduled -> in-progress; claims the pickup for `agent_id`."""
        self._require_role(agent_id, UserRole.agent)
        pickup = self.get_pickup(pickup_id)
        if pickup.status != PickupStatus.scheduled:
            raise self._transition_error(pickup, "accept")

        self._claim(
            pickup, "accept",
            [Pickup.status == PickupStatus.scheduled],
            {
                Pickup.agent_id: agent_id,
                Pickup.status: PickupStatus.in_progress,
                Pickup.accepted_at: utcnow(),
            },
        )
        self.db.commit()
        self.db.refresh(pickup)
        logger.info("Pickup %s accepted by %s", pickup_id, agent_id)
        return pickup

    def complete_pickup(
        self,
        pickup_id: str,
        agent_id: str,
        verification_code: str,
        session: Optional[SessionContext] = None
    ) -> Tuple[Pickup, int, int]:
        """
        in-progress -> completed, after the agent presents the customer's code.

        Awards the agent, bumps both parties' pickup counts and refreshes the
        customer's streak. Returns (pickup, agent_reward, customer_streak).
        """
        self._require_role(agent_id, UserRole.agent)
        pickup = self.get_pickup(pickup_id)
        if pickup.status != PickupStatus.in_progress:
            raise self._transition_error(pickup, "complete")
        if pickup.agent_id != agent_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Pickup is assigned to another agent"
            )
        if verification_code.strip().upper() != pickup.verification_code:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid verification code"
            )

        prior_completed = self.store.count(agent_id=agent_id, status=PickupStatus.completed)
        self._claim(
            pickup, "complete",
            [Pickup.status == PickupStatus.in_progress, Pickup.agent_id == agent_id],
            {Pickup.status: PickupStatus.completed, Pickup.completed_at: utcnow()},
        )

        try:
            agent_reward = compute_agent_reward(pickup, {"completed_pickups": prior_completed})
            award_reward(
                self.db, agent_id, agent_reward,
                RewardReason.pickup_completed.describe(pickup_id=pickup_id),
                session=session, commit=False
            )

            customer_id = pickup.customer_id
            streak = compute_streak(self.store.completed_for_customer(customer_id), customer_id)
            self.db.query(User).filter(User.user_id == customer_id).update(
                {User.total_pickups: User.total_pickups + 1, User.current_streak: streak},
                synchronize_session=False
            )
            self.db.query(User).filter(User.user_id == agent_id).update(
                {User.total_pickups: User.total_pickups + 1},
                synchronize_session=False
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Completing pickup %s failed", pickup_id)
            raise

        self.db.refresh(pickup)
        if session is not None:
            session.refresh_from(UserStore(self.db).get_user(agent_id))
        logger.info("Pickup %s completed by %s: +%s points, customer streak %s", pickup_id, agent_id, agent_reward, streak)
        return pickup, agent_reward, streak

    def rate_pickup(self, pickup_id: str, customer_id: str, rating: int) -> Tuple[Pickup, int]:
        """
        Customer rates a completed pickup once. A top rating earns the agent
        whatever the rating adds to their pickup reward.
        Returns (pickup, bonus_awarded).
        """
        pickup = self.get_pickup(pickup_id)
        if pickup.customer_id != customer_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the customer who booked the pickup can rate it"
            )
        if pickup.status != PickupStatus.completed:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Pickup can only be rated after completion"
            )
        if pickup.rating is not None:
            raise self._rated_error()

        # agent's completed count as it stood when this pickup was completed
        prior_completed = (
            self.db.query(Pickup)
            .filter(
                Pickup.agent_id == pickup.agent_id,
                Pickup.status == PickupStatus.completed,
                Pickup.completed_at < pickup.completed_at,
            )
            .count()
        )
        agent_stats = {"completed_pickups": prior_completed}
        unrated = compute_agent_reward(pickup, agent_stats)

        updated = (
            self.db.query(Pickup)
            .filter(Pickup.pickup_id == pickup_id, Pickup.rating.is_(None))
            .update({Pickup.rating: rating}, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            raise self._rated_error()
        self.db.refresh(pickup)

        bonus = compute_agent_reward(pickup, agent_stats) - unrated
        if bonus:
            award_reward(
                self.db, pickup.agent_id, bonus,
                RewardReason.five_star_rating.describe(pickup_id=pickup_id),
                commit=False
            )
        self.db.commit()
        self.db.refresh(pickup)
        logger.info("Pickup %s rated %s by %s, agent bonus %s", pickup_id, rating, customer_id, bonus)
        return pickup, bonus

    def _rated_error(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Pickup already rated"
        )
