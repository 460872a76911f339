from typing import List, Optional, Iterable
from sqlalchemy.orm import Session

from services.base_service import BaseStore
from api.pickups.pickup_model import Pickup, PickupStatus


class PickupStore(BaseStore[Pickup]):
    """Persisted pickup records, keyed by pickup_id."""

    def __init__(self, db: Session):
        super().__init__(db, Pickup)

    def get_all_pickups(self) -> List[Pickup]:
        return self.get_all()

    def save_all_pickups(self, pickups: Iterable[Pickup]) -> List[Pickup]:
        return self.save_all(pickups)

    def get_pickup(self, pickup_id: str) -> Optional[Pickup]:
        return self.get(pickup_id)

    def for_customer(self, customer_id: str) -> List[Pickup]:
        return self.get_all(customer_id=customer_id)

    def for_agent(self, agent_id: str) -> List[Pickup]:
        return self.get_all(agent_id=agent_id)

    def completed_for_customer(self, customer_id: str) -> List[Pickup]:
        return self.get_all(customer_id=customer_id, status=PickupStatus.completed)

    def completed_for_agent(self, agent_id: str) -> List[Pickup]:
        return self.get_all(agent_id=agent_id, status=PickupStatus.completed)

    def available_for_agent(self, agent_id: str) -> List[Pickup]:
        """Unclaimed pickups plus the ones this agent is working on."""
        return (
            self.db.query(Pickup)
            .filter(
                (Pickup.status == PickupStatus.scheduled)
                | ((Pickup.status == PickupStatus.in_progress) & (Pickup.agent_id == agent_id))
            )
            .order_by(Pickup.created_at.asc(), Pickup.pickup_id.asc())
            .all()
        )
