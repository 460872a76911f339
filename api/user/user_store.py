from typing import List, Optional, Iterable
from sqlalchemy.orm import Session

from services.base_service import BaseStore
from api.user.user_model import User
from config.rewards_config import UserRole


class UserStore(BaseStore[User]):
    """Persisted user records, keyed by user_id."""

    def __init__(self, db: Session):
        super().__init__(db, User, key="user_id")

    def get_all_users(self) -> List[User]:
        return self.get_all()

    def save_all_users(self, users: Iterable[User]) -> List[User]:
        return self.save_all(users)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def users_with_role(self, role: UserRole) -> List[User]:
        return self.get_all(role=role)
