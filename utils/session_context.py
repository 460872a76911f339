"""
Per-request view of the signed-in user.

Replaces a process-wide "current user" cache: whoever needs to see fresh
totals after an award holds one of these and passes it to the ledger.
"""
from typing import Optional

from api.user.user_schema import UserResponse


class SessionContext:
    def __init__(self, current_user: Optional[UserResponse] = None):
        self.current_user = current_user

    @property
    def user_id(self) -> Optional[str]:
        return self.current_user.user_id if self.current_user else None

    def set_current_user(self, user) -> None:
        self.current_user = UserResponse.model_validate(user) if user is not None else None

    def refresh_from(self, user) -> bool:
        """Re-project `user` if it is the session's user. Returns True when refreshed."""
        if user is None or self.user_id != user.user_id:
            return False
        self.set_current_user(user)
        return True

    def __repr__(self):
        return f"<SessionContext(user_id={self.user_id!r})>"
