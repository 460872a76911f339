from typing import List, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from config.database import get_db
from api.user.user_store import UserStore
from utils.session_context import SessionContext


def session_middleware(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> SessionContext:
    """
    Resolve the acting user from the X-User-Id header.
    Anonymous requests get an empty session.
    """
    session = SessionContext()
    if not x_user_id:
        return session

    user = UserStore(db).get_user(x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown session user"
        )
    session.set_current_user(user)
    return session


def require_role(*roles: str):
    """Dependency factory: a signed-in user holding one of `roles` (any role when none given)."""
    allowed: List[str] = [str(r.value) if hasattr(r, "value") else str(r) for r in roles]

    def dependency(session: SessionContext = Depends(session_middleware)) -> SessionContext:
        if session.current_user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="X-User-Id header required"
            )
        if allowed and session.current_user.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Forbidden: requires one of roles {allowed}"
            )
        return session

    return dependency
