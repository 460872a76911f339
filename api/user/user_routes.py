from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.session_middleware import session_middleware
from api.user.user_controller import (
    register_user,
    get_user_details,
    get_session_user,
)
from api.user.user_schema import (
    UserRegister,
    UserResponse,
    UserDetailResponse,
)
from utils.session_context import SessionContext

router = APIRouter(prefix="/users", tags=["Users"])

# ─── Registration ──────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer or agent"
)
def post_register(
    req: UserRegister,
    db: Session = Depends(get_db)
):
    return register_user(req, db)

# ─── Profile ───────────────────────────────────────────────────────────────────

@router.get(
    "/me",
    response_model=UserResponse,
    summary="The user behind the X-User-Id header"
)
def read_me(
    session: SessionContext = Depends(session_middleware)
):
    return get_session_user(session)

@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="User with rewards history"
)
def read_user(
    user_id: str,
    db: Session = Depends(get_db)
):
    return get_user_details(user_id, db)
