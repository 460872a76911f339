from fastapi import HTTPException, status, Depends
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.session_middleware import session_middleware
from api.user.user_schema import UserRegister, UserResponse, UserDetailResponse
from api.user.user_service import create_user, get_user_or_404
from utils.session_context import SessionContext

# Controller functions for user operations

def register_user(
    req: UserRegister,
    db: Session = Depends(get_db)
) -> UserResponse:
    user = create_user(db, req)
    return UserResponse.model_validate(user)

def get_user_details(
    user_id: str,
    db: Session = Depends(get_db)
) -> UserDetailResponse:
    return UserDetailResponse.model_validate(get_user_or_404(db, user_id))

def get_session_user(
    session: SessionContext = Depends(session_middleware)
) -> UserResponse:
    if session.current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header required"
        )
    return session.current_user
