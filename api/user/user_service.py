import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError

from api.user.user_model import User
from api.user.user_schema import UserRegister
from api.user.user_store import UserStore
from config.rewards_config import UserRole

logger = logging.getLogger("UserService")


def create_user(db: Session, data: UserRegister) -> User:
    """
    Register a new customer or agent with zeroed rewards and stats.
    """
    store = UserStore(db)
    if store.get_by_email(data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )

    new_user = User(
        name=data.name,
        email=data.email,
        phone=data.phone or "",
        role=data.role,
        vehicle_info=data.vehicle_info if data.role == UserRole.agent else None,
        rewards=0,
        total_items=0,
        total_co2_saved=0.0,
        current_streak=0,
        total_pickups=0,
    )
    try:
        store.add(new_user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )

    logger.info("Registered %s %s", new_user.role.value, new_user.user_id)
    return new_user


def get_user(db: Session, user_id: str) -> Optional[User]:
    """
    Fetch a user with its reward history loaded.
    """
    return (
        db.query(User)
        .options(selectinload(User.rewards_history))
        .filter(User.user_id == user_id)
        .first()
    )


def get_user_or_404(db: Session, user_id: str) -> User:
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
