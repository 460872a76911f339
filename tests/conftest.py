"""
Global pytest configuration and fixtures.

Every test runs against a fresh in-memory SQLite database, so nothing here
needs a running server.
"""
import os

# must be set before config.settings is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from config.database import engine, SessionLocal
from config.rewards_config import UserRole
from models.index import Base
from api.user.user_model import User
from api.user.user_schema import UserRegister
from api.user.user_service import create_user


@pytest.fixture
def db():
    """A session on an empty schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Factory registering users through the normal service path."""
    counter = {"n": 0}

    def _make(role=UserRole.customer, name=None, rewards=0, **stats) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = create_user(db, UserRegister(
            name=name or f"{role.value}-{n}",
            email=f"{role.value}{n}@recyclink.org",
            role=role,
            vehicle_info="Cargo bike" if role == UserRole.agent else None,
        ))
        if rewards or stats:
            user.rewards = rewards
            for key, value in stats.items():
                setattr(user, key, value)
            db.commit()
            db.refresh(user)
        return user

    return _make


@pytest.fixture
def client():
    """API client over a fresh schema."""
    from fastapi.testclient import TestClient
    from main import app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
