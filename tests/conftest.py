"""
Pytest configuration and fixtures for backend tests.
"""

import os

# The app's own engine is built at import time; keep it off PostgreSQL in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Job, Listing, Coupon
from rest_api.routers.admin.recycle_bin import get_expiry_notifier
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt
from tests.helpers import FakeClock, FakeNotifier, next_id


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """
    Create a test client with database session and notifier overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_expiry_notifier] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer token for an ADMIN user."""
    token = sign_jwt({"sub": "1", "email": "admin@test.com", "name": "Test Admin", "roles": ["ADMIN"]})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def moderator_headers():
    """Bearer token for a user without the ADMIN role."""
    token = sign_jwt({"sub": "2", "email": "mod@test.com", "name": "Test Mod", "roles": ["MODERATOR"]})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_job(db_session):
    """A pending job posting."""
    job = Job(
        id=next_id(),
        title="Head Coach",
        slug="head-coach",
        description="Lead our coaching team",
        status="pending",
        email="jobs@gym.test",
        owner_id=77,
        company="Iron Gym",
    )
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


@pytest.fixture
def seed_listing(db_session):
    """An approved directory listing."""
    listing = Listing(
        id=next_id(),
        title="Downtown Yoga Studio",
        slug="downtown-yoga",
        status="approved",
        email="hello@yoga.test",
        owner_id=55,
        city="Springfield",
    )
    db_session.add(listing)
    db_session.commit()
    db_session.refresh(listing)
    return listing


@pytest.fixture
def seed_coupon(db_session):
    coupon = Coupon(id=next_id(), code="SPRING10", discount_value=10.0)
    db_session.add(coupon)
    db_session.commit()
    db_session.refresh(coupon)
    return coupon
