"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from trailer_desk.api.main import create_app
from trailer_desk.api.dependencies import get_clock
from trailer_desk.infrastructure.database.models import Base, Customer
from trailer_desk.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed clock so day/hour windows in lead scoring are deterministic
FIXED_NOW = datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def make_customer(db: Session) -> Callable[..., Customer]:
    """Insert a customer created `age_days` before the fixed clock"""

    def _make(age_days: int = 30, **fields) -> Customer:
        fields.setdefault("created_at", FIXED_NOW - timedelta(days=age_days))
        fields.setdefault("status", "new")
        customer = Customer(**fields)
        db.add(customer)
        db.commit()
        return customer

    return _make
