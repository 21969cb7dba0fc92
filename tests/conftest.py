"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from history_gateway.api.main import create_app
from history_gateway.api.dependencies import get_gemini_client
from history_gateway.infrastructure.clients.gemini import GeminiClient
from history_gateway.infrastructure.database.models import Base
from history_gateway.infrastructure.database.session import get_db
from history_gateway.domain.models import ChiefComplaint, Duration


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def gemini() -> AsyncMock:
    """Stand-in for the Gemini backend"""
    return AsyncMock(spec=GeminiClient)


@pytest.fixture
def client(db: Session, gemini: AsyncMock) -> TestClient:
    """Create FastAPI test client with test database and mocked AI backend"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    return TestClient(app)


def _complaint(complaint_id: str, years: str = "", months: str = "", days: str = "", text: str = "") -> ChiefComplaint:
    return ChiefComplaint(
        id=complaint_id,
        complaint=text or f"complaint {complaint_id}",
        duration=Duration(years=years, months=months, days=days),
    )


@pytest.fixture
def sample_complaints() -> list[ChiefComplaint]:
    """A(365 days), B(180 days), C(400 days)"""
    return [
        _complaint("A", years="1", months="0", days="0", text="Cough"),
        _complaint("B", years="0", months="6", days="0", text="Weight loss"),
        _complaint("C", years="0", months="0", days="400", text="Joint pain"),
    ]
