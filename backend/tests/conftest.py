"""Test configuration and fixtures."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import blogai.models  # noqa: F401
from blogai.api.deps import get_generation_client
from blogai.database import Base, get_db
from blogai.main import app
from blogai.schemas.generation import GenerationRequest
from blogai.services.job_store import JobStore

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

SAMPLE_POST = (
    "# 5 Remote Work Tips\n\n"
    "Working from home is **easier** with a routine.\n\n"
    "## 1. Set a schedule\n\n"
    "Start and stop at the same time every day.\n"
)


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def job_store(db_session):
    return JobStore(db_session)


@pytest.fixture
def make_job(job_store):
    """Create a queued job; ``created_at`` defaults to ``NOW``."""
    def _make(owner="user-1", topic="Remote Work Tips", created_at=NOW, **params):
        request = GenerationRequest(topic=topic, **params)
        return job_store.create(owner, request, created_at)
    return _make


class FakeGenerationClient:
    """Stands in for the remote model in route tests."""

    def __init__(self, text=SAMPLE_POST, error=None, keywords=None):
        self.text = text
        self.error = error
        self.keywords = keywords or ["remote work", "productivity"]
        self.calls = []

    async def generate_blog_post(self, params):
        self.calls.append(params)
        if self.error:
            raise self.error
        return self.text

    async def rewrite_text(self, text, instruction, tone):
        if self.error:
            raise self.error
        return f"{instruction.value}: {text}"

    async def extract_keywords(self, content, count=5):
        return self.keywords[:count]


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def client(db_session, fake_client):
    """FastAPI TestClient bound to the in-memory session and fake model."""
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_generation_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
