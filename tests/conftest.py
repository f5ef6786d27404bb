import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings
from database.db import Base
from dependencies.llm import get_assistant
from dependencies.store import get_store
from main import app
from models import app_state  # noqa: F401
from services.llm_service import StudyAssistant
from services.store import StateStore

from tests.factories import FakeLLM, make_grade


@pytest.fixture
def sample_grades():
    return [
        make_grade(1, 5, 3, name="Intro to CS"),
        make_grade(2, 4, 4, name="Calculus I"),
        make_grade(3, 3, 3, session="2nd Semester", name="Data Structures"),
    ]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db_session):
    return StateStore(db_session)


@pytest.fixture
def fake_llm():
    return FakeLLM('{"sessions": []}')


@pytest.fixture
def client(store, fake_llm, monkeypatch):
    monkeypatch.setattr(settings, "GRADE_SCALE", 5)
    monkeypatch.setattr(settings, "CREDIT_POLICY", "reject_nonpositive")

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_assistant] = lambda: StudyAssistant(fake_llm)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
