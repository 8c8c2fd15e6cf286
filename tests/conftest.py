import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("SEED_DEMO_PARTICIPANTS", "false")
os.environ.setdefault("GITHUB_API_URL", "https://api.github.test")

import hackathon_api.main as main  # noqa: E402  (import after env vars are set)
from hackathon_api.database import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(monkeypatch):
    """Provide a TestClient with startup seeding patched out for isolation."""
    monkeypatch.setattr(main, "run_seed", lambda: None)

    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture()
def participant_payload():
    def _build(**overrides):
        payload = {
            "full_name": "Priya Patel",
            "email": "priya.patel@example.com",
            "phone_number": "9876543210",
            "college_name": "Institute of Engineering",
            "degree": "B.Tech",
            "year_of_study": "3rd",
            "cgpa": "8.5",
            "tech_stack": ["AI/ML", "IoT"],
            "other_skills": "Rust",
            "project_idea": "",
            "github": "",
            "linkedin": "",
        }
        payload.update(overrides)
        return payload

    return _build
