"""Pytest configuration and fixtures.

The application reads DATABASE_URL at import time, so it is pointed at a
throwaway SQLite file before anything from letter_system is imported.
Each test starts from freshly created tables.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="letter_system_test_"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP_DIR / 'test.db').as_posix()}"

from fastapi.testclient import TestClient  # noqa: E402

from letter_system.database import Base, SessionLocal, engine  # noqa: E402
from letter_system.main import app  # noqa: E402

SAMPLE_LETTER = {
    "letter_date": "2024-01-01",
    "address": "HQ",
    "details": "pending",
    "subject_no": "SP/RD/ADM/01",
    "letter_type": "Registered",
}


@pytest.fixture(autouse=True)
def fresh_tables() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def create_letter(client: TestClient):
    """POST a letter built from SAMPLE_LETTER plus overrides; returns the JSON."""

    def _create(**overrides) -> dict:
        response = client.post("/api/letters", json={**SAMPLE_LETTER, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _create
