"""Pytest configuration and fixtures for the Netflix Shows API tests."""

import os
import tempfile
from datetime import date
from pathlib import Path

# Must be set before any backend import creates the engine or reads settings
_TMP_DIR = tempfile.mkdtemp(prefix="netflix-shows-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{Path(_TMP_DIR) / 'app.db'}")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from core.database import Base, get_db  # noqa: E402
from main import app  # noqa: E402
from schemas.netflix_show import NetflixShowDTO  # noqa: E402

API = "/api/v1/netflix-shows"


def show_payload(**overrides) -> dict:
    """A complete, valid request body in wire (camelCase) form."""
    payload = {
        "showType": "MOVIE",
        "title": "Dick Johnson Is Dead",
        "director": "Kirsten Johnson",
        "castMembers": "Michael Hilow, Kirsten Johnson",
        "country": "United States",
        "dateAdded": "2021-09-25",
        "releaseYear": 2020,
        "rating": 8,
        "durationInMinute": 90,
        "listedIn": "Documentaries",
        "description": "As her father nears the end of his life, filmmaker Kirsten Johnson stages his death.",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def valid_show() -> NetflixShowDTO:
    return NetflixShowDTO(
        show_type="MOVIE",
        title="Dick Johnson Is Dead",
        director="Kirsten Johnson",
        cast_members="Michael Hilow, Kirsten Johnson",
        country="United States",
        date_added=date(2021, 9, 25),
        release_year=2020,
        rating=8,
        duration_in_minute=90,
        listed_in="Documentaries",
        description="Déjà vu is fine here",
    )


@pytest.fixture
def client(tmp_path):
    """TestClient bound to a fresh SQLite database per test."""
    db_path = tmp_path / "shows.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    test_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    sessions = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with sessions() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    return show_payload


@pytest.fixture
def api_path() -> str:
    return API
