"""Shared pytest fixtures for golfmaster tests."""

from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from golfmaster.app import app
from golfmaster.config import reset_settings_cache
from golfmaster.session.models import HoleRecord, Stroke
from golfmaster.session.service import SessionService, get_session_service
from golfmaster.storage.session_store import SessionStore, get_session_store


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("GOLFMASTER_DATA_DIR", str(tmp_path / "session"))
    monkeypatch.delenv("GOLFMASTER_STORAGE_KEY", raising=False)
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    reset_settings_cache()
    get_session_store.cache_clear()
    get_session_service.cache_clear()
    yield
    reset_settings_cache()
    get_session_store.cache_clear()
    get_session_service.cache_clear()


@pytest.fixture
def session_store(tmp_path) -> SessionStore:
    return SessionStore(base_dir=tmp_path / "store")


@pytest.fixture
def session_service(session_store) -> SessionService:
    return SessionService(session_store)


@pytest.fixture
def session_client(session_service):
    app.dependency_overrides[get_session_service] = lambda: session_service
    client = TestClient(app)
    yield client, session_service
    app.dependency_overrides.pop(get_session_service, None)


@pytest.fixture
def make_hole() -> Callable[..., HoleRecord]:
    def _make(
        hole_number: int = 1,
        par: int = 4,
        score: int | None = None,
        putts: int = 2,
        gir: bool = False,
        clubs: tuple[str, ...] = ("Driver", "7 Iron", "Putter", "Putter"),
    ) -> HoleRecord:
        strokes = tuple(Stroke(club=club) for club in clubs)
        return HoleRecord(
            hole_number=hole_number,
            par=par,
            score=len(strokes) if score is None else score,
            putts=putts,
            gir=gir,
            strokes=strokes,
        )

    return _make
