"""Shared fixtures for the weather journal tests."""

from __future__ import annotations

import os
from typing import Any

import pytest

from weather_journal.config import Settings, get_settings
from weather_journal.datasources.store import InMemoryDocumentStore
from weather_journal.errors import WeatherUnavailable
from weather_journal.schemas import Conditions

# 2024-03-15 12:00:00 UTC
MARCH_15_NOON = 1710504000


class StubWeather:
    """Weather client returning fixed conditions, or raising if ``error`` is set."""

    def __init__(
        self,
        temperature: float = 18.5,
        relative_humidity: float = 60.0,
        error: Exception | None = None,
    ) -> None:
        self.conditions = Conditions(temperature=temperature, relative_humidity=relative_humidity)
        self.error = error
        self.calls: list[tuple[float, float]] = []

    def current_conditions(self, lat: float, lon: float) -> Conditions:
        self.calls.append((lat, lon))
        if self.error is not None:
            raise self.error
        return self.conditions


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of Settings."""
    monkeypatch.delenv("VCAP_SERVICES", raising=False)
    for key in [k for k in os.environ if k.startswith("JOURNAL_")]:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, lat=45.5, lon=-122.6, timezone="UTC")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def weather() -> StubWeather:
    return StubWeather()


@pytest.fixture
def failing_weather() -> StubWeather:
    return StubWeather(error=WeatherUnavailable("connection refused"))


def make_doc(value: Any, ts: Any, doc_id: str = "doc", **extra: Any) -> dict[str, Any]:
    """Build a stored observation document."""
    doc: dict[str, Any] = {
        "_id": doc_id,
        "_rev": "1-abc",
        "value": value,
        "note": "",
        "temp": 18.5,
        "rh": 60,
        "ts": ts,
    }
    doc.update(extra)
    return doc
