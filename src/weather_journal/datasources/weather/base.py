"""Weather client contract and helpers shared by the backends."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import requests

from weather_journal.errors import WeatherUnavailable

if TYPE_CHECKING:
    from weather_journal.schemas import Conditions

logger = logging.getLogger(__name__)


class WeatherClient(Protocol):
    """Anything that can report the current conditions at a coordinate."""

    def current_conditions(self, lat: float, lon: float) -> Conditions:
        """Return current temperature (C) and relative humidity (%).

        Raises:
            WeatherUnavailable: On transport error, a non-success status, or
                a response missing either field.
        """
        ...


def get_json(
    session: requests.Session, url: str, params: dict[str, Any] | None = None
) -> dict[str, Any]:
    """GET ``url`` and decode a JSON object, mapping every failure to WeatherUnavailable."""
    logger.debug("GET %s", url)
    try:
        resp = session.get(url, params=params)
        resp.raise_for_status()
        body = resp.json()
    except requests.RequestException as exc:
        logger.warning("Weather request failed: %s", exc)
        msg = f"Weather service unreachable: {exc}"
        raise WeatherUnavailable(msg) from exc
    except ValueError as exc:
        msg = "Weather service returned invalid JSON"
        raise WeatherUnavailable(msg) from exc
    if not isinstance(body, dict):
        msg = "Weather service returned an unexpected payload"
        raise WeatherUnavailable(msg)
    return body


def number_field(section: Any, key: str) -> float:
    """Read a numeric field, raising WeatherUnavailable if absent or not a number."""
    value = section.get(key) if isinstance(section, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"Weather response is missing numeric field {key!r}"
        raise WeatherUnavailable(msg)
    return float(value)
