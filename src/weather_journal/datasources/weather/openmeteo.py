"""Current conditions from the Open-Meteo Forecast API (free, no API key).

API docs: https://open-meteo.com/en/docs
"""

from __future__ import annotations

import requests

from weather_journal.datasources.weather.base import get_json, number_field
from weather_journal.schemas import Conditions
from weather_journal.services.http import create_session

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Current variables we request; units default to C and %
CURRENT_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
]


class OpenMeteoClient:
    """Client for the Open-Meteo ``current`` conditions block."""

    def __init__(
        self,
        base_url: str = OPEN_METEO_API,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.session = session or create_session()

    def current_conditions(self, lat: float, lon: float) -> Conditions:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(CURRENT_VARS),
            "timezone": "UTC",
        }
        data = get_json(self.session, self.base_url, params=params)
        current = data.get("current")
        return Conditions(
            temperature=number_field(current, "temperature_2m"),
            relative_humidity=number_field(current, "relative_humidity_2m"),
        )
