"""The Weather Company current observations.

Endpoint: ``{base}/api/weather/v1/geocode/{lat}/{lon}/observations.json?units=m``

Metric units give ``observation.temp`` in degrees Celsius and
``observation.rh`` in percent.
"""

from __future__ import annotations

import requests

from weather_journal.datasources.weather.base import get_json, number_field
from weather_journal.schemas import Conditions
from weather_journal.services.http import create_session

OBSERVATIONS_PATH = "api/weather/v1/geocode/{lat}/{lon}/observations.json"


class WeatherCompanyClient:
    """Client for The Weather Company observations API."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or create_session()

    def current_conditions(self, lat: float, lon: float) -> Conditions:
        path = OBSERVATIONS_PATH.format(lat=lat, lon=lon)
        params: dict[str, str] = {"units": "m"}
        if self.api_key:
            params["apiKey"] = self.api_key

        data = get_json(self.session, f"{self.base_url}/{path}", params=params)
        observation = data.get("observation")
        return Conditions(
            temperature=number_field(observation, "temp"),
            relative_humidity=number_field(observation, "rh"),
        )
