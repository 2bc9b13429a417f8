"""Current weather conditions for a fixed location.

Public API:
  - base: WeatherClient protocol, shared response parsing
  - twc: WeatherCompanyClient (The Weather Company observations API)
  - openmeteo: OpenMeteoClient (free, no API key)
"""

from weather_journal.datasources.weather.base import WeatherClient
from weather_journal.datasources.weather.openmeteo import OPEN_METEO_API, OpenMeteoClient
from weather_journal.datasources.weather.twc import WeatherCompanyClient

__all__ = [
    "OPEN_METEO_API",
    "OpenMeteoClient",
    "WeatherClient",
    "WeatherCompanyClient",
]
