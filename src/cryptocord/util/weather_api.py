"""Blocking OpenWeatherMap client for current conditions."""

import requests

from cryptocord.datatypes.weather_datatypes import WeatherReport
from cryptocord.util.logger import get_logger

logger = get_logger("weather_api")

OPENWEATHER_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherAPIClient:
    """
    Fetches current weather by city name.

    Args:
        api_key: OpenWeatherMap API key.
        units: ``metric``, ``imperial`` or ``standard``.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, api_key: str, *, units: str = "metric", timeout: float = 10.0) -> None:
        self._api_key = api_key
        self.units = units
        self._timeout = timeout

    def current_weather(self, city: str) -> WeatherReport:
        """
        Return the current conditions for ``city``.

        This call blocks, run it with ``asyncio.to_thread`` from async code.

        Raises:
            requests.RequestException: On transport or HTTP errors.
            KeyError, IndexError, ValueError: If the payload is missing fields.
        """
        logger.debug("[WEATHER API] Requesting current weather for %s", city)
        response = requests.get(
            OPENWEATHER_CURRENT_URL,
            params={"q": city, "appid": self._api_key, "units": self.units},
            timeout=self._timeout,
        )
        response.raise_for_status()
        payload = response.json()

        main = payload["main"]
        conditions = payload["weather"][0]
        return WeatherReport(
            city=city,
            temperature=float(main["temp"]),
            humidity=int(main["humidity"]),
            description=str(conditions["description"]),
            units=self.units,
        )
