"""Weather forecast delivery shared by the slash command, the text trigger and the daily post."""

from __future__ import annotations

import asyncio

from cryptocord.datatypes.delivery_targets import DeliveryTarget
from cryptocord.datatypes.weather_datatypes import WeatherReport, format_forecast
from cryptocord.util.logger import get_logger
from cryptocord.util.weather_api import WeatherAPIClient

logger = get_logger("weather_service")

WEATHER_ERROR_MESSAGE = "Sorry, there was an error fetching the weather forecast."


class WeatherService:
    """
    Fetches the forecast for the configured city and delivers it to a target.

    Args:
        client: Blocking weather API client.
        city: City reported on.
    """

    def __init__(self, client: WeatherAPIClient, city: str) -> None:
        self._client = client
        self.city = city

    async def fetch_report(self) -> WeatherReport:
        return await asyncio.to_thread(self._client.current_weather, self.city)

    async def send_forecast(self, target: DeliveryTarget, *, report_failure: bool = True) -> bool:
        """
        Deliver the current forecast to ``target``.

        Args:
            target: Channel or interaction to answer.
            report_failure: Whether to deliver an apology when the fetch fails.
                The daily post passes False.

        Returns:
            bool: True if a forecast was delivered.
        """
        try:
            report = await self.fetch_report()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("[WEATHER] Error fetching weather for %s: %s", self.city, exc)
            if report_failure:
                await self._deliver(target, WEATHER_ERROR_MESSAGE)
            return False

        return await self._deliver(target, format_forecast(report))

    @staticmethod
    async def _deliver(target: DeliveryTarget, text: str) -> bool:
        try:
            await target.deliver(text)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("[WEATHER] Failed to deliver message to %r: %s", target, exc)
            return False
        return True
