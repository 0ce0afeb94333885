"""Current weather report returned by the weather API client."""

from __future__ import annotations

from dataclasses import dataclass

# OpenWeatherMap unit systems mapped to their temperature symbol
UNIT_SYMBOLS = {
    "metric": "°C",
    "imperial": "°F",
    "standard": "K",
}


@dataclass(frozen=True, slots=True)
class WeatherReport:
    """Current conditions for a city.

    Attributes:
        city (str): City name as requested.
        temperature (float): Current temperature in ``units``.
        humidity (int): Relative humidity in percent.
        description (str): Short text such as ``"scattered clouds"``.
        units (str): OpenWeatherMap unit system the temperature is expressed in.
    """

    city: str
    temperature: float
    humidity: int
    description: str
    units: str = "metric"

    @property
    def unit_symbol(self) -> str:
        return UNIT_SYMBOLS.get(self.units, UNIT_SYMBOLS["metric"])


def format_forecast(report: WeatherReport) -> str:
    """Render a report as the Discord forecast message."""
    return (
        f"🌤️ **Current Weather for {report.city}**\n"
        f"Temperature: {report.temperature:g}{report.unit_symbol}\n"
        f"Humidity: {report.humidity}%\n"
        f"Weather: {report.description}"
    )
