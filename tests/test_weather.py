"""Tests for the weather client, forecast formatting and weather service."""

from unittest.mock import AsyncMock, Mock, patch

import pytest
import requests

from cryptocord.datatypes.weather_datatypes import WeatherReport, format_forecast
from cryptocord.services.weather_service import WEATHER_ERROR_MESSAGE, WeatherService
from cryptocord.util.weather_api import OPENWEATHER_CURRENT_URL, WeatherAPIClient

SAMPLE_PAYLOAD = {
    "weather": [{"main": "Clouds", "description": "scattered clouds"}],
    "main": {"temp": 31.5, "humidity": 70},
    "name": "Kuala Lumpur",
}


class RecordingTarget:
    def __init__(self):
        self.delivered = []

    async def deliver(self, text):
        self.delivered.append(text)


class TestWeatherAPIClient:
    @patch("cryptocord.util.weather_api.requests.get")
    def test_parses_current_weather(self, mock_get):
        response = Mock()
        response.json.return_value = SAMPLE_PAYLOAD
        response.raise_for_status = Mock()
        mock_get.return_value = response

        report = WeatherAPIClient("key").current_weather("Kuala Lumpur")

        assert report == WeatherReport("Kuala Lumpur", 31.5, 70, "scattered clouds", "metric")
        assert mock_get.call_args.args[0] == OPENWEATHER_CURRENT_URL
        assert mock_get.call_args.kwargs["params"] == {"q": "Kuala Lumpur", "appid": "key", "units": "metric"}

    @patch("cryptocord.util.weather_api.requests.get")
    def test_http_error_propagates(self, mock_get):
        response = Mock()
        response.raise_for_status.side_effect = requests.HTTPError("404 city not found")
        mock_get.return_value = response

        with pytest.raises(requests.RequestException):
            WeatherAPIClient("key").current_weather("Atlantis")

    @patch("cryptocord.util.weather_api.requests.get")
    def test_malformed_payload_raises(self, mock_get):
        response = Mock()
        response.json.return_value = {"main": {"temp": 1}}
        response.raise_for_status = Mock()
        mock_get.return_value = response

        with pytest.raises(KeyError):
            WeatherAPIClient("key").current_weather("Nowhere")


def test_format_forecast_metric():
    text = format_forecast(WeatherReport("Kuala Lumpur", 30.0, 80, "light rain"))

    assert text == (
        "🌤️ **Current Weather for Kuala Lumpur**\n"
        "Temperature: 30°C\n"
        "Humidity: 80%\n"
        "Weather: light rain"
    )


def test_format_forecast_imperial_symbol():
    text = format_forecast(WeatherReport("Austin", 88.5, 40, "clear sky", units="imperial"))

    assert "Temperature: 88.5°F" in text


class TestWeatherService:
    @pytest.mark.asyncio
    async def test_delivers_forecast(self):
        client = Mock()
        client.current_weather.return_value = WeatherReport("KL", 29, 75, "haze")
        target = RecordingTarget()

        delivered = await WeatherService(client, "KL").send_forecast(target)

        assert delivered is True
        client.current_weather.assert_called_once_with("KL")
        assert target.delivered == [format_forecast(WeatherReport("KL", 29, 75, "haze"))]

    @pytest.mark.asyncio
    async def test_failure_delivers_apology(self):
        client = Mock()
        client.current_weather.side_effect = requests.ConnectionError("down")
        target = RecordingTarget()

        delivered = await WeatherService(client, "KL").send_forecast(target)

        assert delivered is False
        assert target.delivered == [WEATHER_ERROR_MESSAGE]

    @pytest.mark.asyncio
    async def test_failure_can_stay_silent(self):
        client = Mock()
        client.current_weather.side_effect = requests.Timeout("slow")
        target = Mock()
        target.deliver = AsyncMock()

        delivered = await WeatherService(client, "KL").send_forecast(target, report_failure=False)

        assert delivered is False
        target.deliver.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_returns_false(self):
        client = Mock()
        client.current_weather.return_value = WeatherReport("KL", 29, 75, "haze")
        target = Mock()
        target.deliver = AsyncMock(side_effect=RuntimeError("Forbidden"))

        delivered = await WeatherService(client, "KL").send_forecast(target)

        assert delivered is False
        target.deliver.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_apology_delivery_failure_is_logged_only(self):
        client = Mock()
        client.current_weather.side_effect = requests.ConnectionError("down")
        target = Mock()
        target.deliver = AsyncMock(side_effect=RuntimeError("Unknown Message"))

        assert await WeatherService(client, "KL").send_forecast(target) is False
