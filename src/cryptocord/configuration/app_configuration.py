from __future__ import annotations
from pathlib import Path
import datetime
import fcntl
from typing import Any, Dict, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import yaml

from cryptocord.datatypes.feed_datatypes import FeedAccount
from cryptocord.services.subject_router import DEFAULT_SUBJECT_CHANNELS
from cryptocord.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_POLL_INTERVAL_SECONDS = 300.0
DEFAULT_MAX_RESULTS = 5
DEFAULT_RELAY_CHANNEL = "crypto"
DEFAULT_WEATHER_CITY = "Kuala Lumpur"
DEFAULT_WEATHER_UNITS = "metric"
DEFAULT_FORECAST_TIME = "08:00"


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed properties with defaults for every setting the bot reads. Secrets
    are not stored here; they come from the environment.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
                if not isinstance(data, dict):
                    logger.error("[APP CONFIGURATION] Config %s is not a mapping; using defaults.", self.config_path)
                    return {}
                return data
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
        return {}

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        Returns an empty dict when the file is missing or unreadable.
        """
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the cached configuration mapping. Callers should not mutate it."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    # --------------------------
    # Feed relay
    # --------------------------
    @property
    def feed_accounts(self) -> List[FeedAccount]:
        """Return the tracked accounts. Entries without a username are skipped."""
        accounts: List[FeedAccount] = []
        for raw in self._section("feed").get("accounts") or []:
            if not isinstance(raw, dict) or not raw.get("username"):
                logger.warning("[APP CONFIGURATION] Ignoring malformed feed account entry: %r", raw)
                continue
            username = str(raw["username"]).lstrip("@")
            accounts.append(FeedAccount(username=username, name=str(raw.get("name") or username)))
        return accounts

    @property
    def feed_poll_interval(self) -> float:
        """Seconds between two feed polling cycles. Default is 300 (5 minutes)."""
        raw = self._section("feed").get("poll_interval_seconds", DEFAULT_POLL_INTERVAL_SECONDS)
        try:
            interval = float(raw)
        except (TypeError, ValueError):
            interval = 0.0
        if not interval > 0:
            logger.warning(
                "[APP CONFIGURATION] Invalid feed.poll_interval_seconds %r; using %s.",
                raw,
                DEFAULT_POLL_INTERVAL_SECONDS,
            )
            return float(DEFAULT_POLL_INTERVAL_SECONDS)
        return interval

    @property
    def feed_max_results(self) -> int:
        raw = self._section("feed").get("max_results", DEFAULT_MAX_RESULTS)
        try:
            max_results = int(raw)
        except (TypeError, ValueError):
            max_results = 0
        if max_results < 1:
            logger.warning("[APP CONFIGURATION] Invalid feed.max_results %r; using %s.", raw, DEFAULT_MAX_RESULTS)
            return DEFAULT_MAX_RESULTS
        return max_results

    @property
    def relay_channel_name(self) -> str:
        """Name of the text channel that receives feed announcements in every guild."""
        return str(self._section("feed").get("relay_channel") or DEFAULT_RELAY_CHANNEL)

    # --------------------------
    # Weather
    # --------------------------
    @property
    def weather_city(self) -> str:
        return str(self._section("weather").get("city") or DEFAULT_WEATHER_CITY)

    @property
    def weather_units(self) -> str:
        return str(self._section("weather").get("units") or DEFAULT_WEATHER_UNITS)

    @property
    def forecast_channel_id(self) -> int:
        """Channel id for the daily forecast post; 0 disables the post."""
        try:
            return int(self._section("weather").get("forecast_channel_id") or 0)
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid weather.forecast_channel_id; daily forecast disabled.")
            return 0

    @property
    def forecast_timezone(self) -> datetime.tzinfo:
        name = str(self._section("weather").get("timezone") or "UTC")
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("[APP CONFIGURATION] Unknown timezone %r; falling back to UTC.", name)
            return datetime.timezone.utc

    @property
    def daily_forecast_time(self) -> datetime.time:
        """Local wall-clock time of the daily forecast post, ``HH:MM`` in config."""
        raw = str(self._section("weather").get("daily_forecast_time") or DEFAULT_FORECAST_TIME)
        try:
            parsed = datetime.datetime.strptime(raw, "%H:%M").time()
        except ValueError:
            logger.warning("[APP CONFIGURATION] Invalid daily_forecast_time %r; using %s.", raw, DEFAULT_FORECAST_TIME)
            parsed = datetime.datetime.strptime(DEFAULT_FORECAST_TIME, "%H:%M").time()
        return parsed.replace(tzinfo=self.forecast_timezone)

    # --------------------------
    # Subject routing
    # --------------------------
    @property
    def subject_channels(self) -> Dict[str, str]:
        value = self._data.get("subject_channels")
        if isinstance(value, dict) and value:
            return {str(subject): str(channel) for subject, channel in value.items()}
        return dict(DEFAULT_SUBJECT_CHANNELS)


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
