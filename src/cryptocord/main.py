"""
Cryptocord Discord Bot
======================

A community bot that relays crypto news posts from a social feed, answers
weather requests, points members to subject channels and runs a crypto word
guessing game.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. CRYPTOCORD_HOME environment variable, if set.
    2. If running in a frozen/compiled context (e.g., PyInstaller, Nuitka), use the executable's directory.
    3. Otherwise, assume running from source and use the repository root.
    """
    if env_home := os.getenv("CRYPTOCORD_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
from dataclasses import dataclass
import discord
from dotenv import load_dotenv

from cryptocord.cache.dedup_ledger import DedupLedger
from cryptocord.configuration.app_configuration import AppConfig, app_config
from cryptocord.game.word_game import GameSessionTable
from cryptocord.services.feed_relay import FeedRelay
from cryptocord.services.subject_router import SubjectRouter
from cryptocord.services.weather_service import WeatherService
from cryptocord.util.feed_api import FeedAPIClient
from cryptocord.util.logger import get_logger, handle_exception
from cryptocord.util.weather_api import WeatherAPIClient


logger = get_logger("main")

REQUIRED_SECRETS = ("DISCORD_BOT_TOKEN", "TWITTER_BEARER_TOKEN", "OPENWEATHER_API_KEY")


@dataclass(frozen=True, slots=True)
class Secrets:
    """Credentials read from the environment at startup."""

    discord_token: str
    twitter_bearer_token: str
    openweather_api_key: str


def load_environment() -> Secrets:
    """Load ``.env`` and return the credentials the bot needs.

    Returns
    -------
    Secrets
        Discord token, feed API bearer token and weather API key.

    Raises
    ------
    SystemExit
        If any of the required variables is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    values = {name: (os.getenv(name) or "").strip() for name in REQUIRED_SECRETS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        logger.critical("Missing required environment variable(s): %s. Bot cannot start.", ", ".join(missing))
        sys.exit(1)
    return Secrets(
        discord_token=values["DISCORD_BOT_TOKEN"],
        twitter_bearer_token=values["TWITTER_BEARER_TOKEN"],
        openweather_api_key=values["OPENWEATHER_API_KEY"],
    )


def build_intents() -> discord.Intents:
    """Construct the Discord intents required for Cryptocord.

    Returns
    -------
    discord.Intents
        Intents enabling guild and message events with message content.
    """
    intents = discord.Intents.default()
    intents.guilds = True
    intents.messages = True
    intents.message_content = True
    return intents


def load_cogs(bot: discord.Bot, secrets: Secrets, config: AppConfig) -> None:
    """Build the runtime state and register every cog with the bot.

    The dedup ledger and the game session table live exactly as long as the
    bot instance; they are handed to the cogs that use them.
    """
    from cryptocord.cog.commands import general_cmds
    from cryptocord.cog.listener import events_listener, message_listener, scheduler_cog

    weather_service = WeatherService(
        WeatherAPIClient(secrets.openweather_api_key, units=config.weather_units),
        config.weather_city,
    )
    relay = FeedRelay(
        FeedAPIClient(secrets.twitter_bearer_token),
        config.feed_accounts,
        relay_channel_name=config.relay_channel_name,
        ledger=DedupLedger(),
        max_results=config.feed_max_results,
    )

    events_listener.setup(bot)
    general_cmds.setup(bot, weather_service)
    message_listener.setup(bot, GameSessionTable(), weather_service, SubjectRouter(config.subject_channels))
    scheduler_cog.setup(
        bot,
        relay,
        weather_service,
        poll_interval_seconds=config.feed_poll_interval,
        forecast_channel_id=config.forecast_channel_id,
        forecast_time=config.daily_forecast_time,
    )

    logger.info("All cogs loaded successfully.")


def create_bot(secrets: Secrets, config: AppConfig = app_config) -> discord.Bot:
    """Instantiate the Discord bot and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot, secrets, config)
    return bot


async def start_bot(bot: discord.Bot, token: str) -> None:
    """Start the Discord bot and handle lifecycle logging around the connection."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None = None) -> None:
    """Close the Discord connection if it is still open."""
    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord bot: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap and run the bot, returning an exit code."""
    secrets = load_environment()

    try:
        bot = create_bot(secrets)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        return 1

    exit_code = 0
    try:
        await start_bot(bot, secrets.discord_token)
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot)

    return exit_code


def main() -> int:
    """Entrypoint that orchestrates the async runtime and returns the process code."""
    logger.info("Starting Cryptocord…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        if code is None:
            return 1
        try:
            return int(code)
        except (ValueError, TypeError):
            logger.warning("SystemExit.code is not an int (%r); defaulting to 1", code)
            return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
