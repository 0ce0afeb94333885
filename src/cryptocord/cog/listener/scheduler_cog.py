"""Background scheduler cogs for Cryptocord.

Contains two cogs:
- FeedRelayCog      – polls the social feed and relays new posts, once at
                      startup and then on a fixed interval
- DailyForecastCog  – posts the weather forecast once a day in the
                      configured channel
"""

from __future__ import annotations

import asyncio
import datetime

import discord
from discord.ext import commands, tasks

from cryptocord.datatypes.delivery_targets import ChannelTarget
from cryptocord.services.feed_relay import FeedRelay
from cryptocord.services.weather_service import WeatherService
from cryptocord.util.logger import get_logger

logger = get_logger("scheduler_cog")


# ---------------------------------------------------------------------------
# Feed relay
# ---------------------------------------------------------------------------

class FeedRelayCog(commands.Cog):
    """
    Runs :meth:`FeedRelay.poll_once` over every connected guild.

    The first iteration starts as soon as the bot is ready, later ones follow
    every ``interval_seconds``. A cycle that outlasts the interval is not
    cancelled; the next one simply starts late.
    """

    def __init__(self, bot: discord.Bot, relay: FeedRelay, interval_seconds: float) -> None:
        self.bot = bot
        self.relay = relay
        self.interval_seconds = interval_seconds

    async def run_cycle(self) -> int:
        """Poll once; never raises except on cancellation."""
        try:
            return await self.relay.poll_once(self.bot.guilds)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("[FEED RELAY] Unexpected error during relay cycle: %s", exc)
            return 0

    @tasks.loop(seconds=300)  # real interval set in on_ready
    async def _relay_task(self) -> None:
        await self.run_cycle()

    @_relay_task.before_loop
    async def _before_relay(self) -> None:
        await self.bot.wait_until_ready()

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        self._relay_task.change_interval(seconds=self.interval_seconds)
        if not self._relay_task.is_running():
            self._relay_task.start()
            logger.info(
                "[FEED RELAY] Started (interval=%.1fs, %d account(s), channel #%s)",
                self.interval_seconds,
                len(self.relay.accounts),
                self.relay.relay_channel_name,
            )

    def cog_unload(self) -> None:
        self._relay_task.cancel()
        logger.info("[FEED RELAY] Stopped")


# ---------------------------------------------------------------------------
# Daily forecast
# ---------------------------------------------------------------------------

class DailyForecastCog(commands.Cog):
    """Posts the forecast into ``channel_id`` every day at ``post_time``."""

    def __init__(
        self,
        bot: discord.Bot,
        weather_service: WeatherService,
        channel_id: int,
        post_time: datetime.time,
    ) -> None:
        self.bot = bot
        self._weather_service = weather_service
        self.channel_id = channel_id
        self.post_time = post_time

    async def post_forecast(self) -> bool:
        """Send the forecast if the channel is known; failures are only logged."""
        channel = self.bot.get_channel(self.channel_id)
        if channel is None:
            logger.warning("[DAILY FORECAST] Channel %s not found, skipping", self.channel_id)
            return False
        return await self._weather_service.send_forecast(ChannelTarget(channel), report_failure=False)

    @tasks.loop(time=datetime.time(hour=8, tzinfo=datetime.timezone.utc))  # real time set in on_ready
    async def _forecast_task(self) -> None:
        try:
            await self.post_forecast()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("[DAILY FORECAST] Failed to post forecast: %s", exc)

    @_forecast_task.before_loop
    async def _before_forecast(self) -> None:
        await self.bot.wait_until_ready()

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        if not self.channel_id:
            return
        self._forecast_task.change_interval(time=self.post_time)
        if not self._forecast_task.is_running():
            self._forecast_task.start()
            logger.info("[DAILY FORECAST] Scheduled at %s for channel %s", self.post_time, self.channel_id)

    def cog_unload(self) -> None:
        self._forecast_task.cancel()


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def setup(
    bot: discord.Bot,
    relay: FeedRelay,
    weather_service: WeatherService,
    *,
    poll_interval_seconds: float,
    forecast_channel_id: int,
    forecast_time: datetime.time,
) -> None:
    bot.add_cog(FeedRelayCog(bot, relay, poll_interval_seconds))
    bot.add_cog(DailyForecastCog(bot, weather_service, forecast_channel_id, forecast_time))
