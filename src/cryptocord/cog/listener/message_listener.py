"""Message listener Cog for Cryptocord.

Turns plain channel messages into actions:

- subject keywords  -> reply pointing to the subject's channel
- ``!weather``      -> forecast posted in the channel
- ``!guess``        -> new word game in the channel
- while a game runs -> guesses, ``!hint`` and ``!giveup``
"""

import asyncio

import discord
from discord.ext import commands

from cryptocord.datatypes.delivery_targets import ChannelTarget
from cryptocord.game.word_game import GameSessionTable
from cryptocord.services.subject_router import SubjectRouter
from cryptocord.services.weather_service import WeatherService
from cryptocord.util import discord_utils
from cryptocord.util.logger import get_logger

logger = get_logger("message_listener_cog")

WEATHER_TRIGGER = "!weather"
GUESS_TRIGGER = "!guess"
HINT_TRIGGER = "!hint"
GIVE_UP_TRIGGER = "!giveup"


class MessageListenerCog(commands.Cog):
    """
    Dispatches text triggers to the word game, weather service and subject router.

    Parameters
    ----------
    bot:
        Discord bot instance.
    game_sessions:
        Per-channel word game state.
    weather_service:
        Delivers forecasts for ``!weather``.
    subject_router:
        Matches subject keywords to their channels.
    """

    def __init__(
        self,
        bot: discord.Bot,
        game_sessions: GameSessionTable,
        weather_service: WeatherService,
        subject_router: SubjectRouter,
    ) -> None:
        self.bot = bot
        self._game_sessions = game_sessions
        self._weather_service = weather_service
        self._subject_router = subject_router
        logger.info("[MESSAGE LISTENER] Message listener cog loaded")

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        if discord_utils.is_ignored_author(message.author):
            return

        content = (message.content or "").strip().lower()
        if not content:
            return

        for redirect in self._subject_router.redirects_for(content):
            try:
                await message.reply(redirect)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning("[MESSAGE LISTENER] Failed to send subject redirect in %s: %s", message.channel.id, exc)

        if content == WEATHER_TRIGGER:
            await self._weather_service.send_forecast(ChannelTarget(message.channel))

        await self._handle_word_game(message, content)

    async def _handle_word_game(self, message: discord.Message, content: str) -> None:
        channel_id = str(message.channel.id)

        if content == GUESS_TRIGGER:
            await message.channel.send(self._game_sessions.start(channel_id))
            return

        if channel_id not in self._game_sessions:
            return

        success = self._game_sessions.guess(channel_id, content)
        if success is not None:
            logger.debug("[MESSAGE LISTENER] %s solved the word game in %s", message.author, channel_id)
            await message.reply(success)
        elif content.startswith(HINT_TRIGGER):
            hint = self._game_sessions.hint(channel_id)
            if hint is not None:
                await message.channel.send(hint)
        elif content == GIVE_UP_TRIGGER:
            reveal = self._game_sessions.give_up(channel_id)
            if reveal is not None:
                await message.channel.send(reveal)


def setup(
    bot: discord.Bot,
    game_sessions: GameSessionTable,
    weather_service: WeatherService,
    subject_router: SubjectRouter,
) -> None:
    """Register the MessageListenerCog with the bot."""
    bot.add_cog(MessageListenerCog(bot, game_sessions, weather_service, subject_router))
