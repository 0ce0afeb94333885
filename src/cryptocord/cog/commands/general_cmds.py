"""
General slash commands: ``/weather`` and ``/help``.
"""

import discord
from discord.ext import commands

from cryptocord.datatypes.delivery_targets import InteractionTarget
from cryptocord.services.weather_service import WeatherService
from cryptocord.util.logger import get_logger

logger = get_logger("general_commands")

HELP_TEXT = (
    "**Available Commands:**\n"
    "• `/weather` - Get current weather forecast\n"
    "• `/help` - Show this help message\n\n"
    "**Text Commands:**\n"
    "• `!weather` - Post the current weather forecast in this channel\n"
    "• `!guess` - Start a crypto word guessing game\n"
    "• `!hint` - Reveal how many letters the word has\n"
    "• `!giveup` - End the game and reveal the word"
)


class GeneralCog(commands.Cog):
    """Cog containing the slash commands everyone can use."""

    def __init__(self, bot: discord.Bot, weather_service: WeatherService) -> None:
        self.bot = bot
        self._weather_service = weather_service
        logger.info("General commands cog loaded")

    @commands.slash_command(name="weather", description="Get current weather forecast")
    async def weather(self, application_context: discord.ApplicationContext) -> None:
        """Reply with the current forecast, or an apology if it cannot be fetched."""
        await application_context.defer()
        await self._weather_service.send_forecast(InteractionTarget(application_context))
        logger.debug("Weather command executed by %s", application_context.user)

    @commands.slash_command(name="help", description="Show all available commands")
    async def help(self, application_context: discord.ApplicationContext) -> None:
        await InteractionTarget(application_context, ephemeral=True).deliver(HELP_TEXT)


def setup(bot: discord.Bot, weather_service: WeatherService) -> None:
    """Register the general commands cog with the bot."""
    bot.add_cog(GeneralCog(bot, weather_service))
