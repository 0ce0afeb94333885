"""Event listener Cog for Cryptocord.

Handles bot lifecycle events (on_ready) and application command errors.
Message handling lives in MessageListenerCog.
"""

import discord
from discord.ext import commands

from cryptocord.util.logger import get_logger

logger = get_logger("events_listener_cog")

PRESENCE_ACTIVITY_NAME = "the crypto markets"
COMMAND_ERROR_MESSAGE = "A :bug: showed up while running this command."


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle and command error handlers."""

    def __init__(self, bot: discord.Bot) -> None:
        self.bot = bot
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        """Log the connection, the registered slash commands and set the presence."""
        if not self.bot.user:
            logger.warning("Bot partially connected, but user information not yet available.")
            return

        logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
        command_names = sorted(command.name for command in self.bot.pending_application_commands)
        logger.info("Registered application commands: %s", ", ".join(command_names) or "<none>")
        logger.info("--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--")

        await self.bot.change_presence(
            status=discord.Status.online,
            activity=discord.Activity(type=discord.ActivityType.watching, name=PRESENCE_ACTIVITY_NAME),
        )

    @commands.Cog.listener(name="on_application_command_error")
    async def on_application_command_error(self, application_context: discord.ApplicationContext, error: Exception):
        """Log command failures with traceback and tell the user something went wrong."""
        if isinstance(error, commands.CommandNotFound):
            return

        command_name = getattr(application_context.command, "name", "<unknown>")
        logger.error(f"Error in command '{command_name}': {error}", exc_info=error)

        try:
            await application_context.respond(COMMAND_ERROR_MESSAGE, ephemeral=True)
        except discord.InteractionResponded:
            await application_context.followup.send(COMMAND_ERROR_MESSAGE, ephemeral=True)


def setup(bot: discord.Bot) -> None:
    """Register the EventsListenerCog with the bot."""
    bot.add_cog(EventsListenerCog(bot))
