"""
discord_utils.py
================

Stateless Discord helpers shared by the cogs and services.
"""

from typing import Optional, Union

import discord


def is_ignored_author(author: Union[discord.User, discord.Member]) -> bool:
    """
    Check if an author should be ignored by message handlers.

    Args:
        author (discord.User | discord.Member): The message author.

    Returns:
        bool: True if the author is a bot (including this one).
    """
    return bool(getattr(author, "bot", False))


def find_text_channel(guild: discord.Guild, name: str) -> Optional[discord.TextChannel]:
    """
    Return the first text channel of ``guild`` named exactly ``name``.

    Args:
        guild (discord.Guild): Guild whose cached channels are searched.
        name (str): Channel name to match.

    Returns:
        discord.TextChannel | None: The channel, or None if the guild has none by that name.
    """
    for channel in getattr(guild, "text_channels", []):
        if channel.name == name:
            return channel
    return None
