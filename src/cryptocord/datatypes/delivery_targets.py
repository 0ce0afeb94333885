"""
Destinations that can receive bot output.

Handlers that produce text (weather, help) do not care whether they answer a
plain channel message or a slash command. Both cases are wrapped in a target
exposing the same ``deliver(text)`` coroutine.

- `ChannelTarget`: posts a new message into a text channel.
- `InteractionTarget`: answers an application command. py-cord turns
  ``respond`` into a followup when the interaction was already deferred.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import discord


@dataclass(slots=True)
class ChannelTarget:
    """Send output as a regular message in ``channel``."""

    channel: discord.abc.Messageable

    async def deliver(self, text: str) -> None:
        await self.channel.send(text)


@dataclass(slots=True)
class InteractionTarget:
    """Send output as the reply to a slash command invocation."""

    context: discord.ApplicationContext
    ephemeral: bool = False

    async def deliver(self, text: str) -> None:
        await self.context.respond(text, ephemeral=self.ephemeral)


DeliveryTarget = Union[ChannelTarget, InteractionTarget]
