"""
Relay of new social feed posts into Discord.

One polling cycle walks every tracked account, fetches its latest posts,
drops those already recorded in the :class:`DedupLedger` and announces the
rest in the relay channel of every guild the bot is in.

Failure isolation:
- an account that cannot be resolved or fetched is skipped for this cycle,
- a guild without a relay channel is skipped silently,
- a failed send is logged and does not affect other guilds.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Sequence

import discord

from cryptocord.cache.dedup_ledger import DedupLedger
from cryptocord.datatypes.feed_datatypes import FeedAccount, FeedPost, format_relay_message
from cryptocord.util import discord_utils
from cryptocord.util.feed_api import FeedAPIClient
from cryptocord.util.logger import get_logger

logger = get_logger("feed_relay")


class FeedRelay:
    """
    Polls tracked accounts and forwards unseen posts to Discord.

    Args:
        client: Feed API client used for resolution and timeline fetches.
        accounts: Accounts to poll, in polling order.
        relay_channel_name: Name of the text channel receiving announcements in each guild.
        ledger: Ledger of already relayed post ids. A fresh one is created if omitted.
        max_results: Number of recent posts fetched per account.
    """

    def __init__(
        self,
        client: FeedAPIClient,
        accounts: Sequence[FeedAccount],
        *,
        relay_channel_name: str,
        ledger: Optional[DedupLedger] = None,
        max_results: int = 5,
    ) -> None:
        self._client = client
        self.accounts = list(accounts)
        self.relay_channel_name = relay_channel_name
        self.ledger = ledger if ledger is not None else DedupLedger()
        self.max_results = max_results

    async def collect_new_posts(self, account: FeedAccount) -> List[FeedPost]:
        """
        Fetch the latest posts of ``account`` and return the unseen ones.

        New ids are recorded in the ledger before this coroutine returns, so a
        post is claimed by exactly one cycle even if cycles overlap.

        Raises:
            Exception: Whatever the feed client raises; the caller decides how to isolate it.
        """
        user_id = await asyncio.to_thread(self._client.resolve_user_id, account.username)
        if user_id is None:
            logger.warning("[FEED RELAY] Could not resolve account @%s, skipping", account.username)
            return []

        posts = await asyncio.to_thread(self._client.fetch_recent_posts, user_id, self.max_results)
        return [post for post in posts if self.ledger.record(post.post_id)]

    async def broadcast(self, text: str, guilds: Iterable[discord.Guild]) -> int:
        """Send ``text`` to the relay channel of every guild; return the delivery count."""
        delivered = 0
        for guild in list(guilds):
            channel = discord_utils.find_text_channel(guild, self.relay_channel_name)
            if channel is None:
                continue
            try:
                await channel.send(text)
                delivered += 1
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning(
                    "[FEED RELAY] Failed to deliver to #%s in guild %s: %s",
                    self.relay_channel_name,
                    getattr(guild, "name", guild),
                    exc,
                )
        return delivered

    async def poll_once(self, guilds: Iterable[discord.Guild]) -> int:
        """
        Run one polling cycle.

        Args:
            guilds: Guilds to deliver into, typically ``bot.guilds``.

        Returns:
            int: Number of posts relayed during this cycle.
        """
        guild_list = list(guilds)
        relayed = 0
        for account in self.accounts:
            try:
                posts = await self.collect_new_posts(account)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("[FEED RELAY] Failed to fetch posts for @%s: %s", account.username, exc)
                continue

            for post in posts:
                delivered = await self.broadcast(format_relay_message(account, post), guild_list)
                logger.info(
                    "[FEED RELAY] Relayed post %s from @%s to %d channel(s)",
                    post.post_id,
                    account.username,
                    delivered,
                )
                relayed += 1

        logger.debug("[FEED RELAY] Cycle complete: %d new post(s), %d ids tracked", relayed, len(self.ledger))
        return relayed
