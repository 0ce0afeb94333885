"""Tests for the feed relay polling cycle."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from cryptocord.cache.dedup_ledger import DedupLedger
from cryptocord.datatypes.feed_datatypes import FeedAccount, FeedPost, format_relay_message
from cryptocord.services.feed_relay import FeedRelay

BINANCE = FeedAccount(username="binance", name="Binance")
COINBASE = FeedAccount(username="coinbase", name="Coinbase")


def make_channel(name="crypto", send=None):
    return SimpleNamespace(name=name, send=send or AsyncMock())


def make_guild(name, *channels):
    return SimpleNamespace(name=name, text_channels=list(channels))


def make_client(posts_by_user=None, user_ids=None):
    client = MagicMock()
    user_ids = user_ids if user_ids is not None else {"binance": "1", "coinbase": "2"}
    posts_by_user = posts_by_user or {}
    client.resolve_user_id.side_effect = lambda username: user_ids.get(username)
    client.fetch_recent_posts.side_effect = lambda user_id, max_results=5: list(posts_by_user.get(user_id, []))
    return client


def test_format_relay_message():
    text = format_relay_message(BINANCE, FeedPost("99", "BTC to the moon"))

    assert text == (
        "**New post from Binance**\n\n"
        "BTC to the moon\n\n"
        "Link: https://twitter.com/binance/status/99"
    )


@pytest.mark.asyncio
async def test_same_post_relayed_once_across_cycles():
    client = make_client({"1": [FeedPost("10", "hello")]})
    channel = make_channel()
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto")
    guilds = [make_guild("G", channel)]

    first = await relay.poll_once(guilds)
    second = await relay.poll_once(guilds)

    assert (first, second) == (1, 0)
    channel.send.assert_awaited_once()
    assert "10" in relay.ledger


@pytest.mark.asyncio
async def test_posts_relayed_in_fetch_order():
    client = make_client({"1": [FeedPost("3", "c"), FeedPost("2", "b"), FeedPost("1", "a")]})
    channel = make_channel()
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto")

    await relay.poll_once([make_guild("G", channel)])

    sent = [call.args[0] for call in channel.send.await_args_list]
    assert [text.split("\n\n")[1] for text in sent] == ["c", "b", "a"]


@pytest.mark.asyncio
async def test_prepopulated_ledger_suppresses_posts():
    client = make_client({"1": [FeedPost("5", "old"), FeedPost("6", "new")]})
    channel = make_channel()
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto", ledger=DedupLedger(["5"]))

    assert await relay.poll_once([make_guild("G", channel)]) == 1
    assert "new" in channel.send.await_args.args[0]


@pytest.mark.asyncio
async def test_unresolved_account_is_skipped():
    client = make_client({"2": [FeedPost("20", "cb")]}, user_ids={"coinbase": "2"})
    channel = make_channel()
    relay = FeedRelay(client, [BINANCE, COINBASE], relay_channel_name="crypto")

    assert await relay.poll_once([make_guild("G", channel)]) == 1
    assert client.fetch_recent_posts.call_count == 1


@pytest.mark.asyncio
async def test_fetch_failure_does_not_stop_other_accounts():
    client = make_client({"2": [FeedPost("20", "cb")]})

    def fetch(user_id, max_results=5):
        if user_id == "1":
            raise RuntimeError("rate limited")
        return [FeedPost("20", "cb")]

    client.fetch_recent_posts.side_effect = fetch
    channel = make_channel()
    relay = FeedRelay(client, [BINANCE, COINBASE], relay_channel_name="crypto")

    assert await relay.poll_once([make_guild("G", channel)]) == 1
    assert "New post from Coinbase" in channel.send.await_args.args[0]


@pytest.mark.asyncio
async def test_delivery_failure_is_isolated_per_guild():
    client = make_client({"1": [FeedPost("10", "hello")]})
    broken = make_channel(send=AsyncMock(side_effect=RuntimeError("Missing Access")))
    healthy = make_channel()
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto")

    relayed = await relay.poll_once([make_guild("A", broken), make_guild("B", healthy)])

    assert relayed == 1
    broken.send.assert_awaited_once()
    healthy.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_guild_without_relay_channel_is_skipped():
    client = make_client({"1": [FeedPost("10", "hello")]})
    other = make_channel(name="general")
    target = make_channel(name="crypto")
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto")

    await relay.poll_once([make_guild("A", other), make_guild("B", other, target)])

    other.send.assert_not_awaited()
    target.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_post_is_recorded_before_delivery():
    client = make_client({"1": [FeedPost("10", "hello")]})
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto")
    seen_at_send = []

    async def send(text):
        seen_at_send.append("10" in relay.ledger)

    await relay.poll_once([make_guild("G", make_channel(send=send))])

    assert seen_at_send == [True]


@pytest.mark.asyncio
async def test_max_results_forwarded_to_client():
    client = make_client({"1": []})
    relay = FeedRelay(client, [BINANCE], relay_channel_name="crypto", max_results=3)

    await relay.poll_once([])

    client.fetch_recent_posts.assert_called_once_with("1", 3)
