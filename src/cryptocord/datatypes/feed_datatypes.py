"""
Types shared by the feed client and the relay service.

- `FeedAccount`: a tracked social account, as configured in app_config.yml.
- `FeedPost`: one post returned by the feed API.
"""

from __future__ import annotations

from dataclasses import dataclass

PERMALINK_TEMPLATE = "https://twitter.com/{username}/status/{post_id}"


@dataclass(frozen=True, slots=True)
class FeedAccount:
    """A social account whose posts are relayed into Discord.

    Attributes:
        username (str): Handle used to resolve the account and build permalinks.
        name (str): Display name used in relay announcements.
    """

    username: str
    name: str

    def permalink(self, post_id: str) -> str:
        """Return the public URL of one of this account's posts."""
        return PERMALINK_TEMPLATE.format(username=self.username, post_id=post_id)


@dataclass(frozen=True, slots=True)
class FeedPost:
    """A post fetched from the feed API.

    Attributes:
        post_id (str): Opaque identifier, stable across polling cycles.
        text (str): Body of the post.
    """

    post_id: str
    text: str


def format_relay_message(account: FeedAccount, post: FeedPost) -> str:
    """Build the Discord announcement for a newly seen post."""
    return (
        f"**New post from {account.name}**\n\n"
        f"{post.text}\n\n"
        f"Link: {account.permalink(post.post_id)}"
    )
