"""Blocking client for the Twitter/X API v2 endpoints used by the feed relay.

The functions here block the calling thread, so async callers should run them
through ``asyncio.to_thread``.
"""

from typing import Any, Dict, List, Optional

import requests

from cryptocord.datatypes.feed_datatypes import FeedPost
from cryptocord.util.logger import get_logger

logger = get_logger("feed_api")

TWITTER_API_BASE_URL = "https://api.twitter.com/2"

# The timeline endpoint rejects max_results outside this range
TIMELINE_MIN_RESULTS = 5
TIMELINE_MAX_RESULTS = 100


class FeedAPIClient:
    """
    Minimal Twitter/X API v2 client authenticated with an app bearer token.

    Args:
        bearer_token: App-only bearer token.
        base_url: API root, overridable for tests.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, bearer_token: str, *, base_url: str = TWITTER_API_BASE_URL, timeout: float = 10.0) -> None:
        self._bearer_token = bearer_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = requests.get(
            f"{self._base_url}{path}",
            headers={"Authorization": f"Bearer {self._bearer_token}"},
            params=params,
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def resolve_user_id(self, username: str) -> Optional[str]:
        """
        Look up the numeric account id for ``username``.

        Returns:
            str | None: The account id, or None if the API returned no user
            (for example a suspended or renamed account).

        Raises:
            requests.RequestException: On transport or HTTP errors.
        """
        payload = self._get(f"/users/by/username/{username}")
        data = payload.get("data") or {}
        user_id = data.get("id")
        if not user_id:
            logger.debug("[FEED API] No user returned for %s: %s", username, payload.get("errors"))
            return None
        return str(user_id)

    def fetch_recent_posts(self, user_id: str, max_results: int = 5) -> List[FeedPost]:
        """
        Fetch the most recent original posts of an account.

        Reposts and replies are excluded upstream. Posts are returned in the
        order the API lists them (newest first).

        Raises:
            requests.RequestException: On transport or HTTP errors.
        """
        requested = min(max(max_results, TIMELINE_MIN_RESULTS), TIMELINE_MAX_RESULTS)
        payload = self._get(
            f"/users/{user_id}/tweets",
            params={"exclude": "retweets,replies", "max_results": requested},
        )
        posts = [
            FeedPost(post_id=str(item["id"]), text=str(item.get("text", "")))
            for item in payload.get("data") or []
            if item.get("id")
        ]
        return posts[:max_results]
