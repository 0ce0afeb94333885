"""In-memory record of feed items that were already relayed."""

from __future__ import annotations

from typing import Iterable, Set

from cryptocord.util.logger import get_logger

logger = get_logger("dedup_ledger")


class DedupLedger:
    """
    Set of feed item identifiers seen by this process.

    The ledger only grows. Entries are never evicted, so an item is relayed at
    most once for the lifetime of the process and everything is forgotten on
    restart.
    """

    def __init__(self, seen: Iterable[str] = ()) -> None:
        self._seen: Set[str] = {str(item_id) for item_id in seen}

    def record(self, item_id: str) -> bool:
        """Insert ``item_id`` and return True if it had not been seen before."""
        key = str(item_id)
        if key in self._seen:
            return False
        self._seen.add(key)
        logger.debug("[DEDUP LEDGER] Recorded item %s (%d tracked)", key, len(self._seen))
        return True

    def __contains__(self, item_id: object) -> bool:
        return str(item_id) in self._seen

    def __len__(self) -> int:
        return len(self._seen)
