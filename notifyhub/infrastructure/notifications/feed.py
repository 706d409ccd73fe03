"""In-process realtime change feed.

Backend webhooks post row changes to the API, which republishes them here to
whoever subscribed to the table.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict

logger = logging.getLogger(__name__)

FeedCallback = Callable[[str, dict[str, Any]], None]


class FeedSubscription:
    """Handle returned by :meth:`LocalChangeFeed.subscribe`."""

    def __init__(self, feed: "LocalChangeFeed", table: str, token: int) -> None:
        self._feed = feed
        self.table = table
        self._token = token

    def unsubscribe(self) -> None:
        self._feed._detach(self.table, self._token)


class LocalChangeFeed:
    """Fan row changes out to callbacks registered per table."""

    def __init__(self) -> None:
        self._callbacks: DefaultDict[str, dict[int, FeedCallback]] = defaultdict(dict)
        self._tokens = itertools.count()

    def subscribe(self, table: str, callback: FeedCallback) -> FeedSubscription:
        token = next(self._tokens)
        self._callbacks[table][token] = callback
        return FeedSubscription(self, table, token)

    def publish(self, table: str, payload: dict[str, Any]) -> int:
        """Deliver ``payload`` to the subscribers of ``table``.

        Returns the number of callbacks that handled the change.
        """

        delivered = 0
        for callback in list(self._callbacks.get(table, {}).values()):
            try:
                callback(table, payload)
            except Exception:
                logger.exception("Change feed callback failed for table %s", table)
                continue
            delivered += 1
        return delivered

    def subscribed_tables(self) -> list[str]:
        return sorted(table for table, callbacks in self._callbacks.items() if callbacks)

    def _detach(self, table: str, token: int) -> None:
        callbacks = self._callbacks.get(table)
        if callbacks is None:
            return
        callbacks.pop(token, None)
        if not callbacks:
            self._callbacks.pop(table, None)


__all__ = ["FeedSubscription", "LocalChangeFeed"]
