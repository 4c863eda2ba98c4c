"""In-process change feed.

Subscribers register a table name and an equality filter (``field == value``)
and get a payload-free "something changed" call after each committed write
that matches. Consumers are expected to re-fetch what they display;
``ThreadMirror`` does exactly that for a message thread.
"""

import logging
import threading

from .threads import thread_messages

logger = logging.getLogger(__name__)


class Subscription:
    def __init__(self, feed, table, field, value, callback):
        self._feed = feed
        self.table = table
        self.field = field
        self.value = value
        self.callback = callback

    def matches(self, table, record) -> bool:
        return table == self.table and getattr(record, self.field, None) == self.value

    def unsubscribe(self):
        self._feed.remove(self)


class ChangeFeed:
    """Registry of subscriptions keyed by table and equality filter."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions = []

    def subscribe(self, table: str, field: str, value, callback) -> Subscription:
        subscription = Subscription(self, table, field, value, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def publish(self, table: str, record) -> int:
        """Notify every matching subscriber; return how many were notified."""
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(table, record)]
        for subscription in targets:
            try:
                subscription.callback()
            except Exception:
                # One failing subscriber must not starve the others.
                logger.exception(
                    "change_feed_callback_failed table=%s field=%s value=%s",
                    table,
                    subscription.field,
                    subscription.value,
                )
        return len(targets)


feed = ChangeFeed()


class ThreadMirror:
    """A live copy of one thread.

    On every change signal the whole thread is fetched again and swapped in
    with a single assignment, so readers always see one complete snapshot.
    """

    def __init__(self, key, change_feed=None):
        self.key = key
        self.messages = ()
        self._feed = change_feed or feed
        self._subscription = None

    def start(self) -> "ThreadMirror":
        self._subscription = self._feed.subscribe("messages", self.key.column, self.key.id, self.refresh)
        self.refresh()
        return self

    def refresh(self) -> None:
        self.messages = tuple(thread_messages(self.key))

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
