"""Change notification for consumers of the network graph."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Subscriber = Callable[[], None]
Unsubscribe = Callable[[], None]


class ChangeNotifier:
    """A synchronous observer list.

    Subscribers are called with no arguments; they re-read whatever they
    need from the graph store. Nothing is queued: a notification with no
    subscribers is dropped.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a callback.

        Args:
            callback: Called with no arguments after every change.

        Returns:
            A handle that removes this subscription. Calling it more than
            once is harmless.
        """
        # Wrap so the same callable can be subscribed twice and each handle
        # removes only its own entry.
        entry: Subscriber = lambda: callback()
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def notify(self) -> None:
        """Call every subscriber in subscription order.

        The subscriber list is fixed when the call starts. A subscriber
        removed by an earlier callback in the same round is skipped; one
        added during the round waits for the next notification.
        """
        for entry in list(self._subscribers):
            if entry not in self._subscribers:
                continue
            try:
                entry()
            except Exception:
                logger.exception("Change subscriber raised; continuing")
