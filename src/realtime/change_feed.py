"""In-process change notifications for store resources.

Subscribers learn that "something changed" in a resource; they are expected to
re-fetch, never to patch their state from the event.
"""

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from src.models.base import utcnow

logger = logging.getLogger(__name__)


class ChangeAction(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    resource: str
    action: ChangeAction
    record_id: UUID | None = None
    occurred_at: datetime = field(default_factory=utcnow)


ChangeHandler = Callable[[ChangeEvent], Awaitable[None] | None]


def resource_key(resource: str | Enum) -> str:
    return resource.value if isinstance(resource, Enum) else resource


class Subscription:
    """Handle returned by ChangeFeed.subscribe. Unsubscribing twice is a no-op."""

    def __init__(self, feed: "ChangeFeed", resource: str, handler: ChangeHandler) -> None:
        self._feed = feed
        self.resource = resource
        self._handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._feed._remove(self.resource, self._handler)
            self.active = False

    def __call__(self) -> None:
        self.unsubscribe()


class ChangeFeed:
    def __init__(self) -> None:
        self._handlers: dict[str, list[ChangeHandler]] = defaultdict(list)

    def subscribe(self, resource: str | Enum, on_change: ChangeHandler) -> Subscription:
        key = resource_key(resource)
        self._handlers[key].append(on_change)
        logger.debug("Subscribed to %s changes", key)
        return Subscription(self, key, on_change)

    def subscriber_count(self, resource: str | Enum) -> int:
        return len(self._handlers.get(resource_key(resource), []))

    def _remove(self, resource: str, handler: ChangeHandler) -> None:
        handlers = self._handlers.get(resource, [])
        if handler in handlers:
            handlers.remove(handler)
        logger.debug("Unsubscribed from %s changes", resource)

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every subscriber of its resource.

        A failing subscriber is logged and skipped; the publisher never sees its error.
        """
        for handler in list(self._handlers.get(event.resource, [])):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Change handler for %s failed", event.resource)


change_feed = ChangeFeed()


def get_change_feed() -> ChangeFeed:
    """Dependency to get the process-wide change feed."""
    return change_feed
