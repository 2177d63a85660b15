"""Transient user-facing notifications.

The Notifier turns the outcome of each operation into a short message,
publishes it on the event bus, and keeps the most recent ones around for
front ends that poll instead of subscribing.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
from enum import Enum

from loguru import logger

from folio.core.events import NOTIFICATION, Event, EventBus


class Variant(Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A single transient message.

    Attributes:
        title: Short headline.
        description: Optional detail line.
        variant: ``DESTRUCTIVE`` for failures and removals, ``DEFAULT`` otherwise.
        ok: Whether the operation it reports succeeded.
    """

    title: str
    description: str = ""
    variant: Variant = Variant.DEFAULT
    ok: bool = True

    def __str__(self) -> str:
        return f"{self.title}: {self.description}" if self.description else self.title


class Notifier:
    """Publishes notifications and remembers the last ``history_size`` of them."""

    def __init__(self, bus: EventBus | None = None, history_size: int = 50):
        self.bus = bus or EventBus()
        self._history: deque[Notification] = deque(maxlen=history_size)

    async def success(
        self,
        title: str,
        description: str = "",
        variant: Variant = Variant.DEFAULT,
    ) -> Notification:
        return await self._publish(Notification(title, description, variant, ok=True))

    async def failure(self, title: str, description: str = "") -> Notification:
        return await self._publish(Notification(title, description, Variant.DESTRUCTIVE, ok=False))

    async def _publish(self, notification: Notification) -> Notification:
        self._history.append(notification)
        status = "ok" if notification.ok else "failed"
        logger.debug(f"Notify ({status}): {notification}")

        payload = asdict(notification)
        payload["variant"] = notification.variant.value
        await self.bus.emit(Event(name=NOTIFICATION, payload=payload, source="notifier"))
        return notification

    def recent(self, limit: int | None = None) -> list[Notification]:
        """Most recent notifications, oldest first."""
        items = list(self._history)
        return items[-limit:] if limit else items

    def clear(self) -> None:
        self._history.clear()
