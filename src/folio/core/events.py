"""Event bus for loose-coupled extensibility.

Provides a lightweight publish/subscribe system that lets components
communicate without direct dependencies. Hooks can be sync or async.

Usage::

    from folio.core.events import EventBus, Event, INVESTMENT_CREATED

    bus = EventBus()

    async def on_created(event: Event) -> None:
        print(f"Added: {event.payload['name']}")

    bus.on(INVESTMENT_CREATED, on_created)
    await bus.emit(Event(name=INVESTMENT_CREATED, payload={"name": "Fund A"}, source="store"))
"""

from __future__ import annotations

import inspect
from collections import defaultdict
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

# ---------------------------------------------------------------------------
# Well-known event names
# ---------------------------------------------------------------------------

NOTIFICATION = "notification"
INVESTMENTS_LOADED = "investments.loaded"
INVESTMENT_CREATED = "investment.created"
INVESTMENT_UPDATED = "investment.updated"
INVESTMENT_DELETED = "investment.deleted"

# Type alias for hook callables (sync or async)
Hook = Any  # Callable[[Event], None] | Callable[[Event], Awaitable[None]]


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Event:
    """An immutable event that flows through the bus."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class EventBus:
    """Pub/sub event bus supporting sync and async hooks.

    Hooks run in registration order; a failing hook is logged and does not
    stop the remaining hooks or the emitter.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._wildcard_hooks: list[Hook] = []

    def on(self, event_name: str, hook: Hook) -> None:
        """Register *hook* for a specific event name."""
        self._hooks[event_name].append(hook)

    def on_all(self, hook: Hook) -> None:
        """Register *hook* for all events (wildcard)."""
        self._wildcard_hooks.append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        """Unregister *hook* from a specific event name."""
        try:
            self._hooks[event_name].remove(hook)
        except ValueError:
            pass

    async def emit(self, event: Event) -> None:
        """Emit an event, running all matching hooks (async)."""
        hooks = list(self._hooks.get(event.name, []))
        hooks.extend(self._wildcard_hooks)
        for hook in hooks:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(event)
                else:
                    hook(event)
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")

