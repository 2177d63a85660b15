"""Tests for folio.core.notifications."""

import pytest

from folio.core.events import NOTIFICATION, Event, EventBus
from folio.core.notifications import Notification, Notifier, Variant


@pytest.fixture
def notifier():
    return Notifier(EventBus(), history_size=3)


class TestNotifier:
    async def test_success_is_published(self, notifier):
        seen: list[Event] = []
        notifier.bus.on(NOTIFICATION, seen.append)

        note = await notifier.success("Investment added", "Fund A was added successfully.")

        assert note.ok
        assert note.variant is Variant.DEFAULT
        assert len(seen) == 1
        assert seen[0].payload == {
            "title": "Investment added",
            "description": "Fund A was added successfully.",
            "variant": "default",
            "ok": True,
        }

    async def test_failure_is_destructive(self, notifier):
        note = await notifier.failure("Failed to create investment")
        assert not note.ok
        assert note.variant is Variant.DESTRUCTIVE

    async def test_history_is_bounded(self, notifier):
        for i in range(5):
            await notifier.success(f"n{i}")
        assert [n.title for n in notifier.recent()] == ["n2", "n3", "n4"]
        assert [n.title for n in notifier.recent(limit=1)] == ["n4"]

    async def test_clear(self, notifier):
        await notifier.success("x")
        notifier.clear()
        assert notifier.recent() == []

    def test_default_bus(self):
        assert isinstance(Notifier().bus, EventBus)


def test_notification_str():
    assert str(Notification("Saved")) == "Saved"
    assert str(Notification("Saved", "Fund A")) == "Saved: Fund A"
