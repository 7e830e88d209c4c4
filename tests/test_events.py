"""Tests for event fan-out."""

import logging

import pytest

from pyad2.const.events import AD2EventType
from pyad2.events import EventPublisher, ZoneChangedEvent


def test_delivery_in_subscription_order():
    publisher = EventPublisher()
    calls = []
    publisher.subscribe(AD2EventType.ZONE_CHANGED, lambda e: calls.append(("a", e)))
    publisher.subscribe("zoneChanged", lambda e: calls.append(("b", e)))

    event = ZoneChangedEvent(zone="Garage", faulted=1)
    publisher.emit(AD2EventType.ZONE_CHANGED, event)

    assert calls == [("a", event), ("b", event)]


def test_kinds_are_separate():
    publisher = EventPublisher()
    calls = []
    publisher.subscribe(AD2EventType.CONNECTED, calls.append)

    publisher.emit(AD2EventType.DISCONNECTED, "x")
    assert calls == []
    assert publisher.listener_count(AD2EventType.CONNECTED) == 1
    assert publisher.listener_count(AD2EventType.DISCONNECTED) == 0


def test_zero_listeners_is_fine():
    EventPublisher().emit(AD2EventType.KEYPAD_MESSAGE, None)


def test_unsubscribe():
    publisher = EventPublisher()
    calls = []
    unsubscribe = publisher.subscribe(AD2EventType.CONNECTED, calls.append)
    unsubscribe()
    unsubscribe()  # idempotent
    publisher.emit(AD2EventType.CONNECTED, 1)
    assert calls == []


def test_unknown_event_type():
    with pytest.raises(ValueError):
        EventPublisher().subscribe("zone_changed", print)


def test_failing_listener_does_not_stop_delivery(caplog):
    publisher = EventPublisher()
    calls = []

    def broken(event):
        raise RuntimeError("boom")

    publisher.subscribe(AD2EventType.CONNECTED, broken)
    publisher.subscribe(AD2EventType.CONNECTED, calls.append)

    with caplog.at_level(logging.ERROR, logger="pyad2.events"):
        publisher.emit(AD2EventType.CONNECTED, "payload")

    assert calls == ["payload"]
    assert "failed handling connected" in caplog.text
