"""Tests for learnlog.core.events: ObserverList and StoreAction."""

from __future__ import annotations

import pytest

from learnlog.core.events import DATA_ACTIONS, ObserverList, StoreAction

pytestmark = pytest.mark.smoke


# ---------------------------------------------------------------------------
# 1. subscribe / notify / unsubscribe lifecycle
# ---------------------------------------------------------------------------


def test_subscribe_notify_unsubscribe():
    observers = ObserverList()
    received: list[tuple] = []

    def observer(action, payload):
        received.append((action, payload))

    unsubscribe = observers.subscribe(observer)
    observers.notify(StoreAction.ADD, "payload")
    assert received == [(StoreAction.ADD, "payload")]

    unsubscribe()
    observers.notify(StoreAction.ADD, "again")
    assert len(received) == 1  # observer was removed


def test_observers_called_in_registration_order():
    observers = ObserverList()
    calls: list[str] = []
    observers.subscribe(lambda a, p: calls.append("first"))
    observers.subscribe(lambda a, p: calls.append("second"))

    observers.notify(StoreAction.CLEAR)

    assert calls == ["first", "second"]


def test_unsubscribe_unknown_is_noop():
    observers = ObserverList()
    observers.unsubscribe(lambda a, p: None)
    assert len(observers) == 0


# ---------------------------------------------------------------------------
# 2. Snapshot iteration
# ---------------------------------------------------------------------------


def test_unsubscribe_during_notify_still_reaches_everyone():
    observers = ObserverList()
    calls: list[str] = []
    unsubscribe_holder = {}

    def self_removing(action, payload):
        calls.append("self_removing")
        unsubscribe_holder["fn"]()

    def other(action, payload):
        calls.append("other")

    unsubscribe_holder["fn"] = observers.subscribe(self_removing)
    observers.subscribe(other)

    observers.notify(StoreAction.UPDATE)
    assert calls == ["self_removing", "other"]

    observers.notify(StoreAction.UPDATE)
    assert calls == ["self_removing", "other", "other"]


def test_subscribe_during_notify_takes_effect_next_time():
    observers = ObserverList()
    calls: list[str] = []

    def late(action, payload):
        calls.append("late")

    def registering(action, payload):
        calls.append("registering")
        observers.subscribe(late)

    observers.subscribe(registering)
    observers.notify(StoreAction.ADD)
    assert calls == ["registering"]


# ---------------------------------------------------------------------------
# 3. Failing observers
# ---------------------------------------------------------------------------


def test_failing_observer_does_not_stop_others():
    observers = ObserverList()
    calls: list[str] = []

    def broken(action, payload):
        raise RuntimeError("boom")

    observers.subscribe(broken)
    observers.subscribe(lambda a, p: calls.append("ok"))

    observers.notify(StoreAction.LOAD)
    assert calls == ["ok"]


# ---------------------------------------------------------------------------
# 4. Action names
# ---------------------------------------------------------------------------


def test_action_values_match_wire_names():
    assert {a.value for a in StoreAction} == {
        "add",
        "update",
        "delete",
        "restore",
        "clear",
        "load",
        "deleteConfirmed",
    }
    assert StoreAction.DELETE_CONFIRMED == "deleteConfirmed"


def test_delete_confirmed_is_not_a_data_action():
    assert StoreAction.DELETE_CONFIRMED not in DATA_ACTIONS
    assert len(DATA_ACTIONS) == 6
