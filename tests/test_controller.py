"""Tests for engine/controller.py."""
from __future__ import annotations

import json

import pytest

from core.state import Attributes, default_start_state
from engine.controller import TrackerController
from engine.sim_runner import FixedClock
from storage.bridge import PersistenceBridge, dumps_record


class TestOperations:
    def test_apply_returns_whether_applied(self, controller):
        assert controller.apply_action("stay up late") is True
        assert controller.apply_action("stay up late") is False
        assert controller.state.attributes == Attributes(hp=50, stamina=50, strength=0, intelligence=0)
        assert len(controller.state.logs) == 1

    def test_can_apply_reflects_state(self, controller):
        assert controller.can_apply("stay up late")
        controller.apply_action("stay up late")
        assert not controller.can_apply("stay up late")
        controller.delete_log_entry(0)
        assert controller.can_apply("stay up late")

    def test_time_label_uses_clock_and_format(self, config):
        ctl = TrackerController(config, clock=FixedClock())
        ctl.apply_action("meditate")
        assert ctl.state.logs[0].time == "07:00:00"

    def test_toggle_task_reports_completion(self, controller):
        assert controller.toggle_task("make the bed") is True
        assert controller.toggle_task("make the bed") is False
        assert controller.state.logs == []

    def test_unknown_names_raise(self, controller):
        with pytest.raises(ValueError):
            controller.apply_action("fly")
        with pytest.raises(ValueError):
            controller.toggle_task("walk the dragon")

    def test_reset_all(self, controller):
        controller.apply_action("daily training")
        controller.toggle_task("plan tomorrow")
        controller.reset_all()
        assert controller.state == default_start_state()


class TestNotifications:
    def test_emits_after_effective_mutations_only(self, controller):
        seen = []
        controller.subscribe(lambda change: seen.append(change.kind))

        controller.apply_action("stay up late")
        controller.apply_action("stay up late")  # gated
        controller.delete_log_entry(5)  # out of range
        controller.toggle_task("make the bed")
        controller.delete_log_entry(0)
        controller.reset_all()

        assert seen == ["action", "task", "delete", "reset"]

    def test_change_carries_new_state(self, controller):
        states = []
        controller.subscribe(lambda change: states.append(change.state))
        controller.apply_action("read a page")
        assert states == [controller.state]

    def test_unsubscribe(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        controller.apply_action("read a page")
        assert seen == []


class TestPersistenceWiring:
    def test_attach_loads_without_saving(self, config, memory_store, bridge):
        ctl = TrackerController(config, clock=FixedClock())
        ctl.apply_action("meditate")
        memory_store.set(config.storage_key, dumps_record(ctl.state))
        raw_before = memory_store.get(config.storage_key)

        fresh = TrackerController(config, clock=FixedClock())
        fresh.attach(bridge)
        assert fresh.state.attributes.intelligence == 1
        assert memory_store.get(config.storage_key) == raw_before

    def test_every_change_is_saved(self, attached_controller, memory_store, config):
        assert memory_store.get(config.storage_key) is None
        attached_controller.apply_action("meditate")
        record = json.loads(memory_store.get(config.storage_key))
        assert record["attributes"] == {"hp": 105, "stamina": 105, "strength": 0, "intelligence": 1}
        assert record["logs"][0]["action"] == "meditate"
        assert record["dailyTasksCompleted"] == []

    def test_reset_clears_the_store(self, attached_controller, memory_store, config):
        attached_controller.apply_action("meditate")
        attached_controller.reset_all()
        assert memory_store.get(config.storage_key) is None

    def test_attach_twice_is_an_error(self, attached_controller, bridge):
        with pytest.raises(RuntimeError):
            attached_controller.attach(bridge)

    def test_save_failure_propagates(self, config):
        class BrokenStore:
            def get(self, key):
                return None

            def set(self, key, value):
                raise OSError("disk full")

            def delete(self, key):
                pass

        ctl = TrackerController(config, clock=FixedClock())
        ctl.attach(PersistenceBridge(BrokenStore(), config.storage_key))
        with pytest.raises(OSError):
            ctl.apply_action("meditate")

    def test_restore_replaces_and_saves(self, attached_controller, memory_store, config):
        other = TrackerController(config, clock=FixedClock())
        other.apply_action("daily training")
        attached_controller.restore(other.state)
        assert attached_controller.state.attributes.strength == 5
        assert json.loads(memory_store.get(config.storage_key))["attributes"]["strength"] == 5
