"""Tests for engine/pipeline.py."""
from __future__ import annotations

import random

from core.catalog import ACTIONS, DAILY_TASKS, get_action
from core.state import ActionEntry, Attributes, TaskEntry, TrackerState, attributes_to_dict, default_start_state
from engine.pipeline import apply_action, delete_log_entry, reset_state, toggle_task


def _apply(state, name, t="t1"):
    return apply_action(state, get_action(name), time_label=t)


class TestApplyAction:
    def test_meditate_then_delete_restores_baseline(self, start_state):
        state = _apply(start_state, "meditate")
        assert state.attributes == Attributes(hp=105, stamina=105, strength=0, intelligence=1)
        assert state.logs == [ActionEntry("meditate", "t1", {"intelligence": 1, "hp": 5, "stamina": 5})]

        state = delete_log_entry(state, 0)
        assert state.attributes == start_state.attributes
        assert state.logs == []

    def test_stay_up_late_only_once(self, start_state):
        state = _apply(start_state, "stay up late")
        assert state.attributes == Attributes(hp=50, stamina=50, strength=0, intelligence=0)

        again = _apply(state, "stay up late", t="t2")
        assert again is state
        assert len(again.logs) == 1

    def test_once_only_stays_blocked_after_fields_recover(self, start_state):
        state = _apply(start_state, "stay up late")
        for _ in range(10):
            state = _apply(state, "meditate")
        assert state.attributes.hp == 100
        assert _apply(state, "stay up late") is state

    def test_new_entries_are_prepended(self, start_state):
        state = _apply(start_state, "read a page", t="a")
        state = _apply(state, "exercise", t="b")
        assert [e.action for e in state.logs] == ["exercise", "read a page"]

    def test_does_not_mutate_input(self, start_state):
        _apply(start_state, "meditate")
        assert start_state == default_start_state()


class TestToggleTask:
    def test_toggle_twice_is_identity(self, start_state):
        state = _apply(start_state, "meditate")
        task = DAILY_TASKS[0]
        on = toggle_task(state, task, time_label="t2")
        assert on.tasks_completed == [task]
        assert on.logs[0] == TaskEntry(task, "t2")
        assert on.attributes == state.attributes

        off = toggle_task(on, task, time_label="t3")
        assert off == state

    def test_untoggle_removes_entry_not_at_head(self, start_state):
        state = toggle_task(start_state, "make the bed", time_label="t1")
        state = _apply(state, "read a page", t="t2")
        state = toggle_task(state, "make the bed", time_label="t3")
        assert state.tasks_completed == []
        assert [e.action for e in state.logs] == ["read a page"]


class TestDeleteLogEntry:
    def test_out_of_range_is_noop(self, start_state):
        state = _apply(start_state, "meditate")
        assert delete_log_entry(state, 1) is state
        assert delete_log_entry(state, -1) is state
        assert delete_log_entry(start_state, 0) is start_state

    def test_deleting_task_entry_unchecks_task(self, start_state):
        state = toggle_task(start_state, "plan tomorrow", time_label="t1")
        state = delete_log_entry(state, 0)
        assert state.tasks_completed == []
        assert state.logs == []

    def test_deleting_older_entry_keeps_newer(self, start_state):
        state = _apply(start_state, "daily training")
        state = _apply(state, "read a page")
        state = delete_log_entry(state, 1)
        assert state.attributes == Attributes(hp=100, stamina=100, strength=0, intelligence=1)
        assert [e.action for e in state.logs] == ["read a page"]

    def test_clamped_application_reverses_exactly(self):
        state = TrackerState(attributes=Attributes(hp=3, stamina=2, strength=0, intelligence=0))
        state = _apply(state, "scroll the phone")
        assert state.attributes.hp == 0
        state = delete_log_entry(state, 0)
        assert state.attributes == Attributes(hp=3, stamina=2, strength=0, intelligence=0)

    def test_deleting_once_only_entry_reopens_gate(self, start_state):
        state = _apply(start_state, "stay up late")
        state = delete_log_entry(state, 0)
        assert _apply(state, "stay up late") is not state


class TestInvariants:
    def test_random_sequences_never_go_negative(self, start_state):
        rng = random.Random(7)
        state = start_state
        for _ in range(500):
            if state.logs and rng.random() < 0.3:
                state = delete_log_entry(state, rng.randrange(len(state.logs)))
            else:
                state = apply_action(state, rng.choice(ACTIONS), time_label="t")
            assert min(attributes_to_dict(state.attributes).values()) >= 0

    def test_reset_is_baseline(self, start_state):
        state = _apply(start_state, "stay up late")
        state = toggle_task(state, "make the bed", time_label="t")
        assert reset_state() == default_start_state()
        assert reset_state().attributes == Attributes(hp=100, stamina=100, strength=0, intelligence=0)
