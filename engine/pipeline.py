"""engine.pipeline

State transitions (headless).

Responsibilities:
- apply a catalog action (gated, clamped, logged)
- toggle a daily task
- delete a log entry, reversing what it recorded
- reset to baseline

Every function is pure: it returns a new TrackerState, or the very same
object when the call is a no-op. This layer is UI-agnostic.
"""

from __future__ import annotations

import logging
from typing import List

from core.catalog import Action
from core.effects import applied_delta, apply_effect, can_apply, reverse_effect
from core.state import (
    ActionEntry,
    LogEntry,
    TaskEntry,
    TrackerState,
    default_start_state,
)

logger = logging.getLogger(__name__)


def apply_action(state: TrackerState, action: Action, *, time_label: str) -> TrackerState:
    """Apply an action and prepend its log entry.

    A gated action leaves the state untouched.
    """
    if not can_apply(state.attributes, state.logs, action):
        logger.debug("Action %r is gated; ignoring", action.name)
        return state

    before = state.attributes
    after = apply_effect(before, action.effects)
    entry = ActionEntry(
        action=action.name,
        time=str(time_label),
        effects=applied_delta(before, after, action.effects),
    )
    return TrackerState(
        attributes=after,
        logs=[entry, *state.logs],
        tasks_completed=list(state.tasks_completed),
    )


def toggle_task(state: TrackerState, task: str, *, time_label: str) -> TrackerState:
    """Mark a task complete, or un-mark it and drop its log entry."""
    if task in state.tasks_completed:
        logs: List[LogEntry] = list(state.logs)
        for i, entry in enumerate(logs):
            if isinstance(entry, TaskEntry) and entry.task == task:
                del logs[i]
                break
        return TrackerState(
            attributes=state.attributes,
            logs=logs,
            tasks_completed=[t for t in state.tasks_completed if t != task],
        )

    return TrackerState(
        attributes=state.attributes,
        logs=[TaskEntry(task=task, time=str(time_label)), *state.logs],
        tasks_completed=[*state.tasks_completed, task],
    )


def delete_log_entry(state: TrackerState, index: int) -> TrackerState:
    """Remove the entry at `index` (0 = newest) and reverse its effect."""
    if index < 0 or index >= len(state.logs):
        logger.debug("Log index %d out of range (size %d); ignoring", index, len(state.logs))
        return state

    entry = state.logs[index]
    attrs = state.attributes
    tasks = list(state.tasks_completed)

    if isinstance(entry, ActionEntry):
        attrs = reverse_effect(attrs, entry.effects)
    else:
        tasks = [t for t in tasks if t != entry.task]

    logs = list(state.logs)
    del logs[index]
    return TrackerState(attributes=attrs, logs=logs, tasks_completed=tasks)


def reset_state() -> TrackerState:
    return default_start_state()
