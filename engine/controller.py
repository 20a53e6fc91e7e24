"""engine.controller

Single owner of the tracker state.

The UI keeps one TrackerController per session and routes every event
through it. After each effective mutation the controller notifies its
subscribers with a StateChange; the persistence bridge is one such
subscriber.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Union

from core.catalog import Action, get_action, is_daily_task
from core.effects import can_apply
from core.state import TrackerState, default_start_state

from .config import TrackerConfig
from .pipeline import apply_action, delete_log_entry, reset_state, toggle_task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChange:
    kind: str  # action | task | delete | reset | restore
    state: TrackerState


Listener = Callable[[StateChange], None]


class TrackerController:
    def __init__(
        self,
        config: Optional[TrackerConfig] = None,
        *,
        state: Optional[TrackerState] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or TrackerConfig()
        self._state = state or default_start_state()
        self._clock = clock
        self._listeners: List[Listener] = []
        self._attached = False

    @property
    def state(self) -> TrackerState:
        return self._state

    # -------------------------
    # Wiring
    # -------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def attach(self, bridge) -> None:
        """Load saved state once, then persist every later change through `bridge`."""
        if self._attached:
            raise RuntimeError("A persistence bridge is already attached")
        loaded = bridge.load()
        if loaded is not None:
            self._state = loaded
        self.subscribe(bridge.on_state_changed)
        self._attached = True

    def _notify(self, kind: str) -> None:
        change = StateChange(kind=kind, state=self._state)
        for listener in list(self._listeners):
            listener(change)

    def _commit(self, kind: str, new_state: TrackerState) -> bool:
        if new_state is self._state:
            return False
        self._state = new_state
        self._notify(kind)
        return True

    def _time_label(self) -> str:
        return self._clock().strftime(self.config.time_format)

    # -------------------------
    # Operations
    # -------------------------

    def can_apply(self, action: Union[Action, str]) -> bool:
        act = action if isinstance(action, Action) else get_action(action)
        return can_apply(self._state.attributes, self._state.logs, act)

    def apply_action(self, action: Union[Action, str]) -> bool:
        """Returns True when the action was applied (False when gated)."""
        act = action if isinstance(action, Action) else get_action(action)
        new_state = apply_action(self._state, act, time_label=self._time_label())
        applied = self._commit("action", new_state)
        if applied:
            logger.debug("Applied %r: %s", act.name, new_state.logs[0].effects)
        return applied

    def toggle_task(self, task: str) -> bool:
        """Returns True when the task is now complete."""
        if not is_daily_task(task):
            raise ValueError(f"Unknown task: {task}")
        self._commit("task", toggle_task(self._state, task, time_label=self._time_label()))
        return task in self._state.tasks_completed

    def delete_log_entry(self, index: int) -> bool:
        return self._commit("delete", delete_log_entry(self._state, int(index)))

    def reset_all(self) -> None:
        self._state = reset_state()
        self._notify("reset")
        logger.info("Tracker reset to baseline")

    def restore(self, state: TrackerState) -> None:
        """Replace the whole state (import)."""
        self._state = state
        self._notify("restore")
