"""storage.bridge

Load/save of the full tracker state under one fixed key.

The controller calls load() once at startup and afterwards only talks to the
bridge through change notifications (on_state_changed). A broken record is
logged and treated as "no saved data"; write errors are left to propagate.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from core.state import TrackerState

from .backends.base import KeyValueStore, StoreStatus
from .parsing import try_parse_json
from .schemas import state_from_record, state_to_record

logger = logging.getLogger(__name__)


def dumps_record(state: TrackerState, *, include_tasks: bool = True) -> str:
    return json.dumps(state_to_record(state, include_tasks=include_tasks), ensure_ascii=False)


class PersistenceBridge:
    def __init__(self, store: KeyValueStore, key: str, *, include_tasks: bool = True) -> None:
        self.store = store
        self.key = key
        self.include_tasks = include_tasks

    @classmethod
    def from_config(cls, store: KeyValueStore, config) -> "PersistenceBridge":
        return cls(store, config.storage_key, include_tasks=bool(config.daily_tasks_enabled))

    def status(self) -> StoreStatus:
        return self.store.status()

    def load(self) -> Optional[TrackerState]:
        try:
            raw = self.store.get(self.key)
            if not raw:
                return None
            res = try_parse_json(raw)
            if res.data is None:
                logger.error("Error parsing saved data under %r: %s", self.key, res.error)
                return None
            state = state_from_record(res.data)
        except Exception as e:
            logger.error("Error loading saved data under %r: %s: %s", self.key, type(e).__name__, e)
            return None
        logger.info(
            "Loaded saved state under %r (%d log entries, %d tasks done)",
            self.key,
            len(state.logs),
            len(state.tasks_completed),
        )
        return state

    def save(self, state: TrackerState) -> None:
        self.store.set(self.key, dumps_record(state, include_tasks=self.include_tasks))

    def clear(self) -> None:
        self.store.delete(self.key)

    def on_state_changed(self, change) -> None:
        if change.kind == "reset":
            self.clear()
        else:
            self.save(change.state)
