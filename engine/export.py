"""engine.export

Helpers for exporting/importing the tracker state.

An export is JSON-serializable so it can be downloaded and loaded back later.
It carries the persisted record fields plus a small summary.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Dict

from core.state import ActionEntry, TrackerState
from storage.schemas import state_from_record, state_to_record
from storage.parsing import must_parse_json

from .config import TrackerConfig


def action_counts(state: TrackerState) -> Dict[str, int]:
    counts = Counter(e.action for e in state.logs if isinstance(e, ActionEntry))
    return dict(sorted(counts.items()))


def make_export(*, state: TrackerState, config: TrackerConfig, exported_at: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "exported_at": str(exported_at),
        "storage_key": config.storage_key,
        **state_to_record(state, include_tasks=config.daily_tasks_enabled),
        "summary": {
            "actions": action_counts(state),
            "tasks_done": len(state.tasks_completed),
        },
    }


def dumps_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


def loads_export(raw: str) -> TrackerState:
    """Accept an export file or a bare persisted record. Raises ValueError."""
    data = must_parse_json(raw)
    if "attributes" not in data and "logs" not in data:
        raise ValueError("Not a tracker export: missing 'attributes' and 'logs'")
    return state_from_record(data)
