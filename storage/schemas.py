"""storage.schemas

The persisted record:

    {
      "attributes": {"hp": 100, "stamina": 100, "strength": 0, "intelligence": 0},
      "logs": [{"type": "action", "time": "...", "action": "...", "effects": {...}}, ...],
      "dailyTasksCompleted": ["..."]      # only when daily tasks are enabled
    }

Loading is a defensive merge, not strict validation: anything missing or
malformed falls back to the baseline. Records written before entries carried
a "type" are still accepted (the type is inferred).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from core.state import (
    ATTRIBUTE_KEYS,
    BASELINE,
    ActionEntry,
    Attributes,
    Effect,
    LogEntry,
    TaskEntry,
    TrackerState,
    attributes_from_mapping,
    attributes_to_dict,
)

ENTRY_TYPES = {"action", "task"}


def _as_int(x: Any, default: int = 0) -> int:
    try:
        return int(x)
    except (TypeError, ValueError, OverflowError):
        return int(default)


def normalize_effects(d: Any) -> Effect:
    if not isinstance(d, Mapping):
        return {}
    out: Dict[str, int] = {}
    for k, v in dict(d).items():
        if v is None:
            continue
        out[str(k)] = _as_int(v, 0)
    return out


def normalize_attributes(d: Any) -> Attributes:
    if not isinstance(d, Mapping):
        d = {}
    merged = {k: _as_int(d.get(k, BASELINE[k]), BASELINE[k]) for k in ATTRIBUTE_KEYS}
    return attributes_from_mapping(merged)


def normalize_task_list(items: Any) -> List[str]:
    if not isinstance(items, list):
        return []
    out: List[str] = []
    for x in items:
        s = str(x or "").strip()
        if s and s not in out:
            out.append(s)
    return out


# =========================
# Log entries
# =========================


def log_entry_to_dict(entry: LogEntry) -> Dict[str, Any]:
    if isinstance(entry, TaskEntry):
        return {"type": "task", "time": entry.time, "task": entry.task, "effects": {}}
    return {
        "type": "action",
        "time": entry.time,
        "action": entry.action,
        "effects": dict(entry.effects),
    }


def log_entry_from_dict(d: Mapping[str, Any]) -> LogEntry:
    kind = str(d.get("type") or "").strip().lower()
    if kind not in ENTRY_TYPES:
        kind = "task" if d.get("task") and not d.get("action") else "action"

    time = str(d.get("time") or "")
    if kind == "task":
        return TaskEntry(task=str(d.get("task") or ""), time=time)
    return ActionEntry(
        action=str(d.get("action") or ""),
        time=time,
        effects=normalize_effects(d.get("effects")),
    )


def normalize_logs(items: Any) -> List[LogEntry]:
    if not isinstance(items, list):
        return []
    return [log_entry_from_dict(x) for x in items if isinstance(x, Mapping)]


# =========================
# Whole record
# =========================


def state_to_record(state: TrackerState, *, include_tasks: bool = True) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "attributes": attributes_to_dict(state.attributes),
        "logs": [log_entry_to_dict(e) for e in state.logs],
    }
    if include_tasks:
        record["dailyTasksCompleted"] = list(state.tasks_completed)
    return record


def state_from_record(data: Mapping[str, Any]) -> TrackerState:
    return TrackerState(
        attributes=normalize_attributes(data.get("attributes")),
        logs=normalize_logs(data.get("logs")),
        tasks_completed=normalize_task_list(data.get("dailyTasksCompleted")),
    )

