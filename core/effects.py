"""
core.effects
Attribute rules:
- clamp-at-zero delta application
- applied-delta bookkeeping (what a log entry can later reverse)
- action gating
"""

from __future__ import annotations

from typing import Dict, Iterable

from .catalog import Action
from .state import (
    ATTRIBUTE_KEYS,
    ActionEntry,
    Attributes,
    Effect,
    LogEntry,
    attributes_from_mapping,
    attributes_to_dict,
    clamp_min,
)


def apply_effect(attrs: Attributes, effects: Effect) -> Attributes:
    """Apply deltas with the clamp rule (pure function). Unknown keys are ignored."""
    d = attributes_to_dict(attrs)
    for key, delta in effects.items():
        if key not in ATTRIBUTE_KEYS:
            continue
        d[key] = clamp_min(d[key] + int(delta))
    return attributes_from_mapping(d)


def reverse_effect(attrs: Attributes, effects: Effect) -> Attributes:
    """Subtract recorded deltas, re-clamped at zero."""
    return apply_effect(attrs, {k: -int(v) for k, v in effects.items()})


def applied_delta(before: Attributes, after: Attributes, effects: Effect) -> Effect:
    """The part of `effects` that survived clamping, keyed like `effects`."""
    out: Dict[str, int] = {}
    for key in effects:
        if key not in ATTRIBUTE_KEYS:
            continue
        out[key] = after.get(key) - before.get(key)
    return out


def application_count(logs: Iterable[LogEntry], action_name: str) -> int:
    return sum(1 for e in logs if isinstance(e, ActionEntry) and e.action == action_name)


def can_apply(attrs: Attributes, logs: Iterable[LogEntry], action: Action) -> bool:
    """Gate an action against the current attributes and log only.

    - every decremented attribute must still be above zero
    - an action with max_applications is blocked once the log holds that many
    """
    for key, delta in action.effects.items():
        if key not in ATTRIBUTE_KEYS:
            continue
        if int(delta) < 0 and attrs.get(key) <= 0:
            return False
    if action.max_applications is not None:
        if application_count(logs, action.name) >= int(action.max_applications):
            return False
    return True
