"""
core.state
Core domain data models (UI/storage independent).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union


def clamp_min(x: int, lo: int = 0) -> int:
    return max(lo, x)


Effect = Dict[str, int]

ATTRIBUTE_KEYS = ("hp", "stamina", "strength", "intelligence")

BASELINE: Dict[str, int] = {
    "hp": 100,
    "stamina": 100,
    "strength": 0,
    "intelligence": 0,
}


@dataclass(frozen=True)
class Attributes:
    """Tracked attributes.

    All values are non-negative ints; clamping is applied by core.effects.
    """

    hp: int
    stamina: int
    strength: int
    intelligence: int

    def get(self, key: str, default: int = 0) -> int:
        if key not in ATTRIBUTE_KEYS:
            return default
        return int(getattr(self, key))


@dataclass(frozen=True)
class ActionEntry:
    """An action application. `effects` is the delta that was actually applied."""

    action: str
    time: str
    effects: Effect = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return "action"


@dataclass(frozen=True)
class TaskEntry:
    """A daily task marked complete."""

    task: str
    time: str

    @property
    def kind(self) -> str:
        return "task"


LogEntry = Union[ActionEntry, TaskEntry]


@dataclass(frozen=True)
class TrackerState:
    """The three mutable aggregates.

    - attributes
    - logs (newest first)
    - tasks_completed (completion order, no duplicates)
    """

    attributes: Attributes
    logs: List[LogEntry] = field(default_factory=list)
    tasks_completed: List[str] = field(default_factory=list)


def attributes_from_mapping(d: Mapping[str, int]) -> Attributes:
    """Build Attributes from a dict; missing keys fall back to the baseline."""
    return Attributes(
        hp=clamp_min(int(d.get("hp", BASELINE["hp"]))),
        stamina=clamp_min(int(d.get("stamina", BASELINE["stamina"]))),
        strength=clamp_min(int(d.get("strength", BASELINE["strength"]))),
        intelligence=clamp_min(int(d.get("intelligence", BASELINE["intelligence"]))),
    )


def attributes_to_dict(a: Attributes) -> Dict[str, int]:
    return {
        "hp": int(a.hp),
        "stamina": int(a.stamina),
        "strength": int(a.strength),
        "intelligence": int(a.intelligence),
    }


def baseline_attributes() -> Attributes:
    return attributes_from_mapping(BASELINE)


def default_start_state() -> TrackerState:
    """Baseline start state.

    Keep it in core so headless tests and UI share the same baseline.
    """
    return TrackerState(attributes=baseline_attributes(), logs=[], tasks_completed=[])
