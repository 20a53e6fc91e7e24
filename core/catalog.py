"""
core.catalog
Static action catalog and the daily task list.

Kept in core so balancing lives in one place, but UI can still display labels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .state import Effect


@dataclass(frozen=True)
class Action:
    name: str
    effects: Effect = field(default_factory=dict)
    negative: bool = False
    max_applications: Optional[int] = None  # None = unlimited

    @property
    def once_only(self) -> bool:
        return self.max_applications == 1


ACTIONS: Tuple[Action, ...] = (
    Action("stay up late", {"hp": -50, "stamina": -50}, negative=True, max_applications=1),
    Action("wake up on time", {"strength": 1}),
    Action("scroll the phone", {"hp": -5, "stamina": -5}, negative=True),
    Action("meditate", {"intelligence": 1, "hp": 5, "stamina": 5}),
    Action("exercise", {"strength": 1, "stamina": -1}),
    Action("daily training", {"strength": 5}),
    Action("calligraphy", {"intelligence": 1, "hp": 2, "stamina": 2}),
    Action("tidy up", {"hp": 2, "stamina": 2}),
    Action("review notes", {"intelligence": 1}),
    Action("read a page", {"intelligence": 1}),
    Action("qigong routine", {"strength": 3}),
    Action("recite a passage", {"intelligence": 1}),
    Action("recite a full text", {"intelligence": 5}),
    Action("retell a passage", {"intelligence": 1}),
    Action("listening drill", {"intelligence": 1}),
)

DAILY_TASKS: Tuple[str, ...] = (
    "drink 8 glasses of water",
    "make the bed",
    "stretch for 10 minutes",
    "plan tomorrow",
    "lights out before 23:30",
)

ATTRIBUTE_LABELS: Dict[str, str] = {
    "hp": "Health",
    "stamina": "Stamina",
    "strength": "Strength",
    "intelligence": "Intelligence",
}


def get_action(name: str) -> Action:
    for action in ACTIONS:
        if action.name == name:
            return action
    raise ValueError(f"Unknown action: {name}")


def is_daily_task(name: str) -> bool:
    return name in DAILY_TASKS


def format_effect_lines(effects: Effect) -> List[str]:
    """Tooltip lines, e.g. ["Health: +5", "Stamina: -1"]."""
    lines: List[str] = []
    for key, val in effects.items():
        label = ATTRIBUTE_LABELS.get(key, key)
        sign = "+" if int(val) >= 0 else ""
        lines.append(f"{label}: {sign}{int(val)}")
    return lines
