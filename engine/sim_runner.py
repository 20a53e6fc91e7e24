"""engine.sim_runner

Headless runner for quick sanity checks.

Replays a scripted day through a TrackerController backed by an in-memory
store, so it never touches the disk and always uses a fixed clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Tuple

from storage.backends.memory import MemoryStore
from storage.bridge import PersistenceBridge

from .config import TrackerConfig
from .controller import TrackerController

Step = Tuple[str, Any]  # ("action", name) | ("task", name) | ("delete", index) | ("reset", None)

DEFAULT_SCRIPT: List[Step] = [
    ("action", "wake up on time"),
    ("task", "make the bed"),
    ("action", "meditate"),
    ("action", "read a page"),
    ("action", "exercise"),
    ("task", "drink 8 glasses of water"),
    ("action", "scroll the phone"),
    ("delete", 0),
    ("action", "stay up late"),
    ("action", "stay up late"),
]


@dataclass
class FixedClock:
    """Deterministic clock for tests (ticks one second per call)."""

    start: datetime = datetime(2026, 1, 1, 7, 0, 0)
    calls: int = 0

    def __call__(self) -> datetime:
        t = self.start.replace(second=self.calls % 60, minute=(self.calls // 60) % 60)
        self.calls += 1
        return t


def run_headless_session(script: Iterable[Step] = DEFAULT_SCRIPT) -> Dict[str, Any]:
    """Run a scripted session and return summary."""
    cfg = TrackerConfig(time_format="%H:%M:%S")
    store = MemoryStore()
    controller = TrackerController(cfg, clock=FixedClock())
    controller.attach(PersistenceBridge.from_config(store, cfg))

    results: List[Dict[str, Any]] = []
    for kind, arg in script:
        if kind == "action":
            ok = controller.apply_action(str(arg))
        elif kind == "task":
            ok = controller.toggle_task(str(arg))
        elif kind == "delete":
            ok = controller.delete_log_entry(int(arg))
        elif kind == "reset":
            controller.reset_all()
            ok = True
        else:
            raise ValueError(f"Unknown step kind: {kind}")
        results.append({"step": kind, "arg": arg, "ok": bool(ok)})

    return {
        "steps": results,
        "final": controller.state,
        "stored": store.get(cfg.storage_key),
    }
