"""engine.config

Tracker configuration passed from UI.
"""

from __future__ import annotations

from dataclasses import dataclass

LOCAL_STORAGE_KEY = "attribute_tracker_data"


@dataclass(frozen=True)
class TrackerConfig:
    storage_key: str = LOCAL_STORAGE_KEY
    data_dir: str = "data"
    daily_tasks_enabled: bool = True
    time_format: str = "%X"  # locale time, e.g. 21:04:37
    bar_max: int = 100
