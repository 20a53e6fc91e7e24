"""storage.backends.memory

Dict-backed store for tests and throwaway sessions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .base import StoreStatus


@dataclass
class MemoryStore:
    items: Dict[str, str] = field(default_factory=dict)

    def status(self) -> StoreStatus:
        return StoreStatus(True, "memory", f"{len(self.items)} key(s)")

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set(self, key: str, value: str) -> None:
        self.items[key] = str(value)

    def delete(self, key: str) -> None:
        self.items.pop(key, None)
