"""storage.backends.base

Store interfaces.

A store's job is to keep opaque text under a key. The bridge decides what
the text means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class StoreStatus:
    ok: bool
    backend: str
    location: str
    error: str = ""


class KeyValueStore(Protocol):
    def status(self) -> StoreStatus: ...

    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None:
        """Remove the key. Deleting an absent key is not an error."""
        ...
