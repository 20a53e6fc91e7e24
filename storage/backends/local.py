"""storage.backends.local

File-per-key store on local disk: `<directory>/<key>.json`.

Writes go through a temp file in the same directory followed by
os.replace, so a crash never leaves a half-written record behind.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from .base import StoreStatus

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore:
    def __init__(self, directory: str | os.PathLike) -> None:
        self.directory = Path(directory)

    @classmethod
    def from_config(cls, config) -> "JsonFileStore":
        return cls(Path(config.data_dir))

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def status(self) -> StoreStatus:
        location = str(self.directory.resolve())
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return StoreStatus(False, "file", location, error=f"{type(e).__name__}: {e}")
        if not os.access(self.directory, os.W_OK):
            return StoreStatus(False, "file", location, error="directory is not writable")
        return StoreStatus(True, "file", location)

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, delete=False
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, path)
            temp_path = None
        finally:
            if temp_path is not None:
                try:
                    temp_path.unlink()
                except FileNotFoundError:
                    pass
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        logger.debug("Removed %s", path)
