"""File-backed key-value store with atomic replacement."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from nutrilog.services.storage import KeyValueStore


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores each key as ``<root>/<key>.json``.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so a crash mid-write leaves the previous value intact.
    """

    root: Path

    def get_item(self, key: str) -> str | None:
        """Return the stored value for ``key``, if present."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Atomically replace the value stored under ``key``."""
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.root, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"
