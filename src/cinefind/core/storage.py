"""Key-value durable storage for client state."""

import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from cinefind.errors import StorageError

KEY_RE = re.compile(r"^[A-Za-z0-9_.:-]+$")


class Storage(ABC):
    """Durable key-value surface. Values must be JSON-serializable."""

    @abstractmethod
    async def read(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def write(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""


class MemoryStorage(Storage):
    """Process-local storage. Values round-trip through JSON like the file backend."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def read(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def write(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize value for '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(Storage):
    """Stores each key as ``{path}/{key}.json``."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def get_file_path(self, key: str) -> Path:
        if not KEY_RE.fullmatch(key):
            raise StorageError(f"Invalid storage key: '{key}'")
        return self.path / f"{key.replace(':', '__')}.json"

    async def read(self, key: str) -> Any | None:
        file_path = self.get_file_path(key)
        if not file_path.exists():
            return None
        try:
            return json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read '{key}': {e}") from e

    async def write(self, key: str, value: Any) -> None:
        file_path = self.get_file_path(key)
        try:
            content = json.dumps(value, indent=2)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic replace
            tmp_path = file_path.with_suffix(".json.tmp")
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(file_path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        try:
            self.get_file_path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot delete '{key}': {e}") from e


def create_storage(storage_path: str | None) -> Storage:
    """Pick the storage backend for the configured path."""
    if storage_path is None:
        return MemoryStorage()
    return FileStorage(storage_path)
