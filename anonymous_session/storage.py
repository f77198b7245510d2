"""Key-value storage scopes for anonymous visitors."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from .errors import CorruptStorageError, StorageUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Storage scope persisted as a single JSON object on disk.

    Every call reads or writes the whole file, so two instances pointed at
    the same path behave like two browser tabs sharing local storage.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read storage file %s: %s", self._path, exc)
            raise StorageUnavailableError(f"Cannot read {self._path}.") from exc
        except UnicodeDecodeError as exc:
            raise CorruptStorageError(f"Storage file {self._path} is not valid UTF-8.") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStorageError(f"Storage file {self._path} is not valid JSON.") from exc
        if not isinstance(data, dict) or not all(
            isinstance(value, str) for value in data.values()
        ):
            raise CorruptStorageError(f"Storage file {self._path} is not a string map.")
        return data

    def _write_all(self, items: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write storage file %s: %s", self._path, exc)
            raise StorageUnavailableError(f"Cannot write {self._path}.") from exc
