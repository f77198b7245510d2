"""Persisted layout of anonymous collection records."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple
import json

from .errors import CorruptStorageError

CollectionRecord = Dict[str, Any]

SCHEMA_VERSION = 1
LEGACY_SCHEMA_VERSION = 0

IDENTITY_FIELD = "identity"
CREATED_AT_FIELD = "createdAt"
SLUG_FIELD = "slug"


@dataclass(frozen=True)
class CollectionEnvelope:
    """Versioned wrapper around the persisted collection list."""

    version: int
    collections: Tuple[CollectionRecord, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "version": self.version,
            "collections": [dict(record) for record in self.collections],
        }

    def dumps(self) -> str:
        return json.dumps(self.to_dict())

    @staticmethod
    def empty() -> "CollectionEnvelope":
        return CollectionEnvelope(version=SCHEMA_VERSION, collections=())

    @staticmethod
    def loads(raw: str) -> "CollectionEnvelope":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStorageError("Stored collections are not valid JSON.") from exc

        # Bare arrays predate the envelope.
        if isinstance(data, list):
            return CollectionEnvelope(
                version=LEGACY_SCHEMA_VERSION,
                collections=_check_records(data),
            )

        if not isinstance(data, dict):
            raise CorruptStorageError("Stored collections have an unknown layout.")
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise CorruptStorageError(f"Unsupported collections schema version: {version!r}")
        return CollectionEnvelope(
            version=SCHEMA_VERSION,
            collections=_check_records(data.get("collections", [])),
        )


def _check_records(items: object) -> Tuple[CollectionRecord, ...]:
    if not isinstance(items, list):
        raise CorruptStorageError("Stored collections must be a list.")
    records: List[CollectionRecord] = []
    for item in items:
        if not isinstance(item, dict):
            raise CorruptStorageError("Stored collection entries must be objects.")
        records.append(item)
    return tuple(records)
