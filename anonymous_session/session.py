"""Anonymous visitor identity and locally persisted collections."""

from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional
import logging
import secrets
import string
import time

from .models import (
    CREATED_AT_FIELD,
    IDENTITY_FIELD,
    SCHEMA_VERSION,
    SLUG_FIELD,
    CollectionEnvelope,
    CollectionRecord,
)
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

IDENTITY_KEY = "typavibe_anon_session"
COLLECTIONS_KEY = "typavibe_anon_collections"

_TOKEN_ALPHABET = string.digits + string.ascii_lowercase


class AnonymousSessionStore:
    """Stable local identity plus identity-scoped collection records.

    The identity is resolved once, at construction. Lookups, updates and
    deletes only see records stamped with that identity; ``list_own_collections``
    is the raw, unscoped read. Each call is a whole-value read-modify-write,
    so two stores sharing one storage scope can overwrite each other.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        time_provider: Optional[Callable[[], str]] = None,
        token_provider: Optional[Callable[[], str]] = None,
        identity_key: str = IDENTITY_KEY,
        collections_key: str = COLLECTIONS_KEY,
    ) -> None:
        self._storage = storage
        self._time_provider = time_provider or _utc_timestamp
        self._token_provider = token_provider or generate_identity_token
        self._identity_key = identity_key
        self._collections_key = collections_key
        self._identity = self.get_or_create_identity()

    def get_or_create_identity(self) -> str:
        identity = self._storage.get_item(self._identity_key)
        if identity:
            return identity
        identity = self._token_provider()
        self._storage.set_item(self._identity_key, identity)
        logger.debug("Created anonymous identity %s", _preview(identity))
        return identity

    def get_identity(self) -> str:
        return self._identity

    def clear_identity(self) -> None:
        self._storage.remove_item(self._identity_key)
        logger.debug("Cleared anonymous identity %s", _preview(self._identity))

    def save_collection(self, record: Mapping[str, Any]) -> None:
        collections = self.list_own_collections()
        collections.append(
            {
                **record,
                IDENTITY_FIELD: self._identity,
                CREATED_AT_FIELD: self._time_provider(),
            }
        )
        self._write(collections)

    def list_own_collections(self) -> List[CollectionRecord]:
        raw = self._storage.get_item(self._collections_key)
        if not raw:
            return []
        return list(CollectionEnvelope.loads(raw).collections)

    def find_by_slug(self, slug: str) -> Optional[CollectionRecord]:
        for record in self.list_own_collections():
            if self._owns(record, slug):
                return record
        return None

    def update_by_slug(
        self, slug: str, fields: Mapping[str, Any]
    ) -> Optional[CollectionRecord]:
        collections = self.list_own_collections()
        for index, record in enumerate(collections):
            if self._owns(record, slug):
                collections[index] = {**record, **fields}
                self._write(collections)
                return collections[index]
        return None

    def delete_by_slug(self, slug: str) -> None:
        collections = self.list_own_collections()
        remaining = [record for record in collections if not self._owns(record, slug)]
        self._write(remaining)

    def _owns(self, record: CollectionRecord, slug: str) -> bool:
        return (
            record.get(SLUG_FIELD) == slug
            and record.get(IDENTITY_FIELD) == self._identity
        )

    def _write(self, collections: List[CollectionRecord]) -> None:
        envelope = CollectionEnvelope(version=SCHEMA_VERSION, collections=tuple(collections))
        self._storage.set_item(self._collections_key, envelope.dumps())


def generate_identity_token() -> str:
    """Time-based token with a random suffix, e.g. ``anon_1718000000000_k3j9x0a2b``."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(9))
    return f"anon_{millis}_{suffix}"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _preview(identity: str) -> str:
    return f"{identity[:10]}..."
