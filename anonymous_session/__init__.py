from .errors import CorruptStorageError, StorageError, StorageUnavailableError
from .models import SCHEMA_VERSION, CollectionEnvelope, CollectionRecord
from .session import (
    COLLECTIONS_KEY,
    IDENTITY_KEY,
    AnonymousSessionStore,
    generate_identity_token,
)
from .storage import FileStorage, InMemoryStorage, KeyValueStorage

__all__ = [
    "AnonymousSessionStore",
    "COLLECTIONS_KEY",
    "CollectionEnvelope",
    "CollectionRecord",
    "CorruptStorageError",
    "FileStorage",
    "IDENTITY_KEY",
    "InMemoryStorage",
    "KeyValueStorage",
    "SCHEMA_VERSION",
    "StorageError",
    "StorageUnavailableError",
    "generate_identity_token",
]
