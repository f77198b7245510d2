"""Storage failures surfaced by the anonymous session store."""


class StorageError(RuntimeError):
    """Raised when the local storage scope cannot serve a request."""


class StorageUnavailableError(StorageError):
    """Raised when the storage surface cannot be read or written."""


class CorruptStorageError(StorageError):
    """Raised when persisted data cannot be parsed."""
