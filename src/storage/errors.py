class StorageError(Exception):
    """Base exception for session store integrations."""


class StorageConfigurationError(StorageError):
    """Raised when session store configuration is invalid."""


class StorageDependencyError(StorageError):
    """Raised when an optional dependency for a session store is missing."""


class StorageReadError(StorageError):
    """Raised when reading settings or sessions from a store fails."""


class StorageWriteError(StorageError):
    """Raised when writing or deleting settings or sessions fails."""
