"""Persistence for timer settings and completed sessions."""

from .config import BACKEND_FIRESTORE, BACKEND_MEMORY, StorageConfig
from .contracts import SessionStore
from .errors import (
    StorageConfigurationError,
    StorageDependencyError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from .firestore import FirestoreSessionStore
from .memory import InMemorySessionStore
from .providers import build_session_store

__all__ = [
    "BACKEND_FIRESTORE",
    "BACKEND_MEMORY",
    "FirestoreSessionStore",
    "InMemorySessionStore",
    "SessionStore",
    "StorageConfig",
    "StorageConfigurationError",
    "StorageDependencyError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "build_session_store",
]
