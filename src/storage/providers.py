"""Factory selecting the configured session store backend."""

from __future__ import annotations

import logging

from .config import BACKEND_MEMORY, StorageConfig
from .contracts import SessionStore
from .firestore import FirestoreSessionStore
from .memory import InMemorySessionStore


def build_session_store(
    config: StorageConfig,
    *,
    logger: logging.Logger,
) -> SessionStore:
    """Create the store named by `storage.backend`; errors propagate to startup."""
    if config.backend == BACKEND_MEMORY:
        logger.warning(
            "Using in-memory session store; sessions are lost on restart "
            "(storage.backend=memory)"
        )
        return InMemorySessionStore(logger=logger.getChild("memory"))

    store = FirestoreSessionStore(config, logger=logger.getChild("firestore"))
    logger.info(
        "Firestore session store enabled (project=%s, sessions=%s)",
        config.project_id or "<default>",
        config.sessions_collection,
    )
    return store
