"""Validated session store configuration derived from app settings."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import StorageConfigurationError

BACKEND_FIRESTORE = "firestore"
BACKEND_MEMORY = "memory"
SUPPORTED_BACKENDS: frozenset[str] = frozenset({BACKEND_FIRESTORE, BACKEND_MEMORY})


@dataclass(frozen=True)
class StorageConfig:
    backend: str = BACKEND_FIRESTORE
    project_id: str = ""
    settings_collection: str = "settings"
    settings_document: str = "timer_settings"
    sessions_collection: str = "sessions"
    service_account_file: str = ""

    def __post_init__(self) -> None:
        if self.backend not in SUPPORTED_BACKENDS:
            allowed = ", ".join(sorted(SUPPORTED_BACKENDS))
            raise StorageConfigurationError(f"storage.backend must be one of: {allowed}")
        for name in ("settings_collection", "settings_document", "sessions_collection"):
            if not getattr(self, name).strip():
                raise StorageConfigurationError(f"storage.{name} cannot be empty")
        if "/" in self.settings_collection or "/" in self.sessions_collection:
            raise StorageConfigurationError("Collection names must not contain '/'")

    @classmethod
    def from_settings(
        cls,
        settings,
        *,
        service_account_file: str | None = None,
    ) -> "StorageConfig":
        return cls(
            backend=settings.backend.strip().lower(),
            project_id=settings.project_id.strip(),
            settings_collection=settings.settings_collection.strip(),
            settings_document=settings.settings_document.strip(),
            sessions_collection=settings.sessions_collection.strip(),
            service_account_file=(service_account_file or "").strip(),
        )
