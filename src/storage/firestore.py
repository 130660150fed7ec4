"""Cloud Firestore client wrapper storing timer settings and sessions."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from timer import Session, SessionDraft, TimerConfiguration

from .config import StorageConfig
from .errors import (
    StorageConfigurationError,
    StorageDependencyError,
    StorageReadError,
    StorageWriteError,
)

# Same value as google.cloud.firestore.Query.DESCENDING.
_DESCENDING = "DESCENDING"


class FirestoreSessionStore:
    """Firestore-backed store using the document layout of the web app.

    Settings live in `<settings_collection>/<settings_document>` keyed by
    preset name; each session is one document in `<sessions_collection>`
    whose auto-generated id is repeated in its `id` field.
    """

    def __init__(
        self,
        config: StorageConfig,
        *,
        client: Any = None,
        now_fn: Optional[Callable[[], dt.datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._now = now_fn or (lambda: dt.datetime.now(dt.timezone.utc))
        self._client = client if client is not None else self._build_client()

    def _build_client(self):
        try:
            from google.cloud import firestore
            from google.oauth2 import service_account
        except ImportError as error:  # pragma: no cover - optional dependency
            raise StorageDependencyError(
                "Firestore dependencies missing. Install google-cloud-firestore "
                "and google-auth."
            ) from error

        credentials = None
        account_file = self._config.service_account_file
        if account_file:
            account_path = Path(account_file)
            if not account_path.is_file():
                raise StorageConfigurationError(
                    f"Service account file not found: {account_path}"
                )
            credentials = service_account.Credentials.from_service_account_file(
                str(account_path)
            )

        project = self._config.project_id or None
        try:
            return firestore.Client(project=project, credentials=credentials)
        except Exception as error:  # pragma: no cover - environment dependent
            raise StorageConfigurationError(
                f"Failed to create Firestore client: {error}"
            ) from error

    def read_settings(self) -> Optional[TimerConfiguration]:
        try:
            snapshot = self._settings_ref().get()
        except Exception as error:  # pragma: no cover - network/API dependent
            raise StorageReadError(f"Failed to read timer settings: {error}") from error

        if not snapshot.exists:
            return None
        try:
            return TimerConfiguration.from_document(snapshot.to_dict() or {})
        except ValueError as error:
            raise StorageReadError(f"Stored timer settings are invalid: {error}") from error

    def write_settings(self, configuration: TimerConfiguration) -> bool:
        try:
            self._settings_ref().set(configuration.to_document(), merge=True)
        except Exception as error:  # pragma: no cover - network/API dependent
            raise StorageWriteError(f"Failed to save timer settings: {error}") from error
        return True

    def write_session(self, draft: SessionDraft) -> Session:
        try:
            ref = self._sessions().document()
            session = Session.from_draft(draft, session_id=ref.id, timestamp=self._now())
            ref.set(session.to_document())
        except Exception as error:  # pragma: no cover - network/API dependent
            raise StorageWriteError(f"Failed to save session: {error}") from error
        self._logger.debug("Stored session %s", session.id)
        return session

    def read_all_sessions(self) -> list[Session]:
        return self._run_query(
            self._sessions().order_by("date", direction=_DESCENDING),
            "all sessions",
        )

    def read_sessions_by_date(self, date: str) -> list[Session]:
        query = (
            self._sessions()
            .where(filter=_field_filter("date", "==", date))
            .order_by("timestamp")
        )
        return self._run_query(query, f"sessions on {date}")

    def read_sessions_in_range(self, start_date: str, end_date: str) -> list[Session]:
        query = (
            self._sessions()
            .where(filter=_field_filter("date", ">=", start_date))
            .where(filter=_field_filter("date", "<=", end_date))
            .order_by("date")
        )
        return self._run_query(query, f"sessions in {start_date}..{end_date}")

    def delete_session(self, session_id: str) -> bool:
        try:
            self._sessions().document(session_id).delete()
        except Exception as error:  # pragma: no cover - network/API dependent
            raise StorageWriteError(
                f"Failed to delete session {session_id}: {error}"
            ) from error
        return True

    def _settings_ref(self):
        return self._client.collection(self._config.settings_collection).document(
            self._config.settings_document
        )

    def _sessions(self):
        return self._client.collection(self._config.sessions_collection)

    def _run_query(self, query, label: str) -> list[Session]:
        try:
            snapshots = list(query.stream())
        except Exception as error:  # pragma: no cover - network/API dependent
            raise StorageReadError(f"Failed to read {label}: {error}") from error

        sessions: list[Session] = []
        for snapshot in snapshots:
            try:
                sessions.append(
                    Session.from_document(snapshot.to_dict() or {}, document_id=snapshot.id)
                )
            except ValueError as error:
                self._logger.warning("Skipping malformed session %s: %s", snapshot.id, error)
        return sessions


def _field_filter(field: str, op: str, value: Any):
    try:
        from google.cloud.firestore_v1 import FieldFilter
    except ImportError as error:  # pragma: no cover - optional dependency
        raise StorageDependencyError(
            "Firestore dependencies missing. Install google-cloud-firestore."
        ) from error
    return FieldFilter(field, op, value)
