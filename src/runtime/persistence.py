"""Fire-and-forget store writes on a single background worker."""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Any, Optional

from storage import StorageError
from timer import SessionDraft, TimerConfiguration

from .contracts import SessionStoreLike

WRITE_SESSION = "session"
WRITE_SETTINGS = "settings"


@dataclass(frozen=True)
class PendingWrite:
    kind: str
    payload: Any
    future: concurrent.futures.Future


@dataclass(frozen=True)
class CompletedWrite:
    """Outcome of one store write, collected on the runtime loop thread."""
    kind: str
    payload: Any
    result: Any = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class PersistenceWorker:
    """Runs store writes off the loop thread, one at a time, in submit order.

    Writes are never retried. Callers collect finished writes with
    `collect_finished()` from the thread that owns the session history.
    """

    def __init__(
        self,
        store: SessionStoreLike,
        *,
        logger: logging.Logger,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._store = store
        self._logger = logger
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="persistence",
        )
        self._pending: list[PendingWrite] = []

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def submit_session(self, draft: SessionDraft) -> None:
        self._submit(WRITE_SESSION, draft, self._store.write_session, draft)

    def submit_settings(self, configuration: TimerConfiguration) -> None:
        self._submit(WRITE_SETTINGS, configuration, self._store.write_settings, configuration)

    def collect_finished(self) -> list[CompletedWrite]:
        finished: list[CompletedWrite] = []
        still_pending: list[PendingWrite] = []
        for pending in self._pending:
            if not pending.future.done():
                still_pending.append(pending)
                continue
            finished.append(self._finalize(pending))
        self._pending = still_pending
        return finished

    def shutdown(self, *, wait: bool = True) -> None:
        if self._pending:
            self._logger.info("Waiting for %d pending store writes...", len(self._pending))
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def _submit(self, kind: str, payload: Any, fn, *args: Any) -> None:
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError as error:
            self._logger.error("Failed to submit %s write: %s", kind, error)
            return
        self._pending.append(PendingWrite(kind=kind, payload=payload, future=future))

    def _finalize(self, pending: PendingWrite) -> CompletedWrite:
        try:
            result = pending.future.result()
        except StorageError as error:
            self._logger.error("Store %s write failed: %s", pending.kind, error)
            return CompletedWrite(pending.kind, pending.payload, error=error)
        except Exception as error:
            self._logger.error(
                "Persistence worker failed during %s write: %s",
                pending.kind,
                error,
                exc_info=True,
            )
            return CompletedWrite(pending.kind, pending.payload, error=error)
        return CompletedWrite(pending.kind, pending.payload, result=result)
