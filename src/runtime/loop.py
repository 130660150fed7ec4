"""Runtime orchestration loop for UI commands, countdown ticks, and store writes."""

from __future__ import annotations

import concurrent.futures
import datetime as dt
import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Any, Callable, Optional

from reporting import SessionHistory
from server import UIServer
from storage import StorageError
from timer import FocusTimer, TimerConfiguration
from timer.constants import ACTION_CONFIGURE, ACTION_SYNC, REASON_STARTUP

from .commands import RuntimeCommandDispatcher
from .contracts import CuePlayerLike, SessionStoreLike
from .effects import EffectRunner
from .persistence import WRITE_SESSION, CompletedWrite, PersistenceWorker
from .ticks import CountdownTicker, TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher

_POLL_TIMEOUT_SECONDS = 0.25
_STOP = object()


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    store: SessionStoreLike
    cue_player: CuePlayerLike
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks
    default_configuration: TimerConfiguration = field(default_factory=TimerConfiguration)
    overtime_enabled: bool = True
    today_fn: Callable[[], dt.date] = dt.date.today


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    command_queue: Queue[Any]
    persistence: PersistenceWorker
    syncing: bool = False


class RuntimeEngine:
    """Single loop thread owning the timer state and the session history."""
    def __init__(
        self,
        bootstrap: RuntimeBootstrap,
        *,
        ticker: Optional[CountdownTicker] = None,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._stop_requested = threading.Event()

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._timer = FocusTimer(
            configuration=bootstrap.default_configuration,
            overtime_enabled=bootstrap.overtime_enabled,
            today_fn=bootstrap.today_fn,
            logger=logging.getLogger("timer"),
        )
        self._history = SessionHistory(
            today_fn=bootstrap.today_fn,
            logger=logging.getLogger("reporting"),
        )
        self._ticker = ticker or CountdownTicker()

        persistence = PersistenceWorker(
            bootstrap.store,
            logger=logging.getLogger("storage"),
            executor=executor,
        )
        self._resources = RuntimeResources(
            command_queue=Queue(),
            persistence=persistence,
        )
        self._effects = EffectRunner(
            cue_player=bootstrap.cue_player,
            persistence=persistence,
            logger=logging.getLogger("audio"),
        )
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            timer=self._timer,
            ticker=self._ticker,
            history=self._history,
            effects=self._effects,
            persistence=persistence,
            ui=self._ui,
            today_fn=bootstrap.today_fn,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                timer=self._timer,
                ticker=self._ticker,
                effects=self._effects,
                ui=self._ui,
                logger=self._logger,
            )
        )

    @property
    def timer(self) -> FocusTimer:
        return self._timer

    @property
    def history(self) -> SessionHistory:
        return self._history

    def submit_command(self, command: dict[str, Any]) -> None:
        """Enqueue a parsed UI command; safe to call from any thread."""
        self._resources.command_queue.put(command)

    def request_stop(self) -> None:
        self._stop_requested.set()
        self._resources.command_queue.put(_STOP)

    def run(self) -> int:
        self._bootstrap.hooks.setup_signal_handlers(self.request_stop)

        try:
            self.load_initial_state()
            self._publish_startup_sync()
            self._logger.info("Ready! Press Ctrl+C to stop.")

            while self.step(timeout=_POLL_TIMEOUT_SECONDS):
                pass
            self._logger.info("Shutdown requested.")
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def step(self, timeout: float = 0.0) -> bool:
        """Run one loop iteration; returns False once a stop was requested."""
        self._finalize_pending_writes()
        self._tick_processor.process_due()

        command = self._poll_command(timeout)
        if command is _STOP or self._stop_requested.is_set():
            return False
        if command is not None:
            self._dispatcher.handle_command(command)

        self._publish_sync_state()
        return True

    def load_initial_state(self) -> None:
        """Read settings and sessions once; failures fall back to defaults."""
        store = self._bootstrap.store
        try:
            stored = store.read_settings()
        except StorageError as error:
            self._logger.warning("Failed to load timer settings, using defaults: %s", error)
        else:
            if stored is None:
                self._logger.info("No stored timer settings; saving defaults")
                self._write_default_settings()
            else:
                self._timer.update_configuration(stored)

        try:
            sessions = store.read_all_sessions()
        except StorageError as error:
            self._logger.warning("Failed to load sessions, starting empty: %s", error)
            sessions = []

        for session in sessions:
            self._history.append(session)
        self._logger.info(
            "Loaded %d sessions (%d count toward reports)",
            len(self._history),
            len(self._history.reporting_sessions()),
        )

    def _write_default_settings(self) -> None:
        try:
            self._bootstrap.store.write_settings(self._timer.configuration)
        except StorageError as error:
            self._logger.warning("Failed to save default timer settings: %s", error)

    def _publish_startup_sync(self) -> None:
        self._ui.publish_settings(
            self._timer.configuration,
            overtime_enabled=self._bootstrap.overtime_enabled,
        )
        self._dispatcher.publish_reports()
        self._ui.publish_timer_update(
            self._timer.snapshot(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._ui.publish_sync(False)

    def _poll_command(self, timeout: float) -> Optional[Any]:
        until_tick = self._ticker.seconds_until_due()
        if until_tick is not None:
            timeout = min(timeout, until_tick)
        try:
            if timeout <= 0:
                return self._resources.command_queue.get_nowait()
            return self._resources.command_queue.get(timeout=timeout)
        except Empty:
            return None

    def _finalize_pending_writes(self) -> None:
        for completed in self._resources.persistence.collect_finished():
            if completed.kind == WRITE_SESSION:
                self._finalize_session_write(completed)
            else:
                self._finalize_settings_write(completed)

    def _finalize_session_write(self, completed: CompletedWrite) -> None:
        if not completed.succeeded:
            self._logger.warning(
                "Session not recorded locally: %s",
                completed.payload,
            )
            return
        self._history.append(completed.result)
        self._dispatcher.publish_reports()

    def _finalize_settings_write(self, completed: CompletedWrite) -> None:
        if completed.succeeded and completed.result:
            result = self._timer.update_configuration(completed.payload)
            self._ui.publish_timer_update(
                result.snapshot,
                action=ACTION_CONFIGURE,
                accepted=result.accepted,
                reason=result.reason,
            )
        else:
            self._logger.warning("Timer settings not saved; keeping current durations")

        self._ui.publish_settings(
            self._timer.configuration,
            overtime_enabled=self._bootstrap.overtime_enabled,
        )

    def _publish_sync_state(self) -> None:
        syncing = self._resources.persistence.pending_count > 0
        if syncing != self._resources.syncing:
            self._resources.syncing = syncing
            self._ui.publish_sync(syncing)

    def _shutdown(self) -> None:
        self._ticker.cancel()

        self._logger.info("Stopping persistence worker...")
        self._resources.persistence.shutdown(wait=True)
        self._finalize_pending_writes()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
