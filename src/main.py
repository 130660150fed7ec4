import logging
import signal
import sys
from typing import Callable, Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    load_app_config,
    load_secret_config,
    resolve_config_path,
)
from audio import AudioConfig, CuePlayer, PlaybackError, SilentCuePlayer, build_cue_player
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig
from storage import StorageConfig, StorageError, build_session_store
from timer import TimerConfiguration
from timer.constants import PRESET_LOCK_IN, PRESET_LONG_BREAK, PRESET_SMALL_BREAK


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("lock_in")


def setup_signal_handlers(request_stop: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("lock_in").info("%s received, stopping...", signal_name)
        request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def default_timer_configuration(app_config: AppConfig) -> TimerConfiguration:
    """Built-in preset durations, used until stored settings are read."""
    return TimerConfiguration.from_minutes(
        {
            PRESET_LOCK_IN: app_config.timer.lock_in_minutes,
            PRESET_SMALL_BREAK: app_config.timer.small_break_minutes,
            PRESET_LONG_BREAK: app_config.timer.long_break_minutes,
        }
    )


def build_audio(app_config: AppConfig, logger: logging.Logger) -> CuePlayer:
    audio_logger = logging.getLogger("audio")
    try:
        audio_config = AudioConfig.from_settings(app_config.audio)
    except PlaybackError as error:
        logger.warning("Audio cues disabled due to config error: %s", error)
        return SilentCuePlayer(logger=audio_logger)
    return build_cue_player(audio_config, logger=audio_logger)


def build_ui_server(app_config: AppConfig) -> Optional[UIServer]:
    ui_config = UIServerConfig.from_settings(app_config.ui_server)
    if not ui_config.enabled:
        return None
    return UIServer(config=ui_config, logger=logging.getLogger("ui_server"))


def main() -> int:
    """Run the Lock In focus timer service."""
    logger = setup_logging(level=logging.INFO)

    # Load typed app configuration and secrets.
    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        secret_config = load_secret_config()
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    try:
        storage_config = StorageConfig.from_settings(
            app_config.storage,
            service_account_file=secret_config.google_service_account_file,
        )
        store = build_session_store(storage_config, logger=logging.getLogger("storage"))
    except StorageError as error:
        logger.error("Storage initialization error: %s", error)
        return 1

    try:
        ui_server = build_ui_server(app_config)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        return 1

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            store=store,
            cue_player=build_audio(app_config, logger),
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
            default_configuration=default_timer_configuration(app_config),
            overtime_enabled=app_config.timer.overtime_enabled,
        )
    )

    if ui_server is not None:
        ui_server.set_command_handler(engine.submit_command)
        try:
            ui_server.start()
        except RuntimeError as error:
            logger.error("UI server startup error: %s", error)
            return 1
        logger.info(
            "Open http://%s:%d in a browser",
            ui_server.host,
            ui_server.port,
        )
    else:
        logger.info("UI server disabled (ui_server.enabled=false)")

    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
