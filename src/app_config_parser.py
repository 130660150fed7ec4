"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    StorageSettings,
    TimerSettings,
    UIServerSettings,
)

_ALLOWED_STORAGE_BACKENDS = {"firestore", "memory"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    audio = _parse_audio_settings(_section(raw, "audio"), base_dir=base_dir)
    storage = _parse_storage_settings(_section(raw, "storage"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        timer=timer,
        audio=audio,
        storage=storage,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    return TimerSettings(
        lock_in_minutes=_as_minutes(
            section.get("lock_in_minutes", 90),
            "timer.lock_in_minutes",
        ),
        small_break_minutes=_as_minutes(
            section.get("small_break_minutes", 20),
            "timer.small_break_minutes",
        ),
        long_break_minutes=_as_minutes(
            section.get("long_break_minutes", 45),
            "timer.long_break_minutes",
        ),
        overtime_enabled=_as_bool(
            section.get("overtime_enabled", True),
            "timer.overtime_enabled",
        ),
    )


def _parse_audio_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> AudioSettings:
    return AudioSettings(
        enabled=_as_bool(section.get("enabled", True), "audio.enabled"),
        lock_in_sound=_resolve_path(
            base_dir,
            _as_str(section.get("lock_in_sound", "sounds/lock-in.wav"), "audio.lock_in_sound"),
        ),
        timer_complete_sound=_resolve_path(
            base_dir,
            _as_str(
                section.get("timer_complete_sound", "sounds/timer-complete.wav"),
                "audio.timer_complete_sound",
            ),
        ),
        output_device=(
            _as_int(section.get("output_device"), "audio.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_storage_settings(section: Mapping[str, Any]) -> StorageSettings:
    _forbid_secret_fields(section, "storage", ("service_account_file",))
    return StorageSettings(
        backend=_as_backend(section.get("backend", "firestore"), "storage.backend"),
        project_id=_as_str(section.get("project_id", ""), "storage.project_id"),
        settings_collection=_as_str(
            section.get("settings_collection", "settings"),
            "storage.settings_collection",
        ),
        settings_document=_as_str(
            section.get("settings_document", "timer_settings"),
            "storage.settings_document",
        ),
        sessions_collection=_as_str(
            section.get("sessions_collection", "sessions"),
            "storage.sessions_collection",
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        base = 16 if text.startswith("0x") else 10
        try:
            return int(text, base)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_minutes(value: Any, field: str) -> int:
    minutes = _as_int(value, field)
    if minutes < 0:
        raise AppConfigurationError(f"{field} must be >= 0.")
    return minutes


def _as_backend(value: Any, field: str) -> str:
    name = _as_str(value, field).lower()
    if name not in _ALLOWED_STORAGE_BACKENDS:
        allowed = ", ".join(sorted(_ALLOWED_STORAGE_BACKENDS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_secret_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(
            f"Secret values must not be stored in config.toml: {joined}. "
            "Move them to environment variables."
        )
