"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Default preset durations and overtime behaviour from `[timer]`."""
    lock_in_minutes: int = 90
    small_break_minutes: int = 20
    long_break_minutes: int = 45
    overtime_enabled: bool = True


@dataclass(frozen=True)
class AudioSettings:
    """Audio cue files and output device from `[audio]`."""
    enabled: bool = True
    lock_in_sound: str = ""
    timer_complete_sound: str = ""
    output_device: Optional[int] = None


@dataclass(frozen=True)
class StorageSettings:
    """Session store backend and document layout from `[storage]`."""
    backend: str = "firestore"
    project_id: str = ""
    settings_collection: str = "settings"
    settings_document: str = "timer_settings"
    sessions_collection: str = "sessions"


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    audio: AudioSettings
    storage: StorageSettings
    ui_server: UIServerSettings
    source_file: str


@dataclass(frozen=True)
class SecretConfig:
    """Environment-provided secrets kept out of `config.toml`."""
    google_service_account_file: Optional[str]
