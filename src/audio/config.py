"""Audio cue configuration derived from app settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from timer.constants import CUE_LOCK_IN, CUE_TIMER_COMPLETE

from .errors import AudioConfigurationError


@dataclass(frozen=True)
class AudioConfig:
    enabled: bool = True
    lock_in_sound: str = ""
    timer_complete_sound: str = ""
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.enabled:
            return
        for name, raw in self.cue_files().items():
            if not raw:
                raise AudioConfigurationError(f"Sound file for cue {name!r} is not set")
            path = Path(raw)
            if not path.is_file():
                raise AudioConfigurationError(f"Sound file for cue {name!r} not found: {path}")
        if self.output_device_index is not None and self.output_device_index < 0:
            raise AudioConfigurationError(
                f"audio.output_device must be >= 0, got: {self.output_device_index}"
            )

    def cue_files(self) -> dict[str, str]:
        return {
            CUE_LOCK_IN: self.lock_in_sound,
            CUE_TIMER_COMPLETE: self.timer_complete_sound,
        }

    @classmethod
    def from_settings(cls, settings) -> "AudioConfig":
        return cls(
            enabled=bool(settings.enabled),
            lock_in_sound=settings.lock_in_sound,
            timer_complete_sound=settings.timer_complete_sound,
            output_device_index=settings.output_device,
        )
