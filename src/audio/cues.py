"""Sounddevice-backed playback of the lock-in and timer-complete cues."""

from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Any, Optional, Protocol

import numpy as np

from .config import AudioConfig
from .errors import AudioConfigurationError, AudioDependencyError, PlaybackError


class CuePlayer(Protocol):
    def play(self, cue: str) -> None:
        ...


class SilentCuePlayer:
    """Cue player used when audio is disabled; only logs the cue."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def play(self, cue: str) -> None:
        self._logger.debug("Audio disabled, skipping cue: %s", cue)


class SoundCuePlayer:
    """Plays preloaded mono PCM cues without blocking the caller."""

    def __init__(
        self,
        config: AudioConfig,
        *,
        backend: Any = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._backend = backend if backend is not None else _load_sounddevice()
        self._cues: dict[str, tuple[np.ndarray, int]] = {
            name: load_wav(Path(path)) for name, path in config.cue_files().items()
        }

    def play(self, cue: str) -> None:
        try:
            wav, sample_rate_hz = self._cues[cue]
        except KeyError:
            raise PlaybackError(f"Unknown audio cue: {cue}") from None

        self._logger.debug(
            "Playing cue %s (%d samples at %d Hz)",
            cue,
            len(wav),
            sample_rate_hz,
        )
        try:
            self._backend.play(
                wav,
                samplerate=sample_rate_hz,
                device=self._config.output_device_index,
                blocking=False,
            )
        except Exception as error:
            raise PlaybackError(f"Audio playback failed for {cue}: {error}") from error


def load_wav(path: Path) -> tuple[np.ndarray, int]:
    """Decode a PCM WAV file into a float32 mono array and its sample rate."""
    try:
        with wave.open(str(path), "rb") as fh:
            channels = fh.getnchannels()
            sample_width = fh.getsampwidth()
            sample_rate_hz = fh.getframerate()
            frames = fh.readframes(fh.getnframes())
    except (OSError, wave.Error) as error:
        raise AudioConfigurationError(f"Failed to read sound file {path}: {error}") from error

    if sample_width == 1:
        pcm = (np.frombuffer(frames, dtype=np.uint8).astype(np.float32) - 128.0) / 128.0
    elif sample_width == 2:
        pcm = np.frombuffer(frames, dtype="<i2").astype(np.float32) / 32768.0
    elif sample_width == 4:
        pcm = np.frombuffer(frames, dtype="<i4").astype(np.float32) / 2147483648.0
    else:
        raise AudioConfigurationError(
            f"Unsupported sample width {sample_width} bytes in {path}"
        )

    if channels > 1:
        pcm = pcm.reshape(-1, channels).mean(axis=1)
    if len(pcm) == 0:
        raise AudioConfigurationError(f"Sound file is empty: {path}")
    return pcm.astype(np.float32), sample_rate_hz


def build_cue_player(
    config: AudioConfig,
    *,
    logger: logging.Logger,
) -> CuePlayer:
    """Create the cue player, degrading to silence when audio is unavailable."""
    if not config.enabled:
        logger.info("Audio cues disabled (audio.enabled=false)")
        return SilentCuePlayer(logger=logger)

    try:
        player = SoundCuePlayer(config, logger=logger)
    except PlaybackError as error:
        logger.warning("Audio cues unavailable: %s", error)
        return SilentCuePlayer(logger=logger)

    logger.info("Audio cues enabled")
    return player


def _load_sounddevice():
    try:
        import sounddevice
    except (ImportError, OSError) as error:  # pragma: no cover - host dependent
        raise AudioDependencyError(
            f"sounddevice is unavailable (is PortAudio installed?): {error}"
        ) from error
    return sounddevice
