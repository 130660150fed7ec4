"""Audio cues played at lock-in start and countdown completion."""

from .config import AudioConfig
from .cues import CuePlayer, SilentCuePlayer, SoundCuePlayer, build_cue_player, load_wav
from .errors import AudioConfigurationError, AudioDependencyError, PlaybackError

__all__ = [
    "AudioConfig",
    "AudioConfigurationError",
    "AudioDependencyError",
    "CuePlayer",
    "PlaybackError",
    "SilentCuePlayer",
    "SoundCuePlayer",
    "build_cue_player",
    "load_wav",
]
