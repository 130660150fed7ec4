class PlaybackError(Exception):
    """Raised when an audio cue cannot be played."""


class AudioConfigurationError(PlaybackError):
    """Raised when audio cue configuration is invalid."""


class AudioDependencyError(PlaybackError):
    """Raised when the audio playback dependency is unavailable."""
