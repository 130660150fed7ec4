"""Per-preset countdown durations and their stored document form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .constants import DEFAULT_DURATIONS_SECONDS, PRESETS


@dataclass(frozen=True)
class TimerConfiguration:
    """Mapping of preset name to the duration a fresh countdown starts at."""
    durations: Mapping[str, int] = field(
        default_factory=lambda: dict(DEFAULT_DURATIONS_SECONDS)
    )

    def __post_init__(self) -> None:
        unknown = [name for name in self.durations if name not in PRESETS]
        if unknown:
            raise ValueError(f"Unknown preset(s): {', '.join(sorted(unknown))}")
        missing = [name for name in PRESETS if name not in self.durations]
        if missing:
            raise ValueError(f"Missing duration for preset(s): {', '.join(missing)}")
        for name, seconds in self.durations.items():
            if isinstance(seconds, bool) or not isinstance(seconds, int):
                raise ValueError(f"Duration for {name!r} must be an integer")
            if seconds < 0:
                raise ValueError(f"Duration for {name!r} must be >= 0, got: {seconds}")

    def duration_for(self, preset: str) -> int:
        return self.durations[preset]

    def with_duration(self, preset: str, seconds: int) -> "TimerConfiguration":
        updated = dict(self.durations)
        updated[preset] = seconds
        return TimerConfiguration(durations=updated)

    def to_document(self) -> dict[str, int]:
        return {name: int(self.durations[name]) for name in PRESETS}

    @classmethod
    def from_document(
        cls,
        document: Mapping[str, Any],
        *,
        defaults: Optional["TimerConfiguration"] = None,
    ) -> "TimerConfiguration":
        """Build a configuration from a stored document, filling absent presets."""
        base = defaults or cls()
        durations: dict[str, int] = {}
        for name in PRESETS:
            raw = document.get(name)
            if raw is None:
                durations[name] = base.duration_for(name)
                continue
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"Stored duration for {name!r} is not a number")
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError(f"Stored duration for {name!r} is not whole seconds")
            durations[name] = int(raw)
        return cls(durations=durations)

    @classmethod
    def from_minutes(cls, minutes: Mapping[str, int]) -> "TimerConfiguration":
        return cls(durations={name: int(minutes[name]) * 60 for name in PRESETS})
