"""Executes the side effects returned by timer transitions."""

from __future__ import annotations

import logging
from typing import Iterable

from audio import PlaybackError
from timer import PersistSession, PlayCue, TimerEffect

from .contracts import CuePlayerLike
from .persistence import PersistenceWorker


class EffectRunner:
    """Plays cues inline and hands session drafts to the persistence worker."""
    def __init__(
        self,
        *,
        cue_player: CuePlayerLike,
        persistence: PersistenceWorker,
        logger: logging.Logger,
    ):
        self._cue_player = cue_player
        self._persistence = persistence
        self._logger = logger

    def run(self, effects: Iterable[TimerEffect]) -> None:
        for effect in effects:
            if isinstance(effect, PlayCue):
                self._play(effect.cue)
            elif isinstance(effect, PersistSession):
                self._persistence.submit_session(effect.draft)
            else:
                self._logger.warning(
                    "Ignoring unknown timer effect: %s",
                    type(effect).__name__,
                )

    def _play(self, cue: str) -> None:
        try:
            self._cue_player.play(cue)
        except PlaybackError as error:
            self._logger.warning("Audio cue %s failed: %s", cue, error)
