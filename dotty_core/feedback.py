from __future__ import annotations

from typing import List, Optional

from .engine import ResolveResult, SelectionOutcome

# Four ascending notes (E, F, F#, G) in the stock tone set.
DEFAULT_STEPS = 4


class FeedbackEvent:
    TONE_UP = "tone_up"
    TONE_DOWN = "tone_down"
    GAME_OVER = "game_over"


class ToneLadder:
    """Tracks which selection tone to play as a path grows and shrinks.

    The index starts below the first note, so the first pick plays note 0.
    Stepping past either end wraps back to note 0.
    """

    def __init__(self, steps: int = DEFAULT_STEPS) -> None:
        if steps < 1:
            raise ValueError('ToneLadder needs at least one step')
        self.steps = steps
        self.index = -1

    def reset(self) -> None:
        self.index = -1

    def advance(self) -> int:
        return self._step(1)

    def retreat(self) -> int:
        return self._step(-1)

    def _step(self, delta: int) -> int:
        self.index += delta
        if self.index < 0 or self.index >= self.steps:
            self.index = 0
        return self.index

    def cue_for(self, outcome: Optional[SelectionOutcome]) -> Optional[int]:
        """Tone to play for a selection outcome; rejected touches are silent."""
        if outcome is SelectionOutcome.ADDED:
            return self.advance()
        if outcome is SelectionOutcome.REMOVED:
            return self.retreat()
        return None


def events_for(outcome: Optional[SelectionOutcome], resolution: Optional[ResolveResult]) -> List[str]:
    events: List[str] = []
    if outcome is SelectionOutcome.ADDED:
        events.append(FeedbackEvent.TONE_UP)
    elif outcome is SelectionOutcome.REMOVED:
        events.append(FeedbackEvent.TONE_DOWN)
    if resolution is not None and resolution.resolved and resolution.moves_left == 0:
        events.append(FeedbackEvent.GAME_OVER)
    return events
