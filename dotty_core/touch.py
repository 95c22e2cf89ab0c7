from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .board import Coord
from .engine import GridEngine, ResolveResult, SelectionOutcome
from .log import get_logger

log = get_logger("touch")


class GesturePhase(Enum):
    """Pointer down, move and up."""
    FIRST = "first"
    ADDITIONAL = "additional"
    LAST = "last"

    @classmethod
    def parse(cls, value: object) -> 'GesturePhase':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown gesture phase {value!r}") from None


@dataclass(frozen=True)
class TouchResult:
    outcome: Optional[SelectionOutcome] = None
    resolution: Optional[ResolveResult] = None
    cleared: bool = False
    ignored: bool = False


def cell_at(x: float, y: float, cell_width: float, cell_height: float, size: int) -> Optional[Coord]:
    """Maps a pixel position to the grid cell under it, or None outside the grid."""
    if cell_width <= 0 or cell_height <= 0:
        raise ValueError('Cell dimensions must be positive')
    if x < 0 or y < 0:
        return None
    col = int(x // cell_width)
    row = int(y // cell_height)
    if row >= size or col >= size:
        return None
    return (row, col)


def cell_center(coord: Coord, cell_width: float, cell_height: float) -> Tuple[float, float]:
    r, c = coord
    return (c * cell_width + cell_width / 2.0, r * cell_height + cell_height / 2.0)


def handle_touch(engine: GridEngine, coord: Optional[Coord], phase: GesturePhase) -> TouchResult:
    """
    Routes one gesture event into the engine.
    A pointer that slides off the grid keeps reporting the last selected cell.
    Lifting the pointer resolves a path of two or more tokens and drops anything shorter.
    """
    if engine.is_game_over():
        return TouchResult(ignored=True)
    if coord is None:
        coord = engine.last_selected()
        if coord is None:
            return TouchResult(ignored=True)

    outcome = engine.select_token(coord)
    if phase is not GesturePhase.LAST:
        return TouchResult(outcome=outcome)
    done = release(engine)
    return TouchResult(outcome=outcome, resolution=done.resolution, cleared=done.cleared)


def release(engine: GridEngine) -> TouchResult:
    """Ends the gesture: resolve a path of two or more tokens, otherwise drop it."""
    if len(engine.selection) > 1 and not engine.is_game_over():
        resolution = engine.resolve()
        log.debug("release resolved %d tokens", resolution.removed)
        return TouchResult(resolution=resolution)
    engine.clear_selection()
    return TouchResult(cleared=True)
