from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .board import Coord, Grid, Token, is_adjacent
from .constants import GRID_SIZE, INIT_MOVES, MIN_PATH, NUM_COLORS
from .log import get_logger

log = get_logger("engine")


class SelectionOutcome(Enum):
    """Result of offering a token to the current path."""
    ADDED = "added"
    REJECTED = "rejected"
    REMOVED = "removed"


class CoordinateError(ValueError):
    """Raised for a coordinate that is not an int pair inside the grid."""

    def __init__(self, coord: Any, size: int) -> None:
        super().__init__(f"coordinate {coord!r} outside {size}x{size} grid")
        self.coord = coord
        self.size = size


@dataclass(frozen=True)
class ResolveResult:
    """Summary of a resolution step.

    ``cells`` lists the removed coordinates top-down. ``drops`` maps each
    affected column to the number of tokens removed from it, which is how far
    the tokens above the topmost gap fall. ``lowest`` maps each affected column
    to the lowest selected coordinate before the grid was mutated. All three
    are empty when nothing was resolved.
    """
    removed: int
    score: int
    moves_left: int
    cells: Tuple[Coord, ...] = ()
    drops: Dict[int, int] = field(default_factory=dict)
    lowest: Dict[int, Coord] = field(default_factory=dict)

    @property
    def resolved(self) -> bool:
        return self.removed > 0

    def falls(self) -> Dict[Coord, int]:
        """Pre-resolution coordinate of every surviving token that moves, mapped to its fall distance."""
        gone = set(self.cells)
        out: Dict[Coord, int] = {}
        for c, (bottom, _) in self.lowest.items():
            for r in range(bottom):
                if (r, c) in gone:
                    continue
                out[(r, c)] = sum(1 for (gr, gc) in gone if gc == c and gr > r)
        return out


class GridEngine:
    """Owns the token grid, the active path and the move/score counters."""

    def __init__(
        self,
        size: int = GRID_SIZE,
        num_colors: int = NUM_COLORS,
        init_moves: int = INIT_MOVES,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random(seed)
        self.init_moves = init_moves
        self.grid = Grid(size=size, num_colors=num_colors, rng=self._rng)
        self._selection: List[Coord] = []
        self.score = 0
        self.moves_left = init_moves

    # ---------- lifecycle ----------

    def new_game(self) -> None:
        """Re-seeds every cell, resets counters and drops any in-progress path."""
        self.clear_selection()
        self.score = 0
        self.moves_left = self.init_moves
        self.grid.fill()
        log.info("new game: %dx%d board, %d moves", self.size, self.size, self.moves_left)

    def load(self, rows) -> None:
        """Replaces the board colors with a fixed layout; used for puzzles and tests."""
        self.clear_selection()
        self.grid.load(rows)

    def is_game_over(self) -> bool:
        return self.moves_left == 0

    # ---------- read-only views ----------

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def selection(self) -> Tuple[Coord, ...]:
        return tuple(self._selection)

    def _check(self, coord: Coord) -> Coord:
        if not isinstance(coord, (tuple, list)) or len(coord) != 2:
            raise CoordinateError(coord, self.size)
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in coord):
            raise CoordinateError(coord, self.size)
        key = (coord[0], coord[1])
        if not self.grid.in_bounds(key):
            raise CoordinateError(coord, self.size)
        return key

    def token(self, coord: Coord) -> Token:
        r, c = self._check(coord)
        return self.grid.at(r, c)

    def color_at(self, coord: Coord) -> int:
        return self.token(coord).color

    def last_selected(self) -> Optional[Coord]:
        return self._selection[-1] if self._selection else None

    def colors(self) -> Tuple[Tuple[int, ...], ...]:
        return self.grid.colors()

    def lowest_selected(self) -> List[Coord]:
        """For every column holding a selected token, the one nearest the bottom."""
        lowest: List[Coord] = []
        for c in range(self.size):
            for r in range(self.size - 1, -1, -1):
                if self.grid.at(r, c).selected:
                    lowest.append((r, c))
                    break
        return lowest

    def snapshot(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "colors": [list(row) for row in self.colors()],
            "selected": [[self.grid.at(r, c).selected for c in range(self.size)]
                         for r in range(self.size)],
            "selection": [[r, c] for (r, c) in self._selection],
            "score": self.score,
            "movesLeft": self.moves_left,
            "gameOver": self.is_game_over(),
        }

    def pretty(self) -> str:
        return self.grid.pretty()

    # ---------- selection ----------

    def select_token(self, coord: Coord) -> SelectionOutcome:
        """Offers a token to the path: extend it, backtrack one step, or reject."""
        key = self._check(coord)
        target = self.grid.at(*key)
        outcome = SelectionOutcome.REJECTED

        if not self._selection:
            self._push(target)
            outcome = SelectionOutcome.ADDED
        elif not target.selected:
            last = self.grid.at(*self._selection[-1])
            if last.color == target.color and is_adjacent(last.coord, key):
                self._push(target)
                outcome = SelectionOutcome.ADDED
        elif len(self._selection) > 1 and self._selection[-2] == key:
            # Sliding back over the previous token undoes the latest pick.
            r, c = self._selection.pop()
            self.grid.at(r, c).selected = False
            outcome = SelectionOutcome.REMOVED

        log.debug("select %s -> %s (path length %d)", key, outcome.value, len(self._selection))
        return outcome

    def _push(self, token: Token) -> None:
        self._selection.append(token.coord)
        token.selected = True

    def clear_selection(self) -> None:
        for r, c in self._selection:
            self.grid.at(r, c).selected = False
        self._selection.clear()

    # ---------- resolution ----------

    def resolve(self) -> ResolveResult:
        """Removes the current path, drops the tokens above it and refills from the top.

        Paths shorter than two tokens, or a game with no moves left, only
        clear the selection.
        """
        if len(self._selection) < MIN_PATH or self.is_game_over():
            self.clear_selection()
            return ResolveResult(removed=0, score=self.score, moves_left=self.moves_left)

        drops = dict(sorted(Counter(c for _, c in self._selection).items()))
        lowest = {c: (r, c) for (r, c) in self.lowest_selected()}
        removed = len(self._selection)
        cells = tuple(sorted(self._selection))

        # Top-down so each shift sees colors already moved by the gaps above it.
        for r, c in cells:
            for i in range(r, 0, -1):
                self.grid.at(i, c).color = self.grid.at(i - 1, c).color
            self.grid.at(0, c).color = self.grid.random_color()

        self.score += removed
        self.moves_left -= 1
        self.clear_selection()

        log.debug("resolved %d tokens across columns %s", removed, list(drops))
        if self.is_game_over():
            log.info("game over: final score %d", self.score)
        return ResolveResult(
            removed=removed,
            score=self.score,
            moves_left=self.moves_left,
            cells=cells,
            drops=drops,
            lowest=lowest,
        )
