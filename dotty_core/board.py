from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .constants import GRID_SIZE, NUM_COLORS

Coord = Tuple[int, int]

# Glyphs used by Grid.pretty(), one per color index.
COLOR_GLYPHS = "RGBYP"


@dataclass
class Token:
    """A single colored cell. Position is fixed; only color and selection change."""
    row: int
    col: int
    color: int = 0
    selected: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


def is_adjacent(a: Coord, b: Coord) -> bool:
    """True when two coordinates are 4-directionally adjacent (Manhattan distance 1)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


class Grid:
    """Fixed-size square grid of tokens, addressed by (row, col)."""

    def __init__(self, size: int = GRID_SIZE, num_colors: int = NUM_COLORS,
                 rng: Optional[random.Random] = None) -> None:
        if size < 1:
            raise ValueError('Grid size must be positive')
        if num_colors < 1:
            raise ValueError('Palette must hold at least one color')
        self.size = size
        self.num_colors = num_colors
        self._rng = rng or random.Random()
        self._cells: List[List[Token]] = [
            [Token(row=r, col=c) for c in range(size)] for r in range(size)
        ]
        self.fill()

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def at(self, r: int, c: int) -> Token:
        """Gets the token at a given row and column. Caller guarantees bounds."""
        return self._cells[r][c]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row-major."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def __iter__(self) -> Iterator[Token]:
        for row in self._cells:
            yield from row

    def random_color(self) -> int:
        return self._rng.randrange(self.num_colors)

    def fill(self) -> None:
        """Assigns a uniformly random color to every cell."""
        for token in self:
            token.color = self.random_color()

    def load(self, rows: Iterable[Iterable[int]]) -> None:
        """Overwrites every color from a row-major nested iterable."""
        grid = [list(r) for r in rows]
        if len(grid) != self.size or any(len(r) != self.size for r in grid):
            raise ValueError(f'Expected a {self.size}x{self.size} color layout')
        for r, row in enumerate(grid):
            for c, color in enumerate(row):
                color = int(color)
                if not 0 <= color < self.num_colors:
                    raise ValueError(f'Color {color} outside palette of {self.num_colors}')
                self._cells[r][c].color = color

    def colors(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(t.color for t in row) for row in self._cells)

    def pretty(self) -> str:
        """Generates a human-readable dump; selected tokens are lowercased."""
        lines: List[str] = []
        for row in self._cells:
            cells: List[str] = []
            for token in row:
                glyph = COLOR_GLYPHS[token.color] if token.color < len(COLOR_GLYPHS) else str(token.color)
                cells.append(glyph.lower() if token.selected else glyph)
            lines.append(" ".join(cells))
        return "\n".join(lines)
