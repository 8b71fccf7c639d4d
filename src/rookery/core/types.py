"""Board coordinates.

Layout is rank-major, matching the persisted cell order:
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    ...
    a8=(0, 7), ..., h8=(7, 7)

Rank 0 is White's home rank.
"""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.errors import CoordinateError

BOARD_SIZE = 8

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Coord:
    """Validated (file, rank) pair, both in ``0..7``."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        for value in (self.file, self.rank):
            if type(value) is not int:
                raise CoordinateError(f"Coordinate parts must be int, got {value!r}")
        if not (0 <= self.file < BOARD_SIZE and 0 <= self.rank < BOARD_SIZE):
            raise CoordinateError(
                f"Coordinate not valid: ({self.file}, {self.rank}). Must be in range 0-7."
            )

    @property
    def row(self) -> int:
        return self.rank

    @property
    def col(self) -> int:
        return self.file

    @property
    def index(self) -> int:
        """Row-major cell index 0-63."""
        return self.rank * BOARD_SIZE + self.file

    @property
    def name(self) -> str:
        """Human-readable name, e.g. 'e4'."""
        return _FILES[self.file] + _RANKS[self.rank]

    @classmethod
    def parse(cls, name: str) -> Coord:
        """Parse square name, e.g. 'e4' or 'E4'."""
        if len(name) != 2:
            raise CoordinateError(f"Invalid square name: {name!r}")
        file_char, rank_char = name[0].lower(), name[1]
        if file_char not in _FILES or rank_char not in _RANKS:
            raise CoordinateError(f"Invalid square name: {name!r}")
        return cls(_FILES.index(file_char), _RANKS.index(rank_char))

    @classmethod
    def from_index(cls, index: int) -> Coord:
        if not 0 <= index < BOARD_SIZE * BOARD_SIZE:
            raise CoordinateError(f"Cell index out of range: {index}")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def __str__(self) -> str:
        return self.name


def in_bounds(row: int, col: int) -> bool:
    """Check whether a raw (row, col) pair lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


# ── Named coordinates ───────────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Coord(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Coord(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Coord(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Coord(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Coord(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Coord(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Coord(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Coord(f, 7) for f in range(8))
