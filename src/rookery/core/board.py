"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from rookery.core.enums import PieceKind, Side
from rookery.core.piece import Piece, create_piece
from rookery.core.types import BOARD_SIZE, Coord, in_bounds

_CELL_COUNT = BOARD_SIZE * BOARD_SIZE

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Board:
    """Mutable 64-cell board; each cell holds at most one piece."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * _CELL_COUNT

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self._cells[coord.index]

    def __setitem__(self, coord: Coord, piece: Piece | None) -> None:
        self._cells[coord.index] = piece

    def at(self, row: int, col: int) -> Piece | None:
        """Piece at a raw (row, col) pair; None when empty or off the board."""
        if not in_bounds(row, col):
            return None
        return self._cells[row * BOARD_SIZE + col]

    def is_empty(self, coord: Coord) -> bool:
        return self._cells[coord.index] is None

    def remove(self, coord: Coord) -> Piece | None:
        """Empty the cell at *coord* and return what was there."""
        piece = self._cells[coord.index]
        self._cells[coord.index] = None
        return piece

    def place(self, coord: Coord, kind: PieceKind, side: Side) -> Piece:
        """Create a fresh piece bound to this board and put it on *coord*."""
        piece = create_piece(kind, side, self)
        self._cells[coord.index] = piece
        return piece

    # -- Query helpers ------------------------------------------------------

    def cells(self) -> Iterator[tuple[Coord, Piece | None]]:
        """All 64 cells in row-major order (a1, b1, ..., h8)."""
        for index, piece in enumerate(self._cells):
            yield Coord.from_index(index), piece

    def pieces(self, side: Side | None = None) -> Iterator[tuple[Coord, Piece]]:
        """Occupied cells, optionally restricted to *side*."""
        for coord, piece in self.cells():
            if piece is not None and (side is None or piece.side == side):
                yield coord, piece

    def piece_count(self, side: Side | None = None) -> int:
        return sum(1 for _ in self.pieces(side))

    def find_king(self, side: Side) -> Coord | None:
        """Full scan for *side*'s king."""
        for coord, piece in self.pieces(side):
            if piece.kind is PieceKind.KING:
                return coord
        return None

    def is_between_clear(
        self, src_row: int, src_col: int, dst_row: int, dst_col: int
    ) -> bool:
        """Whether every cell strictly between two squares on a line is empty.

        The squares must share a rank, a file or a diagonal.
        """
        row_step = _sign(dst_row - src_row)
        col_step = _sign(dst_col - src_col)
        row, col = src_row + row_step, src_col + col_step
        while (row, col) != (dst_row, dst_col):
            if self.at(row, col) is not None:
                return False
            row += row_step
            col += col_step
        return True

    def is_straight_path_clear(self, src: Coord, dst: Coord) -> bool:
        """Clearance along a shared rank or file; True for any other pair."""
        if src.row != dst.row and src.col != dst.col:
            return True
        return self.is_between_clear(src.row, src.col, dst.row, dst.col)

    # -- Mutation -----------------------------------------------------------

    def clear(self) -> None:
        self._cells = [None] * _CELL_COUNT

    def setup_standard(self) -> None:
        """Replace the contents with the standard starting layout."""
        self.clear()
        for file, kind in enumerate(_BACK_RANK):
            self.place(Coord(file, Side.WHITE.home_rank), kind, Side.WHITE)
            self.place(Coord(file, Side.BLACK.home_rank), kind, Side.BLACK)
        for file in range(BOARD_SIZE):
            self.place(Coord(file, 1), PieceKind.PAWN, Side.WHITE)
            self.place(Coord(file, 6), PieceKind.PAWN, Side.BLACK)

    @classmethod
    def initial(cls) -> Board:
        """New board with the standard starting layout."""
        board = cls()
        board.setup_standard()
        return board

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return all(
            (a is None and b is None)
            or (a is not None and b is not None and a.state == b.state)
            for a, b in zip(self._cells, other._cells)
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self.at(rank, file)
                row.append(p.letter if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
