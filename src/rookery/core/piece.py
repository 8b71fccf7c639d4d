"""Piece variants and their movement-legality predicates.

Each variant answers a single question: is this geometric move permitted
given the current occupancy of the board it is bound to?  Turn ownership,
own-piece blocking and straight-line clearance for pawns/kings are the
engine's business, not the predicate's.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from rookery.core.enums import PieceKind, Side
from rookery.core.types import BOARD_SIZE, in_bounds

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.types import Coord

_LETTERS: dict[PieceKind, str] = {
    PieceKind.KING: "K",
    PieceKind.QUEEN: "Q",
    PieceKind.ROOK: "R",
    PieceKind.BISHOP: "B",
    PieceKind.KNIGHT: "N",
    PieceKind.PAWN: "P",
}

_UNICODE: dict[tuple[Side, PieceKind], str] = {
    (Side.WHITE, PieceKind.KING): "♔",
    (Side.WHITE, PieceKind.QUEEN): "♕",
    (Side.WHITE, PieceKind.ROOK): "♖",
    (Side.WHITE, PieceKind.BISHOP): "♗",
    (Side.WHITE, PieceKind.KNIGHT): "♘",
    (Side.WHITE, PieceKind.PAWN): "♙",
    (Side.BLACK, PieceKind.KING): "♚",
    (Side.BLACK, PieceKind.QUEEN): "♛",
    (Side.BLACK, PieceKind.ROOK): "♜",
    (Side.BLACK, PieceKind.BISHOP): "♝",
    (Side.BLACK, PieceKind.KNIGHT): "♞",
    (Side.BLACK, PieceKind.PAWN): "♟",
}


@dataclass(frozen=True, slots=True)
class PieceState:
    """Plain snapshot of everything a piece carries besides its board."""

    kind: PieceKind
    side: Side
    captured: bool = False
    moved: bool = False


class Piece(ABC):
    """Base class for all piece variants."""

    kind: ClassVar[PieceKind]

    __slots__ = ("side", "captured", "_board")

    def __init__(self, side: Side, board: Board, *, captured: bool = False) -> None:
        self.side = side
        self.captured = captured
        self._board = board

    # ── Legality ─────────────────────────────────────────────────────────

    def is_legal(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        """Whether moving from (src_row, src_col) to (dst_row, dst_col) is allowed.

        Pure: never mutates the piece or the board.
        """
        if not (in_bounds(src_row, src_col) and in_bounds(dst_row, dst_col)):
            return False
        if src_row == dst_row and src_col == dst_col:
            return False
        return self._reaches(src_row, src_col, dst_row, dst_col)

    def is_legal_move(self, src: Coord, dst: Coord) -> bool:
        return self.is_legal(src.row, src.col, dst.row, dst.col)

    @abstractmethod
    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        """Variant-specific rule; both squares are on the board and distinct."""

    # ── State ────────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def moved(self) -> bool:
        return False

    def mark_moved(self) -> None:
        """Record that the piece has been relocated. Idempotent."""

    def mark_captured(self) -> None:
        self.captured = True

    @property
    def state(self) -> PieceState:
        return PieceState(self.kind, self.side, self.captured, self.moved)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def letter(self) -> str:
        """Upper case for white, lower case for black, e.g. 'N' / 'n'."""
        letter = _LETTERS[self.kind]
        return letter if self.side is Side.WHITE else letter.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.side, self.kind)]

    def __repr__(self) -> str:
        flags = []
        if self.moved:
            flags.append("moved")
        if self.captured:
            flags.append("captured")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"<{type(self).__name__} {self.side}{suffix}>"


class _MoveTrackingPiece(Piece):
    """Variant whose first relocation matters to later legality."""

    __slots__ = ("_moved",)

    def __init__(
        self,
        side: Side,
        board: Board,
        *,
        captured: bool = False,
        moved: bool = False,
    ) -> None:
        super().__init__(side, board, captured=captured)
        self._moved = moved

    @property
    def moved(self) -> bool:
        return self._moved

    def mark_moved(self) -> None:
        self._moved = True


# ── Variants ────────────────────────────────────────────────────────────────


class King(_MoveTrackingPiece):
    kind = PieceKind.KING

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        if abs(dst_row - src_row) <= 1 and abs(dst_col - src_col) <= 1:
            return True
        if self._moved or dst_row != src_row or abs(dst_col - src_col) != 2:
            return False

        # Castling: the edge rook on the side of travel must be untouched
        # and nothing may stand between it and the king.
        rook_col = BOARD_SIZE - 1 if dst_col > src_col else 0
        rook = self._board.at(src_row, rook_col)
        if not isinstance(rook, Rook) or rook.moved or rook.side != self.side:
            return False
        return self._board.is_between_clear(src_row, src_col, src_row, rook_col)


class Queen(Piece):
    kind = PieceKind.QUEEN

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        return _rook_reaches(
            self._board, src_row, src_col, dst_row, dst_col
        ) or _bishop_reaches(self._board, src_row, src_col, dst_row, dst_col)


class Rook(_MoveTrackingPiece):
    kind = PieceKind.ROOK

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        return _rook_reaches(self._board, src_row, src_col, dst_row, dst_col)


class Bishop(Piece):
    kind = PieceKind.BISHOP

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        return _bishop_reaches(self._board, src_row, src_col, dst_row, dst_col)


class Knight(Piece):
    """The only variant allowed to jump over occupied cells."""

    kind = PieceKind.KNIGHT

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        deltas = (abs(dst_row - src_row), abs(dst_col - src_col))
        return deltas in ((2, 1), (1, 2))


class Pawn(_MoveTrackingPiece):
    kind = PieceKind.PAWN

    __slots__ = ()

    def _reaches(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> bool:
        step = self.side.forward
        board = self._board

        if src_col == dst_col:
            if board.at(dst_row, dst_col) is not None:
                return False
            if dst_row == src_row + step:
                return True
            return (
                not self._moved
                and dst_row == src_row + 2 * step
                and board.at(src_row + step, src_col) is None
            )

        # Diagonal steps are captures only.
        if abs(dst_col - src_col) == 1 and dst_row == src_row + step:
            target = board.at(dst_row, dst_col)
            return target is not None and target.side != self.side
        return False


def _rook_reaches(
    board: Board, src_row: int, src_col: int, dst_row: int, dst_col: int
) -> bool:
    if src_row != dst_row and src_col != dst_col:
        return False
    return board.is_between_clear(src_row, src_col, dst_row, dst_col)


def _bishop_reaches(
    board: Board, src_row: int, src_col: int, dst_row: int, dst_col: int
) -> bool:
    if abs(dst_row - src_row) != abs(dst_col - src_col):
        return False
    return board.is_between_clear(src_row, src_col, dst_row, dst_col)


# ── Tag dispatch ────────────────────────────────────────────────────────────

_VARIANTS: dict[PieceKind, type[Piece]] = {
    PieceKind.KING: King,
    PieceKind.QUEEN: Queen,
    PieceKind.ROOK: Rook,
    PieceKind.BISHOP: Bishop,
    PieceKind.KNIGHT: Knight,
    PieceKind.PAWN: Pawn,
}


def create_piece(
    kind: PieceKind,
    side: Side,
    board: Board,
    *,
    captured: bool = False,
    moved: bool = False,
) -> Piece:
    """Build the variant for *kind*, bound to *board*.

    *moved* is ignored for kinds that do not track it.
    """
    cls = _VARIANTS[kind]
    if issubclass(cls, _MoveTrackingPiece):
        return cls(side, board, captured=captured, moved=moved)
    return cls(side, board, captured=captured)


def piece_from_state(state: PieceState, board: Board) -> Piece:
    """Rebuild a piece from a snapshot, bound to *board*."""
    return create_piece(
        state.kind, state.side, board, captured=state.captured, moved=state.moved
    )
