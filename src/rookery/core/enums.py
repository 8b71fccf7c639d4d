"""Core enumerations for the rule engine."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Side(IntEnum):
    """Side color. The value doubles as the owning player's id."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction pawns of this side advance in."""
        return 1 if self is Side.WHITE else -1

    @property
    def home_rank(self) -> int:
        return 0 if self is Side.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Piece kinds. Values are the persisted kind tags and must not change."""

    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5

    @property
    def tracks_moves(self) -> bool:
        """Whether pieces of this kind carry a has-moved flag."""
        return self in (PieceKind.KING, PieceKind.ROOK, PieceKind.PAWN)


class MoveStatus(StrEnum):
    """Outcome of :meth:`Engine.move`. Returned, never raised."""

    OK = "ok"
    SOURCE_EMPTY = "source_empty"
    WRONG_OWNER = "wrong_owner"
    ILLEGAL_FOR_PIECE = "illegal_for_piece"
    OWN_PIECE_BLOCKING = "own_piece_blocking"
    ILLEGAL_CASTLE = "illegal_castle"
    PATH_BLOCKED = "path_blocked"

    @property
    def ok(self) -> bool:
        return self is MoveStatus.OK

    @property
    def description(self) -> str:
        """Short explanation suitable for a status line."""
        return _STATUS_DESCRIPTION[self]


_STATUS_DESCRIPTION: dict[MoveStatus, str] = {
    MoveStatus.OK: "Ok",
    MoveStatus.SOURCE_EMPTY: "No piece at source",
    MoveStatus.WRONG_OWNER: "Not your piece",
    MoveStatus.ILLEGAL_FOR_PIECE: "Invalid move for this piece",
    MoveStatus.OWN_PIECE_BLOCKING: "Can't capture your own piece",
    MoveStatus.ILLEGAL_CASTLE: "Invalid castling movement",
    MoveStatus.PATH_BLOCKED: "Path is not clear",
}
