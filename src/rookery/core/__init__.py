"""Core domain layer — board, pieces and movement rules, no external dependencies.

Quick start::

    from rookery.core import Board, Coord

    board = Board.initial()
    pawn = board[Coord.parse("e2")]
    pawn.is_legal_move(Coord.parse("e2"), Coord.parse("e4"))  # True
"""

from rookery.core.board import Board
from rookery.core.enums import MoveStatus, PieceKind, Side
from rookery.core.errors import (
    ChecksumMismatchError,
    CoordinateError,
    CorruptPayloadError,
    LoadError,
    TooShortError,
    UnknownPieceTagError,
)
from rookery.core.piece import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    PieceState,
    Queen,
    Rook,
    create_piece,
)
from rookery.core.types import BOARD_SIZE, Coord

__all__ = [
    # Enums
    "MoveStatus",
    "PieceKind",
    "Side",
    # Types
    "BOARD_SIZE",
    "Coord",
    # Errors
    "ChecksumMismatchError",
    "CoordinateError",
    "CorruptPayloadError",
    "LoadError",
    "TooShortError",
    "UnknownPieceTagError",
    # Domain objects
    "Bishop",
    "Board",
    "King",
    "Knight",
    "Pawn",
    "Piece",
    "PieceState",
    "Queen",
    "Rook",
    "create_piece",
]
