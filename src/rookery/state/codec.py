"""Binary save format for a complete engine state.

Envelope::

    [u32 crc32][payload]

Payload::

    64 x cell      [u8 present] ([u32 len][piece frame])?     row-major, a1..h8
    2 x player     [u32 len][player frame]
    side to move   [u32 0|1]

Piece frame payload: ``[u8 kind][u8 side][u8 captured]`` followed by
``[u8 moved]`` for kings, rooks and pawns.

Player frame payload: ``[u32 id][u32 turns][u32 max_turns][i64 elapsed]
[u8 has_limit][i64 limit]? [u32 n]`` then *n* length-prefixed piece frames.

Decoding never touches live objects: it builds a fresh :class:`Board`
and fresh :class:`PlayerRecord` values that the caller swaps in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import PieceKind, Side
from rookery.core.errors import CorruptPayloadError, UnknownPieceTagError
from rookery.core.piece import Piece, PieceState, piece_from_state
from rookery.core.types import BOARD_SIZE, Coord
from rookery.state.frame import FrameReader, FrameWriter, unwrap_frame, wrap_frame

PLAYER_COUNT = 2

_KIND_TAGS = frozenset(int(kind) for kind in PieceKind)


@dataclass(slots=True)
class PlayerRecord:
    """Persisted part of a player."""

    player_id: int
    turns: int
    max_turns: int
    elapsed: int
    time_limit: int | None
    captured: list[Piece] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LoadedState:
    """Fully validated state decoded from a save."""

    board: Board
    players: tuple[PlayerRecord, PlayerRecord]
    side_to_move: Side


# ── Pieces ──────────────────────────────────────────────────────────────────


def encode_piece(piece: Piece) -> bytes:
    writer = FrameWriter()
    writer.write_u8(int(piece.kind))
    writer.write_u8(int(piece.side))
    writer.write_bool(piece.captured)
    if piece.kind.tracks_moves:
        writer.write_bool(piece.moved)
    return writer.getvalue()


def decode_piece(payload: bytes, board: Board) -> Piece:
    """Rebuild a piece from its record, bound to *board*."""
    reader = FrameReader(payload)
    tag = reader.read_u8()
    if tag not in _KIND_TAGS:
        raise UnknownPieceTagError(tag)
    kind = PieceKind(tag)
    side = _read_side(reader.read_u8())
    captured = reader.read_bool()
    moved = reader.read_bool() if kind.tracks_moves else False
    reader.expect_end()
    return piece_from_state(PieceState(kind, side, captured, moved), board)


# ── Players ─────────────────────────────────────────────────────────────────


def encode_player(record: PlayerRecord) -> bytes:
    writer = FrameWriter()
    writer.write_u32(record.player_id)
    writer.write_u32(record.turns)
    writer.write_u32(record.max_turns)
    writer.write_i64(record.elapsed)
    writer.write_bool(record.time_limit is not None)
    if record.time_limit is not None:
        writer.write_i64(record.time_limit)
    writer.write_u32(len(record.captured))
    for piece in record.captured:
        writer.write_frame(encode_piece(piece))
    return writer.getvalue()


def decode_player(payload: bytes, board: Board) -> PlayerRecord:
    reader = FrameReader(payload)
    player_id = reader.read_u32()
    turns = reader.read_u32()
    max_turns = reader.read_u32()
    elapsed = reader.read_i64()
    if elapsed < 0:
        raise CorruptPayloadError(f"Negative elapsed time: {elapsed}")
    time_limit: int | None = None
    if reader.read_bool():
        time_limit = reader.read_i64()
        if time_limit < 0:
            raise CorruptPayloadError(f"Negative time limit: {time_limit}")
    count = reader.read_u32()
    captured = [decode_piece(reader.read_frame(), board) for _ in range(count)]
    reader.expect_end()
    return PlayerRecord(player_id, turns, max_turns, elapsed, time_limit, captured)


# ── Engine ──────────────────────────────────────────────────────────────────


def encode_engine(
    board: Board, players: Sequence[PlayerRecord], side_to_move: Side
) -> bytes:
    """Serialize a full engine state into a checksum envelope."""
    if len(players) != PLAYER_COUNT:
        raise ValueError(f"Expected {PLAYER_COUNT} players, got {len(players)}")
    writer = FrameWriter()
    for _, piece in board.cells():
        writer.write_bool(piece is not None)
        if piece is not None:
            writer.write_frame(encode_piece(piece))
    for record in players:
        writer.write_frame(encode_player(record))
    writer.write_u32(int(side_to_move))
    return wrap_frame(writer.getvalue())


def decode_engine(data: bytes) -> LoadedState:
    """Validate an envelope and rebuild the state it carries.

    Raises:
        TooShortError: input or a nested record is truncated.
        ChecksumMismatchError: the envelope or a sub-frame is corrupted.
        UnknownPieceTagError: a piece record names an unknown kind.
        CorruptPayloadError: checksums hold but the structure is invalid,
            e.g. a bad side byte or a second king for one side.
    """
    reader = FrameReader(unwrap_frame(data))
    board = Board()
    kings: set[Side] = set()
    for index in range(BOARD_SIZE * BOARD_SIZE):
        if not reader.read_bool():
            continue
        coord = Coord.from_index(index)
        piece = decode_piece(reader.read_frame(), board)
        if piece.kind is PieceKind.KING:
            if piece.side in kings:
                raise CorruptPayloadError(f"Second {piece.side} king on {coord}")
            kings.add(piece.side)
        board[coord] = piece

    records: list[PlayerRecord] = []
    for slot in range(PLAYER_COUNT):
        record = decode_player(reader.read_frame(), board)
        if record.player_id != slot:
            raise CorruptPayloadError(
                f"Player record {slot} carries id {record.player_id}"
            )
        records.append(record)

    side_to_move = _read_side(reader.read_u32())
    reader.expect_end()
    return LoadedState(board, (records[0], records[1]), side_to_move)


def _read_side(value: int) -> Side:
    if value not in (Side.WHITE, Side.BLACK):
        raise CorruptPayloadError(f"Invalid side indicator: {value}")
    return Side(value)
