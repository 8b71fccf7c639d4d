"""Engine — owns the board and both players, executes moves, saves/loads.

The engine has exactly two logical states: White to move or Black to move.
Terminal conditions (draw, timeout, king lost, check) are queries the
caller polls after each move; the engine raises no events of its own.

Thread-safety: one ``move``/``save``/``load`` call at a time per engine.
Player clocks tick on the owning thread's Qt event loop and only touch
their own player.
"""

from __future__ import annotations

import logging

from rookery.core.board import Board
from rookery.core.enums import MoveStatus, PieceKind, Side
from rookery.core.errors import LoadError
from rookery.core.piece import Piece
from rookery.core.types import BOARD_SIZE, Coord
from rookery.game.player import Player
from rookery.game.settings import (
    DEFAULT_MAX_TURNS,
    DEFAULT_TICK_INTERVAL_MS,
    GameSettings,
)
from rookery.state.codec import decode_engine, encode_engine

_LOGGER = logging.getLogger(__name__)

_KING_HOME_FILE = 4
_KINGSIDE_ROOK = (BOARD_SIZE - 1, 5)  # (from file, to file)
_QUEENSIDE_ROOK = (0, 3)


class Engine:
    """Rule enforcement and state persistence for one game."""

    __slots__ = ("_board", "_players", "_current", "_tick_interval_ms")

    def __init__(
        self,
        time_limit: int | None = None,
        *,
        max_turns: int = DEFAULT_MAX_TURNS,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ) -> None:
        if tick_interval_ms <= 0:
            raise ValueError("Tick interval must be > 0")
        self._board = Board()
        self._players = (
            Player(0, time_limit, max_turns),
            Player(1, time_limit, max_turns),
        )
        self._current = self._players[0]
        self._tick_interval_ms = tick_interval_ms

    @classmethod
    def from_settings(cls, settings: GameSettings) -> Engine:
        return cls(
            settings.time_limit_seconds,
            max_turns=settings.max_turns,
            tick_interval_ms=settings.tick_interval_ms,
        )

    # ── Setup ────────────────────────────────────────────────────────────

    def initialize_standard_positions(self) -> None:
        """Populate the board with the standard starting layout."""
        self._board.setup_standard()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    def piece_at(self, coord: Coord) -> Piece | None:
        return self._board[coord]

    @property
    def current_player(self) -> Player:
        return self._current

    @property
    def current_side(self) -> Side:
        return self._current.side

    def player(self, player_id: int) -> Player:
        if player_id not in (0, 1):
            raise ValueError(f"Player id must be 0 or 1, got {player_id}")
        return self._players[player_id]

    @property
    def players(self) -> tuple[Player, Player]:
        return self._players

    def captured_pieces(self) -> list[Piece]:
        """Every captured piece, player 0's first."""
        return [piece for p in self._players for piece in p.captured]

    def is_check(self) -> bool:
        """Whether any opposing piece's predicate reaches the side-to-move's king.

        Shallow by design of the rules: no checkmate, pins or self-check.
        """
        side = self.current_side
        king = self._board.find_king(side)
        if king is None:
            return False
        return any(
            piece.is_legal_move(coord, king)
            for coord, piece in self._board.pieces(side.opposite)
        )

    def is_king_alive(self) -> bool:
        return self._board.find_king(self.current_side) is not None

    def is_draw(self) -> bool:
        return all(p.out_of_turns for p in self._players)

    def is_time_finished(self) -> bool:
        return self._current.is_time_finished

    # ── Turn management ──────────────────────────────────────────────────

    def switch_side(self) -> None:
        self._current = self._players[1 - self._current.player_id]

    def set_current_player(self, player_id: int) -> None:
        self._current = self.player(player_id)

    def set_max_turns(self, n: int) -> None:
        for p in self._players:
            p.max_turns = n

    def set_turns(self, player_id: int, n: int) -> None:
        """Set *player_id*'s turn count to exactly *n*."""
        self.player(player_id).turns = n

    def add_turns(self, player_id: int, n: int = 1) -> None:
        p = self.player(player_id)
        p.turns = p.turns + n

    def start_clocks(self) -> None:
        """Start both clocks paused, then let the side to move run."""
        for p in self._players:
            p.start_timer(self._tick_interval_ms)
            p.pause_timer()
        self._current.resume_timer()

    def complete_turn(self) -> None:
        """Hand the move over after a successful :meth:`move`.

        Pauses the mover's clock, counts the turn, switches side and
        resumes the new side-to-move's clock.
        """
        mover = self._current
        mover.pause_timer()
        mover.turns = mover.turns + 1
        self.switch_side()
        self._current.resume_timer()

    def end(self) -> None:
        """Stop both clocks; no further ticks are issued."""
        for p in self._players:
            p.stop_timer()

    # ── Moves ────────────────────────────────────────────────────────────

    def move(self, src: Coord, dst: Coord) -> MoveStatus:
        """Try to move the piece on *src* to *dst*.

        The board is left untouched unless :attr:`MoveStatus.OK` is returned.
        """
        status = self._apply_move(src, dst)
        _LOGGER.debug("move %s -> %s by %s: %s", src, dst, self.current_side, status)
        return status

    def _apply_move(self, src: Coord, dst: Coord) -> MoveStatus:
        board = self._board
        piece = board[src]
        if piece is None:
            return MoveStatus.SOURCE_EMPTY
        if piece.side != self.current_side:
            return MoveStatus.WRONG_OWNER
        if not piece.is_legal_move(src, dst):
            return MoveStatus.ILLEGAL_FOR_PIECE

        target = board[dst]
        if target is not None and target.side == piece.side:
            return MoveStatus.OWN_PIECE_BLOCKING

        if piece.kind is PieceKind.KING and abs(dst.file - src.file) == 2:
            return self._castle(piece, src, dst)

        if not board.is_straight_path_clear(src, dst):
            return MoveStatus.PATH_BLOCKED

        if target is not None:
            target.mark_captured()
            board.remove(dst)
            self._current.capture(target)
            _LOGGER.debug("%r captured on %s", target, dst)

        board[dst] = piece
        board.remove(src)
        piece.mark_moved()
        return MoveStatus.OK

    def _castle(self, king: Piece, src: Coord, dst: Coord) -> MoveStatus:
        home = Coord(_KING_HOME_FILE, king.side.home_rank)
        if src != home or dst.rank != home.rank:
            return MoveStatus.ILLEGAL_CASTLE

        rook_from, rook_to = _KINGSIDE_ROOK if dst.file > src.file else _QUEENSIDE_ROOK
        rook_src = Coord(rook_from, src.rank)
        rook_dst = Coord(rook_to, src.rank)
        # King._reaches accepted the move, so an unmoved same-side rook is there.
        rook = self._board[rook_src]
        assert rook is not None

        self._board.remove(src)
        self._board[dst] = king
        king.mark_moved()
        self._board.remove(rook_src)
        self._board[rook_dst] = rook
        rook.mark_moved()
        return MoveStatus.OK

    # ── Persistence ──────────────────────────────────────────────────────

    def save(self) -> bytes:
        """Serialize the complete engine state into a checksum envelope."""
        data = encode_engine(
            self._board,
            [p.to_record() for p in self._players],
            self.current_side,
        )
        _LOGGER.info("Saved engine state (%d bytes)", len(data))
        return data

    def load(self, data: bytes) -> None:
        """Replace the engine state with a previously saved one.

        The input is fully decoded and validated before anything is
        swapped in; on failure the engine is left exactly as it was.

        Raises:
            LoadError: the input is truncated, corrupted or foreign.
        """
        try:
            loaded = decode_engine(data)
        except LoadError as exc:
            _LOGGER.warning("Rejected save data (%d bytes): %s", len(data), exc)
            raise

        self._board = loaded.board
        for p, record in zip(self._players, loaded.players):
            p.restore(record)
        self._current = self._players[int(loaded.side_to_move)]
        _LOGGER.info(
            "Loaded engine state: %d pieces, %s to move",
            loaded.board.piece_count(),
            loaded.side_to_move,
        )
