"""Tests for Engine — move execution, queries and turn hand-off."""

import pytest

from rookery.core.board import Board
from rookery.core.enums import MoveStatus, PieceKind, Side
from rookery.core.piece import PieceState
from rookery.core.types import (
    A1, A8, C1, D1, D5, D7, E1, E2, E4, E5, E7, E8, F1, F3, F8, G1, G8, H1, H8,
    Coord,
)
from rookery.game.engine import Engine
from rookery.game.settings import GameSettings


def _started() -> Engine:
    engine = Engine()
    engine.initialize_standard_positions()
    return engine


def _engine_with(*placements: tuple[Coord, PieceKind, Side]) -> Engine:
    engine = Engine()
    for coord, kind, side in placements:
        engine.board.place(coord, kind, side)
    return engine


def _snapshot(board: Board) -> list[PieceState | None]:
    return [None if p is None else p.state for _, p in board.cells()]


class TestNewEngine:
    def test_empty_board(self) -> None:
        engine = Engine(600)
        assert engine.board.piece_count() == 0

    def test_side_zero_to_move(self) -> None:
        engine = Engine()
        assert engine.current_side is Side.WHITE
        assert engine.current_player is engine.player(0)

    def test_time_limit_applied_to_both(self) -> None:
        engine = Engine(600)
        assert engine.player(0).time_limit == 600
        assert engine.player(1).time_limit == 600

    def test_from_settings(self) -> None:
        engine = Engine.from_settings(GameSettings(time_limit_seconds=120, max_turns=7))
        assert engine.player(1).time_limit == 120
        assert engine.player(1).max_turns == 7

    def test_invalid_player_id(self) -> None:
        with pytest.raises(ValueError):
            Engine().player(2)

    def test_standard_positions(self) -> None:
        engine = _started()
        assert engine.board.piece_count(Side.WHITE) == 16
        assert engine.board.piece_count(Side.BLACK) == 16
        for rank in range(2, 6):
            for file in range(8):
                assert engine.piece_at(Coord(file, rank)) is None


class TestMoveScenarios:
    def test_pawn_double_step(self) -> None:
        engine = _started()
        assert engine.move(E2, E4) is MoveStatus.OK
        assert engine.piece_at(E2) is None
        pawn = engine.piece_at(E4)
        assert pawn is not None
        assert (pawn.kind, pawn.side) == (PieceKind.PAWN, Side.WHITE)
        assert pawn.moved

    def test_pawn_capture(self) -> None:
        engine = _started()
        assert engine.move(E2, E4) is MoveStatus.OK
        engine.switch_side()
        assert engine.move(D7, D5) is MoveStatus.OK
        engine.switch_side()
        assert engine.move(E4, D5) is MoveStatus.OK

        piece = engine.piece_at(D5)
        assert (piece.kind, piece.side) == (PieceKind.PAWN, Side.WHITE)
        captured = engine.captured_pieces()
        assert len(captured) == 1
        assert captured[0].captured
        assert captured[0].side is Side.BLACK
        assert engine.player(0).captured == (captured[0],)

    def test_kingside_castle(self) -> None:
        engine = _started()
        engine.board.remove(F1)
        engine.board.remove(G1)
        assert engine.move(E1, G1) is MoveStatus.OK
        assert engine.piece_at(G1).kind is PieceKind.KING
        assert engine.piece_at(F1).kind is PieceKind.ROOK
        assert engine.piece_at(E1) is None
        assert engine.piece_at(H1) is None
        assert engine.piece_at(G1).moved and engine.piece_at(F1).moved

    def test_queenside_castle(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE), (A1, PieceKind.ROOK, Side.WHITE)
        )
        assert engine.move(E1, C1) is MoveStatus.OK
        assert engine.piece_at(C1).kind is PieceKind.KING
        assert engine.piece_at(D1).kind is PieceKind.ROOK
        assert engine.piece_at(A1) is None

    def test_black_kingside_castle(self) -> None:
        engine = _engine_with(
            (E8, PieceKind.KING, Side.BLACK), (H8, PieceKind.ROOK, Side.BLACK)
        )
        engine.switch_side()
        assert engine.move(E8, G8) is MoveStatus.OK
        assert engine.piece_at(G8).kind is PieceKind.KING
        assert engine.piece_at(F8).kind is PieceKind.ROOK

    def test_own_piece_blocking_leaves_board(self) -> None:
        engine = _started()
        before = _snapshot(engine.board)
        assert engine.move(A1, Coord(0, 1)) is MoveStatus.OWN_PIECE_BLOCKING
        assert _snapshot(engine.board) == before


class TestMoveRejections:
    def test_source_empty(self) -> None:
        assert _started().move(E4, E5) is MoveStatus.SOURCE_EMPTY

    def test_wrong_owner(self) -> None:
        engine = _started()
        assert engine.move(E7, E5) is MoveStatus.WRONG_OWNER

    def test_illegal_for_piece(self) -> None:
        engine = _started()
        assert engine.move(E2, E5) is MoveStatus.ILLEGAL_FOR_PIECE

    def test_illegal_castle_off_home_square(self) -> None:
        c3, e3, h3 = Coord(2, 2), Coord(4, 2), Coord(7, 2)
        engine = _engine_with(
            (c3, PieceKind.KING, Side.WHITE), (h3, PieceKind.ROOK, Side.WHITE)
        )
        before = _snapshot(engine.board)
        assert engine.move(c3, e3) is MoveStatus.ILLEGAL_CASTLE
        assert _snapshot(engine.board) == before

    @pytest.mark.parametrize(
        "rook_square, rook_side",
        [(None, Side.WHITE), (H1, Side.BLACK)],
        ids=["no-rook", "opposing-rook"],
    )
    def test_castle_without_own_rook_is_illegal_for_king(
        self, rook_square: Coord | None, rook_side: Side
    ) -> None:
        engine = _engine_with((E1, PieceKind.KING, Side.WHITE))
        if rook_square is not None:
            engine.board.place(rook_square, PieceKind.ROOK, rook_side)
        before = _snapshot(engine.board)
        assert engine.move(E1, G1) is MoveStatus.ILLEGAL_FOR_PIECE
        assert _snapshot(engine.board) == before

    def test_castle_with_moved_rook_is_illegal_for_king(self) -> None:
        engine = _engine_with((E1, PieceKind.KING, Side.WHITE))
        engine.board.place(A1, PieceKind.ROOK, Side.WHITE).mark_moved()
        assert engine.move(E1, C1) is MoveStatus.ILLEGAL_FOR_PIECE
        assert engine.piece_at(E1).kind is PieceKind.KING

    def test_rejections_leave_board_unchanged(self) -> None:
        engine = _started()
        before = _snapshot(engine.board)
        for src, dst in [(E4, E5), (E7, E5), (E2, E5), (C1, Coord(4, 2)), (G1, E2)]:
            assert engine.move(src, dst) is not MoveStatus.OK
        assert _snapshot(engine.board) == before
        assert engine.captured_pieces() == []

    def test_knight_jumps(self) -> None:
        engine = _started()
        assert engine.move(G1, F3) is MoveStatus.OK

    def test_status_description(self) -> None:
        assert MoveStatus.WRONG_OWNER.description == "Not your piece"
        assert MoveStatus.OK.ok and not MoveStatus.PATH_BLOCKED.ok


class TestCheck:
    def test_start_not_in_check(self) -> None:
        assert not _started().is_check()

    def test_rook_gives_check(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (E8, PieceKind.ROOK, Side.BLACK),
            (A8, PieceKind.KING, Side.BLACK),
        )
        assert engine.is_check()

    def test_blocked_line_is_not_check(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (E2, PieceKind.PAWN, Side.WHITE),
            (E8, PieceKind.ROOK, Side.BLACK),
        )
        assert not engine.is_check()

    def test_knight_gives_check(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (F3, PieceKind.KNIGHT, Side.BLACK),
        )
        assert engine.is_check()

    def test_check_is_for_side_to_move_only(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (E8, PieceKind.KING, Side.BLACK),
            (E4, PieceKind.ROOK, Side.WHITE),
        )
        assert not engine.is_check()
        engine.switch_side()
        assert engine.is_check()

    def test_no_king_no_check(self) -> None:
        engine = _engine_with((E8, PieceKind.QUEEN, Side.BLACK))
        assert not engine.is_check()

    def test_move_into_check_is_allowed(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (Coord(3, 7), PieceKind.ROOK, Side.BLACK),
        )
        assert engine.move(E1, D1) is MoveStatus.OK
        assert engine.is_check()


class TestTerminalQueries:
    def test_king_alive(self) -> None:
        assert _started().is_king_alive()
        assert not Engine().is_king_alive()

    def test_king_captured(self) -> None:
        engine = _engine_with(
            (E1, PieceKind.KING, Side.WHITE),
            (E2, PieceKind.KING, Side.BLACK),
        )
        assert engine.move(E1, E2) is MoveStatus.OK
        engine.switch_side()
        assert not engine.is_king_alive()

    def test_draw_needs_both_players(self) -> None:
        engine = _started()
        engine.set_max_turns(2)
        engine.set_turns(0, 2)
        engine.set_turns(1, 1)
        assert not engine.is_draw()
        engine.set_turns(1, 2)
        assert engine.is_draw()

    def test_set_turns_is_absolute(self) -> None:
        engine = Engine()
        engine.set_turns(0, 5)
        engine.set_turns(0, 3)
        assert engine.player(0).turns == 3

    def test_add_turns(self) -> None:
        engine = Engine()
        engine.add_turns(1)
        engine.add_turns(1, 2)
        assert engine.player(1).turns == 3

    def test_time_finished_follows_side_to_move(self) -> None:
        engine = Engine(2)
        engine.player(0).tick(2)
        assert engine.is_time_finished()
        engine.switch_side()
        assert not engine.is_time_finished()


class TestTurnHandOff:
    def test_switch_side_alternates(self) -> None:
        engine = Engine()
        engine.switch_side()
        assert engine.current_side is Side.BLACK
        engine.switch_side()
        assert engine.current_side is Side.WHITE

    def test_set_current_player(self) -> None:
        engine = Engine()
        engine.set_current_player(1)
        assert engine.current_player is engine.player(1)

    def test_complete_turn(self) -> None:
        engine = _started()
        assert engine.move(E2, E4).ok
        engine.complete_turn()
        assert engine.player(0).turns == 1
        assert engine.player(0).is_paused
        assert engine.current_side is Side.BLACK
        assert not engine.player(1).is_paused

    def test_start_clocks_and_end(self, qapp: object) -> None:
        engine = Engine(300, tick_interval_ms=50)
        engine.start_clocks()
        try:
            assert engine.player(0).is_timer_running
            assert engine.player(1).is_timer_running
            assert not engine.player(0).is_paused
            assert engine.player(1).is_paused
        finally:
            engine.end()
        assert not engine.player(0).is_timer_running
        assert not engine.player(1).is_timer_running

    def test_end_without_clocks(self) -> None:
        Engine().end()
