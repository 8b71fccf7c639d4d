"""Player bookkeeping: turns, captured pieces and clock state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rookery.core.enums import Side
from rookery.game.clock import PlayerClock
from rookery.game.settings import DEFAULT_MAX_TURNS, DEFAULT_TICK_INTERVAL_MS
from rookery.state.codec import PlayerRecord

if TYPE_CHECKING:
    from rookery.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


class Player:
    """One of the two participants.

    The clock only ever advances ``elapsed`` on its own player; nothing here
    touches the board or the other player.
    """

    __slots__ = (
        "_player_id",
        "_turns",
        "_max_turns",
        "_captured",
        "_elapsed",
        "_time_limit",
        "_paused",
        "_clock",
    )

    def __init__(
        self,
        player_id: int,
        time_limit: int | None = None,
        max_turns: int = DEFAULT_MAX_TURNS,
    ) -> None:
        if player_id not in (0, 1):
            raise ValueError(f"Player id must be 0 or 1, got {player_id}")
        self._player_id = player_id
        self._turns = 0
        self._max_turns = _non_negative("Max turns", max_turns)
        self._captured: list[Piece] = []
        self._elapsed = 0
        self._time_limit = (
            None if time_limit is None else _non_negative("Time limit", time_limit)
        )
        self._paused = False
        self._clock: PlayerClock | None = None

    # ── Identity ─────────────────────────────────────────────────────────

    @property
    def player_id(self) -> int:
        return self._player_id

    @property
    def side(self) -> Side:
        return Side(self._player_id)

    # ── Turns ────────────────────────────────────────────────────────────

    @property
    def turns(self) -> int:
        return self._turns

    @turns.setter
    def turns(self, value: int) -> None:
        self._turns = _non_negative("Turns", value)

    @property
    def max_turns(self) -> int:
        return self._max_turns

    @max_turns.setter
    def max_turns(self, value: int) -> None:
        self._max_turns = _non_negative("Max turns", value)

    @property
    def out_of_turns(self) -> bool:
        return self._turns >= self._max_turns

    # ── Captures ─────────────────────────────────────────────────────────

    @property
    def captured(self) -> tuple[Piece, ...]:
        """Pieces taken by this player, in capture order."""
        return tuple(self._captured)

    def capture(self, piece: Piece) -> None:
        self._captured.append(piece)

    # ── Time ─────────────────────────────────────────────────────────────

    @property
    def elapsed(self) -> int:
        """Seconds consumed so far."""
        return self._elapsed

    @property
    def elapsed_minutes(self) -> int:
        return self._elapsed // 60

    @property
    def time_limit(self) -> int | None:
        return self._time_limit

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_time_finished(self) -> bool:
        """Whether elapsed time has reached the limit; never true without one."""
        return self._time_limit is not None and self._elapsed >= self._time_limit

    @property
    def is_timer_running(self) -> bool:
        return self._clock is not None and self._clock.is_active

    def tick(self, seconds: int = 1) -> None:
        """Advance elapsed time unless paused; warn once the limit is crossed."""
        if self._paused:
            return
        was_finished = self.is_time_finished
        self._elapsed += seconds
        if self.is_time_finished and not was_finished:
            _LOGGER.warning(
                "Player %d ran out of time after %d s", self._player_id, self._elapsed
            )

    def start_timer(self, interval_ms: int = DEFAULT_TICK_INTERVAL_MS) -> PlayerClock:
        """Begin ticking once per *interval_ms*; replaces any previous clock."""
        self.stop_timer()
        self._clock = PlayerClock(self.tick, interval_ms)
        self._clock.start()
        _LOGGER.info("Clock started for player %d", self._player_id)
        return self._clock

    def pause_timer(self) -> None:
        self._paused = True

    def resume_timer(self) -> None:
        self._paused = False

    def stop_timer(self) -> None:
        if self._clock is None:
            return
        self._clock.stop()
        self._clock = None
        _LOGGER.info("Clock stopped for player %d", self._player_id)

    # ── Persistence ──────────────────────────────────────────────────────

    def to_record(self) -> PlayerRecord:
        return PlayerRecord(
            player_id=self._player_id,
            turns=self._turns,
            max_turns=self._max_turns,
            elapsed=self._elapsed,
            time_limit=self._time_limit,
            captured=list(self._captured),
        )

    def restore(self, record: PlayerRecord) -> None:
        """Adopt a decoded record. The clock is left stopped."""
        self.stop_timer()
        self._player_id = record.player_id
        self._turns = record.turns
        self._max_turns = record.max_turns
        self._captured = list(record.captured)
        self._elapsed = record.elapsed
        self._time_limit = record.time_limit
        self._paused = False

    def __repr__(self) -> str:
        return (
            f"Player({self._player_id}, turns={self._turns}/{self._max_turns}, "
            f"elapsed={self._elapsed}s, captured={len(self._captured)})"
        )


def _non_negative(label: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{label} must be >= 0, got {value}")
    return value
