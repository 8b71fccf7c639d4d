"""Per-player repeating clock tick driven by a Qt timer."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from rookery.game.settings import DEFAULT_TICK_INTERVAL_MS

_LOGGER = logging.getLogger(__name__)


class PlayerClock(QObject):
    """Invokes *on_tick* once per interval until stopped.

    Ticks are delivered on the event loop of the thread that owns the
    clock, so a tick never runs concurrently with engine calls made from
    that same thread.  Once stopped the clock is spent: it issues no
    further ticks and cannot be restarted.
    """

    ticked = pyqtSignal()
    cancelled = pyqtSignal()

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError("Tick interval must be > 0")
        self._on_tick = on_tick
        self._cancelled = False
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.fire)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if self._cancelled:
            _LOGGER.debug("Ignoring start of a cancelled clock")
            return
        self._timer.start()

    def stop(self) -> None:
        """Cancel the clock for good."""
        if self._cancelled:
            return
        self._timer.stop()
        self._cancelled = True
        self.cancelled.emit()

    def fire(self) -> None:
        """Deliver one tick now. No-op once cancelled."""
        if self._cancelled:
            return
        self._on_tick()
        self.ticked.emit()
