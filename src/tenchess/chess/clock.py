"""
Chess clock tracking the remaining time of both players.

The Game only talks to the `Clock` protocol: it starts/pauses/resumes/switches the clock and asks whether a flag fell.
All wall-clock bookkeeping lives in `ChessClock`.
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable, Optional, Protocol

from tenchess.core.shared_types import Color

DEFAULT_CLOCK_MINUTES = 10

TimeSource = Callable[[], float]


class Clock(Protocol):
    """What the Game needs from a clock"""

    def start(self, color: Color) -> None: ...
    def pause(self) -> None: ...
    def resume(self) -> None: ...
    def switch_turn(self) -> None: ...
    def is_expired(self, color: Color) -> bool: ...
    def remaining(self, color: Color) -> timedelta: ...


class ChessClock:
    """Counts down the running player's time, only while not paused.

    Uses monotonic time by default. Pass another `time_source` (seconds as float) to drive it by hand.
    """

    def __init__(
        self,
        time_per_player: timedelta = timedelta(minutes=DEFAULT_CLOCK_MINUTES),
        time_source: TimeSource = time.monotonic,
    ) -> None:
        self.time_per_player = time_per_player
        self._time_source = time_source
        seconds = time_per_player.total_seconds()
        self._remaining: dict[Color, float] = {Color.WHITE: seconds, Color.BLACK: seconds}
        self.running_color: Optional[Color] = None
        self.paused = True
        self._last_tick = 0.0

    def start(self, color: Color) -> None:
        self._consume_elapsed()
        self.running_color = color
        self.paused = False
        self._last_tick = self._time_source()

    def pause(self) -> None:
        """e.g. while a draw offer is pending"""
        self._consume_elapsed()
        self.paused = True

    def resume(self) -> None:
        if self.paused:
            self._last_tick = self._time_source()
            self.paused = False

    def switch_turn(self) -> None:
        """Stop the current player's clock, start the other player's."""
        if self.running_color is None:
            return
        self._consume_elapsed()
        self.running_color = self.running_color.opposite()
        self._last_tick = self._time_source()

    def remaining(self, color: Color) -> timedelta:
        self._consume_elapsed()
        return timedelta(seconds=self._remaining[color])

    def is_expired(self, color: Color) -> bool:
        return self.remaining(color) <= timedelta(0)

    def format_time(self, color: Color) -> str:
        """MM:SS"""
        total_seconds = int(self.remaining(color).total_seconds())
        minutes, seconds = divmod(total_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def __str__(self) -> str:
        state = " (PAUSED)" if self.paused else f" <- {self.running_color}"
        return f"White: {self.format_time(Color.WHITE)} | Black: {self.format_time(Color.BLACK)}{state}"

    def _consume_elapsed(self) -> None:
        if self.paused or self.running_color is None:
            return
        now = self._time_source()
        elapsed = now - self._last_tick
        self._remaining[self.running_color] = max(
            0.0, self._remaining[self.running_color] - elapsed
        )
        self._last_tick = now
