"""Unit tests for /src/tenchess/chess/clock.py"""

from datetime import timedelta

import pytest

from conftest import FakeTime
from tenchess.chess.clock import DEFAULT_CLOCK_MINUTES, ChessClock
from tenchess.core.shared_types import Color


@pytest.fixture
def clock(fake_time: FakeTime) -> ChessClock:
    return ChessClock(timedelta(minutes=5), time_source=fake_time)


def test_default_time_per_player() -> None:
    clock = ChessClock()
    assert clock.time_per_player == timedelta(minutes=DEFAULT_CLOCK_MINUTES)
    assert clock.remaining(Color.WHITE) == timedelta(minutes=DEFAULT_CLOCK_MINUTES)


def test_clock_does_not_run_before_start(clock: ChessClock, fake_time: FakeTime) -> None:
    fake_time.advance(60)
    assert clock.paused
    assert clock.running_color is None
    assert clock.remaining(Color.WHITE) == timedelta(minutes=5)
    assert clock.remaining(Color.BLACK) == timedelta(minutes=5)


def test_only_running_color_loses_time(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.WHITE)
    fake_time.advance(30)
    assert clock.remaining(Color.WHITE) == timedelta(minutes=4, seconds=30)
    assert clock.remaining(Color.BLACK) == timedelta(minutes=5)


def test_switch_turn(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.WHITE)
    fake_time.advance(10)
    clock.switch_turn()
    assert clock.running_color == Color.BLACK
    fake_time.advance(20)
    assert clock.remaining(Color.WHITE) == timedelta(minutes=4, seconds=50)
    assert clock.remaining(Color.BLACK) == timedelta(minutes=4, seconds=40)


def test_switch_turn_before_start_is_ignored(clock: ChessClock) -> None:
    clock.switch_turn()
    assert clock.running_color is None


def test_pause_and_resume(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.WHITE)
    fake_time.advance(10)
    clock.pause()
    fake_time.advance(100)
    assert clock.remaining(Color.WHITE) == timedelta(minutes=4, seconds=50)

    clock.resume()
    fake_time.advance(5)
    assert not clock.paused
    assert clock.remaining(Color.WHITE) == timedelta(minutes=4, seconds=45)


def test_resume_while_running_does_not_lose_time(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.BLACK)
    fake_time.advance(10)
    clock.resume()
    assert clock.remaining(Color.BLACK) == timedelta(minutes=4, seconds=50)


def test_expired_and_never_below_zero(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.WHITE)
    fake_time.advance(299)
    assert not clock.is_expired(Color.WHITE)
    fake_time.advance(10)
    assert clock.is_expired(Color.WHITE)
    assert clock.remaining(Color.WHITE) == timedelta(0)
    assert not clock.is_expired(Color.BLACK)


def test_format_time(clock: ChessClock, fake_time: FakeTime) -> None:
    clock.start(Color.WHITE)
    fake_time.advance(65.5)
    assert clock.format_time(Color.WHITE) == "03:54"
    assert clock.format_time(Color.BLACK) == "05:00"


def test_clock_display(clock: ChessClock, fake_time: FakeTime) -> None:
    assert str(clock) == "White: 05:00 | Black: 05:00 (PAUSED)"
    clock.start(Color.BLACK)
    fake_time.advance(1)
    assert str(clock) == "White: 05:00 | Black: 04:59 <- black"
