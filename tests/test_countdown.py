import pytest

from quiztaker.core.errors import InvalidDurationError
from quiztaker.core.services.countdown import Countdown


def test_tick_counts_down_to_zero_and_expires_once():
    countdown = Countdown(3)
    seen = []
    expiries = []
    countdown.add_tick_listener(seen.append)
    countdown.add_expiry_listener(lambda: expiries.append(countdown.remaining_seconds))

    for _ in range(5):
        countdown.tick()

    assert seen == [2, 1, 0]
    assert expiries == [0]
    assert countdown.is_expired
    assert not countdown.is_running
    assert countdown.elapsed_seconds == 3


def test_remaining_is_non_increasing():
    countdown = Countdown(10)
    previous = countdown.remaining_seconds
    for _ in range(15):
        current = countdown.tick()
        assert current <= previous
        assert current >= 0
        previous = current


def test_cancel_stops_further_ticks():
    countdown = Countdown(5)
    cancelled = []
    expiries = []
    countdown.add_cancel_listener(lambda: cancelled.append(True))
    countdown.add_expiry_listener(lambda: expiries.append(True))

    countdown.tick()
    countdown.cancel()
    countdown.cancel()
    countdown.advance(10)

    assert countdown.remaining_seconds == 4
    assert cancelled == [True]
    assert expiries == []
    assert countdown.is_cancelled


def test_cancel_after_expiry_is_a_no_op():
    countdown = Countdown(1)
    cancelled = []
    countdown.add_cancel_listener(lambda: cancelled.append(True))
    countdown.tick()
    countdown.cancel()
    assert cancelled == []
    assert not countdown.is_cancelled


@pytest.mark.parametrize("duration", [0, -5, 1.5, True, "60"])
def test_invalid_duration_is_rejected(duration):
    with pytest.raises(InvalidDurationError):
        Countdown(duration)
