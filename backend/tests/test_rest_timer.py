import asyncio

import pytest

from workout_tracker.services.rest_timer import RestTimer


@pytest.mark.asyncio
async def test_counts_down_to_zero_and_stops(clock):
    timer = RestTimer(75, sleep=clock.sleep)
    timer.start()
    assert timer.is_running and timer.remaining == 75

    await clock.advance(76)
    assert timer.remaining == 0
    assert timer.is_running is False
    assert clock.sleepers == []


@pytest.mark.asyncio
async def test_remaining_never_goes_negative(clock):
    timer = RestTimer(3, sleep=clock.sleep)
    timer.start()
    seen = []
    for _ in range(6):
        await clock.advance(1)
        seen.append(timer.remaining)
    assert seen == [2, 1, 0, 0, 0, 0]


@pytest.mark.asyncio
async def test_restart_replaces_the_running_countdown(clock):
    timer = RestTimer(75, sleep=clock.sleep)
    timer.start()
    await clock.advance(3)
    assert timer.remaining == 72

    timer.start(30)
    await clock.advance(5)
    assert timer.remaining == 25
    assert timer.duration == 30
    assert len(clock.sleepers) == 1


@pytest.mark.asyncio
async def test_no_tick_lands_after_stop(clock):
    timer = RestTimer(10, sleep=clock.sleep)
    timer.start()
    await asyncio.sleep(0)  # countdown is now sleeping
    clock.release()         # its sleep is over but the tick has not run yet
    timer.stop()
    await clock.advance(3)

    assert timer.remaining == 10
    assert timer.is_running is False


@pytest.mark.asyncio
async def test_stop_is_idempotent(clock):
    timer = RestTimer(20, sleep=clock.sleep)
    timer.stop()
    timer.start()
    timer.stop()
    timer.stop()
    assert timer.is_running is False


@pytest.mark.asyncio
async def test_wait_returns_when_countdown_ends():
    timer = RestTimer(3, interval=0.001)
    timer.start()
    await timer.wait()
    assert timer.remaining == 0 and not timer.is_running


def test_start_needs_a_running_loop():
    timer = RestTimer(5)
    with pytest.raises(RuntimeError):
        timer.start()
    assert timer.is_running is False


def test_rejects_non_positive_durations():
    with pytest.raises(ValueError):
        RestTimer(0)
