import asyncio

import pytest

from eduhub.services.session_manager import (
    DemoCountdown,
    SessionExpiredError,
    SessionManager,
    SessionNotFoundError,
)


def make_manager(clock, **overrides) -> SessionManager:
    options = dict(
        clock=clock,
        session_seconds=3600,
        demo_seconds=600,
        warning_seconds=60,
        tick_seconds=0.01,
    )
    options.update(overrides)
    return SessionManager(**options)


# ============================================================
# DemoCountdown
# ============================================================

def test_countdown_starts_at_full_duration(fake_clock):
    countdown = DemoCountdown(fake_clock() + 600, warning_seconds=60, clock=fake_clock)

    assert countdown.status() == {"time_left": 600, "is_expiring": False, "expired": False}


def test_countdown_rounds_partial_seconds_up(fake_clock):
    countdown = DemoCountdown(fake_clock() + 600, warning_seconds=60, clock=fake_clock)

    fake_clock.advance(0.4)
    countdown.tick()

    assert countdown.time_left == 600


def test_countdown_warns_inside_final_minute(fake_clock):
    countdown = DemoCountdown(fake_clock() + 600, warning_seconds=60, clock=fake_clock)

    fake_clock.advance(539)
    countdown.tick()
    assert countdown.time_left == 61
    assert countdown.is_expiring is False

    fake_clock.advance(1)
    countdown.tick()
    assert countdown.time_left == 60
    assert countdown.is_expiring is True


def test_countdown_latches_survive_clock_going_backwards(fake_clock):
    start = fake_clock()
    countdown = DemoCountdown(start + 600, warning_seconds=60, clock=fake_clock)

    countdown.tick(now=start + 570)
    assert countdown.is_expiring is True

    countdown.tick(now=start + 10)
    assert countdown.is_expiring is True
    assert countdown.expired is False


def test_countdown_fires_expiry_once(fake_clock):
    start = fake_clock()
    countdown = DemoCountdown(start + 600, warning_seconds=60, clock=fake_clock)
    fired = []
    countdown.on_expire(fired.append)

    assert countdown.tick(now=start + 600) is True
    assert countdown.tick(now=start + 700) is False
    assert countdown.tick(now=start + 5) is False

    assert fired == [countdown]
    assert countdown.status() == {"time_left": 0, "is_expiring": True, "expired": True}


def test_countdown_never_goes_negative(fake_clock):
    start = fake_clock()
    countdown = DemoCountdown(start + 600, warning_seconds=60, clock=fake_clock)

    countdown.tick(now=start + 10_000)

    assert countdown.time_left == 0
    assert countdown.expired is True


def test_failing_listener_does_not_block_others(fake_clock):
    start = fake_clock()
    countdown = DemoCountdown(start + 1, warning_seconds=0, clock=fake_clock)
    fired = []

    def broken(_):
        raise RuntimeError("boom")

    countdown.on_expire(broken)
    countdown.on_expire(fired.append)

    assert countdown.tick(now=start + 1) is True
    assert fired == [countdown]


def test_countdown_decrements_once_per_second(fake_clock):
    countdown = DemoCountdown(fake_clock() + 600, warning_seconds=60, clock=fake_clock)
    seen = []

    for _ in range(600):
        fake_clock.advance(1)
        countdown.tick()
        seen.append(countdown.time_left)

    assert seen == list(range(599, -1, -1))
    assert countdown.expired is True


# ============================================================
# Regular sessions
# ============================================================

def test_open_and_resolve_session(fake_clock):
    manager = make_manager(fake_clock)

    session = manager.open(user_id=7)

    assert session.is_demo is False
    assert session.countdown is None
    assert session.expires_at == fake_clock() + 3600
    assert manager.resolve(session.id) is session


def test_resolve_unknown_session_raises(fake_clock):
    manager = make_manager(fake_clock)

    with pytest.raises(SessionNotFoundError):
        manager.resolve("missing")


def test_closed_session_is_not_found(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open(user_id=1)

    assert manager.close(session.id) is True
    assert manager.close(session.id) is False

    with pytest.raises(SessionNotFoundError):
        manager.resolve(session.id)


def test_regular_session_expires_after_lifetime(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open(user_id=1)

    fake_clock.advance(3600)

    with pytest.raises(SessionExpiredError, match="^Session expired$"):
        manager.resolve(session.id)
    assert manager.get(session.id) is None


def test_tick_expires_abandoned_regular_sessions(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open(user_id=1)

    assert manager.tick(now=fake_clock() + 3599) == []
    assert manager.get(session.id) is session

    assert manager.tick(now=fake_clock() + 3600) == [session.id]
    assert manager.active_sessions() == []
    with pytest.raises(SessionExpiredError, match="^Session expired$"):
        manager.resolve(session.id)


def test_expiry_records_are_forgotten_after_one_lifetime(fake_clock):
    manager = make_manager(fake_clock)
    regular = manager.open(user_id=1)
    demo = manager.open_demo(user_id=2)
    start = fake_clock()

    manager.tick(now=start + 3600)
    assert set(manager._expired) == {regular.id, demo.id}

    # The demo deadline was 600s in, so its record goes first
    manager.tick(now=start + 600 + 3600)
    assert set(manager._expired) == {regular.id}
    with pytest.raises(SessionNotFoundError):
        manager.resolve(demo.id)

    manager.tick(now=start + 3600 + 3600)
    assert manager._expired == {}
    with pytest.raises(SessionNotFoundError):
        manager.resolve(regular.id)


def test_explicit_zero_settings_are_kept(fake_clock):
    manager = SessionManager(
        clock=fake_clock,
        session_seconds=0,
        demo_seconds=0,
        warning_seconds=0,
        tick_seconds=0,
    )

    assert manager.session_seconds == 0
    assert manager.demo_seconds == 0
    assert manager.warning_seconds == 0
    assert manager.tick_seconds == 0

    session = manager.open(user_id=1)
    with pytest.raises(SessionExpiredError):
        manager.resolve(session.id)


# ============================================================
# Demo sessions
# ============================================================

def test_demo_session_carries_countdown(fake_clock):
    manager = make_manager(fake_clock)

    session = manager.open_demo(user_id=3)

    assert session.is_demo is True
    assert session.expires_at == fake_clock() + 600
    assert session.countdown.time_left == 600


def test_demo_session_expires_lazily_on_resolve(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open_demo(user_id=3)

    fake_clock.advance(599)
    assert manager.resolve(session.id).countdown.time_left == 1

    fake_clock.advance(1)
    with pytest.raises(SessionExpiredError, match="Demo session expired"):
        manager.resolve(session.id)

    # Stays rejected on later lookups
    with pytest.raises(SessionExpiredError):
        manager.resolve(session.id)
    assert manager.active_sessions() == []


def test_tick_reports_each_expiry_once(fake_clock):
    manager = make_manager(fake_clock)
    first = manager.open_demo(user_id=1)
    fake_clock.advance(100)
    second = manager.open_demo(user_id=2)
    regular = manager.open(user_id=3)

    assert manager.tick(now=fake_clock() + 500) == [first.id]
    assert manager.tick(now=fake_clock() + 500) == []
    assert manager.tick(now=fake_clock() + 600) == [second.id]

    assert [s.id for s in manager.active_sessions()] == [regular.id]


def test_logout_before_expiry_means_not_found(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open_demo(user_id=1)

    manager.close(session.id)
    fake_clock.advance(600)

    assert manager.tick() == []
    with pytest.raises(SessionNotFoundError):
        manager.resolve(session.id)


async def test_background_ticker_expires_demo_sessions(fake_clock):
    manager = make_manager(fake_clock)
    session = manager.open_demo(user_id=1)

    manager.start()
    try:
        fake_clock.advance(600)
        for _ in range(100):
            if manager.get(session.id) is None:
                break
            await asyncio.sleep(0.01)
    finally:
        await manager.stop()

    assert manager.get(session.id) is None
    assert session.countdown.expired is True


async def test_start_is_idempotent_and_stop_is_safe(fake_clock):
    manager = make_manager(fake_clock)

    await manager.stop()
    manager.start()
    task = manager._ticker_task
    manager.start()

    assert manager._ticker_task is task

    await manager.stop()
    assert manager._ticker_task is None
