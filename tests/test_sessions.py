from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from employee_tracker.core.exceptions import AlreadyClockedIn, NotClockedIn
from employee_tracker.models.clock import ActiveSession, ClockLog, CLOCK_IN, CLOCK_OUT
from employee_tracker.services import sessions
from employee_tracker.services.sessions import elapsed_minutes, format_duration


async def _open_session_started(db, user_id, minutes_ago):
    db.add(ActiveSession(
        user_id=user_id,
        clock_in_time=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago, seconds=5),
    ))
    await db.commit()


async def _count(db, model):
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0h 0m"), (45, "0h 45m"), (59, "0h 59m"), (60, "1h 0m"), (90, "1h 30m"), (605, "10h 5m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_elapsed_minutes_floors_partial_minutes():
    start = datetime(2026, 3, 2, 8, 0, 0, tzinfo=timezone.utc)
    assert elapsed_minutes(start, start + timedelta(minutes=89, seconds=59)) == 89
    assert elapsed_minutes(start, start + timedelta(minutes=90)) == 90


def test_elapsed_minutes_treats_naive_values_as_utc():
    start = datetime(2026, 3, 2, 8, 0, 0)
    end = datetime(2026, 3, 2, 9, 30, 0, tzinfo=timezone.utc)
    assert elapsed_minutes(start, end) == 90


def test_clock_skew_gives_negative_hours_and_valid_minutes():
    start = datetime(2026, 3, 2, 8, 0, 0, tzinfo=timezone.utc)
    minutes = elapsed_minutes(start, start - timedelta(seconds=30))
    assert minutes == -1
    assert format_duration(minutes) == "-1h 59m"


async def test_clock_in_opens_session_and_logs(db, employee):
    now = await sessions.clock_in(
        db, employee.id, user_name=employee.name, work_type="Office",
        ip="10.0.0.5", location="HQ", geolocation={"lat": 51.5, "lng": -0.12},
    )

    active = await sessions.get_active_session(db, employee.id)
    assert active is not None
    assert elapsed_minutes(active.clock_in_time, now) == 0

    logs = (await db.execute(select(ClockLog))).scalars().all()
    assert len(logs) == 1
    assert logs[0].action == CLOCK_IN
    assert logs[0].duration is None
    assert logs[0].ip_address == "10.0.0.5"
    assert logs[0].geolocation == {"lat": 51.5, "lng": -0.12}


async def test_double_clock_in_is_rejected(db, employee):
    await sessions.clock_in(db, employee.id, user_name=employee.name)

    with pytest.raises(AlreadyClockedIn):
        await sessions.clock_in(db, employee.id, user_name=employee.name)

    assert await sessions.get_active_session(db, employee.id) is not None
    assert await _count(db, ClockLog) == 1


async def test_clock_out_without_clock_in_is_rejected(db, employee):
    with pytest.raises(NotClockedIn):
        await sessions.clock_out(db, employee.id, user_name=employee.name)

    assert await _count(db, ClockLog) == 0


@pytest.mark.parametrize("minutes, expected", [(90, "1h 30m"), (45, "0h 45m")])
async def test_clock_out_records_duration(db, employee, minutes, expected):
    await _open_session_started(db, employee.id, minutes)

    duration, _ = await sessions.clock_out(db, employee.id, user_name=employee.name, location="HQ")

    assert duration == expected
    assert await sessions.get_active_session(db, employee.id) is None
    log = (await db.execute(select(ClockLog))).scalar_one()
    assert log.action == CLOCK_OUT
    assert log.duration == expected


async def test_clock_in_out_cycle_can_repeat(db, employee):
    await sessions.clock_in(db, employee.id)
    duration, _ = await sessions.clock_out(db, employee.id)
    assert re.fullmatch(r"\d+h ([0-9]|[1-5][0-9])m", duration)

    await sessions.clock_in(db, employee.id)
    assert await sessions.get_active_session(db, employee.id) is not None
    assert await _count(db, ClockLog) == 3


async def test_racing_clock_in_loses_on_unique_constraint(db, employee, monkeypatch):
    await sessions.clock_in(db, employee.id)

    # Second request read "no session" before the first one committed
    real_lookup = sessions.get_active_session
    calls = []

    async def stale_then_real(session, user_id):
        calls.append(user_id)
        if len(calls) == 1:
            return None
        return await real_lookup(session, user_id)

    monkeypatch.setattr(sessions, "get_active_session", stale_then_real)

    with pytest.raises(AlreadyClockedIn):
        await sessions.clock_in(db, employee.id)

    monkeypatch.undo()
    assert await _count(db, ActiveSession) == 1
    # The losing request's log entry was rolled back with its session row
    assert await _count(db, ClockLog) == 1


async def test_racing_clock_out_only_one_closes(db, employee, monkeypatch):
    await _open_session_started(db, employee.id, 30)
    stale = await sessions.get_active_session(db, employee.id)
    await sessions.clock_out(db, employee.id)

    async def stale_lookup(session, user_id):
        return stale

    monkeypatch.setattr(sessions, "get_active_session", stale_lookup)

    with pytest.raises(NotClockedIn):
        await sessions.clock_out(db, employee.id)

    monkeypatch.undo()
    logs = (await db.execute(select(ClockLog))).scalars().all()
    assert [log.action for log in logs] == [CLOCK_OUT]
