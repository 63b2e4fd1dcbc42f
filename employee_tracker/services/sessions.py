"""Clock-in / clock-out state machine.

An employee is clocked in exactly when a row exists for them in
``active_sessions``. The pre-checks below only exist to give a readable
error; the unique constraint on ``active_sessions.user_id`` and the
conditional delete at clock-out are what keep concurrent requests honest.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_tracker.core.exceptions import AlreadyClockedIn, NotClockedIn, StoreError
from employee_tracker.models.clock import ActiveSession, ClockLog, CLOCK_IN, CLOCK_OUT

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we write is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, floored. Negative if end precedes start."""
    delta = _as_utc(end) - _as_utc(start)
    return int(delta.total_seconds() // 60)


def format_duration(minutes: int) -> str:
    """Render minutes as "{h}h {m}m". The minute part is always 0..59."""
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


async def get_active_session(db: AsyncSession, user_id: int) -> Optional[ActiveSession]:
    result = await db.execute(select(ActiveSession).where(ActiveSession.user_id == user_id))
    return result.scalar_one_or_none()


async def clock_in(
    db: AsyncSession,
    user_id: int,
    user_name: Optional[str] = None,
    work_type: Optional[str] = None,
    ip: Optional[str] = None,
    location: Optional[str] = None,
    geolocation: Any = None,
) -> datetime:
    if await get_active_session(db, user_id) is not None:
        raise AlreadyClockedIn()

    now = datetime.now(timezone.utc)

    # Log entry and session row are committed together or not at all
    db.add(ClockLog(
        user_id=user_id,
        user_name=user_name,
        action=CLOCK_IN,
        time=now,
        work_type=work_type,
        ip_address=ip,
        location=location,
        geolocation=geolocation,
    ))
    db.add(ActiveSession(user_id=user_id, clock_in_time=now))
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        # Lost a race against another clock-in for the same employee
        if await get_active_session(db, user_id) is not None:
            raise AlreadyClockedIn()
        logger.error("Clock in failed for user %s: %s", user_id, e)
        raise StoreError(str(getattr(e, "orig", e)))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Clock in failed for user %s: %s", user_id, e)
        raise StoreError(str(e))

    logger.info("User %s (%s) clocked in at %s", user_id, user_name, now.isoformat())
    return now


async def clock_out(
    db: AsyncSession,
    user_id: int,
    user_name: Optional[str] = None,
    work_type: Optional[str] = None,
    ip: Optional[str] = None,
    location: Optional[str] = None,
    geolocation: Any = None,
) -> Tuple[str, datetime]:
    session = await get_active_session(db, user_id)
    if session is None:
        raise NotClockedIn()

    now = datetime.now(timezone.utc)
    minutes = elapsed_minutes(session.clock_in_time, now)
    if minutes < 0:
        # Clock skew between app servers; the negative value is kept as is.
        logger.warning(
            "Clock out for user %s precedes clock in (%s > %s)",
            user_id, session.clock_in_time, now,
        )
    duration = format_duration(minutes)

    try:
        db.add(ClockLog(
            user_id=user_id,
            user_name=user_name,
            action=CLOCK_OUT,
            time=now,
            work_type=work_type,
            ip_address=ip,
            location=location,
            geolocation=geolocation,
            duration=duration,
        ))
        result = await db.execute(delete(ActiveSession).where(ActiveSession.user_id == user_id))
        if result.rowcount == 0:
            # Another request closed the session between our read and delete
            await db.rollback()
            raise NotClockedIn()
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Clock out failed for user %s: %s", user_id, e)
        raise StoreError(str(e))

    logger.info("User %s (%s) clocked out at %s after %s", user_id, user_name, now.isoformat(), duration)
    return duration, now
