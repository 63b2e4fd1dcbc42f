from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from employee_tracker.database import get_db
from employee_tracker.schemas.clock import (
    ActiveSessionResponse,
    ClockInResponse,
    ClockLogResponse,
    ClockOutResponse,
    ClockRequest,
)
from employee_tracker.services import sessions
from employee_tracker.services.employees import list_logs


router = APIRouter(prefix="/api", tags=["clock"])


@router.post("/clock-in", response_model=ClockInResponse)
async def clock_in(clock_req: ClockRequest, db: AsyncSession = Depends(get_db)):
    now = await sessions.clock_in(
        db,
        clock_req.user_id,
        user_name=clock_req.user_name,
        work_type=clock_req.work_type,
        ip=clock_req.ip,
        location=clock_req.location,
        geolocation=clock_req.geolocation,
    )
    return ClockInResponse(success=True, time=now)


@router.post("/clock-out", response_model=ClockOutResponse)
async def clock_out(clock_req: ClockRequest, db: AsyncSession = Depends(get_db)):
    duration, now = await sessions.clock_out(
        db,
        clock_req.user_id,
        user_name=clock_req.user_name,
        work_type=clock_req.work_type,
        ip=clock_req.ip,
        location=clock_req.location,
        geolocation=clock_req.geolocation,
    )
    return ClockOutResponse(success=True, duration=duration, time=now)


@router.get("/active-session/{user_id}", response_model=Optional[ActiveSessionResponse])
async def get_active_session(user_id: int, db: AsyncSession = Depends(get_db)):
    # null when the employee is clocked out
    return await sessions.get_active_session(db, user_id)


@router.get("/logs", response_model=List[ClockLogResponse])
async def get_all_logs(db: AsyncSession = Depends(get_db)):
    return await list_logs(db)


@router.get("/logs/{user_id}", response_model=List[ClockLogResponse])
async def get_user_logs(user_id: int, db: AsyncSession = Depends(get_db)):
    return await list_logs(db, user_id)
