# employee_tracker/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_tracker.database import get_db
from employee_tracker.schemas.employee import EmployeeResponse, LoginRequest
from employee_tracker.services.employees import authenticate


router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=EmployeeResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    # Raises AuthError (401) on any mismatch
    return await authenticate(db, credentials.username, credentials.password)
