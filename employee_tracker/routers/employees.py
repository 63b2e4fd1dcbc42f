from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from employee_tracker.database import get_db
from employee_tracker.schemas.employee import (
    BulkImportRequest,
    BulkImportResponse,
    EmployeeCreate,
    EmployeeResponse,
)
from employee_tracker.services import employees as employee_service

router = APIRouter(prefix="/api/employees", tags=["employees"])


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(db: AsyncSession = Depends(get_db)):
    return await employee_service.list_employees(db)


@router.post("", response_model=EmployeeResponse)
async def add_employee(employee_in: EmployeeCreate, db: AsyncSession = Depends(get_db)):
    return await employee_service.create_employee(db, employee_in)


@router.post("/bulk", response_model=BulkImportResponse)
async def bulk_import(payload: BulkImportRequest, db: AsyncSession = Depends(get_db)):
    return await employee_service.bulk_create_employees(db, payload.employees)


@router.delete("/{employee_id}")
async def delete_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    await employee_service.delete_employee(db, employee_id)
    return {"success": True}
