import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_tracker.core.exceptions import AuthError, DuplicateUsername, StoreError, TrackerError
from employee_tracker.models.clock import ActiveSession, ClockLog
from employee_tracker.models.employee import Employee
from employee_tracker.schemas.employee import EmployeeCreate, EmployeeResponse
from employee_tracker.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "employee"
NOT_AVAILABLE = "N/A"


async def username_taken(db: AsyncSession, username: str) -> bool:
    result = await db.execute(select(Employee.id).where(Employee.username == username))
    return result.first() is not None


async def create_employee(db: AsyncSession, data: EmployeeCreate) -> Employee:
    """Create one employee. Role is always "employee"; blank company/manager become "N/A"."""
    if await username_taken(db, data.username):
        raise DuplicateUsername()

    employee = Employee(
        name=data.name,
        username=data.username,
        password=hash_password(data.password),
        role=DEFAULT_ROLE,
        company=data.company or NOT_AVAILABLE,
        manager=data.manager or NOT_AVAILABLE,
        work_type=data.work_type,
    )
    db.add(employee)
    try:
        await db.commit()
    except IntegrityError:
        # The unique index on username caught a concurrent insert
        await db.rollback()
        raise DuplicateUsername()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(str(e))

    await db.refresh(employee)
    logger.info("Created employee %s (%s)", employee.id, employee.username)
    return employee


def _validation_message(exc: SchemaValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


async def bulk_create_employees(db: AsyncSession, items: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Best-effort batch create.

    Each item is committed on its own; a failing item is recorded in
    ``errors`` as ``{"employee": name, "error": reason}`` and the loop moves on.
    """
    added: List[EmployeeResponse] = []
    errors: List[Dict[str, Optional[str]]] = []

    for raw in items:
        name = raw.get("name") if isinstance(raw, dict) else None
        if name is not None:
            name = str(name)
        try:
            data = EmployeeCreate.model_validate(raw)
            employee = await create_employee(db, data)
            # Snapshot now: a later rollback expires every instance in the session
            added.append(EmployeeResponse.model_validate(employee))
        except SchemaValidationError as e:
            errors.append({"employee": name, "error": _validation_message(e)})
        except TrackerError as e:
            errors.append({"employee": name, "error": e.message})
        except SQLAlchemyError as e:
            # Leave the session usable for the next item
            await db.rollback()
            errors.append({"employee": name, "error": str(getattr(e, "orig", None) or e)})

    if errors:
        logger.warning("Bulk import: %d added, %d failed", len(added), len(errors))
    else:
        logger.info("Bulk import: %d added", len(added))
    return {"added": added, "errors": errors, "count": len(added)}


async def list_employees(db: AsyncSession) -> List[Employee]:
    result = await db.execute(select(Employee).order_by(Employee.name))
    return list(result.scalars().all())


async def authenticate(db: AsyncSession, username: str, password: str) -> Employee:
    result = await db.execute(select(Employee).where(Employee.username == username))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise AuthError()

    matches, new_hash = verify_password(password, employee.password)
    if not matches:
        raise AuthError()

    if new_hash:
        # Legacy plain-text row: store the hash now that we have the password
        employee.password = new_hash
        db.add(employee)
        await db.commit()
        logger.info("Upgraded password hash for employee %s", employee.id)
    return employee


async def delete_employee(db: AsyncSession, employee_id: int) -> None:
    """Remove an employee with their logs and open session. Unknown ids are a no-op."""
    try:
        await db.execute(delete(ClockLog).where(ClockLog.user_id == employee_id))
        await db.execute(delete(ActiveSession).where(ActiveSession.user_id == employee_id))
        await db.execute(delete(Employee).where(Employee.id == employee_id))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(str(e))
    logger.info("Deleted employee %s", employee_id)


async def list_logs(db: AsyncSession, user_id: Optional[int] = None) -> List[ClockLog]:
    query = select(ClockLog)
    if user_id is not None:
        query = query.where(ClockLog.user_id == user_id)
    result = await db.execute(query.order_by(ClockLog.time.desc(), ClockLog.id.desc()))
    return list(result.scalars().all())
