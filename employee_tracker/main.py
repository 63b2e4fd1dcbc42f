# employee_tracker/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_tracker.config import settings
from employee_tracker.core.exceptions import TrackerError
from employee_tracker.database import Base, engine
from employee_tracker.routers import auth, clock, employees, frontend
import employee_tracker.models  # noqa: F401  registers tables on Base.metadata

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


app = FastAPI(title="Employee Tracker", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers first; the front-end catch-all must stay last
app.include_router(employees.router)
app.include_router(auth.router)
app.include_router(clock.router)
app.include_router(frontend.router)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(sa_exc.SQLAlchemyError)
async def store_error_handler(request: Request, exc: sa_exc.SQLAlchemyError):
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(getattr(exc, "orig", None) or exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"] if p != "body")
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    message = "; ".join(parts)
    return JSONResponse(status_code=400, content={"error": message or "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Create DB tables and check connectivity (use Alembic for managed deployments)
@app.on_event("startup")
async def startup_event():
    try:
        async with engine.begin() as conn:
            try:
                await conn.run_sync(Base.metadata.create_all)
            except sa_exc.IntegrityError as e:
                msg = str(getattr(e, "orig", e))
                if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                    logging.warning("Ignored duplicate DDL error during create_all: %s", msg)
                else:
                    raise
        async with engine.connect() as conn:
            now = (await conn.execute(text("SELECT CURRENT_TIMESTAMP"))).scalar_one()
        logger.info("Database connected successfully at %s", now)
    except (sa_exc.SQLAlchemyError, OSError) as e:
        logger.error("Database connection error: %s", e)
        logger.error("Make sure PostgreSQL is running and credentials are correct")

    logger.info("=" * 60)
    logger.info("Employee Tracker started on http://%s:%s", settings.HOST, settings.PORT)
    logger.info("Database: %s", settings.DB_NAME)
    logger.info("=" * 60)


@app.on_event("shutdown")
async def shutdown_event():
    await engine.dispose()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "employee_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
