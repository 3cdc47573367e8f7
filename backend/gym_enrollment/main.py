"""FastAPI application entry point."""

import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.api.deps import get_db
from gym_enrollment.api.v1 import enrollment
from gym_enrollment.core.config import settings
from gym_enrollment.core.constants import API_PREFIX
from gym_enrollment.core.errors import EnrollmentError, is_store_unavailable
from gym_enrollment.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from gym_enrollment.db.bootstrap import init_db
from gym_enrollment.db.session import build_engine, build_session_factory

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.LOG_LEVEL, json_logs=settings.APP_ENV != "development")
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info("Application starting", env=settings.APP_ENV)

    if settings.AUTO_BOOTSTRAP:
        await init_db(engine, app.state.session_factory, settings)

    yield

    await engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title="Gym Enrollment API",
    description="Membership, batch scheduling and monthly fee tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its id, method and path."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_request_context()
    response.headers["X-Request-ID"] = request_id
    return response


# ─── Error translation ────────────────────────
@app.exception_handler(EnrollmentError)
async def enrollment_error_handler(request: Request, exc: EnrollmentError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body validation failures become 400s in the same shape as business-rule errors."""
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        body = {"error": "Missing required fields", "missing": missing}
    else:
        body = {
            "error": "Invalid request",
            "fields": [
                {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
                for err in errors
            ],
        }
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    if is_store_unavailable(exc):
        logger.exception("Store unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Service temporarily unavailable"},
        )
    logger.exception("Database error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


app.include_router(enrollment.router, prefix=API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """Public health-check endpoint; reports whether the store answers."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the store")
        database = "unavailable"
    return {"status": "ok", "env": settings.APP_ENV, "database": database}
