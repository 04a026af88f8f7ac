from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from plan_service.api.plans import router as plans_router
from plan_service.catalog.seed import load_catalog_file, seed_catalog
from plan_service.config.settings import settings
from plan_service.core.logger import setup_logger
from plan_service.db.models import Base
from plan_service.db.session import check_database_connection, get_engine, get_session

setup_logger(level=settings.log_level, log_file=settings.log_file)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables and optionally seed the exercise catalog on startup."""
    check_database_connection()
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())

    if settings.seed_catalog_on_startup:
        with get_session() as session:
            seed_catalog(session, load_catalog_file())

    yield
    logger.info("Plan service shutting down")


app = FastAPI(title="CoachGPT Plan Service", lifespan=lifespan)
app.include_router(plans_router)

logger.info("FastAPI application initialized")


@app.exception_handler(RequestValidationError)
async def plan_request_validation_error(request: Request, exc: RequestValidationError):
    """Report malformed /api/plans bodies as 400, like every other rejected plan request."""
    if not request.url.path.startswith(plans_router.prefix):
        return await request_validation_exception_handler(request, exc)

    problems = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body') or 'body'}: {error['msg']}"
        for error in exc.errors()
    ]
    detail = f"Invalid request: {'; '.join(problems)}"
    logger.info(f"Plan request rejected ({status.HTTP_400_BAD_REQUEST}): {detail}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests and turn unhandled errors into logged 500s."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error for {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response
