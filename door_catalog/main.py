# door_catalog/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from door_catalog.core.config import get_settings
from door_catalog.core.logging_config import configure_logging
from door_catalog.database import create_engine_from_settings, create_session_factory
from door_catalog.routes import catalog, panels, suppliers, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    app.state.session_factory = create_session_factory(engine)
    logger.info(f"Database engine initialised ({settings.ENVIRONMENT})")
    try:
        yield  # This is where the app runs
    finally:
        await engine.dispose()

app = FastAPI(
    title="Door Catalog",
    debug=get_settings().DEBUG,
    lifespan=lifespan
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed parameters and bodies are client errors (400)."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


app.include_router(catalog.router)
app.include_router(panels.router)
app.include_router(suppliers.router)
app.include_router(health.router)
