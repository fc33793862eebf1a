"""FastAPI application for the task_web_svc API.

This module creates and configures the FastAPI application instance
with all necessary routes, middleware and error handlers. The storage
connection is opened in the application lifespan and kept on ``app.state``
for the lifetime of the process.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import config
from ..database import connect, check_db_connection
from ..routes.task_routes import task_router

logger = logging.getLogger(__name__)


def create_app(db_url: Optional[str] = None) -> FastAPI:
    """Build the application.

    Args:
        db_url: Database URL to connect to at startup. If None, DATABASE_URL
            from the environment is used.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # StorageError propagates and aborts startup
        engine, session_factory = connect(db_url)
        app.state.engine = engine
        app.state.session_factory = session_factory
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database connection closed")

    app = FastAPI(
        title="Task Web Service API",
        description="REST API for task create, list, update and delete operations",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body for {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())}
        )

    app.include_router(task_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness endpoint."""
        return "Server is running!"

    @app.get("/health")
    def health_check(request: Request):
        """Readiness endpoint backed by a trivial database query."""
        if check_db_connection(request.app.state.session_factory):
            return {"status": "healthy"}
        return JSONResponse(status_code=503, content={"status": "unhealthy"})

    return app


app = create_app()
