"""
FastAPI application factory
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pos_backend import __version__
from pos_backend.api.commands import router as commands_router
from pos_backend.infrastructure.configuration.config import Settings, get_config
from pos_backend.infrastructure.container.dependency_injection import (
    DependencyContainer,
)
from pos_backend.infrastructure.database.operations import DatabaseManager, init_db
from pos_backend.infrastructure.utilities.exceptions import (
    NotFoundError,
    PosBackendError,
)
from pos_backend.infrastructure.utilities.helpers import utc_now

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _register_exception_handlers(app: FastAPI) -> None:
    """Every failure reaches the client as ``{"error": "<message>"}``"""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(PosBackendError)
    async def backend_error_handler(_request: Request, exc: PosBackendError):
        logger.warning("⚠️ COMMAND FAILED [%s]: %s", exc.error_code, exc)
        return _error(400, exc.user_message)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(_request: Request, exc: SQLAlchemyError):
        logger.error("💥 STORAGE ERROR: %s", exc)
        return _error(400, f"Database error: {exc}")

    @app.exception_handler(ValueError)
    async def value_error_handler(_request: Request, exc: ValueError):
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _error(400, "Invalid arguments: " + "; ".join(messages))


def create_app(
    config: Optional[Settings] = None,
    db_manager: Optional[DatabaseManager] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """
    Build the application around one DatabaseManager

    A manager passed in by the caller is left open on shutdown; one created
    here is closed with the app.
    """
    config = config or get_config()
    owns_db = db_manager is None
    db_manager = db_manager or DatabaseManager(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("🚀 POS backend starting (%s)", config.environment)
        if config.create_tables_on_startup:
            init_db(db_manager)
        yield
        if owns_db:
            db_manager.close()
        logger.info("👋 POS backend stopped")

    app = FastAPI(title="POS Order Backend", version=__version__, lifespan=lifespan)
    app.state.container = DependencyContainer(db_manager, clock=clock)

    _register_exception_handlers(app)
    app.include_router(commands_router)

    @app.get("/health")
    async def health_check():
        """Storage connectivity check"""
        status = db_manager.health_check()
        return JSONResponse(
            status_code=200 if status["status"] == "healthy" else 503, content=status
        )

    return app
