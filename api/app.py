"""FastAPI application for av-config."""

import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accessors.errors import AccessorError
from api.deps import set_db_path
from api.routes import router

logger = logging.getLogger(__name__)


async def _http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def _bad_request(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return PlainTextResponse("; ".join(messages), status_code=400)


async def _server_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def create_app(db_path: str) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Path to the SQLite database. Each request opens its own
                 connection to it.
    """
    set_db_path(db_path)

    app = FastAPI(title="av-config")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.add_exception_handler(AccessorError, _server_error)
    app.add_exception_handler(sqlite3.Error, _server_error)

    app.include_router(router)

    return app
