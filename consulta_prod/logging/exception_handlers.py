# consulta_prod/logging/exception_handlers.py

import json
import logging
import traceback
from datetime import datetime

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from consulta_prod.core import config
from consulta_prod.core.database import SessionLocal
from consulta_prod.core.exceptions import AppError
from consulta_prod.logging.middleware import get_hostname, safe_headers
from consulta_prod.logging.models import Log

logger = logging.getLogger(__name__)

HOSTNAME = get_hostname()


def safe_json_dumps(obj) -> str:
    return json.dumps(obj, indent=2, default=str)


def _log_failure(request: Request, status_code: int, payload) -> None:
    """Persist a failure the request middleware never gets to see."""
    with SessionLocal() as session:
        try:
            log = Log(
                timestamp=datetime.now(),
                method=request.method,
                path=str(request.url.path),
                status_code=status_code,
                client_ip=request.client.host if request.client else None,
                request_headers=safe_headers(request),
                request_body=getattr(request.state, "body", None),
                response_body=safe_json_dumps(payload),
                processing_time=None,
                user_agent=request.headers.get("user-agent"),
                username=getattr(request.state, "username", None),
                hostname=HOSTNAME,
                application_id=config.APPLICATION_ID,
            )
            session.add(log)
            session.commit()
        except SQLAlchemyError:
            logger.exception("Could not write failure log for %s %s", request.method, request.url.path)


async def app_error_handler(request: Request, exc: AppError):
    """Map the application error taxonomy onto ``{"detail": message}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=exc.headers)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are client errors (400)."""

    def convert_error(error):
        if isinstance(error, dict):
            return {k: convert_error(v) for k, v in error.items() if k != "ctx"}
        elif isinstance(error, (list, tuple)):
            return [convert_error(item) for item in error]
        elif isinstance(error, (int, float, bool)) or error is None:
            return error
        return str(error)

    return JSONResponse(status_code=400, content={"detail": convert_error(exc.errors())})


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    _log_failure(request, 500, exc.errors())
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error: Response validation failed."},
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Unhandled exceptions: log the traceback and answer a bare 500."""
    error_traceback = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    _log_failure(request, 500, {"error": str(exc), "type": type(exc).__name__, "traceback": error_traceback})

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )
