import json
import platform
import socket
import time
from datetime import datetime
from typing import Any, Callable

from fastapi import Request, Response
from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from consulta_prod.core import config
from consulta_prod.core.database import SessionLocal
from consulta_prod.logging.models import Log

MASK = "********"
SENSITIVE_HEADERS = ("authorization", "cookie")


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: MASK if "password" in str(key).lower() else _mask(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_mask(item) for item in value]
    return value


def mask_sensitive_body(body: str) -> str:
    """Replace every ``*password*`` value in a JSON body; non-JSON bodies pass through."""
    if not body:
        return body
    try:
        parsed = json.loads(body)
    except ValueError:
        return body
    return json.dumps(_mask(parsed))


def safe_headers(request: Request) -> str:
    headers = {key: (MASK if key.lower() in SENSITIVE_HEADERS else value) for key, value in request.headers.items()}
    return json.dumps(headers)


def get_hostname() -> str:
    try:
        return socket.gethostname() or platform.node() or "unknown_host"
    except OSError:
        return "unknown_host"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Writes one ``Log`` row per API request, after the response is sent."""

    # Never log reads of the log table itself, nor the docs
    excluded_paths = ("/api/logs", "/api/docs", "/api/redoc", "/api/openapi.json")

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.hostname = get_hostname()
        self.application_id = config.APPLICATION_ID

    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        if not path.startswith("/api") or any(path.startswith(excluded) for excluded in self.excluded_paths):
            return await call_next(request)

        start_time = time.time()

        body_bytes = await request.body()
        request_body = mask_sensitive_body(body_bytes.decode("utf-8", errors="ignore"))
        # Shared with the exception handlers, which can no longer read the stream
        request.state.body = request_body

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        response_body = b""

        if isinstance(response, Response) and hasattr(response, "body"):
            response_body = response.body
        elif hasattr(response, "body_iterator"):
            original_iterator = response.body_iterator
            chunks = []

            async def buffer_iterator():
                nonlocal response_body
                async for chunk in original_iterator:
                    chunks.append(chunk)
                    yield chunk
                response_body = b"".join(chunks)

            response.body_iterator = buffer_iterator()

        username = getattr(request.state, "username", None)

        def log_to_db():
            with SessionLocal() as session:
                log = Log(
                    timestamp=datetime.now(),
                    method=request.method,
                    path=path,
                    status_code=status_code,
                    client_ip=request.client.host if request.client else None,
                    request_headers=safe_headers(request),
                    request_body=request_body,
                    response_body=response_body.decode("utf-8", errors="ignore") if response_body else None,
                    processing_time=duration_ms,
                    user_agent=request.headers.get("user-agent"),
                    username=username,
                    hostname=self.hostname,
                    application_id=self.application_id,
                )
                session.add(log)
                session.commit()

        response.background = getattr(response, "background", None) or BackgroundTask(log_to_db)
        return response
