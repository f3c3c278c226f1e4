"""FastAPI application entry point for Consulta Prod."""

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.middleware.cors import CORSMiddleware

from consulta_prod.core import config
from consulta_prod.core.database import init_db
from consulta_prod.core.exceptions import AppError
from consulta_prod.core.router import register_routes
from consulta_prod.logging.exception_handlers import (
    app_error_handler,
    general_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    response_validation_exception_handler,
)
from consulta_prod.logging.middleware import LoggingMiddleware


def create_app() -> FastAPI:

    app = FastAPI(
        title="Consulta Prod",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    init_db()

    # Add request logger middleware
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    # Response validation errors never reach the middleware as a response
    app.add_exception_handler(ResponseValidationError, response_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.get("/api/health", tags=["health"])
    def health_check() -> dict:
        return {"status": "ok"}

    return app
