# consulta_prod/core/router.py
"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from consulta_prod.audit.router import router as audit_router
from consulta_prod.auth.router import router as auth_router
from consulta_prod.auth.router import users_router
from consulta_prod.dashboard.router import router as dashboard_router
from consulta_prod.logging.router import router as log_router
from consulta_prod.production.router import router as production_router
from consulta_prod.reporting.router import router as report_router
from consulta_prod.resources.router import get_resource_routers


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(dashboard_router, prefix="/api")

    # Reference tables (cbo, prestador, procedimento, srub)
    for resource_router in get_resource_routers():
        app.include_router(resource_router, prefix="/api")

    app.include_router(production_router, prefix="/api")
    app.include_router(report_router, prefix="/api")
    app.include_router(audit_router, prefix="/api")
    app.include_router(log_router, prefix="/api")
