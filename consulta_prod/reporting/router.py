"""API router for the production report."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.dependencies import CurrentUserDep, SessionDep
from consulta_prod.core.schemas import Page
from consulta_prod.production.schemas import ProductionRow
from consulta_prod.reporting.dao import ReportDAO
from consulta_prod.reporting.schemas import ExportRequest, ExportResponse
from consulta_prod.reporting.service import ReportService

router = APIRouter(prefix="/reports", tags=["reporting"])


def get_report_service(session: SessionDep) -> ReportService:
    return ReportService(ReportDAO(session), AuditDAO(session))


@router.get("/data", response_model=Page[ProductionRow])
def get_report_data(
    user: CurrentUserDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, gt=0),
    filters: Optional[str] = Query(None, description="JSON-encoded filter payload"),
    service: ReportService = Depends(get_report_service),
) -> Page[ProductionRow]:
    return service.get_report_data(filters=filters, page=page, limit=limit)


@router.post("/export", response_model=ExportResponse)
def export_report(
    request: ExportRequest, user: CurrentUserDep, service: ReportService = Depends(get_report_service)
) -> ExportResponse:
    return service.export(request, actor_id=user.id)
