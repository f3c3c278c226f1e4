"""Administrator endpoints for browsing the audit trail."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.audit.schemas import AuditLogRead
from consulta_prod.audit.service import AuditService
from consulta_prod.core.dependencies import AdminDep, SessionDep
from consulta_prod.core.schemas import Page

router = APIRouter(prefix="/audit", tags=["audit"])


def get_audit_service(session: SessionDep) -> AuditService:
    return AuditService(AuditDAO(session))


@router.get("", response_model=Page[AuditLogRead])
def list_audit_entries(
    admin: AdminDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, gt=0, le=500),
    table_name: Optional[str] = Query(None, alias="tableName"),
    action: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    service: AuditService = Depends(get_audit_service),
) -> Page[AuditLogRead]:
    return service.search(page=page, limit=limit, table_name=table_name, action=action, user_id=user_id)


@router.get("/{table_name}/{record_id}", response_model=List[AuditLogRead])
def get_record_history(
    table_name: str, record_id: str, admin: AdminDep, service: AuditService = Depends(get_audit_service)
) -> List[AuditLogRead]:
    return service.history(table_name, record_id)
