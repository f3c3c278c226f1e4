"""API router for production records."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.dependencies import CurrentUserDep, SessionDep
from consulta_prod.core.exceptions import NotFoundError
from consulta_prod.core.schemas import Page
from consulta_prod.production.dao import ConsultaProdDAO
from consulta_prod.production.schemas import ConsultaProdCreate, ConsultaProdRead, ConsultaProdUpdate
from consulta_prod.production.service import ConsultaProdService

router = APIRouter(prefix="/consulta-prod", tags=["production"])


def get_consulta_prod_service(session: SessionDep) -> ConsultaProdService:
    return ConsultaProdService(ConsultaProdDAO(session), AuditDAO(session))


@router.get("", response_model=Page[ConsultaProdRead])
def list_records(
    user: CurrentUserDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, gt=0),
    search: Optional[str] = Query(None, description="Matches the CID code"),
    service: ConsultaProdService = Depends(get_consulta_prod_service),
) -> Page[ConsultaProdRead]:
    return service.get_page(page=page, limit=limit, search=search)


@router.get("/{record_id}", response_model=ConsultaProdRead)
def get_record(
    record_id: str, user: CurrentUserDep, service: ConsultaProdService = Depends(get_consulta_prod_service)
) -> ConsultaProdRead:
    return service.get_by_id(record_id)


@router.post("", response_model=ConsultaProdRead, status_code=status.HTTP_201_CREATED)
def create_record(
    data: ConsultaProdCreate, user: CurrentUserDep, service: ConsultaProdService = Depends(get_consulta_prod_service)
) -> ConsultaProdRead:
    return service.create(data, actor_id=user.id)


@router.put("/{record_id}", response_model=ConsultaProdRead)
def update_record(
    record_id: str,
    data: ConsultaProdUpdate,
    user: CurrentUserDep,
    service: ConsultaProdService = Depends(get_consulta_prod_service),
) -> ConsultaProdRead:
    return service.update(record_id, data, actor_id=user.id)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    record_id: str, user: CurrentUserDep, service: ConsultaProdService = Depends(get_consulta_prod_service)
) -> Response:
    if not service.delete(record_id, actor_id=user.id):
        raise NotFoundError("Production record not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
