"""API routes for the reference tables, one CRUD router per registered resource."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from consulta_prod.core.base_service import BaseService
from consulta_prod.core.dependencies import CurrentUserDep, SessionDep
from consulta_prod.core.exceptions import NotFoundError
from consulta_prod.core.schemas import Page
from consulta_prod.resources.registry import ResourceConfig, registry


def build_resource_router(config: ResourceConfig) -> APIRouter:
    """Create list/get/create/update/delete routes for one resource."""
    router = APIRouter(prefix=f"/{config.name}", tags=[config.tag])

    CreateModel = config.create_model_cls
    UpdateModel = config.update_model_cls
    ReadModel = config.read_model_cls

    def get_service(session: SessionDep) -> BaseService:
        return config.get_service(session)

    @router.get("", response_model=Page[ReadModel], name=f"list_{config.name}")
    def list_records(
        user: CurrentUserDep,
        page: int = Query(1, ge=1),
        limit: int = Query(10, gt=0),
        search: Optional[str] = Query(None),
        service: BaseService = Depends(get_service),
    ):
        return service.get_page(page=page, limit=limit, search=search)

    @router.get("/{record_id}", response_model=ReadModel, name=f"get_{config.name}")
    def get_record(record_id: str, user: CurrentUserDep, service: BaseService = Depends(get_service)):
        return service.get_by_id(record_id)

    @router.post("", response_model=ReadModel, status_code=status.HTTP_201_CREATED, name=f"create_{config.name}")
    def create_record(data: CreateModel, user: CurrentUserDep, service: BaseService = Depends(get_service)):
        return service.create(data, actor_id=user.id)

    @router.put("/{record_id}", response_model=ReadModel, name=f"update_{config.name}")
    def update_record(
        record_id: str, data: UpdateModel, user: CurrentUserDep, service: BaseService = Depends(get_service)
    ):
        return service.update(record_id, data, actor_id=user.id)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, name=f"delete_{config.name}")
    def delete_record(record_id: str, user: CurrentUserDep, service: BaseService = Depends(get_service)):
        if not service.delete(record_id, actor_id=user.id):
            raise NotFoundError(f"{config.label} not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def get_resource_routers() -> List[APIRouter]:
    return [build_resource_router(config) for config in registry.get_all_configs()]
