from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.base_service import BaseService
from consulta_prod.resources.dao import CBODAO, PrestadorDAO, ProcedimentoDAO, SRubDAO
from consulta_prod.resources.schemas import (
    CBOCreate,
    CBORead,
    CBOUpdate,
    PrestadorCreate,
    PrestadorRead,
    PrestadorUpdate,
    ProcedimentoCreate,
    ProcedimentoRead,
    ProcedimentoUpdate,
    SRubCreate,
    SRubRead,
    SRubUpdate,
)
from consulta_prod.resources.service import CBOService, PrestadorService, ProcedimentoService, SRubService

CreateModelType = TypeVar("CreateModelType", bound=BaseModel)
UpdateModelType = TypeVar("UpdateModelType", bound=BaseModel)
ReadModelType = TypeVar("ReadModelType", bound=BaseModel)


class ResourceConfig(Generic[CreateModelType, UpdateModelType, ReadModelType]):
    """Configuration for a reference-table resource exposed under ``/api/{name}``."""

    def __init__(
        self,
        name: str,
        label: str,
        create_model_cls: Type[CreateModelType],
        update_model_cls: Type[UpdateModelType],
        read_model_cls: Type[ReadModelType],
        tag: str,
        service_factory: Callable[[Session], BaseService],
    ):
        self.name = name
        self.label = label
        self.create_model_cls = create_model_cls
        self.update_model_cls = update_model_cls
        self.read_model_cls = read_model_cls
        self.tag = tag
        self.service_factory = service_factory

    def get_service(self, session: Session) -> BaseService:
        """Get the service instance for this resource"""
        return self.service_factory(session)


class ResourceRegistry:
    """Registry of all reference-table resources in the application"""

    def __init__(self):
        self.resources: Dict[str, ResourceConfig] = {}

    def register(self, config: ResourceConfig) -> None:
        self.resources[config.name] = config

    def get_config(self, name: str) -> Optional[ResourceConfig]:
        return self.resources.get(name)

    def get_all_configs(self) -> List[ResourceConfig]:
        return list(self.resources.values())


# Create the global registry
registry = ResourceRegistry()

registry.register(
    ResourceConfig(
        name="cbo",
        label="CBO",
        create_model_cls=CBOCreate,
        update_model_cls=CBOUpdate,
        read_model_cls=CBORead,
        tag="CBO",
        service_factory=lambda session: CBOService(CBODAO(session), AuditDAO(session)),
    )
)

registry.register(
    ResourceConfig(
        name="prestador",
        label="Prestador",
        create_model_cls=PrestadorCreate,
        update_model_cls=PrestadorUpdate,
        read_model_cls=PrestadorRead,
        tag="Prestadores",
        service_factory=lambda session: PrestadorService(PrestadorDAO(session), AuditDAO(session)),
    )
)

registry.register(
    ResourceConfig(
        name="procedimento",
        label="Procedimento",
        create_model_cls=ProcedimentoCreate,
        update_model_cls=ProcedimentoUpdate,
        read_model_cls=ProcedimentoRead,
        tag="Procedimentos",
        service_factory=lambda session: ProcedimentoService(ProcedimentoDAO(session), AuditDAO(session)),
    )
)

registry.register(
    ResourceConfig(
        name="srub",
        label="SRub",
        create_model_cls=SRubCreate,
        update_model_cls=SRubUpdate,
        read_model_cls=SRubRead,
        tag="S_RUB",
        service_factory=lambda session: SRubService(SRubDAO(session), AuditDAO(session)),
    )
)
