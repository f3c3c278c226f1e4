"""Services for the reference tables."""

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.base_service import BaseService
from consulta_prod.resources.dao import CBODAO, PrestadorDAO, ProcedimentoDAO, SRubDAO
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub
from consulta_prod.resources.schemas import (
    CBOBase,
    CBOCreate,
    CBORead,
    CBOUpdate,
    PrestadorBase,
    PrestadorCreate,
    PrestadorRead,
    PrestadorUpdate,
    ProcedimentoBase,
    ProcedimentoCreate,
    ProcedimentoRead,
    ProcedimentoUpdate,
    SRubBase,
    SRubCreate,
    SRubRead,
    SRubUpdate,
)


class CBOService(BaseService[CBO, CBOCreate, CBOUpdate, CBORead]):
    response_model = CBORead
    validation_model = CBOBase
    table_name = "cbo"
    entity_label = "CBO"

    def __init__(self, dao: CBODAO, audit_dao: AuditDAO):
        super().__init__(dao, audit_dao)


class PrestadorService(BaseService[Prestador, PrestadorCreate, PrestadorUpdate, PrestadorRead]):
    response_model = PrestadorRead
    validation_model = PrestadorBase
    table_name = "prestador"
    entity_label = "Prestador"

    def __init__(self, dao: PrestadorDAO, audit_dao: AuditDAO):
        super().__init__(dao, audit_dao)


class ProcedimentoService(BaseService[Procedimento, ProcedimentoCreate, ProcedimentoUpdate, ProcedimentoRead]):
    response_model = ProcedimentoRead
    validation_model = ProcedimentoBase
    table_name = "procedimento"
    entity_label = "Procedimento"

    def __init__(self, dao: ProcedimentoDAO, audit_dao: AuditDAO):
        super().__init__(dao, audit_dao)


class SRubService(BaseService[SRub, SRubCreate, SRubUpdate, SRubRead]):
    response_model = SRubRead
    validation_model = SRubBase
    table_name = "s_rub"
    entity_label = "SRub"

    def __init__(self, dao: SRubDAO, audit_dao: AuditDAO):
        super().__init__(dao, audit_dao)
