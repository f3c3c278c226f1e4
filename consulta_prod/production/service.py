# consulta_prod/production/service.py
"""CRUD over the production fact table."""

from typing import Any, Dict

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.base_service import BaseService
from consulta_prod.core.exceptions import ValidationError
from consulta_prod.production.dao import ConsultaProdDAO
from consulta_prod.production.models import ConsultaProd
from consulta_prod.production.schemas import ConsultaProdBase, ConsultaProdCreate, ConsultaProdRead, ConsultaProdUpdate
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub

# column -> (referenced model, wire name used in error messages)
REFERENCES = {
    "prd_cbo": (CBO, "prdCbo"),
    "prd_prest": (Prestador, "prdPrest"),
    "prd_proc": (Procedimento, "prdProc"),
    "prd_rub": (SRub, "prdRub"),
}


class ConsultaProdService(BaseService[ConsultaProd, ConsultaProdCreate, ConsultaProdUpdate, ConsultaProdRead]):
    response_model = ConsultaProdRead
    validation_model = ConsultaProdBase
    table_name = "consulta_prod"
    entity_label = "Production record"
    unique_fields = ()

    def __init__(self, dao: ConsultaProdDAO, audit_dao: AuditDAO):
        super().__init__(dao, audit_dao)

    def _check_references(self, data: Dict[str, Any]) -> None:
        """A dimension FK may be null, but a non-null one must point at an existing row."""
        for column, (model, wire_name) in REFERENCES.items():
            value = data.get(column)
            if value is not None and self.db.get(model, value) is None:
                raise ValidationError(f"{wire_name} references an unknown {model.__name__}", field=wire_name)

    def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check_references(data)
        return data

    def _prepare_update(self, record: ConsultaProd, changes: Dict[str, Any]) -> Dict[str, Any]:
        self._check_references(changes)
        return changes
