# consulta_prod/audit/service.py
"""Read side of the audit trail."""

from typing import List, Optional

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.audit.schemas import AuditLogRead
from consulta_prod.core.exceptions import ValidationError
from consulta_prod.core.schemas import Page

VALID_ACTIONS = ("create", "update", "delete", "export")


class AuditService:
    """Service for browsing audit entries."""

    def __init__(self, audit_dao: AuditDAO):
        self.audit_dao = audit_dao

    def search(
        self,
        page: int = 1,
        limit: int = 50,
        table_name: Optional[str] = None,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Page[AuditLogRead]:
        if action and action not in VALID_ACTIONS:
            raise ValidationError(f"action must be one of: {', '.join(VALID_ACTIONS)}", field="action")

        entries, total = self.audit_dao.search(
            page=page, limit=limit, table_name=table_name, action=action, user_id=user_id
        )
        return Page[AuditLogRead](data=[AuditLogRead.model_validate(e) for e in entries], total=total)

    def history(self, table_name: str, record_id: str) -> List[AuditLogRead]:
        return [AuditLogRead.model_validate(e) for e in self.audit_dao.get_for_record(table_name, record_id)]
