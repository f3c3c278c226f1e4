# consulta_prod/audit/dao.py
"""Data access for the audit trail. Entries are only ever inserted and read."""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from consulta_prod.audit.models import AuditLog


class AuditDAO:
    """DB functionality for interaction with `AuditLog` objects."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def record(
        self,
        action: str,
        table_name: str,
        user_id: Optional[str] = None,
        record_id: Optional[str] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
    ) -> AuditLog:
        """Append an entry to the current transaction (flush only)."""
        entry = AuditLog(
            user_id=user_id,
            action=action,
            table_name=table_name,
            record_id=record_id,
            old_values=old_values,
            new_values=new_values,
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def _filtered(self, query, table_name: Optional[str], action: Optional[str], user_id: Optional[str]):
        if table_name:
            query = query.where(AuditLog.table_name == table_name)
        if action:
            query = query.where(AuditLog.action == action)
        if user_id:
            query = query.where(AuditLog.user_id == user_id)
        return query

    def search(
        self,
        page: int = 1,
        limit: int = 50,
        table_name: Optional[str] = None,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Tuple[List[AuditLog], int]:
        count_query = self._filtered(select(func.count()).select_from(AuditLog), table_name, action, user_id)
        total = self.db.execute(count_query).scalar_one()

        query = self._filtered(select(AuditLog), table_name, action, user_id)
        query = query.order_by(desc(AuditLog.created_at)).offset((page - 1) * limit).limit(limit)
        return list(self.db.execute(query).scalars().all()), total

    def get_for_record(self, table_name: str, record_id: str) -> List[AuditLog]:
        query = (
            select(AuditLog)
            .where(AuditLog.table_name == table_name, AuditLog.record_id == record_id)
            .order_by(AuditLog.created_at)
        )
        return list(self.db.execute(query).scalars().all())
