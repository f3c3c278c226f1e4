# consulta_prod/audit/models.py
"""Append-only audit trail of mutating operations."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String, event

from consulta_prod.core.database import Base, new_id


class AuditLog(Base):
    """One row per create/update/delete/export performed through the API."""

    __tablename__ = "audit_log"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=True, index=True)  # actor; kept even if the account is deleted
    action = Column(String(100), nullable=False, index=True)  # create, update, delete, export
    table_name = Column(String(100), nullable=False, index=True)
    record_id = Column(String(255), nullable=True, index=True)
    old_values = Column(JSON, nullable=True)
    new_values = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, table={self.table_name}, record_id={self.record_id}, action={self.action})>"


class AuditLogImmutableError(RuntimeError):
    """Raised when code tries to change an audit row after it was written."""


@event.listens_for(AuditLog, "before_update")
def _refuse_audit_update(mapper, connection, target):
    raise AuditLogImmutableError(f"Audit entry {target.id} is immutable")


@event.listens_for(AuditLog, "before_delete")
def _refuse_audit_delete(mapper, connection, target):
    raise AuditLogImmutableError(f"Audit entry {target.id} cannot be deleted")
