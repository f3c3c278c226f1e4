"""Pydantic schemas for the audit module API."""

from datetime import datetime
from typing import Any, Dict, Optional

from consulta_prod.core.schemas import ApiModel


class AuditLogRead(ApiModel):
    id: str
    user_id: Optional[str] = None
    action: str
    table_name: str
    record_id: Optional[str] = None
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    created_at: datetime
