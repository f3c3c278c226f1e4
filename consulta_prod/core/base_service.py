# consulta_prod/core/base_service.py
"""Generic base service for business logic orchestration.

Every mutating operation writes the entity and its audit entry inside a single
``transaction`` block.
"""

import logging
from typing import Any, Dict, Generic, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core.base_dao import BaseDAO
from consulta_prod.core.database import transaction
from consulta_prod.core.exceptions import ConflictError, NotFoundError, ValidationError
from consulta_prod.core.schemas import Page

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


def format_validation_error(exc: PydanticValidationError) -> str:
    """Collapse a pydantic error list into one short message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request data"


class BaseService(Generic[ModelType, CreateSchemaType, UpdateSchemaType, ResponseSchemaType]):
    """Generic CRUD service with uniqueness checks and audit trail."""

    response_model: Type[ResponseSchemaType]
    # Schema the merged row is re-validated against on update
    validation_model: Type[BaseModel]
    # Audit ``tableName`` and the label used in error messages
    table_name: str = ""
    entity_label: str = "Record"
    unique_fields: Sequence[str] = ("codigo",)

    def __init__(self, dao: BaseDAO[ModelType], audit_dao: AuditDAO):
        self.dao = dao
        self.audit_dao = audit_dao

    @property
    def db(self):
        return self.dao.db

    # ===== READ =====

    def get_page(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> Page[ResponseSchemaType]:
        records, total = self.dao.get_page(page=page, limit=limit, search=search)
        return Page[self.response_model](data=[self._to_response(r) for r in records], total=total)

    def get_by_id(self, id: str) -> ResponseSchemaType:
        return self._to_response(self._get_or_404(id))

    # ===== WRITE =====

    def create(self, create_data: CreateSchemaType, actor_id: Optional[str] = None) -> ResponseSchemaType:
        """Create new record with validation, audit entry and business logic."""
        data = self._prepare_create(create_data.model_dump())
        self._validate_unique(data)

        with transaction(self.db):
            record = self._flush_write(lambda: self.dao.create(**data))
            response = self._to_response(record)
            self.audit_dao.record(
                user_id=actor_id,
                action="create",
                table_name=self.table_name,
                record_id=record.id,
                new_values=self._snapshot(response),
            )

        logger.info("%s %s created by %s", self.entity_label, record.id, actor_id)
        return response

    def update(self, id: str, update_data: UpdateSchemaType, actor_id: Optional[str] = None) -> ResponseSchemaType:
        """Merge the supplied fields onto the existing row and re-validate."""
        record = self._get_or_404(id)
        old_values = self._snapshot(self._to_response(record))

        changes = update_data.model_dump(exclude_unset=True)
        self._revalidate(record, changes)
        changes = self._prepare_update(record, changes)
        self._validate_unique(changes, exclude_id=id)

        with transaction(self.db):
            record = self._flush_write(lambda: self.dao.update(record, **changes))
            response = self._to_response(record)
            self.audit_dao.record(
                user_id=actor_id,
                action="update",
                table_name=self.table_name,
                record_id=record.id,
                old_values=old_values,
                new_values=self._snapshot(response),
            )

        return response

    def delete(self, id: str, actor_id: Optional[str] = None) -> bool:
        """Delete the row; returns False (no-op) when it does not exist."""
        record = self.dao.get_by_id(id)
        if record is None:
            return False
        old_values = self._snapshot(self._to_response(record))

        with transaction(self.db):
            removed = self._flush_write(lambda: self.dao.delete(id))
            if removed:
                self.audit_dao.record(
                    user_id=actor_id,
                    action="delete",
                    table_name=self.table_name,
                    record_id=id,
                    old_values=old_values,
                )

        return removed

    # ===== HELPERS =====

    def _get_or_404(self, id: str) -> ModelType:
        record = self.dao.get_by_id(id)
        if record is None:
            raise NotFoundError(f"{self.entity_label} not found")
        return record

    def _flush_write(self, write):
        try:
            return write()
        except IntegrityError as e:
            raise ConflictError(f"{self.entity_label} conflicts with existing data") from e

    def _validate_unique(self, data: Dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for field in self.unique_fields:
            value = data.get(field)
            if value is None:
                continue
            existing = self.dao.get_by_field(field, value)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"{self.entity_label} with {field} '{value}' already exists")

    def _revalidate(self, record: ModelType, changes: Dict[str, Any]) -> None:
        fields = self.validation_model.model_fields
        merged = {name: getattr(record, name) for name in fields if hasattr(record, name)}
        merged.update(changes)
        try:
            self.validation_model.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(format_validation_error(e)) from e

    def _to_response(self, record: ModelType) -> ResponseSchemaType:
        return self.response_model.model_validate(record)

    def _snapshot(self, response: ResponseSchemaType) -> Dict[str, Any]:
        return response.model_dump(mode="json", by_alias=True)

    # ===== HOOKS (OVERRIDE IN SUBCLASSES) =====

    def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Turn validated input into model column values."""
        return data

    def _prepare_update(self, record: ModelType, changes: Dict[str, Any]) -> Dict[str, Any]:
        return changes
