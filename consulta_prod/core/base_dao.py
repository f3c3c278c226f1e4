# consulta_prod/core/base_dao.py
"""Generic base DAO for common database operations.

DAOs only ``flush``; committing is left to the service that owns the
transaction (see ``consulta_prod.core.database.transaction``).
"""

from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import desc, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from consulta_prod.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType]):
    """Generic DAO for common database operations."""

    # Column names matched by the free-text ``search`` parameter
    search_fields: Sequence[str] = ()
    # Column used for the default (descending) ordering
    order_field: str = "created_at"

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    # ===== READ =====

    def _search_query(self, search: Optional[str]) -> Select:
        query = select(self.model)
        if search and self.search_fields:
            query = query.where(
                or_(*(getattr(self.model, name).icontains(search, autoescape=True) for name in self.search_fields))
            )
        return query

    def get_page(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> Tuple[List[ModelType], int]:
        """Get one page of records plus the total count of the (searched) set."""
        query = self._search_query(search)

        total = self.db.execute(select(func.count()).select_from(query.subquery())).scalar_one()

        query = query.order_by(desc(getattr(self.model, self.order_field)))
        query = query.offset((page - 1) * limit).limit(limit)
        records = list(self.db.execute(query).scalars().all())
        return records, total

    def get_by_id(self, id: str) -> Optional[ModelType]:
        """Get record by ID."""
        return self.db.get(self.model, id)

    def get_by_field(self, field_name: str, value: Any) -> Optional[ModelType]:
        """Get single record by field value."""
        if not hasattr(self.model, field_name):
            return None

        query = select(self.model).where(getattr(self.model, field_name) == value)
        return self.db.execute(query).scalars().first()

    def count(self, **filters) -> int:
        """Count records with optional equality filters."""
        query = select(func.count()).select_from(self.model)
        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query).scalar_one()

    def exists(self, **filters) -> bool:
        return self.count(**filters) > 0

    # ===== WRITE =====

    def create(self, **data) -> ModelType:
        """Create new record."""
        db_obj = self.model(**data)
        self.db.add(db_obj)
        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, **data) -> ModelType:
        """Update existing record."""
        for field, value in data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: str) -> bool:
        """Delete record by ID. Returns False when there was nothing to delete."""
        db_obj = self.get_by_id(id)
        if db_obj is None:
            return False
        self.db.delete(db_obj)
        self.db.flush()
        return True
