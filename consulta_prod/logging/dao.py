# consulta_prod/logging/dao.py
"""Data access for request logs."""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from consulta_prod.core.base_dao import BaseDAO
from consulta_prod.logging.models import Log


class LogDAO(BaseDAO[Log]):
    """DB functionality for interaction with `Log` objects."""

    order_field = "timestamp"

    def __init__(self, db_session: Session):
        super().__init__(Log, db_session)

    def _filtered(
        self,
        query: Select,
        hours: int,
        status_min: Optional[int],
        status_max: Optional[int],
        search: Optional[str],
    ) -> Select:
        time_threshold = datetime.now() - timedelta(hours=hours)
        query = query.where(Log.timestamp >= time_threshold)

        if status_min is not None:
            query = query.where(Log.status_code >= status_min)
        if status_max is not None:
            query = query.where(Log.status_code <= status_max)

        if search:
            query = query.where(
                or_(
                    Log.path.icontains(search, autoescape=True),
                    Log.method.icontains(search, autoescape=True),
                    Log.client_ip.icontains(search, autoescape=True),
                    Log.username.icontains(search, autoescape=True),
                    Log.hostname.icontains(search, autoescape=True),
                    cast(Log.status_code, String).icontains(search, autoescape=True),
                )
            )
        return query

    def get_logs_with_filters(
        self,
        limit: int = 50,
        offset: int = 0,
        hours: int = 24,
        status_min: Optional[int] = None,
        status_max: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[Log]:
        query = self._filtered(select(Log), hours, status_min, status_max, search)
        query = query.order_by(Log.timestamp.desc(), Log.id.desc()).offset(offset).limit(limit)
        return list(self.db.execute(query).scalars().all())

    def count_logs_with_filters(
        self,
        hours: int = 24,
        status_min: Optional[int] = None,
        status_max: Optional[int] = None,
        search: Optional[str] = None,
    ) -> int:
        query = self._filtered(select(func.count()).select_from(Log), hours, status_min, status_max, search)
        return self.db.execute(query).scalar_one()
