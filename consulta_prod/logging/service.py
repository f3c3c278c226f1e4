"""Service layer for browsing request logs."""

from typing import List, Optional, Tuple

from consulta_prod.core.exceptions import ValidationError
from consulta_prod.logging.dao import LogDAO
from consulta_prod.logging.schemas import LogRead


class LogService:
    def __init__(self, log_dao: LogDAO):
        self.log_dao = log_dao

    def get_logs(
        self,
        limit: int = 50,
        offset: int = 0,
        hours: int = 24,
        status_min: Optional[int] = None,
        status_max: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[LogRead], int]:
        """Return one slice of logs and the total count for the same filters."""
        if status_min is not None and status_max is not None and status_min > status_max:
            raise ValidationError("status_min cannot be greater than status_max", field="status_min")

        logs = self.log_dao.get_logs_with_filters(
            limit=limit, offset=offset, hours=hours, status_min=status_min, status_max=status_max, search=search
        )
        total = self.log_dao.count_logs_with_filters(
            hours=hours, status_min=status_min, status_max=status_max, search=search
        )
        return [LogRead.model_validate(log) for log in logs], total
