# consulta_prod/logging/router.py
"""Administrator endpoint for request logs."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from consulta_prod.core.dependencies import AdminDep, SessionDep
from consulta_prod.logging.dao import LogDAO
from consulta_prod.logging.schemas import LogRead
from consulta_prod.logging.service import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


def get_log_service(session: SessionDep) -> LogService:
    return LogService(LogDAO(session))


@router.get("", response_model=List[LogRead])
def get_logs(
    response: Response,
    admin: AdminDep,
    limit: int = Query(50, ge=1, le=1000, description="Maximum number of logs to return"),
    offset: int = Query(0, ge=0, description="Number of logs to skip"),
    hours: int = Query(24, ge=1, le=168, description="Time window in hours"),
    status_min: Optional[int] = Query(None, ge=100, le=599, description="Minimum status code"),
    status_max: Optional[int] = Query(None, ge=100, le=599, description="Maximum status code"),
    search: Optional[str] = Query(None, description="Search term for filtering logs"),
    log_service: LogService = Depends(get_log_service),
) -> List[LogRead]:
    logs, total_count = log_service.get_logs(
        limit=limit, offset=offset, hours=hours, status_min=status_min, status_max=status_max, search=search
    )

    response.headers["X-Total-Count"] = str(total_count)
    response.headers["X-Page-Size"] = str(limit)
    response.headers["X-Page-Offset"] = str(offset)
    return logs
