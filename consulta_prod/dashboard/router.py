from fastapi import APIRouter

from consulta_prod.core.dependencies import CurrentUserDep, SessionDep
from consulta_prod.dashboard.service import DashboardService, DashboardStats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(session: SessionDep, user: CurrentUserDep) -> DashboardStats:
    return DashboardService(session).get_stats()
