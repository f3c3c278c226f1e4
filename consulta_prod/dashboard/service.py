"""Headline statistics for the dashboard."""

from decimal import Decimal

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from consulta_prod.core.schemas import ApiModel
from consulta_prod.production.models import ConsultaProd
from consulta_prod.resources.models import Prestador


class DashboardStats(ApiModel):
    total_procedures: int
    total_value: Decimal
    active_prestadores: int
    occupancy_rate: float


class DashboardService:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_stats(self) -> DashboardStats:
        total_procedures = self.db.execute(select(func.count(ConsultaProd.id))).scalar_one()
        total_value = self.db.execute(select(func.coalesce(func.sum(ConsultaProd.prd_vl_p), 0))).scalar_one()
        active_prestadores = self.db.execute(
            select(func.count(Prestador.id)).where(Prestador.status.is_(True))
        ).scalar_one()
        producing = self.db.execute(
            select(func.count(distinct(Prestador.id)))
            .select_from(Prestador)
            .join(ConsultaProd, ConsultaProd.prd_prest == Prestador.id)
            .where(Prestador.status.is_(True))
        ).scalar_one()

        # Share of active providers with at least one production record
        occupancy_rate = round(producing * 100.0 / active_prestadores, 1) if active_prestadores else 0.0

        return DashboardStats(
            total_procedures=total_procedures,
            total_value=Decimal(str(total_value)).quantize(Decimal("0.01")),
            active_prestadores=active_prestadores,
            occupancy_rate=occupancy_rate,
        )
