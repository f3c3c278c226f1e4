"""Query executor for the production report."""

from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from consulta_prod.production.models import ConsultaProd
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub


def _with_dimensions(query: Select) -> Select:
    """LEFT JOIN the fact table to its four reference tables."""
    return (
        query.select_from(ConsultaProd)
        .outerjoin(CBO, ConsultaProd.prd_cbo == CBO.id)
        .outerjoin(Prestador, ConsultaProd.prd_prest == Prestador.id)
        .outerjoin(Procedimento, ConsultaProd.prd_proc == Procedimento.id)
        .outerjoin(SRub, ConsultaProd.prd_rub == SRub.id)
    )


class ReportDAO:
    """Runs compiled report predicates against the joined fact table."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def fetch_page(self, predicate: ColumnElement, page: int, limit: int) -> Tuple[List[Row], int]:
        """Rows of (ConsultaProd, CBO, Prestador, Procedimento, SRub) for one page, plus the full count."""
        return self.fetch_rows(predicate, offset=(page - 1) * limit, limit=limit), self.count(predicate)

    def fetch_rows(self, predicate: ColumnElement, offset: int = 0, limit: int = 10) -> List[Row]:
        query = (
            _with_dimensions(select(ConsultaProd, CBO, Prestador, Procedimento, SRub))
            .where(predicate)
            .order_by(ConsultaProd.prd_dtcomp.desc(), ConsultaProd.id)
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(query).all())

    def count(self, predicate: ColumnElement) -> int:
        query = _with_dimensions(select(func.count(ConsultaProd.id))).where(predicate)
        return self.db.execute(query).scalar_one()
