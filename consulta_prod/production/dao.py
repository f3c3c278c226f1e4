from sqlalchemy.orm import Session

from consulta_prod.core.base_dao import BaseDAO
from consulta_prod.production.models import ConsultaProd


class ConsultaProdDAO(BaseDAO[ConsultaProd]):
    """DB functionality for interaction with `ConsultaProd` objects."""

    search_fields = ("prd_cidpri",)
    order_field = "prd_dtcomp"

    def __init__(self, db_session: Session):
        super().__init__(ConsultaProd, db_session)
