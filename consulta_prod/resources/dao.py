from sqlalchemy.orm import Session

from consulta_prod.core.base_dao import BaseDAO
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub


class CBODAO(BaseDAO[CBO]):
    """DB functionality for interaction with `CBO` objects."""

    search_fields = ("codigo", "descricao")

    def __init__(self, db_session: Session):
        super().__init__(CBO, db_session)


class PrestadorDAO(BaseDAO[Prestador]):
    """DB functionality for interaction with `Prestador` objects."""

    search_fields = ("codigo", "nome_razao_social", "cnpj_cpf")

    def __init__(self, db_session: Session):
        super().__init__(Prestador, db_session)


class ProcedimentoDAO(BaseDAO[Procedimento]):
    """DB functionality for interaction with `Procedimento` objects."""

    search_fields = ("codigo", "descricao")

    def __init__(self, db_session: Session):
        super().__init__(Procedimento, db_session)


class SRubDAO(BaseDAO[SRub]):
    """DB functionality for interaction with `SRub` objects."""

    search_fields = ("codigo", "descricao")

    def __init__(self, db_session: Session):
        super().__init__(SRub, db_session)
