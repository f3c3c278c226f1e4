# consulta_prod/core/seed.py
"""Sample data set: an administrator plus a few rows in every table.

Run with ``python -m consulta_prod.core.seed``; does nothing when the
administrator account already exists.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from consulta_prod.auth.models import User
from consulta_prod.auth.security import hash_password
from consulta_prod.core import config
from consulta_prod.core.database import SessionLocal, create_all_tables, transaction
from consulta_prod.production.models import ConsultaProd
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub

logger = logging.getLogger(__name__)

CBO_ROWS = [
    {"codigo": "225125", "descricao": "Médico clínico"},
    {"codigo": "225133", "descricao": "Médico em medicina de família e comunidade"},
    {"codigo": "225170", "descricao": "Médico ginecologista e obstetra"},
    {"codigo": "223505", "descricao": "Enfermeiro"},
    {"codigo": "322205", "descricao": "Técnico de enfermagem"},
]

PRESTADOR_ROWS = [
    {
        "codigo": "001",
        "nome_razao_social": "Hospital Municipal São José",
        "cnpj_cpf": "12.345.678/0001-90",
        "tipo": "pessoa_juridica",
    },
    {
        "codigo": "002",
        "nome_razao_social": "Clínica Santa Maria",
        "cnpj_cpf": "98.765.432/0001-10",
        "tipo": "pessoa_juridica",
    },
    {"codigo": "003", "nome_razao_social": "Dr. João Silva", "cnpj_cpf": "123.456.789-01", "tipo": "pessoa_fisica"},
]

PROCEDIMENTO_ROWS = [
    {
        "codigo": "03.01.01.007-2",
        "descricao": "Consulta médica em atenção básica",
        "valor": Decimal("10.00"),
        "complexidade": "baixa",
    },
    {"codigo": "02.05.02.007-0", "descricao": "Radiografia de tórax", "valor": Decimal("15.50"), "complexidade": "media"},
    {
        "codigo": "04.03.02.018-6",
        "descricao": "Cirurgia de apendicectomia",
        "valor": Decimal("850.00"),
        "complexidade": "alta",
    },
]

SRUB_ROWS = [
    {"codigo": "MAC001", "descricao": "Média e Alta Complexidade", "tipo_financiamento": "Federal"},
    {"codigo": "PAB001", "descricao": "Piso de Atenção Básica", "tipo_financiamento": "Municipal"},
]

# (cbo, prestador, procedimento, s_rub, quantity, competence month); indexes into the lists above
PRODUCTION_ROWS = [
    (0, 0, 0, 1, 12, 1),
    (3, 0, 1, 0, 4, 1),
    (1, 1, 0, 1, 20, 2),
    (2, 1, 2, 0, 1, 2),
    (4, 2, 0, 1, 8, 3),
]


def seed_database(session: Session) -> bool:
    """Insert the sample data set. Returns False when it was already present."""
    if session.query(User).filter(User.username == config.ADMIN_USERNAME).first() is not None:
        logger.info("Seed skipped: user %s already exists", config.ADMIN_USERNAME)
        return False

    with transaction(session):
        session.add(
            User(
                username=config.ADMIN_USERNAME,
                password_hash=hash_password(config.ADMIN_PASSWORD),
                email="admin@consultaprod.com",
                first_name="Admin",
                last_name="Sistema",
                role="admin",
                active=True,
            )
        )

        cbos = [CBO(**row) for row in CBO_ROWS]
        prestadores = [Prestador(**row) for row in PRESTADOR_ROWS]
        procedimentos = [Procedimento(**row) for row in PROCEDIMENTO_ROWS]
        rubricas = [SRub(**row) for row in SRUB_ROWS]
        session.add_all(cbos + prestadores + procedimentos + rubricas)
        session.flush()

        for cbo, prest, proc, rub, quantity, month in PRODUCTION_ROWS:
            procedimento = procedimentos[proc]
            session.add(
                ConsultaProd(
                    prd_dtcomp=datetime(2024, month, 1),
                    prd_dtreal=datetime(2024, month, 10 + quantity % 10),
                    prd_cbo=cbos[cbo].id,
                    prd_prest=prestadores[prest].id,
                    prd_proc=procedimento.id,
                    prd_rub=rubricas[rub].id,
                    prd_qtd=quantity,
                    prd_vl_p=procedimento.valor * quantity,
                    prd_cidpri="Z00.0",
                )
            )

    logger.info(
        "Seeded %d CBO, %d prestadores, %d procedimentos, %d rubricas and %d production rows",
        len(CBO_ROWS),
        len(PRESTADOR_ROWS),
        len(PROCEDIMENTO_ROWS),
        len(SRUB_ROWS),
        len(PRODUCTION_ROWS),
    )
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_all_tables()
    with SessionLocal() as db_session:
        seed_database(db_session)
