"""
Test configuration and shared fixtures for the Consulta Prod test suite.
Provides database setup, authentication, and common test utilities.
"""

import os
import tempfile

# The application engine (used by the request-log middleware) must point at a
# scratch database before anything from the package is imported.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="consulta_prod_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'app.db')}"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["SEED_SAMPLE_DATA"] = "false"

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Dict, List  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from consulta_prod.app import create_app  # noqa: E402
from consulta_prod.auth.models import User  # noqa: E402
from consulta_prod.auth.security import create_access_token, hash_password  # noqa: E402
from consulta_prod.core.database import Base, create_all_tables, get_db  # noqa: E402
from consulta_prod.production.models import ConsultaProd  # noqa: E402
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub  # noqa: E402


# ===== DATABASE SETUP =====

@pytest.fixture(scope="session")
def engine():
    """Create in-memory SQLite engine shared by every test"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(bind=engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine) -> Session:
    """Create a database session; every table is emptied afterwards"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app, db_session):
    """Create FastAPI test client with database overrides"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ===== ACCOUNTS =====

def make_user(session: Session, username: str, role: str, password: str = "secret123", active: bool = True) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password),
        email=f"{username}@example.com",
        first_name=username.title(),
        last_name="Teste",
        role=role,
        active=active,
    )
    session.add(user)
    session.commit()
    return user


def auth_headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, user.username, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session) -> User:
    return make_user(db_session, "admin", "admin", password="admin123")


@pytest.fixture
def operator_user(db_session) -> User:
    return make_user(db_session, "operador", "operator")


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture
def operator_headers(operator_user) -> Dict[str, str]:
    return auth_headers_for(operator_user)


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def sample_references(db_session) -> Dict[str, list]:
    """Two rows in each reference table"""
    cbos = [CBO(codigo="225125", descricao="Médico clínico"), CBO(codigo="223505", descricao="Enfermeiro")]
    prestadores = [
        Prestador(
            codigo="001",
            nome_razao_social="Hospital Municipal São José",
            cnpj_cpf="12.345.678/0001-90",
            tipo="pessoa_juridica",
        ),
        Prestador(codigo="002", nome_razao_social="Clínica Santa Maria", cnpj_cpf="98.765.432/0001-10", tipo="pessoa_juridica"),
    ]
    procedimentos = [
        Procedimento(codigo="03.01.01.007-2", descricao="Consulta médica", valor=Decimal("10.00"), complexidade="baixa"),
        Procedimento(codigo="02.05.02.007-0", descricao="Radiografia de tórax", valor=Decimal("15.50"), complexidade="media"),
    ]
    rubricas = [
        SRub(codigo="MAC001", descricao="Média e Alta Complexidade", tipo_financiamento="Federal"),
        SRub(codigo="PAB001", descricao="Piso de Atenção Básica", tipo_financiamento="Municipal"),
    ]
    db_session.add_all(cbos + prestadores + procedimentos + rubricas)
    db_session.commit()
    return {"cbo": cbos, "prestador": prestadores, "procedimento": procedimentos, "srub": rubricas}


@pytest.fixture
def sample_production(db_session, sample_references) -> List[ConsultaProd]:
    """
    Four production rows:
    0: 2024-01-10, provider 001, procedure 007-2, qtd 2
    1: 2024-01-31 18:30, provider 001, procedure 007-0, qtd 5
    2: 2024-02-15, provider 002, procedure 007-2, qtd 1
    3: 2024-03-01, no dimensions at all, qtd 10
    """
    refs = sample_references
    records = [
        ConsultaProd(
            prd_dtcomp=datetime(2024, 1, 10),
            prd_dtreal=datetime(2024, 1, 9),
            prd_cbo=refs["cbo"][0].id,
            prd_prest=refs["prestador"][0].id,
            prd_proc=refs["procedimento"][0].id,
            prd_rub=refs["srub"][1].id,
            prd_qtd=2,
            prd_vl_p=Decimal("20.00"),
            prd_cidpri="J06.9",
        ),
        ConsultaProd(
            prd_dtcomp=datetime(2024, 1, 31, 18, 30),
            prd_dtreal=datetime(2024, 1, 30),
            prd_cbo=refs["cbo"][1].id,
            prd_prest=refs["prestador"][0].id,
            prd_proc=refs["procedimento"][1].id,
            prd_rub=refs["srub"][0].id,
            prd_qtd=5,
            prd_vl_p=Decimal("77.50"),
            prd_cidpri="R10.4",
        ),
        ConsultaProd(
            prd_dtcomp=datetime(2024, 2, 15),
            prd_dtreal=datetime(2024, 2, 14),
            prd_cbo=refs["cbo"][0].id,
            prd_prest=refs["prestador"][1].id,
            prd_proc=refs["procedimento"][0].id,
            prd_rub=refs["srub"][1].id,
            prd_qtd=1,
            prd_vl_p=Decimal("10.00"),
            prd_cidpri="j06.0",
        ),
        ConsultaProd(
            prd_dtcomp=datetime(2024, 3, 1),
            prd_dtreal=datetime(2024, 3, 1),
            prd_qtd=10,
            prd_vl_p=Decimal("100.00"),
        ),
    ]
    db_session.add_all(records)
    db_session.commit()
    return records


# ===== UTILITY FIXTURES =====

@pytest.fixture
def api_headers():
    """Standard API headers for testing"""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
