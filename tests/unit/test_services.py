"""
Unit tests for service-layer logic with mocked data access.
Covers the audited write path, account handling and report execution.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock, Mock

import pytest

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.audit.models import AuditLog, AuditLogImmutableError
from consulta_prod.auth.schemas import UserCreate, UserUpdate
from consulta_prod.auth.service import UserService
from consulta_prod.core.exceptions import ConflictError, NotFoundError, ValidationError
from consulta_prod.production.models import ConsultaProd
from consulta_prod.reporting.schemas import ExportRequest
from consulta_prod.reporting.service import ReportService
from consulta_prod.resources.dao import PrestadorDAO
from consulta_prod.resources.models import Prestador
from consulta_prod.resources.schemas import PrestadorCreate, PrestadorUpdate
from consulta_prod.resources.service import PrestadorService


class TestAuditedWrites:
    """Entity writes and audit entries commit or roll back together"""

    @pytest.fixture
    def service(self, db_session):
        return PrestadorService(PrestadorDAO(db_session), AuditDAO(db_session))

    @pytest.fixture
    def prestador_data(self):
        return PrestadorCreate(
            codigo="001", nome_razao_social="Hospital", cnpj_cpf="12.345.678/0001-90", tipo="pessoa_juridica"
        )

    def test_create_writes_audit_entry(self, service, db_session, prestador_data):
        created = service.create(prestador_data, actor_id="actor-1")

        entries = db_session.query(AuditLog).all()
        assert len(entries) == 1
        entry = entries[0]
        assert (entry.action, entry.table_name, entry.record_id, entry.user_id) == (
            "create",
            "prestador",
            created.id,
            "actor-1",
        )
        assert entry.new_values["nomeRazaoSocial"] == "Hospital"
        assert entry.old_values is None

    def test_failed_audit_rolls_back_entity(self, db_session, prestador_data):
        audit_dao = AuditDAO(db_session)
        audit_dao.record = Mock(side_effect=RuntimeError("audit store down"))
        service = PrestadorService(PrestadorDAO(db_session), audit_dao)

        with pytest.raises(RuntimeError):
            service.create(prestador_data, actor_id="actor-1")

        assert db_session.query(Prestador).count() == 0

    def test_update_records_old_and_new_values(self, service, db_session, prestador_data):
        created = service.create(prestador_data)
        service.update(created.id, PrestadorUpdate(nome_razao_social="Hospital Novo"), actor_id="actor-2")

        entry = db_session.query(AuditLog).filter(AuditLog.action == "update").one()
        assert entry.old_values["nomeRazaoSocial"] == "Hospital"
        assert entry.new_values["nomeRazaoSocial"] == "Hospital Novo"

    def test_update_revalidates_merged_row(self, service, prestador_data):
        created = service.create(prestador_data)
        with pytest.raises(ValidationError):
            service.update(created.id, PrestadorUpdate(nome_razao_social=""))

    def test_update_unknown_id(self, service):
        with pytest.raises(NotFoundError):
            service.update("missing", PrestadorUpdate(nome_razao_social="X"))

    def test_duplicate_codigo(self, service, prestador_data):
        service.create(prestador_data)
        with pytest.raises(ConflictError):
            service.create(prestador_data)

    def test_update_to_taken_codigo(self, service, prestador_data):
        service.create(prestador_data)
        other = service.create(prestador_data.model_copy(update={"codigo": "002"}))
        with pytest.raises(ConflictError):
            service.update(other.id, PrestadorUpdate(codigo="001"))

    def test_delete_reports_whether_row_existed(self, service, db_session, prestador_data):
        created = service.create(prestador_data)
        assert service.delete(created.id, actor_id="actor-1") is True
        assert service.delete(created.id, actor_id="actor-1") is False
        assert db_session.query(AuditLog).filter(AuditLog.action == "delete").count() == 1

    def test_audit_rows_are_immutable(self, service, db_session, prestador_data):
        service.create(prestador_data)
        entry = db_session.query(AuditLog).one()

        entry.action = "tampered"
        with pytest.raises(AuditLogImmutableError):
            db_session.flush()
        db_session.rollback()

        db_session.delete(db_session.query(AuditLog).one())
        with pytest.raises(AuditLogImmutableError):
            db_session.flush()


class TestUserService:
    @pytest.fixture
    def service(self, db_session):
        from consulta_prod.auth.dao import UserDAO

        return UserService(UserDAO(db_session), AuditDAO(db_session))

    def test_password_is_hashed_and_never_audited(self, service, db_session):
        created = service.create(UserCreate(username="maria", password="segredo1", email="maria@example.com"))

        assert "password" not in created.model_dump()
        entry = db_session.query(AuditLog).one()
        assert "password" not in entry.new_values
        assert "passwordHash" not in entry.new_values

    def test_update_rehashes_password(self, service, db_session):
        from consulta_prod.auth.models import User
        from consulta_prod.auth.security import verify_password

        created = service.create(UserCreate(username="maria", password="segredo1"))
        service.update(created.id, UserUpdate(password="novasenha"))

        user = db_session.get(User, created.id)
        assert verify_password("novasenha", user.password_hash)

    def test_cannot_delete_self(self, service):
        created = service.create(UserCreate(username="maria", password="segredo1"))
        with pytest.raises(ValidationError):
            service.delete(created.id, actor_id=created.id)

    def test_duplicate_email(self, service):
        service.create(UserCreate(username="maria", password="segredo1", email="x@example.com"))
        with pytest.raises(ConflictError):
            service.create(UserCreate(username="joana", password="segredo1", email="x@example.com"))


class TestReportService:
    """Report execution with a mocked executor"""

    @pytest.fixture
    def record(self):
        return ConsultaProd(
            id="rec-1",
            prd_dtcomp=datetime(2024, 1, 10),
            prd_dtreal=datetime(2024, 1, 9),
            prd_qtd=2,
            prd_vl_p=Decimal("20.00"),
        )

    @pytest.fixture
    def mock_report_dao(self, record):
        dao = Mock()
        dao.fetch_page = Mock(return_value=([(record, None, None, None, None)], 1))
        dao.fetch_rows = Mock(return_value=[(record, None, None, None, None)] * 150)
        return dao

    @pytest.fixture
    def mock_audit_dao(self):
        dao = Mock()
        dao.db = MagicMock()
        return dao

    def test_report_data_shapes_rows(self, mock_report_dao, mock_audit_dao):
        service = ReportService(mock_report_dao, mock_audit_dao)
        page = service.get_report_data(filters=None, page=1, limit=10)

        assert page.total == 1
        row = page.data[0]
        assert row.id == "rec-1"
        assert row.cbo is None and row.s_rub is None
        mock_report_dao.fetch_page.assert_called_once()
        assert mock_report_dao.fetch_page.call_args.kwargs == {"page": 1, "limit": 10}

    def test_invalid_filter_never_reaches_the_database(self, mock_report_dao, mock_audit_dao):
        service = ReportService(mock_report_dao, mock_audit_dao)
        with pytest.raises(ValidationError):
            service.get_report_data(filters='[{"field": "nope", "operator": "equals", "value": "1"}]')
        mock_report_dao.fetch_page.assert_not_called()

    def test_export_samples_rows_and_audits(self, mock_report_dao, mock_audit_dao):
        service = ReportService(mock_report_dao, mock_audit_dao)
        response = service.export(ExportRequest(format="csv", fields=["prdQtd"]), actor_id="actor-1")

        assert response.success is True
        assert response.total == 150
        assert len(response.data) == 100
        assert mock_report_dao.fetch_rows.call_args.kwargs["limit"] == 10000

        audit_kwargs = mock_audit_dao.record.call_args.kwargs
        assert audit_kwargs["action"] == "export"
        assert audit_kwargs["table_name"] == "consulta_prod"
        assert audit_kwargs["new_values"]["format"] == "csv"
        mock_audit_dao.db.commit.assert_called_once()
