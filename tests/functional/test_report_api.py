"""
API tests for the production report and its export.
"""

import json
from datetime import datetime, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient

from consulta_prod.production.models import ConsultaProd


def get_report(client, headers, filters=None, **params):
    if filters is not None:
        params["filters"] = json.dumps(filters)
    return client.get("/api/reports/data", params=params, headers=headers)


class TestReportData:
    def test_requires_authentication(self, client: TestClient):
        assert client.get("/api/reports/data").status_code == 401

    def test_empty_filter_returns_everything(self, client: TestClient, operator_headers, sample_production):
        unfiltered = get_report(client, operator_headers).json()
        empty = get_report(client, operator_headers, filters={}).json()
        assert unfiltered["total"] == empty["total"] == 4

    def test_row_shape(self, client: TestClient, operator_headers, sample_production):
        body = get_report(client, operator_headers, filters={"filter_0": {"field": "prdQtd", "operator": "equals", "value": "5"}}).json()
        row = body["data"][0]

        assert set(row) == {
            "id",
            "prdDtcomp",
            "prdDtreal",
            "prdQtd",
            "prdVlP",
            "prdCidpri",
            "cbo",
            "prestador",
            "procedimento",
            "sRub",
        }
        assert row["prdVlP"] == "77.50"
        assert row["cbo"]["codigo"] == "223505"
        assert row["prestador"] == {
            "id": sample_production[1].prd_prest,
            "codigo": "001",
            "nomeRazaoSocial": "Hospital Municipal São José",
        }
        assert row["procedimento"]["descricao"] == "Radiografia de tórax"
        assert row["sRub"]["codigo"] == "MAC001"

    def test_absent_dimensions_are_null(self, client: TestClient, operator_headers, sample_production):
        body = get_report(client, operator_headers, filters=[{"field": "prdQtd", "operator": "equals", "value": 10}]).json()
        row = body["data"][0]
        assert row["cbo"] is None
        assert row["prestador"] is None
        assert row["procedimento"] is None
        assert row["sRub"] is None

    def test_date_bounds_are_inclusive(self, client: TestClient, operator_headers, sample_production):
        body = get_report(
            client, operator_headers, filters={"dateFrom": "2024-01-10T00:00:00", "dateTo": "2024-01-31"}
        ).json()
        assert body["total"] == 2
        assert {row["prdQtd"] for row in body["data"]} == {2, 5}

    def test_pagination(self, client: TestClient, db_session, operator_headers):
        start = datetime(2024, 1, 1)
        db_session.add_all(
            ConsultaProd(
                prd_dtcomp=start + timedelta(days=index),
                prd_dtreal=start + timedelta(days=index),
                prd_qtd=index,
                prd_vl_p=Decimal("1.00"),
            )
            for index in range(15)
        )
        db_session.commit()

        body = get_report(client, operator_headers, page=2, limit=10).json()
        assert body["total"] == 15
        assert len(body["data"]) == 5
        assert [row["prdQtd"] for row in body["data"]] == [4, 3, 2, 1, 0]

    def test_page_beyond_end(self, client: TestClient, operator_headers, sample_production):
        body = get_report(client, operator_headers, page=9, limit=10).json()
        assert body == {"data": [], "total": 4}

    def test_limit_is_not_clamped(self, client: TestClient, operator_headers, sample_production):
        assert get_report(client, operator_headers, limit=5000).status_code == 200

    def test_or_connector(self, client: TestClient, operator_headers, sample_production):
        filters = {
            "filter_0": {"field": "cbo.codigo", "operator": "equals", "value": "223505"},
            "filter_1": {"field": "prdQtd", "operator": "equals", "value": "10", "logicalOperator": "OR"},
        }
        body = get_report(client, operator_headers, filters=filters).json()
        assert {row["prdQtd"] for row in body["data"]} == {5, 10}

    def test_invalid_filters(self, client: TestClient, operator_headers, sample_production):
        response = client.get("/api/reports/data", params={"filters": "{bad"}, headers=operator_headers)
        assert response.status_code == 400

        response = get_report(client, operator_headers, filters=[{"field": "senha", "operator": "equals", "value": "1"}])
        assert response.status_code == 400
        assert "senha" in response.json()["detail"]

        response = get_report(client, operator_headers, filters={"dateFrom": "31/01/2024"})
        assert response.status_code == 400

        response = get_report(client, operator_headers, filters=[{"field": ["prdQtd"], "value": "1"}])
        assert response.status_code == 400

    def test_invalid_paging(self, client: TestClient, operator_headers):
        assert get_report(client, operator_headers, page=0).status_code == 400
        assert get_report(client, operator_headers, limit=0).status_code == 400


class TestEndToEnd:
    def test_reference_rows_to_report(self, client: TestClient, operator_headers):
        prestador = client.post(
            "/api/prestador",
            json={"codigo": "001", "nomeRazaoSocial": "Hospital", "cnpjCpf": "123", "tipo": "pessoa_juridica"},
            headers=operator_headers,
        ).json()
        procedimento = client.post(
            "/api/procedimento",
            json={"codigo": "X", "descricao": "Consulta", "valor": "10.00", "complexidade": "baixa"},
            headers=operator_headers,
        ).json()
        assert procedimento["valor"] == "10.00"

        record = client.post(
            "/api/consulta-prod",
            json={
                "prdDtcomp": "2024-01-15T00:00:00",
                "prdDtreal": "2024-01-15T00:00:00",
                "prdPrest": prestador["id"],
                "prdProc": procedimento["id"],
                "prdQtd": 2,
                "prdVlP": "20.00",
            },
            headers=operator_headers,
        )
        assert record.status_code == 201

        body = get_report(client, operator_headers, filters={}).json()
        assert body["total"] == 1
        row = body["data"][0]
        assert row["prestador"]["codigo"] == "001"
        assert row["procedimento"]["codigo"] == "X"
        assert row["prdQtd"] == 2
        assert row["prdVlP"] == "20.00"

        by_provider = get_report(client, operator_headers, filters={"prestador": prestador["id"]}).json()
        assert by_provider["total"] == 1


class TestExport:
    def test_export_returns_sample_and_is_audited(self, client: TestClient, admin_headers, sample_production):
        response = client.post(
            "/api/reports/export",
            json={"format": "excel", "filters": {"dateFrom": "2024-01-01"}, "fields": ["prdDtcomp", "prestador.codigo"]},
            headers=admin_headers,
        )
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["total"] == 4
        assert len(body["data"]) == 4
        assert "EXCEL" in body["message"]

        audit = client.get("/api/audit", params={"action": "export"}, headers=admin_headers).json()
        assert audit["total"] == 1
        entry = audit["data"][0]
        assert entry["tableName"] == "consulta_prod"
        assert entry["newValues"]["format"] == "excel"
        assert entry["newValues"]["filters"]["criteria"] == {"dateFrom": "2024-01-01"}

    def test_filters_as_json_string(self, client: TestClient, operator_headers, sample_production):
        response = client.post(
            "/api/reports/export",
            json={"format": "csv", "filters": json.dumps([{"field": "prdQtd", "operator": "greaterThan", "value": "4"}])},
            headers=operator_headers,
        )
        assert response.json()["total"] == 2

    def test_unknown_format(self, client: TestClient, operator_headers):
        response = client.post("/api/reports/export", json={"format": "docx"}, headers=operator_headers)
        assert response.status_code == 400

    def test_unknown_export_field(self, client: TestClient, operator_headers):
        response = client.post("/api/reports/export", json={"format": "pdf", "fields": ["password"]}, headers=operator_headers)
        assert response.status_code == 400
