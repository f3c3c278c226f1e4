"""
API tests for the administrator views of the audit trail and request logs.
"""

from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from consulta_prod.logging.models import Log


class TestAuditAPI:
    def test_operator_is_forbidden(self, client: TestClient, operator_headers):
        assert client.get("/api/audit", headers=operator_headers).status_code == 403

    def test_filters(self, client: TestClient, admin_headers, admin_user):
        created = client.post(
            "/api/cbo", json={"codigo": "225125", "descricao": "Médico clínico"}, headers=admin_headers
        ).json()
        client.put(f"/api/cbo/{created['id']}", json={"descricao": "Médico"}, headers=admin_headers)
        client.post(
            "/api/srub",
            json={"codigo": "MAC001", "descricao": "Média e Alta Complexidade", "tipoFinanciamento": "Federal"},
            headers=admin_headers,
        )

        everything = client.get("/api/audit", headers=admin_headers).json()
        assert everything["total"] == 3

        cbo_only = client.get("/api/audit", params={"tableName": "cbo"}, headers=admin_headers).json()
        assert cbo_only["total"] == 2

        updates = client.get("/api/audit", params={"action": "update"}, headers=admin_headers).json()
        assert updates["total"] == 1
        assert updates["data"][0]["recordId"] == created["id"]

        by_user = client.get("/api/audit", params={"userId": admin_user.id}, headers=admin_headers).json()
        assert by_user["total"] == 3

    def test_unknown_action(self, client: TestClient, admin_headers):
        assert client.get("/api/audit", params={"action": "drop"}, headers=admin_headers).status_code == 400


class TestLogsAPI:
    def _add_logs(self, db_session):
        now = datetime.now()
        db_session.add_all(
            [
                Log(timestamp=now, method="GET", path="/api/cbo", status_code=200, username="operador"),
                Log(timestamp=now, method="POST", path="/api/cbo", status_code=409, username="operador"),
                Log(timestamp=now, method="GET", path="/api/users", status_code=403, username="operador"),
                Log(timestamp=now - timedelta(hours=48), method="GET", path="/api/cbo", status_code=200),
            ]
        )
        db_session.commit()

    def test_operator_is_forbidden(self, client: TestClient, operator_headers):
        assert client.get("/api/logs", headers=operator_headers).status_code == 403

    def test_window_and_total_header(self, client: TestClient, db_session, admin_headers):
        self._add_logs(db_session)

        response = client.get("/api/logs", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()) == 3
        assert response.headers["X-Total-Count"] == "3"

    def test_status_and_search_filters(self, client: TestClient, db_session, admin_headers):
        self._add_logs(db_session)

        errors = client.get("/api/logs", params={"status_min": 400}, headers=admin_headers).json()
        assert sorted(log["statusCode"] for log in errors) == [403, 409]

        users = client.get("/api/logs", params={"search": "users"}, headers=admin_headers).json()
        assert [log["path"] for log in users] == ["/api/users"]

        assert client.get("/api/logs", params={"search": "%"}, headers=admin_headers).json() == []

    def test_inverted_status_range(self, client: TestClient, admin_headers):
        response = client.get("/api/logs", params={"status_min": 500, "status_max": 400}, headers=admin_headers)
        assert response.status_code == 400


class TestRequestLogging:
    def test_password_is_masked(self):
        from consulta_prod.logging.middleware import mask_sensitive_body

        masked = mask_sensitive_body('{"username": "admin", "password": "admin123", "nested": {"newPassword": "x"}}')
        assert "admin123" not in masked
        assert '"username": "admin"' in masked
        assert '"newPassword": "********"' in masked

    def test_non_json_body_passes_through(self):
        from consulta_prod.logging.middleware import mask_sensitive_body

        assert mask_sensitive_body("plain text") == "plain text"
