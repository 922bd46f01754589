"""
API tests for the role permission matrix.
"""
from app.config.permissions import ALL_PERMISSIONS


class TestPermissionApi:

    def test_catalog(self, client, client_headers):
        body = client.get("/api/v1/permissions/catalog", headers=client_headers).json()
        assert len(body["permissions"]) == len(ALL_PERMISSIONS)
        assert "events.view" in body["defaults"]["client"]

    def test_matrix_seeds_on_first_read(self, client, admin_headers):
        body = client.get("/api/v1/permissions/matrix", headers=admin_headers).json()
        assert set(body["matrix"]) == {"employee", "client"}
        assert body["matrix"]["employee"]["events.create"] is True
        assert len(body["matrix"]["client"]) == len(ALL_PERMISSIONS)

    def test_matrix_requires_admin_permission(self, client, employee_headers):
        assert client.get("/api/v1/permissions/matrix", headers=employee_headers).status_code == 403

    def test_update_grants_and_audits(self, client, admin_headers, employee_headers):
        assert client.get("/api/v1/revenue/analytics", headers=employee_headers).status_code == 403

        response = client.put("/api/v1/permissions/matrix", headers=admin_headers, json={
            "matrix": {"employee": {"analytics.view": True, "events.view": True}},
        })
        assert response.status_code == 200
        assert response.json()["matrix"]["employee"]["analytics.view"] is True

        assert client.get("/api/v1/revenue/analytics", headers=employee_headers).status_code == 200

        entries = client.get("/api/v1/permissions/audit", headers=admin_headers).json()["entries"]
        assert len(entries) == 1
        assert entries[0]["permission_key"] == "analytics.view"
        assert entries[0]["old_granted"] is False
        assert entries[0]["new_granted"] is True

    def test_revoking_blocks_access(self, client, admin_headers, client_headers):
        client.put("/api/v1/permissions/matrix", headers=admin_headers, json={
            "matrix": {"client": {"events.view": False}},
        })
        assert client.get("/api/v1/events", headers=client_headers).status_code == 403

    def test_my_permissions(self, client, employee_headers, admin_headers):
        mine = client.get("/api/v1/permissions/me", headers=employee_headers).json()
        assert mine["role"] == "employee"
        assert "events.create" in mine["permissions"]
        assert "admin.permissions" not in mine["permissions"]

        admin = client.get("/api/v1/permissions/me", headers=admin_headers).json()
        assert sorted(admin["permissions"]) == sorted(ALL_PERMISSIONS)
