"""
API tests for authentication, users and clients.
"""


class TestAuth:
    """Login, registration and token handling."""

    def test_login_and_me(self, client, admin_user):
        response = client.post("/api/v1/auth/login", json={"email": "admin@catering.io", "password": "password123"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "admin"

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "admin@catering.io"

    def test_login_wrong_password(self, client, admin_user):
        response = client.post("/api/v1/auth/login", json={"email": "admin@catering.io", "password": "wrong-password"})
        assert response.status_code == 401

    def test_register_creates_org_admin(self, client):
        response = client.post("/api/v1/auth/register", json={
            "email": "owner@newcaterer.io",
            "password": "password123",
            "full_name": "New Owner",
            "organization_name": "New Caterer",
        })
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "admin"

    def test_refresh(self, client, admin_user):
        login = client.post("/api/v1/auth/login", json={"email": "admin@catering.io", "password": "password123"}).json()
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})
        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_access_token_is_not_a_refresh_token(self, client, admin_user):
        login = client.post("/api/v1/auth/login", json={"email": "admin@catering.io", "password": "password123"}).json()
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": login["access_token"]})
        assert response.status_code == 401

    def test_missing_token(self, client):
        assert client.get("/api/v1/auth/me").status_code in (401, 403)

    def test_garbage_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestUsers:
    """Organization user management."""

    def test_admin_creates_employee(self, client, admin_headers):
        response = client.post("/api/v1/users", headers=admin_headers, json={
            "email": "server@catering.io",
            "full_name": "Server",
            "password": "password123",
            "role": "employee",
        })
        assert response.status_code == 201
        assert response.json()["role"] == "employee"

    def test_employee_cannot_manage_users(self, client, employee_headers):
        assert client.get("/api/v1/users", headers=employee_headers).status_code == 403

    def test_admin_cannot_demote_self(self, client, admin_headers, admin_user):
        response = client.patch(f"/api/v1/users/{admin_user.id}", headers=admin_headers, json={"role": "client"})
        assert response.status_code == 400


class TestClients:
    """Client records."""

    def test_crud(self, client, admin_headers):
        created = client.post("/api/v1/clients", headers=admin_headers, json={"name": "TechCorp"})
        assert created.status_code == 201
        client_id = created.json()["id"]

        updated = client.patch(f"/api/v1/clients/{client_id}", headers=admin_headers, json={"phone": "555-0100"})
        assert updated.json()["phone"] == "555-0100"

        listing = client.get("/api/v1/clients", headers=admin_headers, params={"search": "tech"}).json()
        assert listing["total"] == 1

        assert client.delete(f"/api/v1/clients/{client_id}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/v1/clients/{client_id}", headers=admin_headers).status_code == 404

    def test_client_role_cannot_view_clients(self, client, client_headers):
        assert client.get("/api/v1/clients", headers=client_headers).status_code == 403


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Frame-Options"] == "DENY"
