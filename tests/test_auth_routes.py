# =============================================================================
# tests/test_auth_routes.py - Login & Registration Endpoint Tests
# =============================================================================

from __future__ import annotations

from tests.conftest import FakeAuthError


class TestLogin:
    """POST /api/v1/auth/login"""

    def test_login_returns_token_and_profile(self, client, fake_supabase):
        fake_supabase.add_user(
            "tok-1", "u1", "ana@lvlup.com", role="customer", password="secret1"
        )

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token"] == "tok-1"
        assert body["user"]["id"] == "u1"
        assert body["user"]["role"] == "customer"

    def test_wrong_password(self, client, fake_supabase):
        fake_supabase.add_user(
            "tok-1", "u1", "ana@lvlup.com", role="customer", password="secret1"
        )

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ana@lvlup.com", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Credenciales inválidas"}

    def test_login_without_profile(self, client, fake_supabase):
        fake_supabase.add_user("tok-1", "u1", "ana@lvlup.com", password="secret1")

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Perfil no encontrado"}

    def test_profile_lookup_fails(self, client, fake_supabase):
        """Test a store failure while reading the profile is a 500."""
        fake_supabase.add_user(
            "tok-1", "u1", "ana@lvlup.com", role="customer", password="secret1"
        )
        fake_supabase.table("profiles").error = RuntimeError("connection reset")

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Error interno de autenticación"}

    def test_login_with_unknown_role(self, client, fake_supabase):
        fake_supabase.add_user(
            "tok-1", "u1", "ana@lvlup.com", role="superuser", password="secret1"
        )

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Perfil inválido"}

    def test_missing_fields(self, client):
        response = client.post("/api/v1/auth/login", json={"email": "ana@lvlup.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Datos de entrada inválidos"
        assert any(d["field"].endswith("password") for d in body["details"])


class TestRegister:
    """POST /api/v1/auth/register"""

    def test_register_creates_customer_profile(self, client, fake_supabase):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["role"] == "customer"
        assert body["user"]["name"] == "Ana"
        assert body["token"].startswith("token-")

        profiles = fake_supabase.table("profiles").rows
        assert profiles == [
            {"id": body["user"]["id"], "email": "ana@lvlup.com", "role": "customer", "name": "Ana"}
        ]

    def test_registered_token_resolves(self, client, fake_supabase):
        """Test the token from registration works on /me."""
        token = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        ).json()["token"]

        response = client.get("/api/v1/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["role"] == "customer"

    def test_register_signs_in_when_no_session(self, client, fake_supabase):
        """Test a follow-up sign-in provides the token when sign-up has none."""
        fake_supabase.auth.sign_up_opens_session = False

        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 201
        assert response.json()["token"].startswith("token-")

    def test_no_session_and_sign_in_fails(self, client, fake_supabase):
        """Test the user and profile exist but no token could be obtained."""
        fake_supabase.auth.sign_up_opens_session = False
        fake_supabase.auth.sign_in_error = FakeAuthError("Email not confirmed")

        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Usuario creado, pero sin sesión"}
        assert len(fake_supabase.table("profiles").rows) == 1

    def test_sign_up_refused(self, client, fake_supabase):
        fake_supabase.auth.sign_up_error = FakeAuthError("User already registered")

        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "No se pudo crear el usuario"}

    def test_profile_insert_fails(self, client, fake_supabase):
        fake_supabase.table("profiles").error = RuntimeError("duplicate key")

        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Usuario creado, pero fallo al guardar perfil"}

    def test_short_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ana", "email": "ana@lvlup.com", "password": "123"},
        )

        assert response.status_code == 400
