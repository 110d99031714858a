"""Integration tests for /api/auth: registration, login, verify and role assignment."""

import unittest
from datetime import timedelta

from fastapi.testclient import TestClient

from catalog.models.user import User
from tests.support import add_user, bearer, make_app, make_settings

ANN = {"name": "Ann", "email": "a@x.com", "password": "secret1"}


class AuthApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = make_app()
        self.client = TestClient(self.app)

    def register(self, **overrides: str):
        return self.client.post("/api/auth/register", json={**ANN, **overrides})

    def post_raw(self, path: str, body: str):
        """Send a JSON body verbatim, so escapes like lone surrogates reach the server intact."""
        return self.client.post(path, content=body.encode("ascii"), headers={"Content-Type": "application/json"})

    def subject(self, token: str) -> str:
        return self.app.state.token_service.verify(token)["sub"]


class TestRegister(AuthApiTestCase):
    def test_register_returns_token_and_public_user(self) -> None:
        resp = self.register()
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["message"], "User registered successfully")
        self.assertEqual(set(data["user"]), {"id", "name", "email", "role"})
        self.assertEqual(data["user"]["name"], "Ann")
        self.assertEqual(data["user"]["email"], "a@x.com")
        self.assertEqual(data["user"]["role"], "user")
        self.assertEqual(self.subject(data["token"]), data["user"]["id"])

    def test_token_verifies_to_same_projection(self) -> None:
        data = self.register().json()
        resp = self.client.get("/api/auth/verify", headers=bearer(data["token"]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"user": data["user"]})

    def test_password_is_stored_hashed(self) -> None:
        user_id = self.register().json()["user"]["id"]
        db = self.app.state.session_factory()
        try:
            stored = db.get(User, user_id).password_hash
        finally:
            db.close()
        self.assertNotEqual(stored, "secret1")
        self.assertTrue(self.app.state.password_hasher.verify("secret1", stored))

    def test_missing_fields(self) -> None:
        for field in ("name", "email", "password"):
            with self.subTest(field=field):
                body = {k: v for k, v in ANN.items() if k != field}
                resp = self.client.post("/api/auth/register", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json(), {"message": "All fields are required"})

    def test_empty_fields(self) -> None:
        resp = self.register(name="")
        self.assertEqual(resp.status_code, 400)

    def test_short_password(self) -> None:
        resp = self.register(password="12345")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Password must be at least 6 characters")

    def test_password_over_bcrypt_limit(self) -> None:
        resp = self.register(password="x" * 73)
        self.assertEqual(resp.status_code, 400)

    def test_duplicate_email(self) -> None:
        self.assertEqual(self.register().status_code, 201)
        resp = self.register(name="Other")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "Email already registered"})

    def test_email_is_case_sensitive(self) -> None:
        self.assertEqual(self.register().status_code, 201)
        self.assertEqual(self.register(email="A@x.com").status_code, 201)

    def test_requested_admin_role_is_ignored(self) -> None:
        resp = self.register(role="admin")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["role"], "user")
        self.assertEqual(self.app.state.token_service.verify(resp.json()["token"])["role"], "user")

    def test_non_json_body(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("message", resp.json())

    def test_lone_surrogate_is_rejected(self) -> None:
        resp = self.post_raw(
            "/api/auth/register",
            r'{"name": "Ann", "email": "a@x.com", "password": "\ud800secret"}',
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "Fields must be valid UTF-8 text"})


class TestLogin(AuthApiTestCase):
    def test_ann_scenario(self) -> None:
        registered = self.register()
        self.assertEqual(registered.status_code, 201)
        first_token = registered.json()["token"]

        wrong = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(wrong.json(), {"message": "Invalid email or password"})

        ok = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
        self.assertEqual(ok.status_code, 200)
        data = ok.json()
        self.assertEqual(data["message"], "Login successful")
        self.assertNotEqual(data["token"], first_token)
        self.assertEqual(self.subject(data["token"]), self.subject(first_token))
        self.assertEqual(data["user"], registered.json()["user"])

    def test_unknown_email_same_error_as_wrong_password(self) -> None:
        self.register()
        unknown = self.client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})
        wrong = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret2"})
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())

    def test_email_lookup_is_exact(self) -> None:
        self.register()
        resp = self.client.post("/api/auth/login", json={"email": "A@X.COM", "password": "secret1"})
        self.assertEqual(resp.status_code, 401)

    def test_missing_fields(self) -> None:
        resp = self.client.post("/api/auth/login", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "Email and password are required"})

    def test_stored_password_plus_suffix_is_rejected(self) -> None:
        self.assertEqual(self.register(password="p" * 72).status_code, 201)
        ok = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "p" * 72})
        self.assertEqual(ok.status_code, 200)
        resp = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "p" * 72 + "WRONG"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Invalid email or password"})

    def test_lone_surrogate_credentials_are_invalid(self) -> None:
        self.register()
        for body in (
            r'{"email": "a@x.com", "password": "\ud800secret"}',
            r'{"email": "\ud800a@x.com", "password": "secret1"}',
        ):
            with self.subTest(body=body):
                resp = self.post_raw("/api/auth/login", body)
                self.assertEqual(resp.status_code, 401)
                self.assertEqual(resp.json(), {"message": "Invalid email or password"})


class TestVerify(AuthApiTestCase):
    def assert_unauthorized(self, resp) -> None:
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "unauthorized"})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_missing_header(self) -> None:
        self.assert_unauthorized(self.client.get("/api/auth/verify"))

    def test_wrong_scheme(self) -> None:
        token = self.register().json()["token"]
        self.assert_unauthorized(
            self.client.get("/api/auth/verify", headers={"Authorization": f"Token {token}"})
        )

    def test_empty_bearer(self) -> None:
        self.assert_unauthorized(self.client.get("/api/auth/verify", headers={"Authorization": "Bearer "}))

    def test_invalid_token(self) -> None:
        self.assert_unauthorized(self.client.get("/api/auth/verify", headers=bearer("not.a.token")))

    def test_expired_token(self) -> None:
        user_id = self.register().json()["user"]["id"]
        token = self.app.state.token_service.issue(user_id, "user", ttl=timedelta(seconds=-30))
        self.assert_unauthorized(self.client.get("/api/auth/verify", headers=bearer(token)))

    def test_deleted_user(self) -> None:
        data = self.register().json()
        db = self.app.state.session_factory()
        try:
            db.delete(db.get(User, data["user"]["id"]))
            db.commit()
        finally:
            db.close()
        self.assert_unauthorized(self.client.get("/api/auth/verify", headers=bearer(data["token"])))

    def test_token_from_other_secret(self) -> None:
        other = make_app(make_settings(JWT_SECRET="a-completely-different-secret-0123456789"))
        _, foreign_token = add_user(other)
        self.assert_unauthorized(self.client.get("/api/auth/verify", headers=bearer(foreign_token)))


class TestRoleAssignment(AuthApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        _, self.admin_token = add_user(self.app)
        data = self.register().json()
        self.ann_id = data["user"]["id"]
        self.ann_token = data["token"]

    def test_admin_promotes_user(self) -> None:
        resp = self.client.patch(
            f"/api/auth/users/{self.ann_id}/role",
            json={"role": "admin"},
            headers=bearer(self.admin_token),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["role"], "admin")

        # The role is read from the store, so Ann's existing token now passes the admin gate.
        created = self.client.post("/api/books", json={"title": "Dune"}, headers=bearer(self.ann_token))
        self.assertEqual(created.status_code, 201)

    def test_user_cannot_assign_roles(self) -> None:
        resp = self.client.patch(
            f"/api/auth/users/{self.ann_id}/role",
            json={"role": "admin"},
            headers=bearer(self.ann_token),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Access denied. Admin only."})

    def test_unknown_user(self) -> None:
        resp = self.client.patch(
            "/api/auth/users/does-not-exist/role",
            json={"role": "admin"},
            headers=bearer(self.admin_token),
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "User not found"})

    def test_invalid_role(self) -> None:
        resp = self.client.patch(
            f"/api/auth/users/{self.ann_id}/role",
            json={"role": "superuser"},
            headers=bearer(self.admin_token),
        )
        self.assertEqual(resp.status_code, 400)

    def test_list_users_admin_only(self) -> None:
        resp = self.client.get("/api/auth/users", headers=bearer(self.admin_token))
        self.assertEqual(resp.status_code, 200)
        users = resp.json()["users"]
        self.assertEqual({u["email"] for u in users}, {"admin@x.com", "a@x.com"})
        for user in users:
            self.assertNotIn("password_hash", user)

        self.assertEqual(self.client.get("/api/auth/users", headers=bearer(self.ann_token)).status_code, 403)
        self.assertEqual(self.client.get("/api/auth/users").status_code, 401)
