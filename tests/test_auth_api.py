"""API tests for /auth routes and the Authorization header gate."""

import unittest
from datetime import UTC, datetime, timedelta

from inkpost.core.security import TokenService
from inkpost.models import User
from inkpost.services.accounts import identity_claims
from support import add_user, auth_header, clear_overrides, make_client, make_session_factory

PREFIX = "/api/v1/auth"


class AuthApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        self.tokens = TokenService("api-secret")
        self.client = make_client(self.session_factory, self.tokens)

    def tearDown(self) -> None:
        clear_overrides()

    def register(self, username: str = "ada", email: str = "ada@example.com", password: str = "s3cret!"):
        return self.client.post(
            f"{PREFIX}/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str = "ada@example.com", password: str = "s3cret!"):
        return self.client.post(f"{PREFIX}/login", json={"email": email, "password": password})


class TestRegisterEndpoint(AuthApiTestCase):
    def test_success_returns_public_view(self) -> None:
        response = self.register()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(set(body["user"]), {"id", "username", "email"})
        self.assertEqual(body["user"]["username"], "ada")
        self.assertNotIn("token", body)

    def test_duplicate_email_is_400(self) -> None:
        self.register()
        response = self.register(username="lovelace")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["detail"], "User already exists with this email or username"
        )

    def test_invalid_body_is_422(self) -> None:
        response = self.register(password="123")
        self.assertEqual(response.status_code, 422)
        response = self.register(email="not-an-email")
        self.assertEqual(response.status_code, 422)


class TestLoginEndpoint(AuthApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register()

    def test_success_returns_usable_token(self) -> None:
        response = self.login()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["email"], "ada@example.com")
        me = self.client.get(f"{PREFIX}/user", headers={"Authorization": f"Bearer {body['token']}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["username"], "ada")

    def test_failures_share_status_and_body(self) -> None:
        wrong_password = self.login(password="wrong!!")
        unknown_email = self.login(email="nobody@example.com")
        self.assertEqual(wrong_password.status_code, 400)
        self.assertEqual(unknown_email.status_code, 400)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertEqual(wrong_password.json(), {"detail": "Invalid credentials"})


class TestAuthGate(AuthApiTestCase):
    """GET /auth/user is protected by the Authorization header gate."""

    def setUp(self) -> None:
        super().setUp()
        with self.session_factory() as db:
            self.user = add_user(db, "ada")
            self.token = self.tokens.issue(identity_claims(self.user), timedelta(hours=1))

    def get_me(self, headers: dict[str, str] | None = None):
        return self.client.get(f"{PREFIX}/user", headers=headers or {})

    def test_missing_header(self) -> None:
        response = self.get_me()
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "No token, authorization denied")

    def test_empty_header(self) -> None:
        response = self.get_me({"Authorization": ""})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "No token, authorization denied")

    def test_bearer_and_bare_token_behave_identically(self) -> None:
        with_prefix = self.get_me({"Authorization": f"Bearer {self.token}"})
        bare = self.get_me({"Authorization": self.token})
        self.assertEqual(with_prefix.status_code, 200)
        self.assertEqual(bare.status_code, 200)
        self.assertEqual(with_prefix.json(), bare.json())

    def test_profile_excludes_password_hash(self) -> None:
        body = self.get_me({"Authorization": f"Bearer {self.token}"}).json()
        self.assertEqual(body["id"], self.user.id)
        self.assertEqual(body["role"], "user")
        self.assertNotIn("password_hash", body)
        self.assertNotIn("password", body)

    def test_prefix_is_case_sensitive(self) -> None:
        response = self.get_me({"Authorization": f"bearer {self.token}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Token is not valid")

    def test_garbage_token(self) -> None:
        response = self.get_me({"Authorization": "Bearer abc.def.ghi"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Token is not valid")

    def test_token_signed_with_other_secret(self) -> None:
        forged = TokenService("other-secret").issue(identity_claims(self.user), timedelta(hours=1))
        response = self.get_me({"Authorization": f"Bearer {forged}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Token is not valid")

    def test_expired_token(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=25)
        expired = TokenService("api-secret", clock=lambda: past).issue(
            identity_claims(self.user), timedelta(hours=24)
        )
        response = self.get_me({"Authorization": f"Bearer {expired}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Token is not valid")

    def test_non_numeric_subject(self) -> None:
        token = self.tokens.issue({"sub": "ada"}, timedelta(hours=1))
        response = self.get_me({"Authorization": token})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Token is not valid")

    def test_deleted_user_is_404(self) -> None:
        with self.session_factory() as db:
            db.query(User).filter(User.id == self.user.id).delete()
            db.commit()
        response = self.get_me(auth_header(self.tokens, self.user))
        self.assertEqual(response.status_code, 404)


class TestGoogleLoginEndpoint(AuthApiTestCase):
    def google_login(self, picture: str | None = "https://img/a.png"):
        return self.client.post(
            f"{PREFIX}/google-login",
            json={
                "email": "ada@example.com",
                "name": "Ada",
                "googleId": "g-123",
                "picture": picture,
            },
        )

    def test_returns_token_and_oauth_user_view(self) -> None:
        response = self.google_login()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(
            body["user"],
            {
                "id": body["user"]["id"],
                "name": "Ada",
                "email": "ada@example.com",
                "picture": "https://img/a.png",
            },
        )
        me = self.client.get(f"{PREFIX}/user", headers={"Authorization": body["token"]})
        self.assertEqual(me.status_code, 200)
        self.assertTrue(me.json()["isGoogleUser"])
        self.assertEqual(me.json()["googleId"], "g-123")

    def test_repeat_login_reuses_account(self) -> None:
        first = self.google_login().json()
        second = self.google_login(picture="https://img/b.png").json()
        self.assertEqual(first["user"]["id"], second["user"]["id"])
        self.assertEqual(second["user"]["picture"], "https://img/b.png")


if __name__ == "__main__":
    unittest.main()
