"""Unit tests for the auth gate: token extraction order, verification and role enforcement."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

from cosmos.api.auth import extract_token, require_admin, verify_request
from cosmos.core.errors import ForbiddenError, UnauthenticatedError
from cosmos.core.security import create_access_token

from support import TEST_SECRET, make_settings


def _request(cookies: dict[str, str] | None = None, headers: dict[str, str] | None = None) -> SimpleNamespace:
    """Minimal stand-in for a Starlette request carrying app state, cookies and headers."""
    app = SimpleNamespace(state=SimpleNamespace(settings=make_settings(), jwt_secret=TEST_SECRET))
    return SimpleNamespace(app=app, cookies=cookies or {}, headers=headers or {})


def _token(role: str = "admin", **kwargs: object) -> str:
    return create_access_token("alice", role, 1, secret=TEST_SECRET, **kwargs)


class TestExtractToken(unittest.TestCase):
    def test_cookie_is_preferred_over_header(self) -> None:
        request = _request(
            cookies={"auth_token": "from-cookie"},
            headers={"Authorization": "Bearer from-header"},
        )
        self.assertEqual(extract_token(request), "from-cookie")

    def test_bearer_header_used_without_cookie(self) -> None:
        request = _request(headers={"Authorization": "Bearer from-header"})
        self.assertEqual(extract_token(request), "from-header")

    def test_other_schemes_ignored(self) -> None:
        request = _request(headers={"Authorization": "Basic YWxpY2U6cHc="})
        self.assertIsNone(extract_token(request))

    def test_nothing_present(self) -> None:
        self.assertIsNone(extract_token(_request()))


class TestVerifyRequest(unittest.TestCase):
    def test_no_token_redirects_to_login(self) -> None:
        with self.assertRaises(UnauthenticatedError) as ctx:
            verify_request(_request())
        self.assertEqual(ctx.exception.redirect_to, "/admin/login")

    def test_expired_token_redirects_to_login(self) -> None:
        token = _token(now=datetime.now(UTC) - timedelta(days=2))
        with self.assertRaises(UnauthenticatedError) as ctx:
            verify_request(_request(cookies={"auth_token": token}))
        self.assertEqual(ctx.exception.redirect_to, "/admin/login")

    def test_foreign_signature_redirects_to_login(self) -> None:
        token = create_access_token("mallory", "admin", 1, secret="forged")
        with self.assertRaises(UnauthenticatedError):
            verify_request(_request(headers={"Authorization": f"Bearer {token}"}))

    def test_valid_token_returns_claims(self) -> None:
        claims = verify_request(_request(cookies={"auth_token": _token()}))
        self.assertEqual(claims.username, "alice")
        self.assertTrue(claims.is_admin)


class TestRequireAdmin(unittest.TestCase):
    def test_admin_claims_pass_through(self) -> None:
        claims = verify_request(_request(cookies={"auth_token": _token("admin")}))
        self.assertIs(require_admin(claims), claims)

    def test_non_admin_is_forbidden_without_redirect(self) -> None:
        claims = verify_request(_request(cookies={"auth_token": _token("user")}))
        with self.assertRaises(ForbiddenError) as ctx:
            require_admin(claims)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertNotIsInstance(ctx.exception, UnauthenticatedError)


if __name__ == "__main__":
    unittest.main()
