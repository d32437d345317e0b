"""HTTP tests through FastAPI's TestClient: login flow, gate outcomes, public pages and admin CRUD."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from cosmos.core.security import create_access_token
from cosmos.main import create_app
from cosmos.models import Base

from support import ADMIN_PASSWORD, ADMIN_USERNAME, FAST_BCRYPT_ROUNDS, TEST_SECRET, make_settings

ANDROMEDA = {"name": "Andromeda", "type": "spiral", "description": "..."}


class AppTestCase(unittest.TestCase):
    """Fresh app and in-memory database per test; the bootstrap admin is user 1."""

    def setUp(self) -> None:
        patcher = patch("cosmos.core.security.BCRYPT_ROUNDS", FAST_BCRYPT_ROUNDS)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.app = create_app(make_settings())
        Base.metadata.create_all(self.app.state.engine)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def login(self) -> None:
        response = self.client.post(
            "/admin/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 303)

    def bearer(self, role: str = "admin", **kwargs: object) -> dict[str, str]:
        token = create_access_token("someone", role, 99, secret=TEST_SECRET, **kwargs)
        return {"Authorization": f"Bearer {token}"}


class TestLoginFlow(AppTestCase):
    def test_valid_admin_login_sets_cookie_and_redirects(self) -> None:
        response = self.client.post(
            "/admin/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin")
        cookie = response.headers["set-cookie"]
        self.assertIn("auth_token=", cookie)
        self.assertIn("HttpOnly", cookie)
        self.assertIn("Max-Age=86400", cookie)
        self.assertIn("Path=/", cookie)

        dashboard = self.client.get("/admin")
        self.assertEqual(dashboard.status_code, 200)
        body = dashboard.json()
        self.assertEqual(body["username"], ADMIN_USERNAME)
        self.assertEqual(body["admin_count"], 1)

    def test_wrong_password_stays_on_login_with_error(self) -> None:
        response = self.client.post(
            "/admin/login",
            json={"username": ADMIN_USERNAME, "password": "wrong-password"},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Invalid username or password")
        self.assertNotIn("set-cookie", response.headers)

    def test_browser_form_post_logs_in(self) -> None:
        response = self.client.post(
            "/admin/login",
            data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 303)
        self.assertIn("auth_token=", response.headers["set-cookie"])

    def test_over_long_password_is_rejected_without_echo(self) -> None:
        password = ADMIN_PASSWORD + "x" * 200
        response = self.client.post(
            "/admin/login",
            json={"username": ADMIN_USERNAME, "password": password},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Invalid username or password")
        self.assertNotIn(password, response.text)

    def test_unknown_user_gets_same_message(self) -> None:
        response = self.client.post(
            "/admin/login", json={"username": "ghost", "password": "whatever1"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Invalid username or password")

    def test_non_admin_cannot_log_in(self) -> None:
        self.login()
        self.client.post(
            "/admin/users/new",
            json={"username": "bob", "email": "bob@example.com", "password": "bobpass1", "role": "user"},
        )
        self.client.post("/admin/logout")
        response = self.client.post(
            "/admin/login", json={"username": "bob", "password": "bobpass1"}, follow_redirects=False
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"], "Administrator rights required")

    def test_login_page_redirects_authenticated_admin(self) -> None:
        anonymous = self.client.get("/admin/login", follow_redirects=False)
        self.assertEqual(anonymous.status_code, 200)
        self.assertEqual(anonymous.json()["current_page"], "admin_login")
        self.login()
        again = self.client.get("/admin/login", follow_redirects=False)
        self.assertEqual(again.status_code, 302)
        self.assertEqual(again.headers["location"], "/admin")

    def test_logout_clears_cookie(self) -> None:
        self.login()
        response = self.client.post("/admin/logout", follow_redirects=False)
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login")
        self.assertIn("Max-Age=0", response.headers["set-cookie"])
        after = self.client.get("/admin", follow_redirects=False)
        self.assertEqual(after.status_code, 302)


class TestAdminGate(AppTestCase):
    def test_no_token_redirects_to_login(self) -> None:
        response = self.client.get("/admin/planets", follow_redirects=False)
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/admin/login")

    def test_bearer_header_is_accepted(self) -> None:
        response = self.client.get("/admin", headers=self.bearer())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["username"], "someone")

    def test_non_admin_token_is_forbidden(self) -> None:
        response = self.client.get("/admin", headers=self.bearer("user"), follow_redirects=False)
        self.assertEqual(response.status_code, 403)

    def test_expired_token_redirects(self) -> None:
        headers = self.bearer(now=datetime.now(UTC) - timedelta(hours=30))
        response = self.client.get("/admin", headers=headers, follow_redirects=False)
        self.assertEqual(response.status_code, 302)

    def test_forged_token_redirects(self) -> None:
        token = create_access_token("mallory", "admin", 1, secret="not-the-secret")
        response = self.client.get(
            "/admin", headers={"Authorization": f"Bearer {token}"}, follow_redirects=False
        )
        self.assertEqual(response.status_code, 302)


class TestPublicPages(AppTestCase):
    def test_home_and_health(self) -> None:
        home = self.client.get("/")
        self.assertEqual(home.status_code, 200)
        self.assertEqual(home.json()["planet_count"], 0)
        health = self.client.get("/health")
        self.assertEqual(health.json()["database"], "connected")

    def test_unknown_ids_are_404(self) -> None:
        self.assertEqual(self.client.get("/planets/999").status_code, 404)
        self.assertEqual(self.client.get("/galaxies/999").status_code, 404)

    def test_non_numeric_id_is_rejected_by_router(self) -> None:
        self.assertEqual(self.client.get("/planets/abc").status_code, 422)

    def test_listing_and_detail(self) -> None:
        self.login()
        self.client.post("/admin/galaxies/new", json=ANDROMEDA)
        self.client.post(
            "/admin/planets/new",
            json={"name": "X", "type": "gas giant", "description": "d", "galaxy_id": 1},
        )
        self.client.post("/admin/planets/new", json={"name": "Lonely", "type": "rogue", "description": "d"})

        planets = self.client.get("/planets").json()["planets"]
        self.assertEqual([p["name"] for p in planets], ["Lonely", "X"])
        self.assertIsNone(planets[0]["galaxy_name"])
        self.assertEqual(planets[0]["galaxy_label"], "Not specified")
        self.assertEqual(planets[1]["galaxy_name"], "Andromeda")

        galaxy = self.client.get("/galaxies/1").json()
        self.assertEqual(galaxy["galaxy"]["name"], "Andromeda")
        self.assertIsNone(galaxy["galaxy"]["diameter_ly"])
        self.assertEqual([p["name"] for p in galaxy["planets"]], ["X"])


class TestAdminCatalog(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login()

    def test_galaxy_delete_blocked_until_planets_removed(self) -> None:
        created = self.client.post("/admin/galaxies/new", json=ANDROMEDA, follow_redirects=False)
        self.assertEqual(created.status_code, 303)
        self.assertTrue(created.headers["location"].startswith("/admin/galaxies?success="))
        planet = self.client.post(
            "/admin/planets/new",
            json={"name": "X", "type": "rocky", "description": "d", "galaxy_id": 1},
            follow_redirects=False,
        )
        self.assertEqual(planet.status_code, 303)

        confirm = self.client.get("/admin/galaxies/1/delete").json()
        self.assertTrue(confirm["blocked"])
        self.assertEqual(confirm["dependent_count"], 1)

        blocked = self.client.post("/admin/galaxies/1/delete", follow_redirects=False)
        self.assertEqual(blocked.status_code, 409)
        self.assertIn("Andromeda", blocked.json()["detail"])
        self.assertEqual(self.client.get("/galaxies/1").status_code, 200)

        self.assertEqual(
            self.client.post("/admin/planets/1/delete", follow_redirects=False).status_code, 303
        )
        self.assertEqual(
            self.client.post("/admin/galaxies/1/delete", follow_redirects=False).status_code, 303
        )
        self.assertEqual(self.client.get("/galaxies/1").status_code, 404)

    def test_create_planet_with_empty_name_renders_form_error(self) -> None:
        response = self.client.post(
            "/admin/planets/new",
            json={"name": "", "type": "rocky", "description": "d"},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"], "Planet name is required")
        self.assertEqual(self.client.get("/").json()["planet_count"], 0)

    def test_browser_form_post_creates_planet(self) -> None:
        response = self.client.post(
            "/admin/planets/new",
            data={
                "name": "Kepler-22b",
                "type": "super-earth",
                "description": "d",
                "diameter_km": "",
                "mass_kg": "",
                "orbital_period_days": "289.9",
                "discovered_year": "",
                "galaxy_id": "",
                "has_life": "on",
            },
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 303)
        planet = self.client.get("/planets/1").json()["planet"]
        self.assertEqual(planet["diameter_km"], 0.0)
        self.assertEqual(planet["orbital_period_days"], 289.9)
        self.assertIsNone(planet["discovered_year"])
        self.assertIsNone(planet["galaxy_id"])
        self.assertTrue(planet["has_life"])
        self.assertFalse(planet["is_habitable"])

    def test_malformed_number_is_rejected(self) -> None:
        response = self.client.post(
            "/admin/galaxies/new",
            json={**ANDROMEDA, "diameter_ly": "very-large"},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 422)
        self.assertIn("diameter_ly", response.json()["detail"])
        self.assertNotIn("very-large", response.text)
        self.assertEqual(self.client.get("/galaxies").json()["galaxy_count"], 0)

    def test_unsupported_content_type_is_refused(self) -> None:
        response = self.client.post(
            "/admin/galaxies/new",
            content=b"name=Andromeda",
            headers={"Content-Type": "text/plain"},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 415)

    def test_edit_galaxy(self) -> None:
        self.client.post("/admin/galaxies/new", json=ANDROMEDA)
        form = self.client.get("/admin/galaxies/1/edit").json()
        self.assertEqual(form["galaxy"]["name"], "Andromeda")
        response = self.client.post(
            "/admin/galaxies/1/edit",
            json={**ANDROMEDA, "diameter_ly": "220000"},
            follow_redirects=False,
        )
        self.assertEqual(response.status_code, 303)
        self.assertEqual(self.client.get("/galaxies/1").json()["galaxy"]["diameter_ly"], 220000.0)

    def test_admin_lists_newest_first_with_success_message(self) -> None:
        self.client.post("/admin/galaxies/new", json=ANDROMEDA)
        self.client.post("/admin/galaxies/new", json={**ANDROMEDA, "name": "Bode"})
        page = self.client.get("/admin/galaxies", params={"success": "Galaxy Bode created"}).json()
        self.assertEqual([g["name"] for g in page["galaxies"]], ["Bode", "Andromeda"])
        self.assertEqual(page["success"], "Galaxy Bode created")

    def test_planet_form_lists_galaxy_choices(self) -> None:
        self.client.post("/admin/galaxies/new", json=ANDROMEDA)
        page = self.client.get("/admin/planets/new").json()
        self.assertEqual(page["galaxies"], [{"id": 1, "name": "Andromeda"}])


class TestAdminUsers(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.login()

    def test_protected_admin_cannot_be_deleted(self) -> None:
        response = self.client.post("/admin/users/1/delete", follow_redirects=False)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.client.get("/admin/users/1").status_code, 200)

    def test_create_edit_delete_user(self) -> None:
        created = self.client.post(
            "/admin/users/new",
            json={"username": "bob", "email": "bob@example.com", "password": "bobpass1", "role": "user"},
            follow_redirects=False,
        )
        self.assertEqual(created.status_code, 303)
        listing = self.client.get("/admin/users").json()["users"]
        self.assertEqual([u["username"] for u in listing], ["bob", ADMIN_USERNAME])
        self.assertNotIn("password_hash", listing[0])

        edit = self.client.get("/admin/users/2/edit").json()
        self.assertEqual(edit["user"]["password"], "")
        updated = self.client.post(
            "/admin/users/2/edit",
            json={"username": "bobby", "email": "bob@example.com", "password": "", "role": "admin"},
            follow_redirects=False,
        )
        self.assertEqual(updated.status_code, 303)
        self.assertEqual(self.client.get("/admin/users/2").json()["user"]["role"], "admin")

        deleted = self.client.post("/admin/users/2/delete", follow_redirects=False)
        self.assertEqual(deleted.status_code, 303)
        self.assertEqual(self.client.get("/admin/users/2").status_code, 404)

    def test_duplicate_user_shows_form_error_without_password_echo(self) -> None:
        response = self.client.post(
            "/admin/users/new",
            json={
                "username": ADMIN_USERNAME,
                "email": "other@example.com",
                "password": "secret-value",
                "role": "user",
            },
        )
        self.assertEqual(response.status_code, 422)
        body = response.json()
        self.assertIn("already exists", body["error"])
        self.assertEqual(body["user"]["password"], "")


    def test_over_long_password_renders_form_error_without_echo(self) -> None:
        password = "p" * 200
        response = self.client.post(
            "/admin/users/new",
            json={"username": "bob", "email": "bob@example.com", "password": password, "role": "user"},
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"], "Password must be at most 72 bytes")
        self.assertNotIn(password, response.text)
        self.assertEqual(len(self.client.get("/admin/users").json()["users"]), 1)


class TestStartup(unittest.TestCase):
    def test_production_without_secret_refuses_to_start(self) -> None:
        with self.assertRaises(RuntimeError):
            create_app(make_settings(APP_ENV="production", JWT_SECRET=None))


if __name__ == "__main__":
    unittest.main()
