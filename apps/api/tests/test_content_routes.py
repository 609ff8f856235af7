"""Category, post, consultation and user API tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import create_app
from app.repositories.memory import InMemoryStore


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = ("GALILEA_BACKEND", "GALILEA_EMAIL_PROVIDER")

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["GALILEA_BACKEND"] = "memory"
        os.environ["GALILEA_EMAIL_PROVIDER"] = "memory"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


def _auth_headers(store: InMemoryStore, user_id: str, role: str) -> dict[str, str]:
    store.insert("admin_profiles", {"user_id": user_id, "role": role})
    return {"Authorization": f"Bearer test:{user_id}"}


class CategoryApiTests(_SettingsEnvCase):
    def test_admin_manages_categories_and_list_is_ordered_by_name(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "admin-1", "admin")

        created = [
            client.post("/api/v1/categories", headers=headers, json={"name": name}).json()
            for name in ("Noticias", "Eventos", "Comunidad")
        ]
        listed = client.get("/api/v1/categories")

        self.assertEqual([category["id"] for category in created], [1, 2, 3])
        self.assertEqual(listed.status_code, 200)
        self.assertEqual([category["name"] for category in listed.json()], ["Comunidad", "Eventos", "Noticias"])

        updated = client.put(
            "/api/v1/categories/2",
            headers=headers,
            json={"name": "Agenda", "description": "Upcoming dates"},
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["description"], "Upcoming dates")

        deleted = client.delete("/api/v1/categories/2", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(client.get("/api/v1/categories/2").status_code, 404)

    def test_missing_category_returns_no_leak_404(self) -> None:
        client = TestClient(create_app())

        response = client.get("/api/v1/categories/99")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"code": "RESOURCE_NOT_FOUND", "message": "Resource not found"})

    def test_editor_cannot_create_category(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")

        response = client.post("/api/v1/categories", headers=headers, json={"name": "News"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(app.state.store.tables.get("categories", []), [])

    def test_invalid_payload_returns_validation_error(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "admin-1", "admin")

        response = client.post("/api/v1/categories", headers=headers, json={"name": ""})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")
        self.assertTrue(response.json()["details"]["errors"])


class PostApiTests(_SettingsEnvCase):
    def _seed_posts(self, client: TestClient, headers: dict[str, str]) -> list[dict]:
        payloads = [
            {"title": "Nueva sede", "content": "Inauguramos oficina", "category_id": 1},
            {"title": "Taller de idiomas", "content": "Clases gratuitas", "category_id": 2},
            {"title": "Resumen anual", "content": "La nueva memoria", "category_id": 1},
        ]
        return [client.post("/api/v1/posts", headers=headers, json=payload).json() for payload in payloads]

    def test_create_and_get_post(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")

        created = client.post(
            "/api/v1/posts",
            headers=headers,
            json={"title": "Hello", "content": "World", "category_id": 3, "image_url": "memory://storage/posts/a.png"},
        )
        fetched = client.get(f"/api/v1/posts/{created.json()['id']}")

        self.assertEqual(created.status_code, 201)
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["author_id"], "editor-1")
        self.assertEqual(fetched.json()["image_url"], "memory://storage/posts/a.png")

    def test_search_filter_and_pagination(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")
        self._seed_posts(client, headers)

        searched = client.get("/api/v1/posts", params={"search": "NUEVA"})
        filtered = client.get("/api/v1/posts", params={"category_id": 2})
        by_title = client.get("/api/v1/posts", params={"orderBy": "title asc"})
        paged = client.get("/api/v1/posts", params={"orderBy": "title asc", "limit": 1, "offset": 1})

        self.assertEqual(sorted(post["title"] for post in searched.json()), ["Nueva sede", "Resumen anual"])
        self.assertEqual([post["title"] for post in filtered.json()], ["Taller de idiomas"])
        self.assertEqual(
            [post["title"] for post in by_title.json()],
            ["Nueva sede", "Resumen anual", "Taller de idiomas"],
        )
        self.assertEqual([post["title"] for post in paged.json()], ["Resumen anual"])

    def test_unknown_order_column_is_rejected(self) -> None:
        client = TestClient(create_app())

        response = client.get("/api/v1/posts", params={"orderBy": "password desc"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")

    def test_editor_updates_but_only_moderator_deletes(self) -> None:
        app = create_app()
        client = TestClient(app)
        editor = _auth_headers(app.state.store, "editor-1", "editor")
        moderator = _auth_headers(app.state.store, "mod-1", "moderator")
        post = self._seed_posts(client, editor)[0]

        updated = client.put(f"/api/v1/posts/{post['id']}", headers=editor, json={"title": "Sede nueva"})
        denied = client.delete(f"/api/v1/posts/{post['id']}", headers=editor)
        deleted = client.delete(f"/api/v1/posts/{post['id']}", headers=moderator)

        self.assertEqual(updated.json()["title"], "Sede nueva")
        self.assertEqual(denied.status_code, 403)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(client.get(f"/api/v1/posts/{post['id']}").status_code, 404)

    def test_empty_update_is_rejected(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")
        post = self._seed_posts(client, headers)[0]

        response = client.put(f"/api/v1/posts/{post['id']}", headers=headers, json={})

        self.assertEqual(response.status_code, 400)

    def test_store_failure_is_reported(self) -> None:
        app = create_app()
        client = TestClient(app)
        app.state.store.store_failure_message = "connection refused"

        response = client.get("/api/v1/posts")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"code": "STORE_ERROR", "message": "connection refused"})


class ConsultationApiTests(_SettingsEnvCase):
    _payload = {
        "dni_or_id": "12345678",
        "email": "maria@example.com",
        "consultation_reason": "Residencia",
        "first_name": "Maria",
        "last_name": "Lopez",
        "phone_number": "+54 11 5555 5555",
        "nationality": "AR",
    }

    def test_public_create_registers_user_once(self) -> None:
        app = create_app()
        client = TestClient(app)

        first = client.post("/api/v1/consultations", json=self._payload)
        second = client.post("/api/v1/consultations", json={**self._payload, "consultation_reason": "Visa"})

        self.assertEqual((first.status_code, second.status_code), (201, 201))
        users = app.state.store.tables["users"]
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0]["name"], "Maria Lopez")
        self.assertEqual(users[0]["dni"], "12345678")
        self.assertEqual(len(app.state.store.tables["consultations"]), 2)

    def test_create_without_dni_skips_user_registration(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post("/api/v1/consultations", json={"email": "anon@example.com", "first_name": "Ana"})

        self.assertEqual(response.status_code, 201)
        self.assertNotIn("users", app.state.store.tables)

    def test_public_create_is_rate_limited(self) -> None:
        client = TestClient(create_app())

        statuses = [client.post("/api/v1/consultations", json=self._payload).status_code for _ in range(6)]

        self.assertEqual(statuses, [201] * 5 + [429])

    def test_listing_requires_moderator_and_filters(self) -> None:
        app = create_app()
        client = TestClient(app)
        client.post("/api/v1/consultations", json=self._payload)
        client.post("/api/v1/consultations", json={**self._payload, "email": "juan@example.com", "status": "closed"})
        editor = _auth_headers(app.state.store, "editor-1", "editor")
        moderator = _auth_headers(app.state.store, "mod-1", "moderator")

        denied = client.get("/api/v1/consultations", headers=editor)
        by_email = client.get("/api/v1/consultations", headers=moderator, params={"user_email": "juan@example.com"})
        by_status = client.get("/api/v1/consultations", headers=moderator, params={"status": "closed"})
        searched = client.get("/api/v1/consultations", headers=moderator, params={"search": "resid"})

        self.assertEqual(denied.status_code, 403)
        self.assertEqual([item["email"] for item in by_email.json()], ["juan@example.com"])
        self.assertEqual(len(by_status.json()), 1)
        self.assertEqual(len(searched.json()), 2)

    def test_update_by_moderator_and_delete_by_admin_only(self) -> None:
        app = create_app()
        client = TestClient(app)
        consultation = client.post("/api/v1/consultations", json=self._payload).json()
        moderator = _auth_headers(app.state.store, "mod-1", "moderator")
        admin = _auth_headers(app.state.store, "admin-1", "admin")
        path = f"/api/v1/consultations/{consultation['id']}"

        updated = client.put(path, headers=moderator, json={"status": "answered"})
        moderator_delete = client.delete(path, headers=moderator)
        admin_delete = client.delete(path, headers=admin)

        self.assertEqual(updated.json()["status"], "answered")
        self.assertEqual(moderator_delete.status_code, 403)
        self.assertEqual(admin_delete.status_code, 200)
        self.assertEqual(client.get(path, headers=admin).status_code, 404)


class UserApiTests(_SettingsEnvCase):
    def test_editor_creates_user(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")

        response = client.post(
            "/api/v1/users",
            headers=headers,
            json={"dni": "30111222", "email": "pedro@example.com", "name": "Pedro"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["dni"], "30111222")
        self.assertEqual(app.state.store.get("users", "dni", "30111222")["name"], "Pedro")

    def test_viewer_cannot_create_user(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "viewer-1", "viewer")

        response = client.post("/api/v1/users", headers=headers, json={"dni": "1", "email": "a@example.com"})

        self.assertEqual(response.status_code, 403)

    def test_invalid_email_is_rejected(self) -> None:
        app = create_app()
        client = TestClient(app)
        headers = _auth_headers(app.state.store, "editor-1", "editor")

        response = client.post("/api/v1/users", headers=headers, json={"dni": "1", "email": "not-an-email"})

        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
