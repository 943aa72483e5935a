import unittest
from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient

from aster_backend.app import create_app
from aster_backend.auth import StaticTokenVerifier
from aster_backend.dependencies import get_document_store, get_token_verifier
from aster_backend.errors import StorePermissionDenied, StoreUnavailable
from aster_backend.store import InMemoryDocumentStore

OPERATOR = {"Authorization": "Bearer letmein"}


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryDocumentStore()
        app = create_app()
        app.dependency_overrides[get_document_store] = lambda: self.store
        app.dependency_overrides[get_token_verifier] = lambda: StaticTokenVerifier("letmein")
        self.client = TestClient(app)

    def test_pages_render_from_defaults(self):
        for page in ("home", "services", "packages", "portfolio", "about", "contact"):
            with self.subTest(page=page):
                response = self.client.get(f"/api/pages/{page}")
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["page"], page)

    def test_portfolio_filter_and_contact_package(self):
        response = self.client.get("/api/pages/portfolio", params={"tag": "Ballroom"})
        projects = response.json()["sections"]["projects"]
        self.assertEqual([p["id"] for p in projects], ["p2"])

        response = self.client.get("/api/pages/contact", params={"package": "Partial Planning"})
        self.assertEqual(
            response.json()["sections"]["serviceInterested"], ["Partial Planning"]
        )

    def test_content_envelope_reports_fallback(self):
        self.store.fail("list", StorePermissionDenied("denied"))
        response = self.client.get("/api/content/packages")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["source"], "fallback")
        self.assertEqual(payload["outcome"], "permission-denied")
        self.assertEqual(
            [p["name"] for p in payload["data"]],
            ["Full Planning Service", "Partial Planning", "On-the-Day Coordination"],
        )

    def test_content_singleton_and_unknown_names(self):
        response = self.client.get("/api/content/settings")
        self.assertEqual(response.json()["data"]["brandName"], "Aster & Co.")
        self.assertEqual(self.client.get("/api/content/inquiries").status_code, 404)
        self.assertEqual(self.client.get("/api/content/vendors").status_code, 404)

    def test_submit_inquiry(self):
        response = self.client.post(
            "/api/inquiries",
            json={
                "name": "Rina",
                "email": "rina@example.com",
                "phone": "0812",
                "serviceInterested": ["Full Planning Service"],
                "status": "closed",
            },
        )
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["status"], "new")
        self.assertTrue(payload["createdAt"])
        stored = self.store.collections["inquiries"][payload["id"]]
        self.assertEqual(stored["serviceInterested"], ["Full Planning Service"])

    def test_submit_inquiry_validation(self):
        response = self.client.post(
            "/api/inquiries", json={"name": "", "email": "nope", "phone": "0812"}
        )
        self.assertEqual(response.status_code, 422)

    def test_submit_inquiry_store_failure_is_503(self):
        self.store.fail("add", StoreUnavailable("offline"))
        response = self.client.post(
            "/api/inquiries",
            json={"name": "Rina", "email": "rina@example.com", "phone": "0812"},
        )
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["operation"], "append")

    def test_whatsapp_link_does_not_record(self):
        response = self.client.post(
            "/api/inquiries/whatsapp-link",
            json={"name": "Rina", "email": "rina@example.com", "phone": "0812"},
        )
        self.assertEqual(response.status_code, 200)
        url = urlparse(response.json()["url"])
        self.assertEqual(url.path, "/6281234567890")
        self.assertIn("Tanggal Acara: Belum fix", parse_qs(url.query)["text"][0])
        self.assertNotIn("inquiries", self.store.collections)


class AdminApiTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryDocumentStore()
        app = create_app()
        app.dependency_overrides[get_document_store] = lambda: self.store
        app.dependency_overrides[get_token_verifier] = lambda: StaticTokenVerifier("letmein")
        self.client = TestClient(app)

    def test_admin_requires_token(self):
        self.assertEqual(self.client.get("/api/admin/inquiries").status_code, 401)
        response = self.client.get(
            "/api/admin/inquiries", headers={"Authorization": "Bearer wrong"}
        )
        self.assertEqual(response.status_code, 401)
        response = self.client.post("/api/admin/projects", json={})
        self.assertEqual(response.status_code, 401)

    def test_inquiry_triage(self):
        created = self.client.post(
            "/api/inquiries",
            json={"name": "Rina", "email": "rina@example.com", "phone": "0812"},
        ).json()
        response = self.client.patch(
            f"/api/admin/inquiries/{created['id']}",
            json={"status": "contacted"},
            headers=OPERATOR,
        )
        self.assertEqual(response.status_code, 200)

        listing = self.client.get(
            "/api/admin/inquiries", params={"status": "contacted"}, headers=OPERATOR
        ).json()
        self.assertEqual(listing["source"], "live")
        self.assertEqual([i["id"] for i in listing["inquiries"]], [created["id"]])

        listing = self.client.get(
            "/api/admin/inquiries", params={"status": "new"}, headers=OPERATOR
        ).json()
        self.assertEqual(listing["inquiries"], [])

    def test_status_update_on_missing_inquiry_is_503(self):
        response = self.client.patch(
            "/api/admin/inquiries/x1", json={"status": "closed"}, headers=OPERATOR
        )
        self.assertEqual(response.status_code, 503)

    def test_create_update_delete_project(self):
        response = self.client.post(
            "/api/admin/projects",
            json={"title": "Test & Test", "themeTags": "Outdoor, Intimate"},
            headers=OPERATOR,
        )
        self.assertEqual(response.status_code, 201)
        item = response.json()["item"]
        self.assertEqual(item["slug"], "test-&-test")
        self.assertEqual(item["themeTags"], ["Outdoor", "Intimate"])

        content = self.client.get("/api/content/projects").json()
        self.assertEqual(content["source"], "live")
        self.assertEqual([p["id"] for p in content["data"]], [item["id"]])

        item["location"] = "Bali"
        response = self.client.put(
            f"/api/admin/projects/{item['id']}", json=item, headers=OPERATOR
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.store.collections["projects"][item["id"]]["location"], "Bali"
        )

        response = self.client.delete(f"/api/admin/projects/{item['id']}", headers=OPERATOR)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.store.collections["projects"], {})

    def test_create_package_orders_after_defaults(self):
        response = self.client.post(
            "/api/admin/packages", json={"name": "Elopement"}, headers=OPERATOR
        )
        self.assertEqual(response.json()["item"]["order"], 4)

    def test_unknown_kind_is_404(self):
        response = self.client.post("/api/admin/vendors", json={}, headers=OPERATOR)
        self.assertEqual(response.status_code, 404)

    def test_write_denied_is_503(self):
        self.store.fail("set", StorePermissionDenied("denied"))
        response = self.client.post(
            "/api/admin/testimonials", json={"name": "Ayu"}, headers=OPERATOR
        )
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["collection"], "testimonials")

    def test_oversized_cover_image_is_413(self):
        response = self.client.post(
            "/api/admin/projects",
            json={"coverImage": "data:image/png;base64," + "A" * 800_000},
            headers=OPERATOR,
        )
        self.assertEqual(response.status_code, 413)

    def test_save_settings_and_site_content(self):
        settings = self.client.get("/api/content/settings").json()["data"]
        settings["whatsappNumber"] = "628999"
        response = self.client.put("/api/admin/settings", json=settings, headers=OPERATOR)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.client.get("/api/content/settings").json()["source"], "live"
        )

        content = self.client.get("/api/content/site_content").json()["data"]
        content["hero"]["headline"] = "New headline"
        response = self.client.put("/api/admin/site-content", json=content, headers=OPERATOR)
        self.assertEqual(response.status_code, 200)
        home = self.client.get("/api/pages/home").json()
        self.assertEqual(home["sections"]["hero"]["headline"], "New headline")

    def test_invalid_settings_payload_is_422(self):
        response = self.client.put(
            "/api/admin/settings", json={"brandName": "Only"}, headers=OPERATOR
        )
        self.assertEqual(response.status_code, 422)

    def test_mistyped_item_is_422_and_not_stored(self):
        package = {"name": "Live A", "priceFrom": "IDR 1", "features": [], "order": 1}
        response = self.client.put("/api/admin/packages/a", json=package, headers=OPERATOR)
        self.assertEqual(response.status_code, 200)

        response = self.client.put(
            "/api/admin/packages/b",
            json={**package, "name": "Live B", "order": "two"},
            headers=OPERATOR,
        )
        self.assertEqual(response.status_code, 422)
        self.assertNotIn("b", self.store.collections["packages"])

        content = self.client.get("/api/content/packages").json()
        self.assertEqual(content["source"], "live")
        self.assertEqual([p["name"] for p in content["data"]], ["Live A"])

    def test_rating_outside_one_to_five_is_422(self):
        for rating in (0, 6, 42, True):
            response = self.client.put(
                "/api/admin/testimonials/t1",
                json={"name": "Ayu", "rating": rating},
                headers=OPERATOR,
            )
            self.assertEqual(response.status_code, 422, rating)
        self.assertNotIn("testimonials", self.store.collections)

        response = self.client.put(
            "/api/admin/testimonials/t1", json={"name": "Ayu", "rating": 4}, headers=OPERATOR
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.store.collections["testimonials"]["t1"]["rating"], 4)

    def test_site_content_without_hero_or_cta_is_422(self):
        content = self.client.get("/api/content/site_content").json()["data"]
        for name in ("hero", "ctaSection"):
            missing = {key: value for key, value in content.items() if key != name}
            for payload in ({**content, name: None}, missing):
                response = self.client.put(
                    "/api/admin/site-content", json=payload, headers=OPERATOR
                )
                self.assertEqual(response.status_code, 422, name)
        self.assertNotIn("site_content", self.store.collections)
        home = self.client.get("/api/pages/home")
        self.assertEqual(home.status_code, 200)

    def test_write_routes_document_store_error_body(self):
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        put_settings = schema["paths"]["/api/admin/settings"]["put"]
        self.assertIn("503", put_settings["responses"])

    def test_seed_defaults(self):
        response = self.client.post("/api/admin/seed-defaults", headers=OPERATOR)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["seeded"]), 6)
        response = self.client.post(
            "/api/admin/seed-defaults", json={"force": False}, headers=OPERATOR
        )
        self.assertEqual(response.json()["seeded"], [])
        self.assertEqual(len(response.json()["skipped"]), 6)


if __name__ == "__main__":
    unittest.main()
