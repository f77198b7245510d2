"""Smoke tests for the site's server routes."""

import unittest
import xml.etree.ElementTree as ET

try:
    from fastapi.testclient import TestClient
except ImportError:  # pragma: no cover - optional dependency
    TestClient = None

try:
    from web import app as web_app
except ImportError:  # pragma: no cover - optional dependency
    web_app = None
from backend_client.config import BackendSettings, get_settings


@unittest.skipIf(TestClient is None or web_app is None, "FastAPI not available")
class WebApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = BackendSettings(
            _env_file=None,
            public_supabase_url="https://example.supabase.co",
            public_supabase_anon_key=None,
            site_base_url="https://example.com",
        )
        web_app.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(web_app.app)

    def tearDown(self) -> None:
        web_app.app.dependency_overrides.clear()

    def test_sitemap_served_as_xml_with_cache_header(self) -> None:
        response = self.client.get("/sitemap.xml")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("application/xml"))
        self.assertEqual(response.headers["cache-control"], "public, max-age=3600")

        root = ET.fromstring(response.content)
        ns = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}
        locs = [node.text for node in root.findall("sm:url/sm:loc", ns)]
        self.assertEqual(locs[0], "https://example.com/")
        self.assertEqual(len(locs), 4)

    def test_backend_status_reports_presence_only(self) -> None:
        response = self.client.get("/api/backend/status")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"url_present": True, "anon_key_present": False}
        )
        self.assertNotIn("example.supabase.co", response.text)


if __name__ == "__main__":
    unittest.main()
