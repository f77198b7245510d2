"""Tests for backend client configuration and request building."""

import json
import unittest
import urllib.error
from unittest import mock

from backend_client.client import (
    BackendClient,
    BackendClientError,
    BackendConfigError,
    create_client,
)
from backend_client.config import BackendSettings


def _response(payload) -> mock.MagicMock:
    response = mock.MagicMock()
    response.__enter__.return_value = response
    response.read.return_value = json.dumps(payload).encode("utf-8")
    return response


class CreateClientTests(unittest.TestCase):
    def test_missing_credentials_rejected(self) -> None:
        settings = BackendSettings(
            _env_file=None, public_supabase_url=None, public_supabase_anon_key=None
        )
        with self.assertLogs("backend_client.client", level="ERROR"):
            with self.assertRaises(BackendConfigError):
                create_client(settings)

    def test_client_built_from_settings(self) -> None:
        settings = BackendSettings(
            _env_file=None,
            public_supabase_url="https://example.supabase.co/",
            public_supabase_anon_key="anon-key-value-that-is-long",
        )
        with self.assertLogs("backend_client.client", level="DEBUG") as logs:
            client = create_client(settings)
        self.assertEqual(client.url, "https://example.supabase.co")
        output = "\n".join(logs.output)
        self.assertIn("anon-key-value-that-...", output)
        self.assertNotIn("anon-key-value-that-is-long", output)

    def test_settings_read_from_environment(self) -> None:
        env = {
            "PUBLIC_SUPABASE_URL": "https://env.supabase.co",
            "PUBLIC_SUPABASE_ANON_KEY": "env-key",
        }
        with mock.patch.dict("os.environ", env):
            settings = BackendSettings(_env_file=None)
        self.assertEqual(settings.public_supabase_url, "https://env.supabase.co")
        self.assertEqual(settings.public_supabase_anon_key, "env-key")


class BackendClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = BackendClient("https://example.supabase.co", "anon")

    def _last_request(self, urlopen: mock.MagicMock):
        return urlopen.call_args[0][0]

    def test_select_builds_filters_and_headers(self) -> None:
        with mock.patch("urllib.request.urlopen", return_value=_response([{"slug": "s1"}])) as urlopen:
            rows = self.client.select("collections", {"slug": "s1"})

        self.assertEqual(rows, [{"slug": "s1"}])
        request = self._last_request(urlopen)
        self.assertEqual(request.get_method(), "GET")
        self.assertTrue(request.full_url.startswith("https://example.supabase.co/rest/v1/collections?"))
        self.assertIn("select=%2A", request.full_url)
        self.assertIn("slug=eq.s1", request.full_url)
        self.assertEqual(request.get_header("Apikey"), "anon")
        self.assertEqual(request.get_header("Authorization"), "Bearer anon")

    def test_insert_sends_json_body(self) -> None:
        with mock.patch("urllib.request.urlopen", return_value=_response([{"id": 1}])) as urlopen:
            self.client.insert("collections", [{"slug": "s1"}])

        request = self._last_request(urlopen)
        self.assertEqual(request.get_method(), "POST")
        self.assertEqual(json.loads(request.data), [{"slug": "s1"}])

    def test_access_token_overrides_bearer(self) -> None:
        client = self.client.with_access_token("user-jwt")
        headers = client.headers()
        self.assertEqual(headers["Authorization"], "Bearer user-jwt")
        self.assertEqual(headers["apikey"], "anon")

    def test_update_and_delete_require_filters(self) -> None:
        with self.assertRaises(ValueError):
            self.client.update("collections", {}, {"title": "B"})
        with self.assertRaises(ValueError):
            self.client.delete("collections", {})

    def test_http_error_wrapped(self) -> None:
        error = urllib.error.HTTPError("https://example", 401, "Unauthorized", {}, None)
        with mock.patch("urllib.request.urlopen", side_effect=error):
            with self.assertRaises(BackendClientError):
                self.client.delete("collections", {"slug": "s1"})

    def test_invalid_json_wrapped(self) -> None:
        response = _response([])
        response.read.return_value = b"not json"
        with mock.patch("urllib.request.urlopen", return_value=response):
            with self.assertRaises(BackendClientError):
                self.client.select("collections")


if __name__ == "__main__":
    unittest.main()
