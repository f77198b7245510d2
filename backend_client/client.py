"""Thin REST client for the hosted backend's table API."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .config import BackendSettings

logger = logging.getLogger(__name__)


class BackendConfigError(ValueError):
    """Raised when backend credentials are missing."""


class BackendClientError(RuntimeError):
    """Raised when a backend request fails."""


class BackendClient:
    """Request/response access to ``<url>/rest/v1/<table>``.

    Every request carries the public anon key. Passing ``access_token``
    sends a signed-in user's token as the bearer instead.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        if not url or not anon_key:
            raise BackendConfigError("Backend URL and anon key are required.")
        self._url = url.rstrip("/")
        self._anon_key = anon_key
        self._access_token = access_token
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url

    def with_access_token(self, access_token: str) -> "BackendClient":
        return BackendClient(
            self._url, self._anon_key, access_token=access_token, timeout=self._timeout
        )

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        columns: str = "*",
    ) -> List[Dict[str, Any]]:
        params = {"select": columns}
        params.update(_eq_filters(filters))
        return self._request("GET", table, params=params)

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return self._request("POST", table, body=[dict(row) for row in rows])

    def update(
        self, table: str, filters: Mapping[str, Any], fields: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("Updates require at least one filter.")
        return self._request("PATCH", table, params=_eq_filters(filters), body=dict(fields))

    def delete(self, table: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("Deletes require at least one filter.")
        return self._request("DELETE", table, params=_eq_filters(filters))

    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {self._access_token or self._anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Prefer": "return=representation",
        }

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> List[Dict[str, Any]]:
        endpoint = f"{self._url}/rest/v1/{urllib.parse.quote(table)}"
        if params:
            endpoint = f"{endpoint}?{urllib.parse.urlencode(params)}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        request = urllib.request.Request(
            endpoint, data=data, headers=self.headers(), method=method
        )

        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                raw = response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            logger.warning("Backend %s %s failed with HTTP %s", method, table, exc.code)
            raise BackendClientError(f"Backend returned HTTP {exc.code}.") from exc
        except urllib.error.URLError as exc:
            logger.warning("Backend %s %s failed: %s", method, table, exc.reason)
            raise BackendClientError("Backend request failed.") from exc

        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise BackendClientError("Backend returned invalid JSON.") from exc
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise BackendClientError("Backend returned an unexpected response.")
        return data


def create_client(settings: BackendSettings) -> BackendClient:
    url = settings.public_supabase_url
    anon_key = settings.public_supabase_anon_key

    logger.info("Backend URL present: %s", bool(url))
    logger.info("Backend anon key present: %s", bool(anon_key))
    logger.debug("Backend URL (first 20 chars): %s", _preview(url))
    logger.debug("Backend anon key (first 20 chars): %s", _preview(anon_key))

    if not url or not anon_key:
        logger.error(
            "Missing backend environment variables: PUBLIC_SUPABASE_URL present=%s, "
            "PUBLIC_SUPABASE_ANON_KEY present=%s",
            bool(url),
            bool(anon_key),
        )
        raise BackendConfigError("PUBLIC_SUPABASE_URL and PUBLIC_SUPABASE_ANON_KEY must be set.")

    return BackendClient(url, anon_key, timeout=settings.backend_timeout)


def _preview(value: Optional[str]) -> str:
    return f"{value[:20]}..." if value else "undefined"


def _eq_filters(filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    return {column: f"eq.{value}" for column, value in (filters or {}).items()}
