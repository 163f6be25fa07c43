"""
Thin async client for the Supabase PostgREST API.

Every failure (transport error, timeout, HTTP >= 400, a body that is
not JSON, missing configuration) is raised as RemoteSyncException so callers only need
one except clause at the boundary.
"""

import asyncio
import logging
from typing import Any

import aiohttp

import config
from exceptions.remote import RemoteSyncException

logger = logging.getLogger(__name__)


class SupabaseRestClient:

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: float | None = None):
        self.base_url = (base_url if base_url is not None else config.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.SUPABASE_ANON_KEY
        self.timeout = timeout if timeout is not None else config.REMOTE_TIMEOUT_SECONDS

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def request(
        self,
        operation: str,
        method: str,
        table: str,
        params: list[tuple[str, str]] | None = None,
        payload: Any = None,
        prefer: str | None = None
    ) -> list[dict]:
        """
        Perform one PostgREST call against /rest/v1/<table>.

        Args:
            operation: Name used in logs and in the raised exception
            method: HTTP method
            table: Table name
            params: Query parameters; a list so filters may repeat a column
            payload: JSON body
            prefer: Value for the Prefer header

        Returns:
            Decoded JSON rows, [] for an empty body

        Raises:
            RemoteSyncException: On any failure
        """
        if not self.configured:
            raise RemoteSyncException(operation, "remote store not configured")

        url = f"{self.base_url}/rest/v1/{table}"
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as http:
                async with http.request(
                    method, url, params=params, json=payload, headers=self._headers(prefer)
                ) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise RemoteSyncException(operation, body[:200] or str(response.reason), status=response.status)
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteSyncException(operation, str(e) or type(e).__name__) from e
        except ValueError as e:
            # 2xx with a non-JSON body (proxy or captive portal page)
            raise RemoteSyncException(operation, f"invalid JSON response: {e}") from e

        logger.debug(f"Remote {operation} on {table} succeeded")
        if data is None:
            return []
        return data if isinstance(data, list) else [data]
