"""Supabase (PostgREST) connection management."""
import logging
from typing import Any, Dict

import httpx

from finnolan.config import Settings
from finnolan.domain.exceptions import DatastoreError
from finnolan.infrastructure.http import RetryPolicy, error_message

logger = logging.getLogger(__name__)

PROVIDER = "Supabase"


class SupabaseConnection:
    """Issues PostgREST requests with the service-role key."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings, retry: RetryPolicy):
        self._client = client
        self._settings = settings
        self._retry = retry

    def _rest_url(self, table: str) -> str:
        base_url = self._settings.require("supabase_url").rstrip("/")
        return f"{base_url}/rest/v1/{table}"

    def _headers(self) -> Dict[str, str]:
        key = self._settings.require("supabase_service_role_key")
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Prefer": "return=minimal",
        }

    async def update(
        self, table: str, values: Dict[str, Any], filters: Dict[str, str]
    ) -> None:
        """PATCH rows matching ``filters`` (PostgREST operator syntax, e.g. ``eq.5``)."""
        response = await self._retry.send(
            self._client,
            PROVIDER,
            "PATCH",
            self._rest_url(table),
            params=filters,
            headers=self._headers(),
            json=values,
        )
        if response.status_code not in (200, 204):
            message = error_message(response, f"Supabase update failed: {response.status_code}")
            logger.error(f"Supabase update on {table} failed: {message}")
            raise DatastoreError(message)
