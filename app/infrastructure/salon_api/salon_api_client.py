from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import UpstreamStoreError


class SalonApiClient:
    """Thin reader for the salon backend's `{"success": ..., "data": [...]}` endpoints."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def fetch_list(self, resource: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}/{resource.strip('/')}"
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Salon API request failed", extra={"resource": resource, "error": str(e)})
            raise UpstreamStoreError(f"GET {resource} failed: {e}") from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            self._logger.error("Salon API returned failure", extra={"resource": resource, "error": error})
            raise UpstreamStoreError(f"GET {resource} unsuccessful: {error or 'no success flag'}")

        data = body.get("data")
        if not isinstance(data, list):
            self._logger.warning("Salon API returned no list", extra={"resource": resource})
            return []
        return [item for item in data if isinstance(item, dict)]

    def close(self) -> None:
        self._client.close()
