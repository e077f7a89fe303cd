"""HTTP client for the game backend."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from shake_gateway.auth_forwarder import attach
from shake_gateway.enums import HttpMethod
from shake_gateway.models import BackendFailure, BackendResult, BackendSuccess


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BackendClient:
    """
    Issues exactly one backend call per invocation and reports the outcome as a
    value. HTTP error statuses and transport failures are returned, not raised.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """
        Args:
            http_client: Shared httpx AsyncClient with base_url set to the backend
        """
        self._client = http_client

    async def call(
        self,
        method: HttpMethod,
        path: str,
        payload: Any = None,
        token: str | None = None,
    ) -> BackendResult:
        headers = attach(token) if token is not None else {}

        logger.debug("Backend call {} {}", method.value, path)
        try:
            response = await self._client.request(method.value, path, json=payload, headers=headers)
        except httpx.HTTPError as e:
            return BackendFailure(status_code=None, detail=f"{type(e).__name__}: {e}")

        body = _decode_body(response)
        if response.is_success:
            return BackendSuccess(response.status_code, body)
        return BackendFailure(response.status_code, body)
