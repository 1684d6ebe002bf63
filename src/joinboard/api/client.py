"""HTTP client for the remote document store API."""

import asyncio
import json as jsonlib
from collections.abc import AsyncIterator
from typing import Any

import httpx

from joinboard.models.config_models import APIConfig
from joinboard.utils.logger import get_logger


class APIClient:
    """Async HTTP client with retry for the document store API."""

    def __init__(self, config: APIConfig):
        self.config = config
        self.base_url = config.endpoint
        self.timeout = config.timeout
        self._client: httpx.AsyncClient | None = None
        self._logger = get_logger("api")

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers, with the bearer token if one is configured."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        retry: int | None = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API.

        Server errors and transport errors are retried with exponential
        backoff up to ``retry`` times; client errors (4xx) are raised
        immediately. The write helpers pass ``retry=0``.
        """
        if retry is None:
            retry = self.config.retry

        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        last_exception: Exception | None = None
        for attempt in range(retry + 1):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                )
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                # Don't retry client errors (4xx)
                if 400 <= e.response.status_code < 500:
                    raise
                last_exception = e
            except httpx.RequestError as e:
                last_exception = e

            if attempt < retry:
                self._logger.warning(
                    "%s %s failed (attempt %d/%d): %s",
                    method,
                    url,
                    attempt + 1,
                    retry + 1,
                    last_exception,
                )
                await asyncio.sleep(2**attempt)

        # All retries failed
        if last_exception:
            raise last_exception
        raise RuntimeError("Request failed after all retries")

    async def get(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, *, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a POST request. Writes are never retried."""
        return await self.request("POST", path, json=json, retry=0)

    async def patch(
        self, path: str, *, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a PATCH request. Writes are never retried."""
        return await self.request("PATCH", path, json=json, retry=0)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request. Writes are never retried."""
        return await self.request("DELETE", path, retry=0)

    async def stream_json(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> AsyncIterator[Any]:
        """Stream a newline-delimited JSON response, one decoded object per line.

        The stream has no read timeout; it stays open until the server
        closes it or the consumer stops iterating.
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        timeout = httpx.Timeout(self.timeout, read=None)
        async with client.stream("GET", url, params=params, timeout=timeout) as response:
            response.raise_for_status()
            async for line in response.aiter_lines():
                if line.strip():
                    yield jsonlib.loads(line)
