"""
EPA API Client
==============

Async HTTP client for the upstream data sources:

- Documents API (``document.json``) and document search (``documents.json``)
- Facility Registry Service (FRS) facility lookup
- Narrative text renderings linked from a document's file formats

Every call goes through ``EPAClient._request``, which is the only place
upstream error bodies are translated into ``UpstreamError``. Transport
failures (connection errors, timeouts, undecodable payloads) propagate
unchanged. No retries are attempted.

Version: 0.1.0
"""

from typing import Any

import httpx

from services.regulations.errors import UpstreamError
from shared.config import EPASettings, settings
from shared.logging import get_logger


logger = get_logger(__name__)


def _structured_error(response: httpx.Response) -> UpstreamError | None:
    """Return an UpstreamError if the response body is ``{status, message}``."""
    try:
        body = response.json()
    except ValueError:
        return None

    if not isinstance(body, dict):
        return None

    status = body.get("status")
    message = body.get("message")
    if not status or not message:
        return None

    try:
        return UpstreamError(int(status), str(message))
    except (TypeError, ValueError):
        return None


class EPAClient:
    """Client for the EPA documents, search, facility and text endpoints."""

    def __init__(
        self,
        config: EPASettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Upstream API configuration (defaults to global settings)
            http_client: Pre-built HTTP client, mainly for tests
        """
        self.config = config or settings.epa
        self._client = http_client

    @property
    def api_key(self) -> str:
        return self.config.api_key.get_secret_value()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            timeout = httpx.Timeout(
                connect=self.config.connect_timeout,
                read=self.config.read_timeout,
                write=30.0,
                pool=30.0,
            )

            self._client = httpx.AsyncClient(
                timeout=timeout,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json, text/plain, text/html",
                },
                follow_redirects=True,
                http2=True,
            )

        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "EPAClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        *,
        as_text: bool = False,
    ) -> Any:
        """
        Issue a GET request and return the decoded payload.

        Args:
            url: URL to request
            params: Query parameters; ``None`` values are omitted
            as_text: Return the body as text instead of decoded JSON

        Returns:
            Decoded JSON payload, or the body text when ``as_text`` is set

        Raises:
            UpstreamError: The upstream answered with a ``{status, message}`` body
            httpx.HTTPError: Any other transport or HTTP failure
        """
        client = await self._get_client()
        query = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            # Merge with any query already on the URL (file format links carry one)
            response = await client.get(httpx.URL(url).copy_merge_params(query))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _structured_error(e.response)
            if error is None:
                raise
            logger.warning(
                "upstream_error",
                url=url,
                status=error.status,
                message=error.message,
            )
            raise error from e

        logger.debug(
            "upstream_request",
            url=url,
            status=response.status_code,
        )

        if as_text:
            return response.text
        return response.json()

    async def get_document(self, document_id: str) -> dict[str, Any]:
        """
        Get document metadata by document ID.

        Args:
            document_id: Regulations.gov document ID
        """
        return await self._request(
            f"{self.config.api_base_url}/document.json",
            {"api_key": self.api_key, "documentId": document_id},
        )

    async def search_documents(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Search documents.

        Args:
            params: Search query parameters (the API key is added here)
        """
        return await self._request(
            f"{self.config.api_base_url}/documents.json",
            {"api_key": self.api_key, **params},
        )

    async def get_facilities(self, options: dict[str, Any]) -> dict[str, Any]:
        """
        Query the Facility Registry Service.

        Args:
            options: FRS query parameters (zip_code, city_name, ...)
        """
        return await self._request(
            self.config.facility_url,
            {"output": "json", **options},
        )

    async def get_text(self, url: str) -> str:
        """
        Fetch a narrative rendering of a document as text.

        Args:
            url: File format link taken from the document metadata
        """
        return await self._request(url, {"api_key": self.api_key}, as_text=True)
