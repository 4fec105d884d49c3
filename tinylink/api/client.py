"""
HTTP Client for the TinyLink API

This module talks to the four link endpoints of the API:
- GET    /api/links          list all links
- POST   /api/links          create a link ({url, code?})
- DELETE /api/links/{code}   delete a link
- GET    /api/links/{code}   get one link

Each method returns parsed records on success and raises the matching
TinyLinkException on failure, so callers get a classified error instead
of a raw status code.

Design Decisions:
- One httpx.AsyncClient per LinkApiClient (connection pooling across calls)
- Base address is injected at construction, never read from globals
- Transport is injectable so tests can use httpx.MockTransport/ASGITransport
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from tinylink.api.schemas import CreateLinkRequest, ErrorBody, LinkRecord
from tinylink.core.exceptions import (
    CodeConflictError,
    LinkNotFoundError,
    LinkValidationError,
    OperationFailedError,
    TransportError,
)
from tinylink.middleware.logging import logging_event_hooks

logger = logging.getLogger(__name__)

LINKS_PATH = "/api/links"
DEFAULT_CREATE_ERROR = "Could not create link."


def _link_path(code: str) -> str:
    # Code always travels as a single path segment
    return f"{LINKS_PATH}/{quote(code, safe='')}"


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract the "error" field from a rejection body, if any."""
    try:
        return ErrorBody.model_validate(response.json()).error
    except (ValueError, ValidationError):
        return None


def _parse_record(response: httpx.Response) -> LinkRecord:
    try:
        return LinkRecord.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise OperationFailedError(
            f"Malformed link record in response: {e}",
            status_code=response.status_code
        )


class LinkApiClient:
    """
    Async client for the TinyLink link endpoints.

    Usage:
        async with LinkApiClient("http://localhost:5000") as client:
            links = await client.list_links()
    """

    def __init__(
        self,
        base_address: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_address: Root address of the API (e.g. http://localhost:5000)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.base_address = base_address.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_address,
            timeout=timeout,
            transport=transport,
            event_hooks=logging_event_hooks(),
        )

    async def __aenter__(self) -> "LinkApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request, converting network failures to TransportError.

        Raises:
            TransportError: If no response was received
        """
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed before a response: {e!r}")
            raise TransportError(f"Network error: {e}", original_error=e)

    async def list_links(self) -> list[LinkRecord]:
        """
        Fetch every link.

        Raises:
            TransportError: On network failure or any non-2xx status
            OperationFailedError: If the body is not a list of records
        """
        response = await self._send("GET", LINKS_PATH)
        if not response.is_success:
            raise TransportError(
                f"Failed to load links (status {response.status_code})",
                status_code=response.status_code
            )

        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError("expected a JSON array")
            return [LinkRecord.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            raise OperationFailedError(
                f"Malformed link list in response: {e}",
                status_code=response.status_code
            )

    async def create_link(self, url: str, code: Optional[str] = None) -> LinkRecord:
        """
        Create a link.

        Args:
            url: Target URL (sent as given)
            code: Custom short code, omitted from the body when empty

        Returns:
            The created record with server-assigned fields

        Raises:
            CodeConflictError: Code already taken (409)
            LinkValidationError: Any other rejection; carries the server's
                error message, or a generic one when the body has none
            TransportError: Network failure
        """
        body = CreateLinkRequest(url=url, code=code or None)
        response = await self._send("POST", LINKS_PATH, json=body.to_payload())

        if response.status_code == 409:
            raise CodeConflictError(code)

        if not response.is_success:
            message = _error_message(response) or DEFAULT_CREATE_ERROR
            raise LinkValidationError(message, status_code=response.status_code)

        return _parse_record(response)

    async def delete_link(self, code: str) -> None:
        """
        Delete a link.

        Raises:
            LinkNotFoundError: Code does not exist (404)
            OperationFailedError: Any other non-2xx status
            TransportError: Network failure
        """
        response = await self._send("DELETE", _link_path(code))

        if response.status_code == 404:
            raise LinkNotFoundError(code)

        if not response.is_success:
            raise OperationFailedError(
                f"Could not delete '{code}' (status {response.status_code})",
                status_code=response.status_code
            )

    async def get_link(self, code: str) -> LinkRecord:
        """
        Fetch one link by code.

        Raises:
            LinkNotFoundError: Code does not exist (404)
            OperationFailedError: Any other non-2xx status or a bad body
            TransportError: Network failure
        """
        response = await self._send("GET", _link_path(code))

        if response.status_code == 404:
            raise LinkNotFoundError(code)

        if not response.is_success:
            raise OperationFailedError(
                f"Could not load '{code}' (status {response.status_code})",
                status_code=response.status_code
            )

        return _parse_record(response)
