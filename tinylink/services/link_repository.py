"""
Link Repository

This service wraps the API client and turns every remote call into an
explicit Result. Classified failures never escape as exceptions here:
controllers branch on result.ok / result.kind instead.

Design Decisions:
- Separated from the HTTP client so transport details stay in one place
- Input shaping (trimmed URL, empty code omitted) happens here
- Every failure is logged once, with its kind
"""

import logging
from typing import Optional

from tinylink.api.client import LinkApiClient
from tinylink.api.schemas import LinkRecord
from tinylink.core.display import build_short_url
from tinylink.core.exceptions import TinyLinkException
from tinylink.core.results import LinkError, Result

logger = logging.getLogger(__name__)


class LinkRepository:
    """
    Remote link operations with typed results.

    Wraps list, create, delete and get-by-code.
    """

    def __init__(self, client: LinkApiClient):
        """
        Initialize the repository.

        Args:
            client: API client bound to the configured base address
        """
        self.client = client

    @property
    def base_address(self) -> str:
        return self.client.base_address

    def short_url(self, code: str) -> str:
        """Public short URL for a code."""
        return build_short_url(self.base_address, code)

    def _failure(self, operation: str, exc: TinyLinkException) -> Result:
        logger.warning(f"{operation} failed: kind={exc.kind.value} status={exc.status_code} {exc.message}")
        return Result.failure(LinkError.from_exception(exc))

    async def list_links(self) -> Result[list[LinkRecord]]:
        """
        Fetch every link.

        Returns:
            Result with the records in server order, or a TRANSPORT
            failure (network error or non-2xx status)
        """
        try:
            links = await self.client.list_links()
        except TinyLinkException as e:
            return self._failure("list_links", e)
        logger.debug(f"Loaded {len(links)} links")
        return Result.success(links)

    async def create_link(self, target_url: str, code: Optional[str] = None) -> Result[LinkRecord]:
        """
        Create a link.

        Args:
            target_url: Long URL, trimmed before sending
            code: Optional custom code; empty means server-generated

        Returns:
            Result with the created record, or a CODE_CONFLICT,
            VALIDATION or TRANSPORT failure
        """
        try:
            record = await self.client.create_link(target_url.strip(), code or None)
        except TinyLinkException as e:
            return self._failure("create_link", e)
        logger.info(f"Created link {record.code} -> {record.target_url}")
        return Result.success(record)

    async def delete_link(self, code: str) -> Result[None]:
        """
        Delete a link.

        Returns:
            Empty success, or a NOT_FOUND, OPERATION_FAILED or
            TRANSPORT failure
        """
        try:
            await self.client.delete_link(code)
        except TinyLinkException as e:
            return self._failure("delete_link", e)
        logger.info(f"Deleted link {code}")
        return Result.success(None)

    async def get_link(self, code: str) -> Result[LinkRecord]:
        """
        Fetch one link.

        Returns:
            Result with the record, or a NOT_FOUND, OPERATION_FAILED or
            TRANSPORT failure
        """
        try:
            record = await self.client.get_link(code)
        except TinyLinkException as e:
            return self._failure("get_link", e)
        return Result.success(record)
