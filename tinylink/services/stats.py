"""
Statistics Service

This service drives the per-link stats page: given a short code it fetches
the link and exposes one of three terminal outcomes.

- LOADED: the record is available
- NOT_FOUND: the code doesn't exist (404)
- ERROR: network or server failure

Design Decisions:
- Re-fetches only when the code changes (or on explicit refresh())
- Enters LOADING with no record before each fetch, so data from a
  previous code is never shown for the new one
- Only the most recent fetch may update the state: a superseded
  response, or one that arrives after unmount(), is discarded
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from tinylink.api.schemas import LinkRecord
from tinylink.core.exceptions import ErrorKind
from tinylink.core.results import Result
from tinylink.services.link_repository import LinkRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Code doesn't exist."
LOAD_FAILED_MESSAGE = "Stats could not be loaded."
NETWORK_ERROR_MESSAGE = "Network error."


class StatsStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class StatsState:
    """Snapshot of the stats page."""
    code: Optional[str] = None
    status: StatsStatus = StatsStatus.IDLE
    link: Optional[LinkRecord] = None
    error: Optional[str] = None
    short_url: Optional[str] = None


def finish_fetch(state: StatsState, result: Result[LinkRecord]) -> StatsState:
    if result.ok:
        return replace(state, status=StatsStatus.LOADED, link=result.value, error=None)
    if result.kind is ErrorKind.NOT_FOUND:
        return replace(state, status=StatsStatus.NOT_FOUND, link=None, error=NOT_FOUND_MESSAGE)
    if result.kind is ErrorKind.TRANSPORT:
        return replace(state, status=StatsStatus.ERROR, link=None, error=NETWORK_ERROR_MESSAGE)
    return replace(state, status=StatsStatus.ERROR, link=None, error=LOAD_FAILED_MESSAGE)


class StatsController:
    """
    Holds the stats page state for one code at a time.

    Usage:
        stats = StatsController(repository)
        await stats.show("abc123")
        if stats.state.status is StatsStatus.LOADED:
            stats.state.link.total_clicks
    """

    def __init__(self, repository: LinkRepository):
        self.repository = repository
        self.state = StatsState()
        self.mounted = True
        # Bumped on every fetch; only the latest fetch may land
        self._generation = 0

    def unmount(self) -> None:
        self.mounted = False

    async def show(self, code: str) -> StatsState:
        """
        Display stats for a code, fetching only if the code changed.

        Args:
            code: Short code from the page route

        Returns:
            The state after the fetch (or the unchanged state)
        """
        if code == self.state.code and self.state.status is not StatsStatus.IDLE:
            return self.state
        return await self._fetch(code)

    async def refresh(self) -> StatsState:
        """Fetch the current code again."""
        if self.state.code is None:
            return self.state
        return await self._fetch(self.state.code)

    async def _fetch(self, code: str) -> StatsState:
        self._generation += 1
        generation = self._generation
        if self.mounted:
            self.state = StatsState(
                code=code,
                status=StatsStatus.LOADING,
                short_url=self.repository.short_url(code),
            )

        result = await self.repository.get_link(code)

        if not self.mounted:
            logger.debug(f"Dropping stats for {code}: view unmounted")
            return self.state
        if generation != self._generation:
            logger.debug(f"Dropping stale stats for {code}: a newer fetch superseded it")
            return self.state

        self.state = finish_fetch(self.state, result)
        return self.state
