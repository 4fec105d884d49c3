"""
Dashboard Service

This service owns the dashboard's local state: the list of links, the
search query, the create form and the per-operation flags.

Design Decisions:
- State is an immutable snapshot (DashboardState); every change produces
  a new snapshot through a pure transition function
- Transitions that need I/O return an effect request (FetchLinks,
  CreateLink) that DashboardController carries out against the repository
- Successful create/delete update the local list directly, without
  re-fetching (optimistic local update)
- After unmount(), late responses are dropped instead of applied

State machines:
- List loading:  idle -> loading -> loaded | errored (once, on mount)
- Create:        idle -> submitting -> idle-with-success | idle-with-error
- Delete:        confirm -> remote call -> removed | notice
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from tinylink.api.schemas import LinkRecord
from tinylink.core.exceptions import ErrorKind
from tinylink.core.results import LinkError, Result
from tinylink.core.validators import validate_code, validate_url
from tinylink.services.link_repository import LinkRepository
from tinylink.services.prompt import UserPrompt

logger = logging.getLogger(__name__)

# User-facing messages
LOAD_ERROR = "Could not load links. Try again after some time."
URL_REQUIRED = "URL required."
CODE_INVALID = "Code must be 6-8 characters: A-Z, a-z, 0-9."
CODE_TAKEN = "Code already exists, try another."
CREATE_FAILED = "Could not create link."
CREATE_NETWORK_ERROR = "Network error. Try again after some time."
CREATE_SUCCESS = "Link successfully created!"
CREATE_IN_PROGRESS = "A link is already being created."
DELETE_CONFIRM = "Delete short code {code}?"
DELETE_GONE = "Code already deleted or doesn't exist."
DELETE_FAILED = "Could not delete. Try again after some time."
NETWORK_ERROR = "Network error."
COPY_SUCCESS = "Short URL copied!"
COPY_FAILED = "Could not copy."


# --- Effects ---


@dataclass(frozen=True)
class FetchLinks:
    """Request to load the full link list."""


@dataclass(frozen=True)
class CreateLink:
    """Request to create a link."""
    url: str
    code: Optional[str] = None


# --- State ---


@dataclass(frozen=True)
class DashboardState:
    """Snapshot of the dashboard view."""
    links: tuple[LinkRecord, ...] = ()
    search: str = ""

    # Create form
    url: str = ""
    code: str = ""

    loading: bool = False
    links_error: Optional[str] = None
    creating: bool = False
    form_error: Optional[str] = None
    form_error_kind: Optional[ErrorKind] = None
    form_success: Optional[str] = None
    code_conflict: bool = False

    # Last delete outcome that needs acknowledgment
    notice: Optional[str] = None

    @property
    def filtered_links(self) -> list[LinkRecord]:
        return filter_links(self.links, self.search)


def filter_links(links, query: str) -> list[LinkRecord]:
    """
    Links whose code or target URL contains the query (case-insensitive).

    A blank query returns every link.
    """
    if not query.strip():
        return list(links)
    needle = query.lower()
    return [
        link for link in links
        if needle in link.code.lower() or needle in link.target_url.lower()
    ]


# --- Transitions ---


def start_loading(state: DashboardState) -> tuple[DashboardState, FetchLinks]:
    return replace(state, loading=True, links_error=None), FetchLinks()


def finish_loading(state: DashboardState, result: Result[list[LinkRecord]]) -> DashboardState:
    if result.ok:
        return replace(state, loading=False, links=tuple(result.value or ()), links_error=None)
    return replace(state, loading=False, links_error=LOAD_ERROR)


def submit_create(state: DashboardState) -> tuple[DashboardState, Optional[CreateLink]]:
    """
    Validate the create form.

    Returns:
        The new state and a CreateLink effect, or no effect when a guard
        clause rejected the input (form_error is set instead) or a
        submission is already in flight (state returned unchanged)
    """
    if state.creating:
        return state, None

    state = replace(state, form_error=None, form_error_kind=None, form_success=None)

    if not validate_url(state.url):
        return replace(state, form_error=URL_REQUIRED, form_error_kind=ErrorKind.VALIDATION), None

    if not validate_code(state.code):
        return replace(state, form_error=CODE_INVALID, form_error_kind=ErrorKind.VALIDATION), None

    return replace(state, creating=True), CreateLink(url=state.url.strip(), code=state.code or None)


def create_error_message(error: LinkError) -> str:
    if error.kind is ErrorKind.CODE_CONFLICT:
        return CODE_TAKEN
    if error.kind is ErrorKind.TRANSPORT:
        return CREATE_NETWORK_ERROR
    if error.kind is ErrorKind.OPERATION_FAILED:
        return CREATE_FAILED
    return error.message or CREATE_FAILED


def finish_create(state: DashboardState, result: Result[LinkRecord]) -> DashboardState:
    if not result.ok:
        return replace(
            state,
            creating=False,
            form_error=create_error_message(result.error),
            form_error_kind=result.error.kind,
            code_conflict=result.error.kind is ErrorKind.CODE_CONFLICT,
        )

    created = result.value
    # Codes are unique: drop any stale local copy before prepending
    others = tuple(link for link in state.links if link.code != created.code)
    return replace(
        state,
        creating=False,
        links=(created,) + others,
        url="",
        code="",
        code_conflict=False,
        form_error=None,
        form_error_kind=None,
        form_success=CREATE_SUCCESS,
    )


def delete_notice(error: LinkError) -> str:
    if error.kind is ErrorKind.NOT_FOUND:
        return DELETE_GONE
    if error.kind is ErrorKind.TRANSPORT:
        return NETWORK_ERROR
    return DELETE_FAILED


def finish_delete(state: DashboardState, code: str, result: Result[None]) -> DashboardState:
    if result.ok:
        return replace(
            state,
            links=tuple(link for link in state.links if link.code != code),
            notice=None,
        )
    # NOT_FOUND: nothing to reconcile locally until the next reload
    return replace(state, notice=delete_notice(result.error))


def change_search(state: DashboardState, search: str) -> DashboardState:
    return replace(state, search=search)


def change_url(state: DashboardState, url: str) -> DashboardState:
    return replace(state, url=url)


def change_code(state: DashboardState, code: str) -> DashboardState:
    return replace(state, code=code, code_conflict=False)


# --- Controller ---


class DashboardController:
    """
    Holds the dashboard state and runs its remote operations.

    Usage:
        dashboard = DashboardController(repository, prompt)
        await dashboard.mount()
        dashboard.set_url("https://example.com")
        await dashboard.create()
        dashboard.filtered_links
    """

    def __init__(self, repository: LinkRepository, prompt: UserPrompt):
        """
        Initialize the controller.

        Args:
            repository: Remote link operations
            prompt: Confirmation/clipboard/notice capability
        """
        self.repository = repository
        self.prompt = prompt
        self.state = DashboardState()
        self.mounted = True

    def unmount(self) -> None:
        """Stop applying results; in-flight calls are abandoned."""
        self.mounted = False

    def _apply(self, state: DashboardState) -> None:
        if self.mounted:
            self.state = state

    async def mount(self) -> Result[list[LinkRecord]]:
        """Load the link list (the only automatic fetch)."""
        return await self.reload()

    async def reload(self) -> Result[list[LinkRecord]]:
        state, _ = start_loading(self.state)
        self._apply(state)
        try:
            result = await self.repository.list_links()
            self._apply(finish_loading(self.state, result))
        finally:
            if self.state.loading:
                self._apply(replace(self.state, loading=False))
        return result

    async def create(self) -> Result[LinkRecord]:
        """
        Submit the create form.

        Returns:
            The repository result, or a VALIDATION failure when the form
            was rejected before any network call
        """
        state, effect = submit_create(self.state)
        self._apply(state)
        if effect is None:
            if state.creating:
                logger.debug("Create ignored: a submission is already in flight")
                return Result.failure(LinkError(ErrorKind.VALIDATION, CREATE_IN_PROGRESS))
            return Result.failure(LinkError(ErrorKind.VALIDATION, state.form_error))

        try:
            result = await self.repository.create_link(effect.url, effect.code)
            self._apply(finish_create(self.state, result))
        finally:
            if self.state.creating:
                self._apply(replace(self.state, creating=False))
        return result

    async def delete(self, code: str) -> Optional[Result[None]]:
        """
        Delete a link after user confirmation.

        Returns:
            The repository result, or None when the user declined
        """
        if not self.prompt.confirm(DELETE_CONFIRM.format(code=code)):
            logger.debug(f"Delete of {code} cancelled")
            return None

        result = await self.repository.delete_link(code)
        if not self.mounted:
            return result

        self._apply(finish_delete(self.state, code, result))
        if not result.ok:
            self.prompt.notify(self.state.notice)
        return result

    def copy_short_url(self, code: str) -> bool:
        """Copy a link's short URL and tell the user how it went."""
        copied = self.prompt.copy_to_clipboard(self.repository.short_url(code))
        self.prompt.notify(COPY_SUCCESS if copied else COPY_FAILED)
        return copied

    def set_search(self, search: str) -> None:
        self._apply(change_search(self.state, search))

    def set_url(self, url: str) -> None:
        self._apply(change_url(self.state, url))

    def set_code(self, code: str) -> None:
        self._apply(change_code(self.state, code))

    @property
    def filtered_links(self) -> list[LinkRecord]:
        return self.state.filtered_links
