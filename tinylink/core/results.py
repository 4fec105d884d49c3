"""
Operation Results

Repository calls return a Result instead of raising, so controllers can
branch on the outcome explicitly:

    result = await repository.get_link("abc123")
    if result.ok:
        show(result.value)
    elif result.error.kind is ErrorKind.NOT_FOUND:
        ...
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from tinylink.core.exceptions import ErrorKind, TinyLinkException

T = TypeVar("T")


@dataclass(frozen=True)
class LinkError:
    """A classified failure of a link operation."""
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    @classmethod
    def from_exception(cls, exc: TinyLinkException) -> "LinkError":
        return cls(kind=exc.kind, message=exc.message, status_code=exc.status_code)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value (success) or a LinkError (failure)."""
    value: Optional[T] = None
    error: Optional[LinkError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: LinkError) -> "Result[T]":
        return cls(error=error)
