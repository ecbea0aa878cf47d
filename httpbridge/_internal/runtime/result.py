"""Discriminated result type for the two-value failure contract."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a success payload or an error message, never both.

    Fallible bridge operations return a Result instead of raising so scripts
    can branch on the second return value. Use ``unpack()`` to get the script
    view: ``(value, None)`` on success, ``(None, message)`` on failure.
    """

    value: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("a result carries either a value or an error")
        if self.error is not None and not self.error:
            raise ValueError("error message must not be empty")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> "Result[T]":
        return cls(error=message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Result[T]":
        """Build a failure from an exception, falling back to its class name."""
        return cls(error=str(exc) or type(exc).__name__)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unpack(self) -> tuple[T | None, str | None]:
        return self.value, self.error
