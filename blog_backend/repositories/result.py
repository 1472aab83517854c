"""Lookup results returned by repositories instead of ``None`` or exceptions."""

from dataclasses import dataclass

from blog_backend.errors.database import RecordNotFoundError


@dataclass(frozen=True, slots=True)
class Found[T]:
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    reason: str = "Record not found"


type Lookup[T] = Found[T] | NotFound


def found_or_raise[T](lookup: Lookup[T]) -> T:
    """
    Unwrap a lookup at the HTTP boundary.

    Raises:
        RecordNotFoundError: If the lookup is `NotFound`
    """
    if isinstance(lookup, NotFound):
        raise RecordNotFoundError(detail=lookup.reason)
    return lookup.value
