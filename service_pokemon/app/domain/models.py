"""
Value types shared by the lookup pipeline.

Upstream clients return one of a closed set of outcome types instead of
raising, so the orchestrator can branch on every case explicitly:

- ``Success(value)``: the call produced a usable value
- ``NotFound``: the provider has no record for the request
- ``Unavailable``: transport failure, timeout, server error or bad payload
- ``RateLimited``: the provider refused the call because of its quota
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from shared.errors import InvalidInputError

T = TypeVar("T")


@dataclass(frozen=True)
class LookupKey:
    """Normalized (trimmed, case-folded) species name used as a cache key."""

    value: str

    @classmethod
    def from_name(cls, name: str) -> "LookupKey":
        normalized = (name or "").strip().casefold()
        if not normalized:
            raise InvalidInputError(
                "Species name must not be empty",
                details={"name": name}
            )
        return cls(normalized)

    def __str__(self) -> str:
        return self.value


class Provenance(str, Enum):
    """Whether a description went through the style transform."""
    ORIGINAL = "original"
    TRANSFORMED = "transformed"


@dataclass(frozen=True)
class Description:
    """Resolved description text tagged with its provenance."""

    text: str
    provenance: Provenance

    @property
    def is_transformed(self) -> bool:
        return self.provenance is Provenance.TRANSFORMED


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Unavailable:
    reason: str = "unavailable"


@dataclass(frozen=True)
class RateLimited:
    reason: str = "rate limited"


UpstreamResult = Union[Success[T], NotFound, Unavailable, RateLimited]

# Entity lookups never report rate limiting; style transforms never report NotFound.
EntityResult = Union[Success[str], NotFound, Unavailable]
TransformResult = Union[Success[str], Unavailable, RateLimited]
