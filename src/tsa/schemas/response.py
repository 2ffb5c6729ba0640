"""Two-variant result wrapper returned by the analysis service.

A ``Success`` carries data and never an error; a ``Failure`` carries an
error and never data. Callers branch on the variant::

    if isinstance(result, Success):
        ...
    elif isinstance(result, Failure):
        ...
    else:
        assert_never(result)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Literal, NoReturn, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

ANALYSIS_FAILED = "ANALYSIS_FAILED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIError(BaseModel):
    """Structured failure description."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    details: dict[str, Any] | None = None


class Success(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    data: T
    timestamp: datetime = Field(default_factory=_utcnow)


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    error: APIError
    timestamp: datetime = Field(default_factory=_utcnow)


APIResponse = Union[Success[T], Failure]


def failure(code: str, message: str, details: dict[str, Any] | None = None) -> Failure:
    """Shorthand for building a ``Failure`` with a fresh timestamp."""
    return Failure(error=APIError(code=code, message=message, details=details))


def assert_never(value: NoReturn) -> NoReturn:
    """Exhaustiveness guard for ``APIResponse`` branches."""
    raise AssertionError(f"Unexpected value: {value!r}")
