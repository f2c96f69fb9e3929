"""
Railway-oriented result types.

Remote queries and resolutions return Success or Failure values instead of
raising, so a batch can keep going when a single target misbehaves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar('T')
E = TypeVar('E')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation result."""
    value: T
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed operation result."""
    error: E
    context: dict[str, Any] | None = None


# Type alias for Railway Result
Result = Success[T] | Failure[E]
