"""
Core Custom Exceptions

This module defines the domain-specific exceptions raised while reflecting
over model types and synthesizing schema entries. Callers can catch
`SchemaSynthesisError` to handle every user-facing failure of a synthesis run
without resorting to a broad `except Exception`.

Defined Exceptions:
- `SchemaSynthesisError`: Base class for every user-facing failure.
- `ReflectionError`: A type's properties cannot be enumerated or classified.
- `ModelIdConflictError`: Two distinct types resolve to the same schema id.
- `InvalidExpressionError`: The schema builder was asked to bind something
  that is not a simple property access.
- `CycleGuardViolation`: Internal invariant failure in the cycle guard.
"""

from __future__ import annotations

from typing import Any

__all__: list[str] = [
    "SchemaSynthesisError",
    "ReflectionError",
    "ModelIdConflictError",
    "InvalidExpressionError",
    "CycleGuardViolation",
]


class SchemaSynthesisError(Exception):
    """Base class for errors that abort a schema synthesis call."""


class ReflectionError(SchemaSynthesisError):
    """
    Raised when a type cannot be enumerated or classified.

    The whole ``synthesize`` call is aborted: skipping a property would leave
    the owning entry's ``required`` set unverifiable.
    """

    def __init__(self, message: str, *, type_: Any = None, prop: str | None = None):
        super().__init__(message)
        self.type_ = type_
        self.prop = prop


class ModelIdConflictError(SchemaSynthesisError):
    """Raised when two distinct origin types resolve to the same schema id."""

    def __init__(self, model_id: str, existing: Any, incoming: Any) -> None:
        super().__init__(
            f"Schema id {model_id!r} is already used by {existing!r}; "
            f"cannot register {incoming!r} under the same id"
        )
        self.model_id = model_id
        self.existing = existing
        self.incoming = incoming


class InvalidExpressionError(SchemaSynthesisError, ValueError):
    """Raised by the schema builder for accessors that are not a member access."""


class CycleGuardViolation(RuntimeError):
    """
    A type's placeholder was missing when the engine came back to fill it in.

    This signals a programming error inside the engine rather than bad input
    and is therefore not a `SchemaSynthesisError`.
    """
