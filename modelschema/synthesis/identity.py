"""
Model Identity Resolver

Turns a type into the schema id under which its model entry is published.
The naming convention is injected; nothing in this module reads global
configuration.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Final

from modelschema.core.exceptions import ReflectionError
from modelschema.reflection import TypeDescriptor, describe

__all__: list[str] = [
    "NamingConvention",
    "NAMING_CONVENTIONS",
    "simple_name",
    "qualified_name",
    "get_naming_convention",
    "ModelIdResolver",
]

NamingConvention = Callable[[type], str]


def simple_name(type_: type) -> str:
    """``Address``"""
    return describe(type_).name


def qualified_name(type_: type) -> str:
    """``billing.models.Address``"""
    return describe(type_).qualified_name


# Dispatch table – maps configuration names to naming conventions.
NAMING_CONVENTIONS: Final[Dict[str, NamingConvention]] = {
    "simple": simple_name,
    "qualified": qualified_name,
}


def get_naming_convention(name: str) -> NamingConvention:
    """Look up a built-in naming convention by its configuration name."""
    try:
        return NAMING_CONVENTIONS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown naming convention {name!r}; "
            f"expected one of {sorted(NAMING_CONVENTIONS)}"
        ) from None


class ModelIdResolver:
    """Resolve schema ids through an injected naming convention."""

    def __init__(self, convention: NamingConvention) -> None:
        self._convention = convention

    def resolve(self, type_: TypeDescriptor | Any) -> str:
        """
        Return the schema id for *type_*.

        Nullable wrappers resolve to the id of the wrapped type, so
        ``Optional[Address]`` and ``Address`` share one entry.

        Raises:
            ReflectionError: When the convention yields an empty id.
        """
        handle = describe(type_).underlying.handle
        model_id = self._convention(handle)
        if not isinstance(model_id, str) or not model_id.strip():
            raise ReflectionError(
                f"Naming convention produced an invalid id {model_id!r} for {handle!r}",
                type_=handle,
            )
        return model_id
