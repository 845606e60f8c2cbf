"""
Primitive Classifier

Pure classification helpers used by the synthesis engine to decide whether a
property ends in an inline leaf schema or must be expanded into a model entry
of its own.

A type is a *class property* (expanded recursively) iff it is not primitive,
not an enum, not a generic container and not opaque.  Classification looks
through ``Optional``: ``Optional[Address]`` is still a class property.
"""

from __future__ import annotations

from typing import Any, List

from modelschema.reflection import TypeDescriptor
from modelschema.synthesis.types import Schema

__all__: list[str] = [
    "is_primitive",
    "is_enum",
    "is_class_property",
    "leaf_schema",
]


def is_primitive(type_: TypeDescriptor) -> bool:
    return type_.is_primitive


def is_enum(type_: TypeDescriptor) -> bool:
    return type_.is_enum


def is_class_property(type_: TypeDescriptor) -> bool:
    """Return True when *type_* needs a model entry of its own."""
    return (
        not type_.is_primitive
        and not type_.is_enum
        and not type_.is_generic_container
        and not type_.is_opaque
    )


def _enum_type_keyword(values: List[Any]) -> str:
    # bool is an int subclass but never a valid integer enum value here
    if values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return "integer"
    if values and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
    ):
        return "number"
    return "string"


def leaf_schema(type_: TypeDescriptor) -> Schema:
    """
    Build the inline schema for a primitive, enum or opaque property type.

    Args:
        type_: Descriptor of the property type

    Returns:
        A `Schema` with ``type``/``format`` for primitives, ``type``/``enum``
        for enums and an empty schema for anything else.
    """
    if type_.is_enum:
        values = type_.enum_values
        return Schema(type=_enum_type_keyword(values), enum=values)

    scalar = type_.scalar_format
    if scalar is not None:
        keyword, fmt = scalar
        return Schema(type=keyword, format=fmt)

    return Schema()
