"""
Required-Field Policy

A property is *implicitly* required when its type cannot represent an absent
value (a non-nullable value type).  An explicit annotation from the model
author always wins over the implicit rule, in both directions.
"""

from __future__ import annotations

from typing import Iterable, List

from modelschema.reflection import PropertyDescriptor, TypeDescriptor

__all__: list[str] = [
    "is_implicitly_required",
    "is_required",
    "required_names",
]


def is_implicitly_required(type_: TypeDescriptor) -> bool:
    return type_.is_value_type and not type_.is_nullable


def is_required(prop: PropertyDescriptor) -> bool:
    """Return the effective requiredness of a single property."""
    if prop.explicitly_required is not None:
        return prop.explicitly_required
    return is_implicitly_required(prop.type)


def required_names(
    props: Iterable[PropertyDescriptor], explicit: Iterable[str] = ()
) -> List[str]:
    """
    Compute the sorted required set of an entry.

    Args:
        props: The entry's properties
        explicit: Additional names marked required by an author (builder)

    Returns:
        Sorted, deduplicated property names: explicit names united with the
        properties that are required by annotation or by their type.
    """
    props = list(props)
    known = {prop.name for prop in props}
    names = {name for name in explicit if name in known}
    names.update(prop.name for prop in props if is_required(prop))
    return sorted(names)
