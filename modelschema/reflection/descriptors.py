"""
Reflection capability interface

The synthesis engine never touches Python's reflection facilities directly;
it talks to a `TypeDescriptor`.  Keeping the contract this narrow lets other
metadata sources (ORM mappers, protobuf descriptors, ...) plug into the
engine by implementing the same abstract class.

Classification flags on a nullable wrapper describe the wrapped type; only
`is_nullable` and `is_value_type` tell the wrapper apart from its inner type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

__all__: list[str] = ["TypeDescriptor", "PropertyDescriptor"]


class TypeDescriptor(ABC):
    """Read-only view over a single type in the model graph."""

    @property
    @abstractmethod
    def handle(self) -> Any:
        """Opaque identity of the type, used as the known-model cache key."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name of the type."""

    @property
    @abstractmethod
    def qualified_name(self) -> str:
        """Fully-qualified name of the type."""

    @property
    @abstractmethod
    def is_value_type(self) -> bool:
        """True when the type cannot represent an absent value."""

    @property
    @abstractmethod
    def is_nullable(self) -> bool:
        """True for optional wrappers such as ``Optional[T]``."""

    @property
    @abstractmethod
    def is_primitive(self) -> bool: ...

    @property
    @abstractmethod
    def is_enum(self) -> bool: ...

    @property
    @abstractmethod
    def is_generic_container(self) -> bool: ...

    @property
    @abstractmethod
    def is_opaque(self) -> bool:
        """True for types that carry no structure at all (``Any``)."""

    @property
    @abstractmethod
    def is_class(self) -> bool:
        """True for object types whose properties can be enumerated."""

    @property
    @abstractmethod
    def underlying(self) -> "TypeDescriptor":
        """The type with any nullable wrapper removed."""

    @property
    @abstractmethod
    def container_kind(self) -> Optional[str]:
        """``"sequence"``, ``"set"``, ``"mapping"`` or ``"generic"`` for containers."""

    @property
    @abstractmethod
    def element_types(self) -> Tuple["TypeDescriptor", ...]:
        """Type arguments of a container, empty when unparameterized."""

    @property
    @abstractmethod
    def enum_values(self) -> List[Any]: ...

    @property
    @abstractmethod
    def scalar_format(self) -> Optional[Tuple[str, Optional[str]]]:
        """``(type keyword, format)`` for primitives, else ``None``."""

    @abstractmethod
    def enumerate_properties(self) -> Sequence["PropertyDescriptor"]:
        """Return the type's own properties; raises `ReflectionError` on failure."""


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    A single property of a class type.

    Attributes:
        name: Property name as it appears in the schema.
        type: Descriptor of the declared property type.
        explicitly_required: Author-supplied requiredness, or None when the
            property carries no annotation either way.
        description: Optional human description of the property.
    """

    name: str
    type: TypeDescriptor
    explicitly_required: Optional[bool] = None
    description: Optional[str] = None
