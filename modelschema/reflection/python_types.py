"""modelschema/reflection/python_types.py
###############################################################################
Python type adapter
###############################################################################
Implements `TypeDescriptor` on top of ``typing`` annotations.  Supported model
shapes are dataclasses, pydantic models and plain annotated classes (typed
``@property`` accessors included).

Python has no value/reference type split.  A property type counts as a
*value type* when it is a scalar (primitive, enum or ``Literal``) that is not
wrapped in ``Optional``; object types and containers behave like reference
types.
"""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import datetime
import decimal
import enum
import inspect
import types
import uuid
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    List,
    Literal,
    NewType,
    Optional,
    Sequence,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from modelschema.core.exceptions import ReflectionError
from modelschema.reflection.descriptors import PropertyDescriptor, TypeDescriptor

__all__: list[str] = ["PythonTypeDescriptor", "describe", "SCALAR_TYPES"]

# Maps scalar Python types to their (type keyword, format) pair.  Lookups walk
# the MRO, so ``bool`` must be matched before its base class ``int``.
SCALAR_TYPES: Dict[type, Tuple[str, Optional[str]]] = {
    bool: ("boolean", None),
    int: ("integer", None),
    float: ("number", "double"),
    decimal.Decimal: ("number", None),
    str: ("string", None),
    bytes: ("string", "byte"),
    datetime.datetime: ("string", "date-time"),
    datetime.date: ("string", "date"),
    datetime.time: ("string", "time"),
    datetime.timedelta: ("string", "duration"),
    uuid.UUID: ("string", "uuid"),
}

_SEQUENCE_TYPES: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        collections.deque,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)
_SET_TYPES: frozenset[Any] = frozenset(
    {set, frozenset, collections.abc.Set, collections.abc.MutableSet}
)
_MAPPING_TYPES: frozenset[Any] = frozenset(
    {
        dict,
        collections.OrderedDict,
        collections.defaultdict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)

_NONE_TYPE = type(None)


def _scalar_format(cls: type) -> Optional[Tuple[str, Optional[str]]]:
    for base in cls.__mro__:
        if base in SCALAR_TYPES:
            return SCALAR_TYPES[base]
    return None


def _container_kind(target: Any) -> Optional[str]:
    if not inspect.isclass(target):
        return None
    if target in _SEQUENCE_TYPES:
        return "sequence"
    if target in _SET_TYPES:
        return "set"
    if target in _MAPPING_TYPES:
        return "mapping"
    return None


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _unwrap_alias(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and ``NewType`` aliases down to the real type."""
    while True:
        if get_origin(annotation) is Annotated:
            annotation = get_args(annotation)[0]
        elif isinstance(annotation, NewType):
            annotation = annotation.__supertype__
        else:
            return annotation


def _resolve_hints(target: Any, owner: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError, AttributeError) as e:
        raise ReflectionError(
            f"Cannot resolve type hints of {owner!r}: {e}", type_=owner
        ) from e


class PythonTypeDescriptor(TypeDescriptor):
    """Describe a Python annotation (class, ``typing`` alias or union)."""

    def __init__(self, annotation: Any) -> None:
        annotation = _unwrap_alias(annotation)

        self._annotation = annotation
        self._inner: Optional[PythonTypeDescriptor] = None
        self._elements: Tuple[TypeDescriptor, ...] = ()
        self._container: Optional[str] = None

        origin = get_origin(annotation)
        if _is_union(origin):
            args = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
            if len(args) != 1:
                raise ReflectionError(
                    f"Union {annotation!r} cannot be mapped to a single schema type",
                    type_=annotation,
                )
            self._kind = "nullable"
            self._inner = PythonTypeDescriptor(args[0])
        elif origin is Literal:
            self._kind = "literal"
        elif annotation is Any:
            self._kind = "opaque"
        elif origin is not None:
            self._kind = "container"
            self._container = _container_kind(origin) or "generic"
            args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
            self._elements = tuple(PythonTypeDescriptor(arg) for arg in args)
        elif _container_kind(annotation) is not None:
            self._kind = "container"
            self._container = _container_kind(annotation)
        elif inspect.isclass(annotation) and annotation is not _NONE_TYPE:
            if issubclass(annotation, enum.Enum):
                self._kind = "enum"
            elif _scalar_format(annotation) is not None:
                self._kind = "primitive"
            else:
                self._kind = "class"
        else:
            raise ReflectionError(
                f"Cannot classify type annotation {annotation!r}", type_=annotation
            )

    def __repr__(self) -> str:
        return f"PythonTypeDescriptor({self._annotation!r})"

    @property
    def handle(self) -> Any:
        return self._annotation

    @property
    def name(self) -> str:
        if self._inner is not None:
            return self._inner.name
        return getattr(self._annotation, "__name__", None) or repr(self._annotation)

    @property
    def qualified_name(self) -> str:
        if self._inner is not None:
            return self._inner.qualified_name
        module = getattr(self._annotation, "__module__", None)
        qualname = getattr(self._annotation, "__qualname__", None)
        if module and qualname:
            return f"{module}.{qualname}"
        return self.name

    @property
    def is_value_type(self) -> bool:
        return self._kind in ("primitive", "enum", "literal")

    @property
    def is_nullable(self) -> bool:
        return self._inner is not None

    @property
    def is_primitive(self) -> bool:
        return self.underlying._kind == "primitive"

    @property
    def is_enum(self) -> bool:
        return self.underlying._kind in ("enum", "literal")

    @property
    def is_generic_container(self) -> bool:
        return self.underlying._kind == "container"

    @property
    def is_opaque(self) -> bool:
        return self.underlying._kind == "opaque"

    @property
    def is_class(self) -> bool:
        return self.underlying._kind == "class"

    @property
    def underlying(self) -> "PythonTypeDescriptor":
        return self._inner if self._inner is not None else self

    @property
    def container_kind(self) -> Optional[str]:
        return self.underlying._container

    @property
    def element_types(self) -> Tuple[TypeDescriptor, ...]:
        return self.underlying._elements

    @property
    def enum_values(self) -> List[Any]:
        target = self.underlying
        if target._kind == "literal":
            return list(get_args(target._annotation))
        if target._kind == "enum":
            return [member.value for member in target._annotation]
        return []

    @property
    def scalar_format(self) -> Optional[Tuple[str, Optional[str]]]:
        target = self.underlying
        if target._kind != "primitive":
            return None
        return _scalar_format(target._annotation)

    def enumerate_properties(self) -> Sequence[PropertyDescriptor]:
        target = self.underlying
        if target._kind != "class":
            raise ReflectionError(
                f"{self._annotation!r} is not a class with enumerable properties",
                type_=self._annotation,
            )
        cls = target._annotation
        if issubclass(cls, BaseModel):
            return _pydantic_properties(cls)
        if dataclasses.is_dataclass(cls):
            return _dataclass_properties(cls)
        return _class_properties(cls)


def describe(annotation: Any) -> TypeDescriptor:
    """Return a `TypeDescriptor` for *annotation*, passing descriptors through."""
    if isinstance(annotation, TypeDescriptor):
        return annotation
    return PythonTypeDescriptor(annotation)


def _describe_property(owner: type, name: str, annotation: Any) -> TypeDescriptor:
    try:
        return PythonTypeDescriptor(annotation)
    except ReflectionError as e:
        raise ReflectionError(
            f"Property {owner.__name__}.{name}: {e}", type_=owner, prop=name
        ) from e


def _pydantic_explicit_required(field: FieldInfo) -> Optional[bool]:
    # Defaults do not count, only ``json_schema_extra={"required": ...}``.
    extra = field.json_schema_extra
    if not isinstance(extra, dict) or "required" not in extra:
        return None
    return bool(extra["required"])


def _pydantic_properties(cls: type[BaseModel]) -> List[PropertyDescriptor]:
    props: List[PropertyDescriptor] = []
    for name, field in cls.model_fields.items():
        props.append(
            PropertyDescriptor(
                name=name,
                type=_describe_property(cls, name, field.annotation),
                explicitly_required=_pydantic_explicit_required(field),
                description=field.description,
            )
        )
    return props


def _dataclass_properties(cls: type) -> List[PropertyDescriptor]:
    hints = _resolve_hints(cls, cls)
    props: List[PropertyDescriptor] = []
    for field in dataclasses.fields(cls):
        required = field.metadata.get("required")
        props.append(
            PropertyDescriptor(
                name=field.name,
                type=_describe_property(cls, field.name, hints[field.name]),
                explicitly_required=None if required is None else bool(required),
                description=field.metadata.get("description"),
            )
        )
    return props


def _class_properties(cls: type) -> List[PropertyDescriptor]:
    annotations: Dict[str, Any] = {}
    for name, hint in _resolve_hints(cls, cls).items():
        if name.startswith("_") or get_origin(hint) is ClassVar:
            continue
        annotations[name] = hint

    # Typed @property accessors, base classes first so overrides win.
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if not isinstance(member, property) or member.fget is None:
                continue
            if name.startswith("_"):
                continue
            returns = _resolve_hints(member.fget, cls).get("return")
            if returns is not None:
                annotations[name] = returns

    return [
        PropertyDescriptor(name=name, type=_describe_property(cls, name, hint))
        for name, hint in annotations.items()
    ]
