from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional, TypeVar, Union

import pytest

from modelschema.core.exceptions import ReflectionError
from modelschema.reflection import PythonTypeDescriptor, describe
from tests.models import (
    Account,
    Address,
    Ambiguous,
    Contact,
    Dangling,
    Empty,
    Invoice,
    InvoiceLine,
    Person,
    Point,
    Priority,
    Resident,
    Session,
    Status,
    UserId,
)


def _props(model: Any) -> Dict[str, Any]:
    return {prop.name: prop for prop in describe(model).enumerate_properties()}


class TestClassification:
    def test_primitive(self) -> None:
        d = describe(int)
        assert d.is_primitive and d.is_value_type
        assert not d.is_class and not d.is_nullable
        assert d.scalar_format == ("integer", None)

    def test_bool_is_not_integer(self) -> None:
        assert describe(bool).scalar_format == ("boolean", None)

    def test_str_is_value_type(self) -> None:
        assert describe(str).is_value_type is True

    def test_enum(self) -> None:
        d = describe(Status)
        assert d.is_enum and not d.is_primitive
        assert d.enum_values == ["draft", "issued", "paid"]

    def test_int_enum_is_enum_not_primitive(self) -> None:
        d = describe(Priority)
        assert d.is_enum and not d.is_primitive
        assert d.enum_values == [1, 2, 3]

    def test_optional_wraps_inner_type(self) -> None:
        d = describe(Optional[Address])
        assert d.is_nullable and d.is_class
        assert not d.is_value_type
        assert d.underlying.handle is Address
        assert d.name == "Address"

    def test_pep604_optional(self) -> None:
        d = describe(int | None)
        assert d.is_nullable and d.is_primitive and not d.is_value_type

    def test_annotated_is_unwrapped(self) -> None:
        d = describe(Annotated[int, "meta"])
        assert d.handle is int

    def test_new_type_is_unwrapped(self) -> None:
        d = describe(UserId)
        assert d.handle is int
        assert d.is_primitive and d.is_value_type
        assert describe(Annotated[UserId, "meta"]).handle is int

    def test_new_type_properties(self) -> None:
        props = _props(Session)
        assert props["user"].type.scalar_format == ("integer", None)
        assert props["account"].type.is_nullable
        assert props["account"].type.scalar_format == ("string", "uuid")
        assert props["token"].type.handle is int

    def test_containers(self) -> None:
        assert describe(List[int]).container_kind == "sequence"
        assert describe(dict).container_kind == "mapping"
        assert describe(set[str]).container_kind == "set"
        d = describe(Dict[str, Point])
        assert d.is_generic_container and not d.is_class
        assert [e.handle for e in d.element_types] == [str, Point]

    def test_any_is_opaque(self) -> None:
        d = describe(Any)
        assert d.is_opaque and not d.is_class and not d.is_value_type

    def test_class(self) -> None:
        d = describe(Person)
        assert d.is_class and not d.is_value_type
        assert d.qualified_name == f"{Person.__module__}.Person"

    def test_descriptor_passthrough(self) -> None:
        d = describe(Point)
        assert describe(d) is d

    @pytest.mark.parametrize(
        "annotation", [Union[int, str], Optional[Union[int, str]], TypeVar("T"), "Point", None]
    )
    def test_unclassifiable(self, annotation: Any) -> None:
        with pytest.raises(ReflectionError):
            PythonTypeDescriptor(annotation)


class TestEnumerateProperties:
    def test_dataclass(self) -> None:
        props = _props(Address)
        assert list(props) == ["street", "city", "postcode"]
        assert props["postcode"].type.is_nullable
        assert props["street"].explicitly_required is None

    def test_dataclass_metadata(self) -> None:
        props = _props(Contact)
        assert props["email"].explicitly_required is False
        assert props["phone"].explicitly_required is True
        assert props["phone"].description == "E.164 number"

    def test_pydantic_model(self) -> None:
        props = _props(Invoice)
        assert props["number"].explicitly_required is None
        assert props["number"].description == "Invoice number"
        assert props["priority"].explicitly_required is None
        assert props["lines"].explicitly_required is True
        assert props["customer"].type.underlying.handle is Person

    def test_pydantic_defaults_are_not_explicit(self) -> None:
        props = _props(InvoiceLine)
        assert props["description"].explicitly_required is None
        assert props["quantity"].explicitly_required is False
        assert all(p.explicitly_required is None for p in _props(Resident).values())

    def test_plain_class(self) -> None:
        props = _props(Account)
        assert sorted(props) == ["balance", "id", "owner"]
        assert props["balance"].type.handle is float

    def test_empty(self) -> None:
        assert _props(Empty) == {}

    def test_unresolved_forward_reference(self) -> None:
        with pytest.raises(ReflectionError):
            describe(Dangling).enumerate_properties()

    def test_unclassifiable_property_names_property(self) -> None:
        with pytest.raises(ReflectionError) as exc_info:
            describe(Ambiguous).enumerate_properties()
        assert exc_info.value.prop == "value"
        assert exc_info.value.type_ is Ambiguous

    def test_non_class_has_no_properties(self) -> None:
        with pytest.raises(ReflectionError):
            describe(List[Point]).enumerate_properties()
