from __future__ import annotations

from typing import Any, List, Optional

import pytest

from modelschema.reflection import PropertyDescriptor, describe
from modelschema.synthesis.required import (
    is_implicitly_required,
    is_required,
    required_names,
)
from tests.models import Address, Status


def _prop(name: str, annotation: Any, explicit: Optional[bool] = None) -> PropertyDescriptor:
    return PropertyDescriptor(name=name, type=describe(annotation), explicitly_required=explicit)


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (int, True),
        (bool, True),
        (str, True),
        (Status, True),
        (Optional[int], False),
        (Address, False),
        (List[int], False),
        (Any, False),
    ],
)
def test_is_implicitly_required(annotation: Any, expected: bool) -> None:
    assert is_implicitly_required(describe(annotation)) is expected


def test_explicit_true_beats_nullable() -> None:
    assert is_required(_prop("a", Optional[int], explicit=True)) is True


def test_explicit_false_beats_value_type() -> None:
    assert is_required(_prop("a", int, explicit=False)) is False


def test_required_names_sorted_and_deduplicated() -> None:
    props = [
        _prop("zeta", int),
        _prop("alpha", Optional[str]),
        _prop("mid", Address, explicit=True),
    ]

    assert required_names(props, explicit=["alpha", "zeta"]) == ["alpha", "mid", "zeta"]


def test_required_names_ignores_unknown_explicit_names() -> None:
    assert required_names([_prop("a", Optional[int])], explicit=["ghost"]) == []


def test_required_names_empty() -> None:
    assert required_names([]) == []
