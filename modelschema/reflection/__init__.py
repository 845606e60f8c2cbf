from __future__ import annotations

from .descriptors import PropertyDescriptor, TypeDescriptor
from .python_types import SCALAR_TYPES, PythonTypeDescriptor, describe

__all__: list[str] = [
    "TypeDescriptor",
    "PropertyDescriptor",
    "PythonTypeDescriptor",
    "describe",
    "SCALAR_TYPES",
]
