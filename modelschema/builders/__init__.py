from __future__ import annotations

from .schema_builder import SchemaBuilder

__all__: list[str] = ["SchemaBuilder"]
