"""modelschema
###############################################################################
Model reflection & schema synthesis
###############################################################################
Turns annotated Python model types (dataclasses, pydantic models, plain
annotated classes) into a deduplicated, deterministically ordered list of
schema entries for API description documents.

    from modelschema import SchemaSynthesizer

    models = SchemaSynthesizer().synthesize(Person)
"""

from __future__ import annotations

from modelschema.builders import SchemaBuilder
from modelschema.core.exceptions import (
    CycleGuardViolation,
    InvalidExpressionError,
    ModelIdConflictError,
    ReflectionError,
    SchemaSynthesisError,
)
from modelschema.synthesis import (
    ExternalDocumentation,
    KnownModelCache,
    Schema,
    SchemaSynthesizer,
    to_models,
)

__version__: str = "0.1.0"

__all__: list[str] = [
    "__version__",
    "Schema",
    "ExternalDocumentation",
    "KnownModelCache",
    "SchemaSynthesizer",
    "to_models",
    "SchemaBuilder",
    "SchemaSynthesisError",
    "ReflectionError",
    "ModelIdConflictError",
    "InvalidExpressionError",
    "CycleGuardViolation",
]
