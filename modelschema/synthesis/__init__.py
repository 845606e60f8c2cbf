from __future__ import annotations

from importlib import import_module as _import_module

_types_module = _import_module(".types", package=__name__)
Schema = _types_module.Schema
ExternalDocumentation = _types_module.ExternalDocumentation

_cache_module = _import_module(".cache", package=__name__)
KnownModelCache = _cache_module.KnownModelCache

_identity_module = _import_module(".identity", package=__name__)
ModelIdResolver = _identity_module.ModelIdResolver
NAMING_CONVENTIONS = _identity_module.NAMING_CONVENTIONS
get_naming_convention = _identity_module.get_naming_convention

_engine_module = _import_module(".engine", package=__name__)
SchemaSynthesizer = _engine_module.SchemaSynthesizer
to_models = _engine_module.to_models

__all__: list[str] = [
    "Schema",
    "ExternalDocumentation",
    "KnownModelCache",
    "ModelIdResolver",
    "NAMING_CONVENTIONS",
    "get_naming_convention",
    "SchemaSynthesizer",
    "to_models",
]
