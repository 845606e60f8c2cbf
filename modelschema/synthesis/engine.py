"""
Schema Synthesis Engine

This module walks a root model type and produces one schema entry for it and
for every distinct object type reachable from it.  Entries are cached per run
so that a type reached through several paths is emitted once and referenced
everywhere else, and so that cyclic graphs terminate.

Key Responsibilities:
- Register a placeholder for a type before resolving its properties.
- Classify each property and emit an inline leaf, a container schema or a
  reference to a recursively synthesized entry.
- Compute the sorted required set of every entry.
- Return entries in depth-first post-order: dependencies before dependents.

Dependencies:
- `modelschema.reflection`: Type descriptors over Python annotations.
- `modelschema.synthesis.primitives` / `.required` / `.identity` / `.cache`:
  The classifier, required-field policy, id resolver and known-model cache.
- `modelschema.core.config`: Defaults for the naming convention and
  container expansion when the caller injects none.
- `structlog`: Structured logging of cache hits and synthesized entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import structlog

from modelschema.core.config import Settings, get_settings
from modelschema.core.exceptions import CycleGuardViolation, ReflectionError
from modelschema.core.logging import bind_synthesis_context, clear_synthesis_context
from modelschema.reflection import PropertyDescriptor, TypeDescriptor, describe
from modelschema.synthesis.cache import KnownModelCache
from modelschema.synthesis.identity import (
    ModelIdResolver,
    NamingConvention,
    get_naming_convention,
)
from modelschema.synthesis.primitives import is_class_property, leaf_schema
from modelschema.synthesis.required import required_names
from modelschema.synthesis.types import Schema

__all__: list[str] = ["SchemaSynthesizer", "to_models"]

logger = structlog.get_logger(__name__)


@dataclass
class _Run:
    """Mutable state of one ``synthesize_into`` call."""

    cache: KnownModelCache
    created: List[Schema] = field(default_factory=list)
    registered: List[Any] = field(default_factory=list)

    def rollback(self) -> None:
        for handle in reversed(self.registered):
            self.cache.discard(handle)


class SchemaSynthesizer:
    """
    Reflect model types into deduplicated, deterministically ordered schemas.

    Args:
        naming_convention: Callable turning a type into its schema id.
            Defaults to the convention named by ``Settings.model_id_convention``.
        expand_containers: Expand ``list``/``dict`` element types into
            ``items``/``additional_properties``.  When False containers become
            opaque leaves.  Defaults to ``Settings.expand_containers``.
        settings: Settings used for the defaults above.
    """

    def __init__(
        self,
        naming_convention: Optional[NamingConvention] = None,
        *,
        expand_containers: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if naming_convention is None or expand_containers is None:
            settings = settings or get_settings()
            if naming_convention is None:
                naming_convention = get_naming_convention(settings.model_id_convention)
            if expand_containers is None:
                expand_containers = settings.expand_containers

        self._resolver = ModelIdResolver(naming_convention)
        self._expand_containers = expand_containers

    def synthesize(
        self, root: Any, known_models: Optional[Iterable[Schema]] = None
    ) -> List[Schema]:
        """
        Synthesize *root* against a fresh cache seeded with *known_models*.

        Returns:
            The full updated collection: the known models in the order given,
            followed by every newly synthesized entry, root last.
        """
        seeds = list(known_models or ())
        cache = KnownModelCache(seeds)
        return seeds + self.synthesize_into(root, cache)

    def synthesize_many(
        self, roots: Iterable[Any], known_models: Optional[Iterable[Schema]] = None
    ) -> List[Schema]:
        """Synthesize several roots against one shared cache."""
        seeds = list(known_models or ())
        cache = KnownModelCache(seeds)
        created: List[Schema] = []
        for root in roots:
            created.extend(self.synthesize_into(root, cache))
        return seeds + created

    def synthesize_into(self, root: Any, cache: KnownModelCache) -> List[Schema]:
        """
        Synthesize *root* against a caller-owned *cache*.

        Returns:
            Only the entries created by this call, in post-order.  Nothing is
            returned and the cache is left untouched when an error is raised.

        Raises:
            ReflectionError: If *root* is not an object type or one of the
                reachable properties cannot be classified.
        """
        root_type = describe(root)
        if not is_class_property(root_type):
            raise ReflectionError(
                f"{root_type.name} is not an object type and has no model entry",
                type_=root_type.handle,
            )

        run = _Run(cache=cache)
        bind_synthesis_context(root_type.qualified_name)
        try:
            root_entry = self._synthesize_type(root_type, run)
        except Exception:
            run.rollback()
            raise
        else:
            logger.info(
                "synthesis_complete",
                root_id=root_entry.id,
                created=len(run.created),
                known=len(cache),
            )
        finally:
            clear_synthesis_context()

        return run.created

    def _synthesize_type(self, type_: TypeDescriptor, run: _Run) -> Schema:
        handle = type_.underlying.handle

        cached = run.cache.lookup(handle)
        if cached is not None:
            logger.debug(
                "model_reused",
                model_id=cached.id,
                placeholder=run.cache.is_placeholder(handle),
            )
            return cached

        model_id = self._resolver.resolve(type_)
        run.cache.register_placeholder(handle, model_id)
        run.registered.append(handle)

        props = sorted(type_.enumerate_properties(), key=lambda prop: prop.name)
        properties = {prop.name: self._property_schema(prop, run) for prop in props}

        if not run.cache.is_placeholder(handle):
            raise CycleGuardViolation(
                f"Placeholder for {model_id!r} disappeared before it was filled in"
            )

        entry = Schema(
            id=model_id,
            properties=properties,
            required=required_names(props),
            clr_type=handle,
        )
        run.cache.commit(handle, entry)
        run.created.append(entry)

        logger.debug(
            "model_synthesized",
            model_id=model_id,
            properties=len(properties),
            required=entry.required,
        )
        return entry

    def _property_schema(self, prop: PropertyDescriptor, run: _Run) -> Schema:
        schema = self._schema_for(prop.type, run)
        if prop.description:
            schema.description = prop.description
        return schema

    def _schema_for(self, type_: TypeDescriptor, run: _Run) -> Schema:
        if is_class_property(type_):
            entry = self._synthesize_type(type_, run)
            return Schema.reference(entry.id)
        if type_.is_generic_container:
            return self._container_schema(type_, run)
        return leaf_schema(type_)

    def _container_schema(self, type_: TypeDescriptor, run: _Run) -> Schema:
        kind = type_.container_kind
        if not self._expand_containers or kind == "generic":
            return Schema()

        elements = type_.element_types
        if kind == "mapping":
            values = self._schema_for(elements[1], run) if len(elements) == 2 else Schema()
            return Schema(type="object", additional_properties=values)

        items = self._schema_for(elements[0], run) if len(elements) == 1 else Schema()
        return Schema(
            type="array", items=items, unique_items=True if kind == "set" else None
        )


def to_models(
    root: Any,
    known_models: Optional[Iterable[Schema]] = None,
    *,
    settings: Optional[Settings] = None,
) -> List[Schema]:
    """Synthesize *root* with the naming convention configured in *settings*."""
    return SchemaSynthesizer(settings=settings).synthesize(root, known_models)
