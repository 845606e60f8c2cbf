"""
Fluent builder for hand-authored schemas

`SchemaBuilder` produces the same `Schema` entity as the synthesis engine,
but from explicit author input instead of reflection alone.  A built model
carries its origin type in ``clr_type``, so it can be passed to
``SchemaSynthesizer.synthesize(..., known_models=[...])`` where it takes the
place of the reflected entry.

Example::

    address = (
        SchemaBuilder(Address)
        .description("Postal address")
        .required("city")
    )
    address.property(lambda a: a.street).description("Street and number")
    schema = address.build()
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

from modelschema.core.config import Settings, get_settings
from modelschema.core.exceptions import InvalidExpressionError
from modelschema.reflection import PropertyDescriptor, describe
from modelschema.synthesis.identity import (
    ModelIdResolver,
    NamingConvention,
    get_naming_convention,
)
from modelschema.synthesis.primitives import leaf_schema
from modelschema.synthesis.required import required_names
from modelschema.synthesis.types import ExternalDocumentation, Schema

__all__: list[str] = ["SchemaBuilder"]

Accessor = Union[str, Callable[[Any], Any]]


class _MemberAccess:
    """Records one attribute access made on a `_MemberRecorder`."""

    def __init__(self, parent: Any, name: str) -> None:
        self.parent = parent
        self.name = name

    def __getattr__(self, name: str) -> "_MemberAccess":
        return _MemberAccess(self, name)


class _MemberRecorder:
    """Stand-in model instance handed to accessor lambdas."""

    def __getattr__(self, name: str) -> _MemberAccess:
        return _MemberAccess(self, name)


def _member_name(accessor: Accessor) -> str:
    """Return the property name bound by *accessor*."""
    if isinstance(accessor, str):
        if not accessor.isidentifier():
            raise InvalidExpressionError(f"{accessor!r} is not a property name")
        return accessor

    if not callable(accessor):
        raise InvalidExpressionError("Expression is not a member access")

    recorder = _MemberRecorder()
    try:
        result = accessor(recorder)
    except Exception as e:  # noqa: BLE001 – any failure means "not a member access"
        raise InvalidExpressionError("Expression is not a member access") from e

    if not isinstance(result, _MemberAccess) or result.parent is not recorder:
        raise InvalidExpressionError("Expression is not a member access")
    return result.name


class SchemaBuilder:
    """
    Chainable builder for the schema of *model_type*.

    Args:
        model_type: The type being described.
        naming_convention: Convention used for the built model's id.
            Defaults to the one named by ``Settings.model_id_convention``.
        settings: Settings used for the default convention.
    """

    def __init__(
        self,
        model_type: Any,
        naming_convention: Optional[NamingConvention] = None,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        if naming_convention is None:
            settings = settings or get_settings()
            naming_convention = get_naming_convention(settings.model_id_convention)

        self._model = describe(model_type)
        self._convention = naming_convention
        self._resolver = ModelIdResolver(naming_convention)
        self._properties: Dict[str, SchemaBuilder] = {}
        self._required: List[str] = []
        self._all_of: List[str] = []
        self._discriminator: Optional[str] = None
        self._description: Optional[str] = None
        self._read_only: Optional[bool] = None
        self._documentation: Optional[ExternalDocumentation] = None
        self._example: Any = None

    def property(self, accessor: Accessor) -> "SchemaBuilder":
        """
        Access the builder for one property of the model.

        Args:
            accessor: A property name or a lambda such as ``lambda m: m.name``.

        Returns:
            The `SchemaBuilder` of the property; repeated calls for the same
            property return the same builder.  An object-typed property is
            emitted as a reference carrying the child's metadata; its own
            properties belong in a separately built known model.

        Raises:
            InvalidExpressionError: If *accessor* is not a simple member access
                or names no property of the model.
        """
        name = _member_name(accessor)
        if name in self._properties:
            return self._properties[name]

        descriptor = self._model_properties().get(name)
        if descriptor is None:
            raise InvalidExpressionError(
                f"{self._model.name} has no property named {name!r}"
            )

        builder = SchemaBuilder(descriptor.type, self._convention)
        self._properties[name] = builder
        return builder

    def _model_properties(self) -> Dict[str, PropertyDescriptor]:
        return {prop.name: prop for prop in self._model.enumerate_properties()}

    # Building

    def discriminator(self, discriminator: str) -> "SchemaBuilder":
        self._discriminator = discriminator
        return self

    def description(self, description: str) -> "SchemaBuilder":
        self._description = description
        return self

    def read_only(self) -> "SchemaBuilder":
        self._read_only = True
        return self

    def external_documentation(
        self, documentation: Union[ExternalDocumentation, str], description: Optional[str] = None
    ) -> "SchemaBuilder":
        """Attach external documentation, given as an object or a URL."""
        if isinstance(documentation, str):
            documentation = ExternalDocumentation(url=documentation, description=description)
        self._documentation = documentation
        return self

    def example(self, example: Any) -> "SchemaBuilder":
        self._example = example
        return self

    def required(self, *accessors: Accessor) -> "SchemaBuilder":
        """Mark properties as required, binding them if not yet bound."""
        for accessor in accessors:
            name = _member_name(accessor)
            self.property(name)
            if name not in self._required:
                self._required.append(name)
        return self

    def all_of(self, *model_ids: str) -> "SchemaBuilder":
        self._all_of.extend(model_ids)
        return self

    def build(self) -> Schema:
        """Return the `Schema` described so far."""
        if self._model.is_class:
            return self._with_metadata(self._build_model())
        return self._with_metadata(leaf_schema(self._model))

    def _with_metadata(self, schema: Schema) -> Schema:
        schema.discriminator = self._discriminator
        schema.description = self._description
        schema.read_only = self._read_only
        schema.external_documentation = self._documentation
        schema.example = self._example
        schema.all_of = list(self._all_of)
        return schema

    def _build_model(self) -> Schema:
        handle = self._model.underlying.handle
        descriptors = self._model_properties()
        bound = [descriptors[name] for name in sorted(self._properties)]
        return Schema(
            id=self._resolver.resolve(self._model),
            properties={prop.name: self._property_schema(prop.name) for prop in bound},
            required=required_names(bound, explicit=self._required),
            clr_type=handle,
        )

    def _property_schema(self, name: str) -> Schema:
        # Object-typed properties point at their own model entry.
        child = self._properties[name]
        if child._model.is_class:
            return child._with_metadata(
                Schema.reference(self._resolver.resolve(child._model))
            )
        return child.build()
