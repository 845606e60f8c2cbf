from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

__all__: list[str] = ["Schema", "ExternalDocumentation"]


@dataclass
class ExternalDocumentation:
    """
    Pointer to documentation that lives outside the API description.

    Attributes:
        url: Location of the external documentation
        description: Short description of the target documentation
    """

    url: str
    description: Optional[str] = None


@dataclass
class Schema:
    """
    A schema entry: a model definition, an inline leaf or a reference.

    Attributes:
        id: Stable identifier of the originating type (model entries only)
        type: Schema type keyword, None for references and opaque leaves
        format: Format hint such as ``double`` or ``date-time``
        description: Human description, carried over from known entries
        properties: Property name to leaf or reference, in lexicographic order
        required: Sorted names of required properties
        ref: Id of the referenced model entry
        enum: Allowed values of an enum leaf
        items: Element schema of an ``array``
        additional_properties: Value schema of a mapping
        unique_items: Set when an ``array`` holds a set
        discriminator: Property name used to tell subtypes apart
        read_only: Whether the schema describes read-only data
        example: Example instance
        external_documentation: Link to external documentation
        all_of: Ids of schemas this schema extends
        clr_type: Origin-type handle, used for identity only
    """

    id: Optional[str] = None
    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, "Schema"] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    ref: Optional[str] = None
    enum: Optional[List[Any]] = None
    items: Optional["Schema"] = None
    additional_properties: Optional["Schema"] = None
    unique_items: Optional[bool] = None
    # Builder-only metadata; the engine never sets these
    discriminator: Optional[str] = None
    read_only: Optional[bool] = None
    example: Any = None
    external_documentation: Optional[ExternalDocumentation] = None
    all_of: List[str] = field(default_factory=list)
    clr_type: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def reference(cls, model_id: str) -> "Schema":
        """Return a schema pointing at the model entry *model_id*."""
        return cls(ref=model_id)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    # Utility helpers
    def dict(self) -> dict[str, Any]:
        """Return the populated public fields as a plain ``dict``.

        Empty collections and ``None`` values are dropped and ``clr_type`` is
        never included.  This is an inspection aid for tests and logs, not a
        wire format.
        """
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "clr_type":
                continue
            value = getattr(self, f.name)
            if value is None or value == [] or value == {}:
                continue
            if isinstance(value, Schema):
                value = value.dict()
            elif f.name == "properties":
                value = {name: prop.dict() for name, prop in value.items()}
            elif isinstance(value, ExternalDocumentation):
                value = {k: v for k, v in vars(value).items() if v is not None}
            data[f.name] = value
        return data
