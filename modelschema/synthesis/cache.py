"""
Known-Model Cache

Per-run registry of schema entries keyed by origin-type handle.  Existence in
the cache short-circuits recursion; a placeholder registered before a type's
properties are resolved is what stops cyclic graphs from recursing forever.

A cache belongs to one synthesis run (or to one caller sharing it across
several roots).  It is not thread-safe: treat it as a single-writer resource.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from modelschema.core.exceptions import ModelIdConflictError
from modelschema.synthesis.types import Schema

__all__: list[str] = ["KnownModelCache"]


class KnownModelCache:
    """Mapping of origin-type handle to synthesized `Schema`."""

    def __init__(self, known_models: Optional[Iterable[Schema]] = None) -> None:
        self._entries: Dict[Any, Schema] = {}
        self._ids: Dict[str, Any] = {}
        self._placeholders: Set[Any] = set()

        for model in known_models or ():
            if model.clr_type is None or model.id is None:
                raise ValueError(
                    f"Known model {model.id!r} needs both an id and an origin type "
                    "to seed the cache"
                )
            self.commit(model.clr_type, model)

    def __contains__(self, handle: Any) -> bool:
        return handle in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._entries.values())

    def lookup(self, handle: Any) -> Optional[Schema]:
        """Return the cached entry for *handle*, or None."""
        return self._entries.get(handle)

    def register_placeholder(self, handle: Any, model_id: str) -> Schema:
        """Register an empty entry for *handle* ahead of resolving its properties."""
        placeholder = Schema(id=model_id, clr_type=handle)
        self.commit(handle, placeholder)
        self._placeholders.add(handle)
        return placeholder

    def is_placeholder(self, handle: Any) -> bool:
        return handle in self._placeholders

    def commit(self, handle: Any, entry: Schema) -> None:
        """
        Insert or overwrite the entry for *handle*.

        Raises:
            ModelIdConflictError: If *entry.id* already belongs to another handle.
        """
        if entry.id is not None:
            owner = self._ids.get(entry.id, handle)
            if owner != handle:
                raise ModelIdConflictError(entry.id, owner, handle)

        previous = self._entries.get(handle)
        if previous is not None and previous.id is not None and previous.id != entry.id:
            del self._ids[previous.id]

        self._entries[handle] = entry
        if entry.id is not None:
            self._ids[entry.id] = handle
        self._placeholders.discard(handle)

    def discard(self, handle: Any) -> None:
        """Remove *handle* and its id; unknown handles are ignored."""
        entry = self._entries.pop(handle, None)
        if entry is not None and entry.id is not None:
            self._ids.pop(entry.id, None)
        self._placeholders.discard(handle)

    def entries(self) -> List[Schema]:
        """Return all entries in insertion order."""
        return list(self._entries.values())
