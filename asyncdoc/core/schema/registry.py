"""Schema registry: name → schema entry, first write wins."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any


class SchemaRegistry:
    """Holds the schema entries produced during one generation call.

    The registry doubles as the builder's memo. A structural type's slot is
    reserved before its fields are resolved, so a type that refers back to
    itself finds its own name already present and stops recursing.

    Entries are keyed by bare type name. The qualified name of whichever
    type claimed a name first is kept alongside so that clashes between
    same-named types can be reported.

    Examples
    --------
    >>> registry = SchemaRegistry()
    >>> registry.put("Contact", "app.Contact", {"type": "object", "properties": {}})
    True
    >>> registry.put("Contact", "other.Contact", {"type": "string"})
    False
    >>> registry.owner("Contact")
    'app.Contact'
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}
        self._owners: dict[str, str] = {}
        self._pending: set[str] = set()

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, name: str) -> dict[str, Any] | None:
        return self._entries.get(name)

    def owner(self, name: str) -> str | None:
        return self._owners.get(name)

    def is_pending(self, name: str) -> bool:
        return name in self._pending

    def put(self, name: str, qualified_name: str, schema: dict[str, Any]) -> bool:
        """Store a finished entry. Returns False if the name was taken."""
        if name in self._entries:
            return False
        self._entries[name] = schema
        self._owners[name] = qualified_name
        return True

    def reserve(self, name: str, qualified_name: str) -> dict[str, Any]:
        """Reserve an object slot and return it for in-place filling.

        Raises
        ------
        KeyError
            If the name is already registered
        """
        if name in self._entries:
            raise KeyError(f"Schema '{name}' is already registered")
        entry: dict[str, Any] = {"type": "object", "properties": {}}
        self._entries[name] = entry
        self._owners[name] = qualified_name
        self._pending.add(name)
        return entry

    def complete(self, name: str) -> None:
        self._pending.discard(name)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return an independent copy of all entries in insertion order."""
        return copy.deepcopy(self._entries)
