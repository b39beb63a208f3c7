"""Schema builder - expands type descriptors into schema registry entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

from asyncdoc.core.descriptors import DescriptorSource, FieldDescriptor, TypeDescriptor, TypeRef
from asyncdoc.core.descriptors.introspection import default_source
from asyncdoc.core.exceptions import NameCollisionError
from asyncdoc.core.logging import get_logger
from asyncdoc.core.schema.mapping import (
    GENERIC_OBJECT,
    OPAQUE_LEAF_NAMES,
    primitive_schema,
    schema_ref,
)
from asyncdoc.core.schema.registry import SchemaRegistry
from asyncdoc.core.types import MAPPING_ORIGINS, SEQUENCE_ORIGINS

logger = get_logger(__name__)

DiagnosticKind = Literal[
    "unresolvable_field", "name_collision", "channel_overwrite", "operation_overwrite"
]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Something generation worked around instead of failing on."""

    kind: DiagnosticKind
    subject: str
    message: str


class SchemaBuilder:
    """Expand payload types into a SchemaRegistry.

    Field types are mapped in this order:

    1. sequences → ``{type: array, items: ...}``
    2. mappings → ``{type: object, properties: {key: ..., value: ...}}``
    3. ``date`` / ``datetime`` → string with ``date`` / ``date-time`` format
    4. ``bool``, ``str``/``bytes``, ``UUID``, ``int``, ``float``/``Decimal``
    5. anything else → nested object, emitted as a ``$ref``

    Primitive types become ``["null", <type>]`` on nullable fields.
    References never carry nullability.

    Fields whose type can't be resolved are left out of the object and
    reported in ``diagnostics``.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Contact:
    ...     name: str
    ...     age: int | None
    >>> registry = SchemaRegistry()
    >>> SchemaBuilder().expand(Contact, registry)
    >>> registry.get("Contact")["properties"]["age"]
    {'type': ['null', 'integer']}
    """

    def __init__(self, source: DescriptorSource | None = None, *, strict: bool = False) -> None:
        self.source = source or default_source
        self.strict = strict
        self.diagnostics: list[Diagnostic] = []

    def expand_all(self, targets: Iterable[Any], registry: SchemaRegistry) -> SchemaRegistry:
        for target in targets:
            self.expand(target, registry)
        return registry

    def expand(self, target: Any, registry: SchemaRegistry) -> None:
        """Write the entry for ``target`` (and everything it reaches) into ``registry``."""
        descriptor = self.source.describe(target)
        name = descriptor.name

        if name in registry:
            self._check_collision(descriptor, registry)
            return

        if name in OPAQUE_LEAF_NAMES:
            # A built-in expanded directly gets its own entry, never its fields
            schema = self.resolve_type(TypeRef(descriptor.python_type), registry)
            registry.put(
                name, descriptor.qualified_name, schema or {"type": "object", "properties": {}}
            )
            logger.debug("Registered built-in schema {name}", name=name)
            return

        if not descriptor.structural:
            schema = primitive_schema(descriptor.python_type) or {
                "type": "object",
                "properties": {},
            }
            registry.put(name, descriptor.qualified_name, schema)
            logger.debug("Registered scalar schema {name}", name=name)
            return

        logger.debug("Expanding {name} ({count} fields)", name=name, count=len(descriptor.fields))
        properties = registry.reserve(name, descriptor.qualified_name)["properties"]
        for field in descriptor.fields:
            schema = self.resolve_field(field, registry, owner=name)
            if schema is not None:
                properties[field.name] = schema
        registry.complete(name)

    def resolve_field(
        self, field: FieldDescriptor, registry: SchemaRegistry, owner: str | None = None
    ) -> dict[str, Any] | None:
        """Schema for one field, or None when its type can't be resolved."""
        schema = self.resolve_type(field.type, registry)
        if schema is None:
            subject = f"{owner}.{field.name}" if owner else field.name
            self._record(
                "unresolvable_field",
                subject,
                f"Field '{subject}' has unresolvable type {field.type.name}; omitted",
            )
        return schema

    def resolve_type(self, ref: TypeRef, registry: SchemaRegistry) -> dict[str, Any] | None:
        if not ref.resolvable:
            return None
        origin = ref.origin

        if isinstance(origin, TypeDescriptor):
            self.expand(origin, registry)
            return schema_ref(origin.name)

        if origin in SEQUENCE_ORIGINS:
            return {"type": "array", "items": self._resolve_arg(ref.arg(0), registry)}

        if origin in MAPPING_ORIGINS:
            return {
                "type": "object",
                "properties": {
                    "key": self._resolve_arg(ref.arg(0), registry),
                    "value": self._resolve_arg(ref.arg(1), registry),
                },
            }

        primitive = primitive_schema(origin, ref.nullable)
        if primitive is not None:
            return primitive

        descriptor = self.source.describe(origin)
        if descriptor.name in OPAQUE_LEAF_NAMES:
            # Built-in type with no schema mapping (complex, timedelta, ...)
            return None
        self.expand(descriptor, registry)
        return schema_ref(descriptor.name)

    def _resolve_arg(self, ref: TypeRef | None, registry: SchemaRegistry) -> dict[str, Any]:
        schema = self.resolve_type(ref, registry) if ref is not None else None
        if schema is None:
            return dict(GENERIC_OBJECT)
        return schema

    def _check_collision(self, descriptor: TypeDescriptor, registry: SchemaRegistry) -> None:
        existing = registry.owner(descriptor.name)
        if existing is None or existing == descriptor.qualified_name:
            return
        if self.strict:
            raise NameCollisionError(descriptor.name, existing, descriptor.qualified_name)
        self._record(
            "name_collision",
            descriptor.name,
            f"'{descriptor.qualified_name}' shares schema name '{descriptor.name}' "
            f"with '{existing}'; keeping the first",
        )

    def _record(self, kind: DiagnosticKind, subject: str, message: str) -> None:
        logger.debug(message)
        self.diagnostics.append(Diagnostic(kind, subject, message))
