"""Descriptor data models.

A TypeDescriptor is the builder's only view of a payload type: a name, an
ordered tuple of fields, and whether the type is structural at all. Each
field carries a TypeRef, which reduces a declared annotation to its origin,
up to two type arguments, and a nullability flag read once at
introspection time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class TypeRef:
    """A declared type reduced to what schema building needs.

    Attributes
    ----------
    origin : Any
        Runtime class of the declared type (``list``, ``dict``, ``int``, a
        user class, ...). ``None`` when the declared type cannot be resolved
        to a class, e.g. ``Any``, a ``TypeVar`` or a union of several types.
    args : tuple[TypeRef, ...]
        Type arguments of a parameterized container. Empty for bare
        containers and non-generic types.
    nullable : bool
        True when the declaration admits ``None``.
    annotation : Any
        The original annotation, kept for diagnostics.
    """

    origin: Any
    args: tuple[TypeRef, ...] = ()
    nullable: bool = False
    annotation: Any = field(default=None, compare=False)

    @property
    def resolvable(self) -> bool:
        return self.origin is not None

    @property
    def name(self) -> str:
        if self.origin is None:
            return repr(self.annotation)
        return getattr(self.origin, "__name__", repr(self.origin))

    def arg(self, index: int) -> TypeRef | None:
        """Return the type argument at ``index`` or None when absent."""
        if index < len(self.args):
            return self.args[index]
        return None


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One field of a structural type, in declaration order."""

    name: str
    type: TypeRef

    @property
    def nullable(self) -> bool:
        return self.type.nullable


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Handle to a payload type.

    Attributes
    ----------
    name : str
        Bare type name, used as the schema key
    qualified_name : str
        ``module.qualname``, used to tell same-named types apart
    fields : tuple[FieldDescriptor, ...]
        Fields in declaration order
    python_type : Any
        The described class, when there is one
    structural : bool
        False for scalar types such as ``Decimal`` that have no fields of
        their own
    """

    name: str
    qualified_name: str
    fields: tuple[FieldDescriptor, ...] = ()
    python_type: Any = field(default=None, compare=False)
    structural: bool = True

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]
