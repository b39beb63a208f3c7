"""Type descriptor source.

Builds TypeDescriptor objects from Python classes. Supported payload
shapes, in lookup order:

- explicitly registered descriptors (see ``DescriptorSource.register``)
- pydantic models (``model_fields``)
- dataclasses (``dataclasses.fields`` order, resolved hints)
- NamedTuple and TypedDict classes
- any other class with annotations (``typing.get_type_hints``)

Classes without any of these are described as non-structural: a descriptor
with no fields.
"""

from __future__ import annotations

import contextlib
import dataclasses
import decimal
import inspect
import uuid
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, ClassVar, Literal, TypeVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from asyncdoc.core.descriptors.models import FieldDescriptor, TypeDescriptor, TypeRef
from asyncdoc.core.logging import get_logger
from asyncdoc.core.types import (
    container_origin,
    is_mapping_type,
    is_sequence_type,
    is_union_type,
    split_optional,
    strip_qualifiers,
)

logger = get_logger(__name__)

# Classes described as scalars even though some of them carry annotations
_SCALAR_TYPES: frozenset[type] = frozenset({
    bool,
    int,
    float,
    str,
    bytes,
    decimal.Decimal,
    uuid.UUID,
    date,
    datetime,
})

FieldSpec = Mapping[str, Any] | Iterable[tuple[str, Any]]


def type_ref(annotation: Any) -> TypeRef:
    """Reduce a declared annotation to a TypeRef.

    Examples
    --------
    >>> type_ref(int | None)
    TypeRef(origin=<class 'int'>, args=(), nullable=True, annotation=int | None)
    >>> type_ref(list[str]).args[0].origin
    <class 'str'>
    >>> from typing import Any
    >>> type_ref(Any).resolvable
    False
    """
    base, nullable = split_optional(strip_qualifiers(annotation))
    base = strip_qualifiers(base)

    # NewType("UserId", int) resolves to its supertype
    supertype = getattr(base, "__supertype__", None)
    if supertype is not None:
        inner = type_ref(supertype)
        return TypeRef(inner.origin, inner.args, nullable or inner.nullable, annotation)

    if isinstance(base, TypeDescriptor):
        return TypeRef(base, (), nullable, annotation)

    if base is Any or base is None or isinstance(base, (str, TypeVar)) or is_union_type(base):
        return TypeRef(None, (), nullable, annotation)

    if get_origin(base) is Literal:
        values = get_args(base)
        value_types = {type(value) for value in values}
        if len(value_types) == 1:
            return TypeRef(value_types.pop(), (), nullable, annotation)
        return TypeRef(None, (), nullable, annotation)

    if is_sequence_type(base):
        return TypeRef(container_origin(base), _sequence_args(base), nullable, annotation)

    if is_mapping_type(base):
        args = get_args(base)
        if len(args) == 2:
            return TypeRef(
                container_origin(base), (type_ref(args[0]), type_ref(args[1])), nullable, annotation
            )
        return TypeRef(container_origin(base), (), nullable, annotation)

    origin = get_origin(base)
    if isinstance(origin, type):
        # User generic such as Envelope[int]: described through its class
        return TypeRef(origin, (), nullable, annotation)

    if isinstance(base, type):
        return TypeRef(base, (), nullable, annotation)

    return TypeRef(None, (), nullable, annotation)


def _sequence_args(annotation: Any) -> tuple[TypeRef, ...]:
    args = get_args(annotation)
    if not args:
        return ()
    if container_origin(annotation) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return (type_ref(args[0]),)
        # Heterogeneous tuples have no single item type
        if any(arg != args[0] for arg in args[1:]):
            return (TypeRef(None, (), False, annotation),)
    return (type_ref(args[0]),)


class DescriptorSource:
    """Produces TypeDescriptor objects for payload classes.

    Explicit registrations take precedence over introspection, so a class
    whose annotations can't be read at runtime can still be documented.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Contact:
    ...     name: str
    ...     deleted: bool
    >>> source = DescriptorSource()
    >>> source.describe(Contact).field_names()
    ['name', 'deleted']
    """

    def __init__(self) -> None:
        self._registered: dict[Any, TypeDescriptor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, cls: Any, fields: FieldSpec | None = None, *, name: str | None = None
    ) -> TypeDescriptor:
        """Register an explicit descriptor for ``cls``.

        Parameters
        ----------
        cls : type
            The payload class being described
        fields : Mapping[str, Any] | Iterable[tuple[str, Any]] | None
            Ordered field names and annotations. When omitted the fields are
            introspected once and frozen into the registration.
        name : str | None
            Schema name to use instead of ``cls.__name__``

        Returns
        -------
        TypeDescriptor
            The registered descriptor
        """
        if fields is None:
            introspected = self._introspect(cls)
            descriptor = dataclasses.replace(introspected, name=name or introspected.name)
        else:
            descriptor = build_descriptor(
                name or cls.__name__, fields, qualified_name=_qualified_name(cls), python_type=cls
            )
        self._registered[cls] = descriptor
        logger.debug("Registered descriptor for {name}", name=descriptor.qualified_name)
        return descriptor

    def unregister(self, cls: Any) -> bool:
        """Remove an explicit registration. Returns False if there was none."""
        return self._registered.pop(cls, None) is not None

    def registered(self) -> dict[Any, TypeDescriptor]:
        return dict(self._registered)

    def clear(self) -> None:
        self._registered.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def describe(self, target: Any) -> TypeDescriptor:
        """Return the descriptor for a class or pass a descriptor through."""
        if isinstance(target, TypeDescriptor):
            return target
        if target in self._registered:
            return self._registered[target]
        return self._introspect(target)

    def _introspect(self, cls: Any) -> TypeDescriptor:
        name = getattr(cls, "__name__", None) or repr(cls)
        qualified = _qualified_name(cls)

        if not isinstance(cls, type) or cls in _SCALAR_TYPES:
            return TypeDescriptor(name, qualified, (), cls, structural=False)

        annotations = _field_annotations(cls)
        if annotations is None:
            return TypeDescriptor(name, qualified, (), cls, structural=False)

        fields = tuple(
            FieldDescriptor(field_name, type_ref(annotation))
            for field_name, annotation in annotations.items()
        )
        return TypeDescriptor(name, qualified, fields, cls)


def build_descriptor(
    name: str,
    fields: FieldSpec,
    *,
    qualified_name: str | None = None,
    python_type: Any = None,
) -> TypeDescriptor:
    """Build a descriptor by hand, without a backing class.

    Field annotations may themselves be TypeDescriptor objects, which makes
    it possible to describe nested payloads that only exist on the wire.

    Examples
    --------
    >>> contact = build_descriptor("Contact", {"name": str})
    >>> org = build_descriptor("Org", [("contacts", list[contact])])
    >>> org.fields[0].type.args[0].origin.name
    'Contact'
    """
    items = fields.items() if isinstance(fields, Mapping) else fields
    return TypeDescriptor(
        name,
        qualified_name or name,
        tuple(
            FieldDescriptor(field_name, type_ref(annotation)) for field_name, annotation in items
        ),
        python_type,
    )


def _qualified_name(cls: Any) -> str:
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None) or repr(cls)
    return f"{module}.{qualname}" if module else qualname


def _field_annotations(cls: type) -> dict[str, Any] | None:
    """Ordered field name → annotation, or None for non-structural classes."""
    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}

    hints = _resolved_hints(cls)

    if dataclasses.is_dataclass(cls):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}

    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return {name: hints.get(name, Any) for name in cls._fields}

    public = {
        name: hint
        for name, hint in hints.items()
        if not name.startswith("_") and get_origin(hint) is not ClassVar and hint is not ClassVar
    }
    return public or None


def _resolved_hints(cls: type) -> dict[str, Any]:
    """Resolve annotations, keeping unresolvable ones as their raw strings."""
    try:
        return get_type_hints(cls, include_extras=True)
    except Exception as e:  # noqa: BLE001 - any failure falls back to per-field resolution
        logger.debug("Could not resolve all hints of {cls}: {error}", cls=cls, error=e)

    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        raw: dict[str, Any] = {}
        with contextlib.suppress(Exception):
            raw = inspect.get_annotations(klass)
        for name, annotation in raw.items():
            hints[name] = _resolve_one(klass, name, annotation)
    return hints


def _resolve_one(klass: type, name: str, annotation: Any) -> Any:
    """Resolve a single string annotation in the namespace of its class.

    The annotation is placed alone on a throwaway class from the same module
    so ``get_type_hints`` evaluates it without the other, broken ones.
    Strings that still fail stay strings and later resolve to nothing.
    """
    if not isinstance(annotation, str):
        return annotation
    holder = type(
        f"_{klass.__name__}_{name}",
        (),
        {"__annotations__": {name: annotation}, "__module__": klass.__module__},
    )
    with contextlib.suppress(Exception):
        return get_type_hints(holder, localns=dict(vars(klass)), include_extras=True)[name]
    return annotation


default_source = DescriptorSource()


def register_descriptor(
    cls: Any, fields: FieldSpec | None = None, *, name: str | None = None
) -> TypeDescriptor:
    """Register an explicit descriptor on the default source."""
    return default_source.register(cls, fields, name=name)


def describe(target: Any) -> TypeDescriptor:
    """Describe a class through the default source."""
    return default_source.describe(target)


def payload(
    cls: Any = None, *, fields: FieldSpec | None = None, name: str | None = None
) -> Any:
    """Class decorator form of ``register_descriptor``.

    Usable bare (``@payload``) or with arguments (``@payload(name=...)``).

    Examples
    --------
    >>> @payload(name="InvoiceV2")
    ... class Invoice:
    ...     id: int
    >>> describe(Invoice).name
    'InvoiceV2'
    >>> default_source.unregister(Invoice)
    True
    """

    def decorate(target: Any) -> Any:
        default_source.register(target, fields, name=name)
        return target

    if cls is None:
        return decorate
    return decorate(cls)
