"""Type inspection utilities.

Thin wrappers over ``typing.get_origin``/``get_args`` that answer the
questions the descriptor source asks about a declared annotation: is it a
union, an ``Annotated`` wrapper, a sequence, or a mapping.
"""

import collections
import collections.abc
import typing
from types import UnionType
from typing import Annotated, Any, NotRequired, Required, Union, get_args, get_origin

# Origins treated as "sequence of X"
SEQUENCE_ORIGINS: frozenset[Any] = frozenset({
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
})

# Origins treated as "map of K to V"
MAPPING_ORIGINS: frozenset[Any] = frozenset({
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
})

# TypedDict key qualifiers; ReadOnly exists from Python 3.13
TYPED_DICT_QUALIFIERS: frozenset[Any] = frozenset(
    q for q in (Required, NotRequired, getattr(typing, "ReadOnly", None)) if q is not None
)


def is_union_type(type_hint: Any) -> bool:
    """Check if type hint is a Union type (including | syntax).

    Examples
    --------
    >>> from typing import Optional
    >>> is_union_type(Optional[int])
    True
    >>> is_union_type(str | int)
    True
    >>> is_union_type(str)
    False
    """
    if get_origin(type_hint) is Union:
        return True
    return isinstance(type_hint, UnionType)


def is_annotated_type(type_hint: Any) -> bool:
    """Check if type hint is an Annotated type.

    Examples
    --------
    >>> from typing import Annotated
    >>> is_annotated_type(Annotated[int, "meta"])
    True
    >>> is_annotated_type(int)
    False
    """
    return get_origin(type_hint) is Annotated


def get_annotated_metadata(type_hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Extract base type and metadata from Annotated type.

    Examples
    --------
    >>> from typing import Annotated
    >>> base, metadata = get_annotated_metadata(Annotated[int, "meta"])
    >>> base
    <class 'int'>
    >>> metadata
    ('meta',)
    """
    args = get_args(type_hint)
    if not args:
        return type_hint, ()
    return args[0], tuple(args[1:])


def split_optional(type_hint: Any) -> tuple[Any, bool]:
    """Strip ``None`` from a union and report whether it was present.

    A union left with more than one member is returned unchanged apart from
    the ``None`` removal; callers decide what a multi-member union means.

    Examples
    --------
    >>> split_optional(int | None)
    (<class 'int'>, True)
    >>> split_optional(int)
    (<class 'int'>, False)
    """
    if not is_union_type(type_hint):
        return type_hint, False

    args = get_args(type_hint)
    non_none = tuple(arg for arg in args if arg is not type(None))
    nullable = len(non_none) != len(args)
    if len(non_none) == 1:
        return non_none[0], nullable
    return Union[non_none], nullable  # noqa: UP007


def container_origin(type_hint: Any) -> Any:
    """Return the runtime origin of a (possibly bare) generic annotation.

    Examples
    --------
    >>> container_origin(list[int])
    <class 'list'>
    >>> container_origin(dict)
    <class 'dict'>
    >>> container_origin(int) is None
    True
    """
    origin = get_origin(type_hint)
    if origin is not None:
        return origin
    try:
        if type_hint in SEQUENCE_ORIGINS or type_hint in MAPPING_ORIGINS:
            return type_hint
    except TypeError:
        # unhashable annotation object
        return None
    return None


def is_sequence_type(type_hint: Any) -> bool:
    """Check if type hint is a sequence-like container.

    Examples
    --------
    >>> is_sequence_type(list[str])
    True
    >>> is_sequence_type(set)
    True
    >>> is_sequence_type(str)
    False
    """
    return container_origin(type_hint) in SEQUENCE_ORIGINS


def is_mapping_type(type_hint: Any) -> bool:
    """Check if type hint is a mapping container.

    Examples
    --------
    >>> is_mapping_type(dict[str, int])
    True
    >>> is_mapping_type(dict)
    True
    >>> is_mapping_type(list)
    False
    """
    return container_origin(type_hint) in MAPPING_ORIGINS


def strip_qualifiers(type_hint: Any) -> Any:
    """Remove ``Annotated`` and TypedDict key qualifiers around a type.

    The wrappers may nest in either order, e.g.
    ``NotRequired[Annotated[int, "meta"]]``.

    Examples
    --------
    >>> from typing import Annotated, NotRequired
    >>> strip_qualifiers(NotRequired[Annotated[int, "meta"]])
    <class 'int'>
    >>> strip_qualifiers(int | None)
    int | None
    """
    while True:
        if is_annotated_type(type_hint):
            type_hint, _ = get_annotated_metadata(type_hint)
        elif get_origin(type_hint) in TYPED_DICT_QUALIFIERS:
            type_hint = get_args(type_hint)[0]
        else:
            return type_hint
