"""Primitive and format mapping tables.

See https://www.asyncapi.com/docs/reference/specification/v3.0.0#data-type-formats
"""

import decimal
import uuid
from datetime import date, datetime
from typing import Any

SCHEMA_REF_PREFIX = "#/components/schemas/"

# Type names never expanded as objects when reached by name
OPAQUE_LEAF_NAMES: frozenset[str] = frozenset({
    "bool",
    "bytes",
    "bytearray",
    "int",
    "float",
    "complex",
    "str",
    "list",
    "tuple",
    "set",
    "frozenset",
    "dict",
    "date",
    "datetime",
    "time",
    "timedelta",
    "object",
    "NoneType",
})

# (json type, format) keyed by exact class; identity lookup keeps bool away
# from int and datetime away from date
PRIMITIVE_TYPES: dict[type, tuple[str, str | None]] = {
    date: ("string", "date"),
    datetime: ("string", "date-time"),
    bool: ("boolean", None),
    str: ("string", None),
    bytes: ("string", None),
    uuid.UUID: ("string", "uuid"),
    int: ("integer", None),
    float: ("number", None),
    decimal.Decimal: ("number", None),
}

GENERIC_OBJECT: dict[str, Any] = {"type": "object"}


def nullable_type(json_type: str, nullable: bool) -> str | list[str]:
    """Apply the nullability rule to a primitive type name.

    Examples
    --------
    >>> nullable_type("integer", True)
    ['null', 'integer']
    >>> nullable_type("integer", False)
    'integer'
    """
    if nullable:
        return ["null", json_type]
    return json_type


def primitive_schema(python_type: Any, nullable: bool = False) -> dict[str, Any] | None:
    """Schema for a primitive class, or None when it isn't one.

    Examples
    --------
    >>> from datetime import date
    >>> primitive_schema(date, nullable=True)
    {'type': ['null', 'string'], 'format': 'date'}
    >>> primitive_schema(object) is None
    True
    """
    try:
        mapped = PRIMITIVE_TYPES.get(python_type)
    except TypeError:
        return None
    if mapped is None:
        return None
    json_type, fmt = mapped
    schema: dict[str, Any] = {"type": nullable_type(json_type, nullable)}
    if fmt is not None:
        schema["format"] = fmt
    return schema


def schema_ref(name: str) -> dict[str, str]:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}
