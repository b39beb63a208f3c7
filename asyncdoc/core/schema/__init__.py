"""Schema generation from payload type descriptors.

This module turns payload classes into the ``components.schemas`` section
of an AsyncAPI document.
"""

from asyncdoc.core.schema.builder import Diagnostic, SchemaBuilder
from asyncdoc.core.schema.mapping import OPAQUE_LEAF_NAMES, primitive_schema, schema_ref
from asyncdoc.core.schema.registry import SchemaRegistry

__all__ = [
    "OPAQUE_LEAF_NAMES",
    "Diagnostic",
    "SchemaBuilder",
    "SchemaRegistry",
    "primitive_schema",
    "schema_ref",
]
