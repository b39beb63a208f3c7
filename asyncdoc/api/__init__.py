"""Public API for generating AsyncAPI documents from payload types.

Both the CLI and library callers go through these functions.
"""

from asyncdoc.api.generation import (
    build_document,
    generate_channels,
    generate_document,
    generate_operations,
    generate_schemas,
    generate_yaml,
)

__all__ = [
    "build_document",
    "generate_channels",
    "generate_document",
    "generate_operations",
    "generate_schemas",
    "generate_yaml",
]
