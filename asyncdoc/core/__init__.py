"""asyncdoc core: descriptors, schema building, document assembly.

Example usage:
    from asyncdoc.core import DocumentAssembler, render

    result = DocumentAssembler().assemble({"invoices": InvoiceTopic}, None)
    print(render(result.to_dict()))
"""

from asyncdoc.core.descriptors import (
    DescriptorSource,
    FieldDescriptor,
    TypeDescriptor,
    TypeRef,
    build_descriptor,
    register_descriptor,
)
from asyncdoc.core.document import (
    ChannelEntry,
    Document,
    DocumentAssembler,
    DocumentResult,
    InfoBlock,
    OperationEntry,
    render,
)
from asyncdoc.core.exceptions import (
    AsyncDocError,
    ConfigurationError,
    NameCollisionError,
    ResolveError,
    ValidationError,
)
from asyncdoc.core.schema import Diagnostic, SchemaBuilder, SchemaRegistry

__all__ = [
    "AsyncDocError",
    "ChannelEntry",
    "ConfigurationError",
    "DescriptorSource",
    "Diagnostic",
    "Document",
    "DocumentAssembler",
    "DocumentResult",
    "FieldDescriptor",
    "InfoBlock",
    "NameCollisionError",
    "OperationEntry",
    "ResolveError",
    "SchemaBuilder",
    "SchemaRegistry",
    "TypeDescriptor",
    "TypeRef",
    "ValidationError",
    "build_descriptor",
    "register_descriptor",
    "render",
]
