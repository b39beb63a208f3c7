"""AsyncAPI document assembly and rendering."""

from asyncdoc.core.document.assembler import DocumentAssembler
from asyncdoc.core.document.models import (
    ASYNCAPI_VERSION,
    ChannelEntry,
    Document,
    DocumentResult,
    InfoBlock,
    OperationEntry,
)
from asyncdoc.core.document.serializer import OUTPUT_FORMATS, render

__all__ = [
    "ASYNCAPI_VERSION",
    "OUTPUT_FORMATS",
    "ChannelEntry",
    "Document",
    "DocumentAssembler",
    "DocumentResult",
    "InfoBlock",
    "OperationEntry",
    "render",
]
