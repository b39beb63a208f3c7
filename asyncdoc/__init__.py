"""asyncdoc - AsyncAPI documents generated from message payload types.

Describe the topics a service produces to and consumes from, and get an
AsyncAPI 3.0.0 document whose schemas follow the payload classes:

    from asyncdoc import generate_yaml

    yaml_output = generate_yaml(
        senders={"invoices": InvoiceTopic},
        receivers={"orders": OrderTopic},
    )
"""

# Version is defined in pyproject.toml and read dynamically
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("asyncdoc")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from asyncdoc.api import (
    build_document,
    generate_channels,
    generate_document,
    generate_operations,
    generate_schemas,
    generate_yaml,
)
from asyncdoc.core.descriptors import build_descriptor, payload, register_descriptor
from asyncdoc.core.document import InfoBlock

__all__ = [
    "InfoBlock",
    "__version__",
    "build_descriptor",
    "build_document",
    "generate_channels",
    "generate_document",
    "generate_operations",
    "generate_schemas",
    "generate_yaml",
    "payload",
    "register_descriptor",
]
