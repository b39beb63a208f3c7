"""Document generation API.

Example::

    senders = {"invoices": InvoiceTopic}
    receivers = {"orders": OrderTopic}
    yaml_output = generate_yaml(senders, receivers)

    output_path = Path("docs", "asyncapi.yaml")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(yaml_output)
"""

from collections.abc import Iterable, Mapping
from typing import Any

from asyncdoc.core.descriptors import DescriptorSource
from asyncdoc.core.document import DocumentAssembler, DocumentResult, InfoBlock, render
from asyncdoc.core.document.assembler import ChannelBindings
from asyncdoc.core.schema import SchemaBuilder, SchemaRegistry


def build_document(
    senders: ChannelBindings | None = None,
    receivers: ChannelBindings | None = None,
    *,
    info: InfoBlock | None = None,
    source: DescriptorSource | None = None,
    strict: bool = False,
) -> DocumentResult:
    """Assemble the document tree and collect diagnostics.

    Raises
    ------
    NameCollisionError
        In strict mode, when two payload types share a schema name
    """
    return DocumentAssembler(source, strict=strict).assemble(senders, receivers, info)


def generate_document(
    senders: ChannelBindings | None = None,
    receivers: ChannelBindings | None = None,
    *,
    info: InfoBlock | None = None,
    output_format: str = "yaml",
    source: DescriptorSource | None = None,
    strict: bool = False,
) -> str:
    """Generate the rendered AsyncAPI document.

    Parameters
    ----------
    senders : Mapping[str, type] | None
        Channel name → payload type for topics this service produces to
    receivers : Mapping[str, type] | None
        Channel name → payload type for topics this service consumes from
    info : InfoBlock | None
        Title and version; defaults to ``Kafka Topics`` / ``1.0.0``
    output_format : str
        ``yaml`` (default) or ``json``
    source : DescriptorSource | None
        Where descriptors come from; the default source when omitted
    strict : bool
        Raise NameCollisionError instead of keeping the first of two
        same-named types

    Returns
    -------
    str
        The rendered document

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Ping:
    ...     id: int
    >>> text = generate_document({"pings": Ping})
    >>> "producePing:" in text
    True
    """
    result = build_document(senders, receivers, info=info, source=source, strict=strict)
    return render(result.to_dict(), output_format)


def generate_yaml(
    senders: ChannelBindings | None = None, receivers: ChannelBindings | None = None
) -> str:
    """Shorthand for the YAML document with default info."""
    return generate_document(senders, receivers)


def generate_channels(
    senders: ChannelBindings | None = None,
    receivers: ChannelBindings | None = None,
    source: DescriptorSource | None = None,
) -> dict[str, Any]:
    channels = DocumentAssembler(source).channels(senders, receivers)
    return {name: entry.to_dict() for name, entry in channels.items()}


def generate_operations(
    senders: ChannelBindings | None = None,
    receivers: ChannelBindings | None = None,
    source: DescriptorSource | None = None,
) -> dict[str, Any]:
    operations = DocumentAssembler(source).operations(senders, receivers)
    return {name: entry.to_dict() for name, entry in operations.items()}


def generate_schemas(
    types: Mapping[str, Any] | Iterable[Any],
    source: DescriptorSource | None = None,
    *,
    strict: bool = False,
) -> dict[str, dict[str, Any]]:
    """Expand payload types into ``components.schemas`` entries.

    ``types`` is either a channel binding mapping (its values are used) or
    an iterable of types.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Contact:
    ...     name: str
    >>> @dataclass
    ... class Org:
    ...     contacts: list[Contact]
    >>> list(generate_schemas([Org]))
    ['Org', 'Contact']
    """
    targets = types.values() if isinstance(types, Mapping) else types
    builder = SchemaBuilder(source, strict=strict)
    return builder.expand_all(targets, SchemaRegistry()).to_dict()
