"""Document assembler - wires channels and operations to payload schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from asyncdoc.core.descriptors import DescriptorSource
from asyncdoc.core.descriptors.introspection import default_source
from asyncdoc.core.document.models import (
    ChannelEntry,
    Document,
    DocumentResult,
    InfoBlock,
    OperationEntry,
)
from asyncdoc.core.logging import get_logger
from asyncdoc.core.schema.builder import Diagnostic, SchemaBuilder
from asyncdoc.core.schema.registry import SchemaRegistry

logger = get_logger(__name__)

ChannelBindings = Mapping[str, Any]


class DocumentAssembler:
    """Build an AsyncAPI document from channel → payload type bindings.

    ``senders`` are topics this service produces to, ``receivers`` are
    topics it consumes from. Either may be None.

    Channels are keyed by name, so a receiver replaces a sender bound to the
    same channel. Operations are keyed by ``produce<Type>`` /
    ``consume<Type>``, so two channels carrying the same type in the same
    direction keep only the last one. Both overwrites are reported as
    diagnostics and otherwise left alone.
    """

    def __init__(self, source: DescriptorSource | None = None, *, strict: bool = False) -> None:
        self.source = source or default_source
        self.strict = strict

    def _type_name(self, payload_type: Any) -> str:
        return self.source.describe(payload_type).name

    def channels(
        self,
        senders: ChannelBindings | None,
        receivers: ChannelBindings | None,
        diagnostics: list[Diagnostic] | None = None,
    ) -> dict[str, ChannelEntry]:
        channels: dict[str, ChannelEntry] = {}
        for bindings in (senders or {}, receivers or {}):
            for channel, payload_type in bindings.items():
                entry = ChannelEntry(channel, self._type_name(payload_type))
                previous = channels.get(channel)
                if previous is not None and previous != entry and diagnostics is not None:
                    diagnostics.append(
                        Diagnostic(
                            "channel_overwrite",
                            channel,
                            f"Channel '{channel}' rebound from {previous.message_name} "
                            f"to {entry.message_name}",
                        )
                    )
                channels[channel] = entry
        return channels

    def operations(
        self,
        senders: ChannelBindings | None,
        receivers: ChannelBindings | None,
        diagnostics: list[Diagnostic] | None = None,
    ) -> dict[str, OperationEntry]:
        operations: dict[str, OperationEntry] = {}
        entries = [
            OperationEntry.for_sender(channel, self._type_name(payload_type))
            for channel, payload_type in (senders or {}).items()
        ] + [
            OperationEntry.for_receiver(channel, self._type_name(payload_type))
            for channel, payload_type in (receivers or {}).items()
        ]
        for entry in entries:
            previous = operations.get(entry.name)
            if previous is not None and previous != entry and diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        "operation_overwrite",
                        entry.name,
                        f"Operation '{entry.name}' rebound from channel "
                        f"'{previous.channel}' to '{entry.channel}'",
                    )
                )
            operations[entry.name] = entry
        return operations

    @staticmethod
    def payload_types(
        senders: ChannelBindings | None, receivers: ChannelBindings | None
    ) -> list[Any]:
        """Payload types in document order, receivers replacing senders per channel."""
        return list({**(senders or {}), **(receivers or {})}.values())

    def assemble(
        self,
        senders: ChannelBindings | None = None,
        receivers: ChannelBindings | None = None,
        info: InfoBlock | None = None,
    ) -> DocumentResult:
        """Assemble the document and expand every referenced payload type."""
        diagnostics: list[Diagnostic] = []
        channels = self.channels(senders, receivers, diagnostics)
        operations = self.operations(senders, receivers, diagnostics)

        builder = SchemaBuilder(self.source, strict=self.strict)
        registry = builder.expand_all(self.payload_types(senders, receivers), SchemaRegistry())
        diagnostics.extend(builder.diagnostics)

        logger.debug(
            "Assembled {channels} channels, {operations} operations, {schemas} schemas",
            channels=len(channels),
            operations=len(operations),
            schemas=len(registry),
        )
        document = Document(
            info=info or InfoBlock(),
            channels=channels,
            operations=operations,
            schemas=registry.to_dict(),
        )
        return DocumentResult(document, diagnostics)
