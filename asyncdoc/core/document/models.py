"""AsyncAPI document data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from asyncdoc.core.schema.builder import Diagnostic
from asyncdoc.core.schema.mapping import schema_ref

ASYNCAPI_VERSION = "3.0.0"
DEFAULT_TITLE = "Kafka Topics"
DEFAULT_VERSION = "1.0.0"

OperationAction = Literal["send", "receive"]


@dataclass(frozen=True, slots=True)
class InfoBlock:
    """The document's ``info`` section."""

    title: str = DEFAULT_TITLE
    version: str = DEFAULT_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "version": self.version}


@dataclass(frozen=True, slots=True)
class ChannelEntry:
    """A topic and the single message type that flows through it."""

    channel: str
    message_name: str

    @property
    def description(self) -> str:
        return f"Channel for {self.message_name} events."

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "address": self.channel,
            "messages": {
                self.message_name: {
                    "name": self.message_name,
                    "payload": schema_ref(self.message_name),
                }
            },
        }


@dataclass(frozen=True, slots=True)
class OperationEntry:
    """A send or receive action bound to a channel."""

    name: str
    action: OperationAction
    channel: str

    @classmethod
    def for_sender(cls, channel: str, type_name: str) -> OperationEntry:
        return cls(f"produce{type_name}", "send", channel)

    @classmethod
    def for_receiver(cls, channel: str, type_name: str) -> OperationEntry:
        return cls(f"consume{type_name}", "receive", channel)

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "channel": {"$ref": f"#/channels/{self.channel}"}}


@dataclass(slots=True)
class Document:
    """A complete AsyncAPI document before rendering."""

    info: InfoBlock = field(default_factory=InfoBlock)
    channels: dict[str, ChannelEntry] = field(default_factory=dict)
    operations: dict[str, OperationEntry] = field(default_factory=dict)
    schemas: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Plain tree with the exact top-level key order of the output."""
        return {
            "asyncapi": ASYNCAPI_VERSION,
            "info": self.info.to_dict(),
            "channels": {name: entry.to_dict() for name, entry in self.channels.items()},
            "operations": {name: entry.to_dict() for name, entry in self.operations.items()},
            "components": {"schemas": self.schemas},
        }


@dataclass(slots=True)
class DocumentResult:
    """An assembled document together with what was worked around."""

    document: Document
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.document.to_dict()
