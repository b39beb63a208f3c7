"""Configuration data models for asyncdoc."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from asyncdoc.core.document.models import DEFAULT_TITLE, DEFAULT_VERSION, InfoBlock
from asyncdoc.core.document.serializer import OUTPUT_FORMATS
from asyncdoc.core.exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for asyncdoc.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON log records to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.asyncdoc.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export ASYNCDOC_LOG_LEVEL=DEBUG
    export ASYNCDOC_LOG_FORMAT=json
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class AsyncDocConfig:
    """Complete asyncdoc configuration.

    Attributes
    ----------
    title : str
        ``info.title`` of the generated document
    version : str
        ``info.version`` of the generated document
    senders : Mapping[str, str]
        Channel name → payload type path for produced topics (read-only)
    receivers : Mapping[str, str]
        Channel name → payload type path for consumed topics
    output : str | None
        File the CLI writes to; stdout when unset
    output_format : str
        ``yaml`` or ``json``
    strict : bool
        Fail on payload types that share a schema name

    Examples
    --------
    ```toml
    [tool.asyncdoc]
    output = "docs/asyncapi.yaml"

    [tool.asyncdoc.senders]
    invoices = "billing.events.InvoiceTopic"

    [tool.asyncdoc.receivers]
    orders = "billing.events.OrderTopic"
    ```
    """

    title: str = DEFAULT_TITLE
    version: str = DEFAULT_VERSION
    senders: Mapping[str, str] = field(default_factory=dict)
    receivers: Mapping[str, str] = field(default_factory=dict)
    output: str | None = None
    output_format: str = "yaml"
    strict: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        # Bindings are read-only copies
        object.__setattr__(self, "senders", MappingProxyType(dict(self.senders)))
        object.__setattr__(self, "receivers", MappingProxyType(dict(self.receivers)))
        if self.output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                "output_format", f"must be one of {', '.join(OUTPUT_FORMATS)}", self.output_format
            )

    @property
    def info(self) -> InfoBlock:
        return InfoBlock(title=self.title, version=self.version)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "version": self.version,
            "senders": dict(self.senders),
            "receivers": dict(self.receivers),
            "output": self.output,
            "format": self.output_format,
            "strict": self.strict,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "output_file": self.logging.output_file,
                "use_color": self.logging.use_color,
                "include_timestamp": self.logging.include_timestamp,
            },
        }
