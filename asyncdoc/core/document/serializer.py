"""Render an assembled document tree as YAML or JSON text."""

import json
from typing import Any, Literal

import yaml

from asyncdoc.core.exceptions import ValidationError

OutputFormat = Literal["yaml", "json"]
OUTPUT_FORMATS: tuple[str, ...] = ("yaml", "json")


class _DocumentDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated sub-trees out instead of anchoring them."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def render(tree: dict[str, Any], output_format: str = "yaml") -> str:
    """Render a plain mapping tree.

    YAML output is block style with insertion order preserved, and never
    folds long scalars, so identical trees always render identically.

    Raises
    ------
    ValidationError
        If ``output_format`` is not yaml or json

    Examples
    --------
    >>> print(render({"asyncapi": "3.0.0", "info": {"title": "Kafka Topics"}}), end="")
    asyncapi: 3.0.0
    info:
      title: Kafka Topics
    """
    if output_format == "yaml":
        yaml_str: str = yaml.dump(
            tree,
            Dumper=_DocumentDumper,
            sort_keys=False,
            default_flow_style=False,
            width=float("inf"),
        )
        return yaml_str
    if output_format == "json":
        return json.dumps(tree, indent=2) + "\n"
    raise ValidationError(
        "output_format", f"must be one of {', '.join(OUTPUT_FORMATS)}", output_format
    )
