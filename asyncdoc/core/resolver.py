"""Resolve payload type paths to Python classes.

Type paths name a class by its full module path, either dotted
(``myapp.events.InvoiceCreated``) or with a colon before the attribute
(``myapp.events:InvoiceCreated``).

Examples
--------
>>> from asyncdoc.core.resolver import resolve
>>> resolve("decimal.Decimal")
<class 'decimal.Decimal'>
"""

from __future__ import annotations

import importlib
from typing import Any

from asyncdoc.core.exceptions import ResolveError


def split_path(path: str) -> tuple[str, str]:
    """Split a type path into module path and attribute path.

    Examples
    --------
    >>> split_path("myapp.events.Invoice")
    ('myapp.events', 'Invoice')
    >>> split_path("myapp.events:Outer.Inner")
    ('myapp.events', 'Outer.Inner')
    """
    if ":" in path:
        module_path, _, attr_path = path.partition(":")
    elif "." in path:
        module_path, attr_path = path.rsplit(".", 1)
    else:
        raise ResolveError(path, "Must be a full module path (e.g., 'myapp.events.Invoice')")
    if not module_path or not attr_path:
        raise ResolveError(path, "Invalid format - expected 'module.path.ClassName'")
    return module_path, attr_path


def resolve(path: str) -> type[Any]:
    """Resolve a type path to a class.

    Raises
    ------
    ResolveError
        If the module or class cannot be found, or the target isn't a class
    """
    module_path, attr_path = split_path(path)

    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        raise ResolveError(path, f"Module '{module_path}' not found: {e}") from e
    except ImportError as e:
        raise ResolveError(path, f"Failed to import '{module_path}': {e}") from e

    target: Any = module
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            available = [name for name in dir(module) if not name.startswith("_")]
            raise ResolveError(
                path,
                f"'{attr_path}' not found in '{module_path}'. "
                f"Available: {', '.join(available[:10])}",
            ) from e

    if not isinstance(target, type):
        raise ResolveError(path, f"'{attr_path}' is not a class (got {type(target).__name__})")

    return target


def resolve_bindings(bindings: dict[str, str]) -> dict[str, type[Any]]:
    """Resolve a channel → type path table, keeping its order."""
    return {channel: resolve(path) for channel, path in bindings.items()}
