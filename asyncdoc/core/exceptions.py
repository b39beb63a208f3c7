"""Core exception hierarchy for asyncdoc.

Document generation itself degrades to partial output instead of raising.
These exceptions cover the boundaries around it: configuration, type path
resolution, and the optional strict mode that fails fast on name clashes.
All of them inherit from AsyncDocError.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class AsyncDocError(Exception):
    """Base exception for all asyncdoc errors.

    Catch this to handle every asyncdoc-specific failure.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(AsyncDocError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("senders", "channel bindings must be a table")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the configuration section that is invalid
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(AsyncDocError):
    """Raised when a value fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("output_format", "must be yaml or json", value="xml")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Resolution Errors
# ============================================================================


class ResolveError(AsyncDocError):
    """Raised when a type path cannot be resolved to a Python class."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve '{path}': {reason}")


# ============================================================================
# Schema Errors
# ============================================================================


class NameCollisionError(AsyncDocError):
    """Raised in strict mode when two distinct types share a schema name.

    Schema entries are keyed by the bare type name, so ``billing.Invoice`` and
    ``orders.Invoice`` would both claim ``Invoice``.

    Examples
    --------
    Example usage::

        raise NameCollisionError("Invoice", "billing.Invoice", "orders.Invoice")
    """

    def __init__(self, name: str, existing: str, incoming: str) -> None:
        """Initialize name collision error.

        Args
        ----
            name: The bare schema name both types map to
            existing: Qualified name of the type that claimed the name first
            incoming: Qualified name of the type that collided with it
        """
        super().__init__(
            f"Schema name '{name}' is already used by '{existing}', cannot register '{incoming}'"
        )
        self.name = name
        self.existing = existing
        self.incoming = incoming


__all__ = [
    "AsyncDocError",
    "ConfigurationError",
    "NameCollisionError",
    "ResolveError",
    "ValidationError",
]
