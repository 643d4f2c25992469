"""
Exception types raised by attrbag.

All exceptions derive from BagError so callers can catch everything the
package raises with a single except clause. The immutability and
invocation errors also derive from TypeError, matching what Python raises
for writes to read-only containers and calls to non-callables.
"""

import typing as _typing


class BagError(Exception):
    """Base class for all attrbag errors."""

    pass


class ImmutabilityViolation(BagError, TypeError):
    """Raised when a write reaches a frozen (guarded) node."""

    pass


class NotInvocable(BagError, TypeError):
    """Raised by Bag.call() when the resolved value is not callable."""

    def __init__(self, path: _typing.Any, value: _typing.Any) -> None:
        self.path = path
        self.value = value
        super().__init__(
            f"Value at path {path!r} is not callable: {type(value).__name__}"
        )


class SerializationError(BagError, ValueError):
    """Raised when text cannot be decoded into a bag's attribute mapping."""

    pass
