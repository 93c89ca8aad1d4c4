"""Exceptions raised by the accessor layer.

Storage failures are not wrapped: ``sqlite3.Error`` propagates to the caller
as-is. Everything here is a failure the accessors detect themselves.
"""


class AccessorError(Exception):
    """Base class for errors detected by the accessor layer."""

    kind = "accessor_error"


class InvalidAttributeError(AccessorError):
    """Raised when an attribute name or value fails validation."""

    kind = "invalid_input"


class NotFoundError(AccessorError):
    """Raised when a referenced building, room, device or definition is absent."""

    kind = "not_found"


class IntegrityViolationError(AccessorError):
    """Raised when a write would break a data-model invariant."""

    kind = "integrity"


class DuplicateDeviceError(IntegrityViolationError):
    """Raised when a device name is already taken within its room."""


class UnknownDefinitionError(IntegrityViolationError):
    """Raised when a role or power state name has no definition row."""


class RowCountError(IntegrityViolationError):
    """Raised when an update touches a number of rows other than one."""
