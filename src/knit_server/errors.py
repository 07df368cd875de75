"""Exception types raised by the data layer and mapped to HTTP responses."""

from __future__ import annotations


class KnitError(Exception):
    """Base class for errors raised by the Knit service layer."""


class StorageConfigurationError(KnitError):
    """Raised when the storage URL or access key is missing."""


class StorageUnavailableError(KnitError):
    """Raised when a request needs the data layer but it is disabled."""


class StorageError(KnitError):
    """Raised when the relational store fails a query or write."""


class NotFoundError(KnitError):
    """Raised by mutations that reference an entity which does not exist."""


class ConflictError(KnitError):
    """Raised when a write collides with an existing row."""


class EventFullError(ConflictError):
    """Raised when an RSVP would exceed an event's attendee cap."""


class NotAMemberError(KnitError):
    """Raised when an action requires community membership."""


class InvalidOperationError(KnitError):
    """Raised when a request is well-formed but not allowed in the current state."""
