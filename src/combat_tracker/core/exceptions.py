"""Exception hierarchy for the Combat Tracker.

Every error a store or the API can report derives from
CombatTrackerError, so boundaries (HTTP handlers, Streamlit callbacks)
catch one type and read ``message`` and ``details`` from it.

The turn sequencer raises none of these: its index arithmetic is kept in
range by construction.

Example:
    >>> from combat_tracker.core.exceptions import NotFoundError
    >>> raise NotFoundError("Combatant not found", resource="combatant", resource_id=7)
"""

from __future__ import annotations

from typing import Any


class CombatTrackerError(Exception):
    """Base exception for all Combat Tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context, safe to show to API clients.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{context}]"

    def to_dict(self) -> dict[str, Any]:
        """Structured failure payload: error type, message and details."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


class ConfigurationError(CombatTrackerError):
    """Raised when settings cannot be loaded or are inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details=details)


# =============================================================================
# Store Errors
# =============================================================================


class ValidationError(CombatTrackerError):
    """Raised when input to a create or update is missing, mistyped or out of range.

    Nothing is written when this is raised.

    Attributes:
        field_name: Wire name of the first offending field, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The rejected value, if it is worth echoing.
            details: Optional additional context.
        """
        self.field_name = field_name
        details = dict(details or {})
        if field_name:
            details["field_name"] = field_name
        if invalid_value is not None:
            details["invalid_value"] = invalid_value
        super().__init__(message, details=details)


class NotFoundError(CombatTrackerError):
    """Raised when an operation addresses a record id that does not exist.

    Attributes:
        resource: Kind of record addressed ("combatant", "tutorial_step").
        resource_id: The missing id.
    """

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        resource_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.resource = resource
        self.resource_id = resource_id
        details = dict(details or {})
        if resource:
            details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message, details=details)


class StorageFault(CombatTrackerError):
    """Raised when the persistence layer is unreachable or erroring.

    Reported to callers as a generic failure. There is no automatic retry.

    Attributes:
        operation: Name of the store operation that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.operation = operation
        details = dict(details or {})
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details)


__all__ = [
    "CombatTrackerError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "StorageFault",
]
