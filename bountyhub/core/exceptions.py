"""
Platform-wide exception hierarchy.

Services raise these types; ``bountyhub.utils.errors.register_error_handlers``
maps each one to an HTTP status once, so every blueprint returns the same
error body shape.

Usage:
    from bountyhub.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Program", resource_id=42)
    raise ValidationError("title is required", details={"title": "required"})
"""


class NotFoundError(Exception):
    """Raised when a requested resource does not exist.

    Args:
        resource: Human-readable model/entity name (e.g. "Program", "Report").
        resource_id: The PK that was looked up.
    """

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when input is malformed or violates a business rule.

    Maps to HTTP 400.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown for structured API responses.
                 Keys are field names; values are error descriptions.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ConflictError(Exception):
    """Raised when an operation would create a duplicate unique value.

    Maps to HTTP 409.

    Args:
        resource: Model name.
        field: The unique field that would be duplicated.
        value: The conflicting value.
    """

    def __init__(self, resource: str, field: str, value: str | None = None) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        msg = f"{resource} with {field}={value!r} already exists"
        super().__init__(msg)


class TransitionError(Exception):
    """Raised when a report status transition is not in the transition table.

    Maps to HTTP 409.
    """

    def __init__(self, report_id: int, current: str, target: str, reason: str | None = None) -> None:
        msg = f"Cannot move report {report_id} from '{current}' to '{target}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.report_id = report_id
        self.current_status = current
        self.target_status = target


class AuthenticationError(Exception):
    """Raised when a request needs a logged-in user and has none. Maps to 401."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AccessDenied(Exception):
    """Raised when the caller's role or ownership does not allow the action.

    Maps to HTTP 403.
    """

    def __init__(self, user_id: int | None, action: str, reason: str | None = None) -> None:
        msg = reason or f"User {user_id} is not allowed to {action}"
        super().__init__(msg)
        self.user_id = user_id
        self.action = action
