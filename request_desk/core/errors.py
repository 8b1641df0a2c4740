from __future__ import annotations


class DeskError(Exception):
    """Base class for every failure an operation reports to its caller."""

    status_code = 400
    code = "desk_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(DeskError):
    status_code = 422
    code = "validation"


class ConflictError(DeskError):
    status_code = 409
    code = "conflict"


class NotFoundError(DeskError):
    status_code = 404
    code = "not_found"


class AuthenticationError(DeskError):
    status_code = 401
    code = "authentication"

    NOT_FOUND = "NotFound"
    NOT_VERIFIED = "NotVerified"
    WRONG_PASSWORD = "WrongPassword"
    NOT_AUTHENTICATED = "NotAuthenticated"

    def __init__(self, reason: str, detail: str):
        super().__init__(detail)
        self.reason = reason


class AuthorizationError(DeskError):
    status_code = 403
    code = "authorization"


class InvalidTransitionError(DeskError):
    status_code = 409
    code = "invalid_transition"


class DependentEntitiesError(DeskError):
    status_code = 409
    code = "dependent_entities"

    def __init__(self, detail: str, count: int):
        super().__init__(detail)
        self.count = count


class PersistenceWarning(UserWarning):
    """Storage write or read failed; in-memory state is still authoritative."""
