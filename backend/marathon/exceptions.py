"""Domain errors raised by services and mapped to HTTP responses."""


class MarathonError(Exception):
    """Base class for business-rule failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MarathonError):
    """Referenced race, distance, registration or user does not exist."""

    status_code = 404


class ConflictError(MarathonError):
    """State already satisfies the transition, or a uniqueness rule is hit."""

    status_code = 409


class BadRequestError(MarathonError):
    """Temporal or business precondition violated."""

    status_code = 400


class CapacityExceededError(BadRequestError):
    """Distance category has no free slot left."""


class UnauthenticatedError(MarathonError):
    status_code = 401


class ForbiddenError(MarathonError):
    status_code = 403


class InternalError(MarathonError):
    """Unexpected store or infrastructure failure."""

    status_code = 500
