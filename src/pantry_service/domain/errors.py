"""Error taxonomy surfaced to RPC callers."""


class ServiceError(Exception):
    """Base class for errors with a caller-facing kind."""

    kind = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(ServiceError):
    """Raised when a request carries no valid caller identity."""

    kind = "UNAUTHENTICATED"


class InvalidArgumentError(ServiceError):
    """Raised when a required payload field is missing or malformed."""

    kind = "INVALID_ARGUMENT"


class NotFoundError(ServiceError):
    """Raised when a referenced document does not exist."""

    kind = "NOT_FOUND"


class InternalError(ServiceError):
    """Raised for unclassified failures below the gateway."""


class ConflictError(ServiceError):
    """Raised when a guarded write finds the document at a newer version."""

    kind = "INTERNAL"
