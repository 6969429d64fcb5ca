"""Exception hierarchy for the stackquery package."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of remote API failures."""

    NOT_FOUND = "not_found"
    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    CONNECTION = "connection"
    INVALID_RESPONSE = "invalid_response"
    PROVIDER = "provider"


class ResolutionReason(str, Enum):
    """Why a service client could not be resolved."""

    AUTH_FAILURE = "auth_failure"
    UNKNOWN_SERVICE = "unknown_service"
    NETWORK_UNREACHABLE = "network_unreachable"


class StackQueryError(Exception):
    """Base exception for all stackquery errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(StackQueryError):
    """Raised when a descriptor or connection configuration is invalid."""

    pass


class RemoteAPIError(StackQueryError):
    """Raised by service clients when a remote call fails."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.PROVIDER,
        status_code: int | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, context)
        self.kind = kind
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RemoteAPIError({self.message!r}, kind={self.kind.value!r})"


class ResolutionError(StackQueryError):
    """Raised when no usable client can be obtained for a service."""

    def __init__(
        self,
        message: str,
        reason: ResolutionReason,
        context: dict | None = None,
    ):
        super().__init__(message, context)
        self.reason = reason


class ListError(StackQueryError):
    """Raised when a page fetch fails while listing entities.

    Entities yielded before the failure remain valid.
    """

    def __init__(self, message: str, cause: Exception, context: dict | None = None):
        super().__init__(message, context)
        self.cause = cause


class FetchError(StackQueryError):
    """Raised when a get-by-key call fails for a reason other than absence."""

    def __init__(self, message: str, cause: Exception, context: dict | None = None):
        super().__init__(message, context)
        self.cause = cause


class UnknownTableError(StackQueryError):
    """Raised when a request names a table that is not registered."""

    pass


class MissingQualifierError(StackQueryError):
    """Raised when a scan lacks a predicate the table requires."""

    pass
