"""gitgate exception classes."""


class GitGateError(Exception):
    """Base exception for all gitgate errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitGateError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class InvalidPathError(GitGateError):
    """Raised when a request path has fewer segments than a policy needs.

    This is a routing misconfiguration, never an access denial.
    """

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_PATH", message)


class AuthorizationError(GitGateError):
    """Raised when access is denied (401 Unauthorized)."""

    status_code = 401

    def __init__(
        self,
        code: str = "UNAUTHORIZED",
        message: str = "Unauthorized",
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)


class NotFoundError(GitGateError):
    """Raised when the target resource does not exist (404 Not Found)."""

    status_code = 404

    def __init__(
        self,
        code: str = "NOT_FOUND",
        message: str = "Not Found",
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)


class LookupFailedError(GitGateError):
    """Raised when a resource lookup could not be completed.

    Lookup failures are infrastructure errors and are never reported as
    Unauthorized or Not Found.
    """

    pass


class RateLimitedError(LookupFailedError):
    """Raised when the lookup backend keeps rate limiting requests."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(LookupFailedError):
    """Raised on lookup backend server errors (5xx) and connection failures."""

    pass
