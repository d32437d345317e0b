"""Error taxonomy shared by repositories, the auth gate and request handlers."""


class CosmosError(Exception):
    """Base for errors that carry a user-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(CosmosError):
    """Missing or malformed required input; shown inline on the form."""

    status_code = 422


class NotFoundError(CosmosError):
    """Unknown entity id."""

    status_code = 404


class ConflictError(CosmosError):
    """Deletion blocked by dependent rows or a protected row."""

    status_code = 409


class UnauthenticatedError(CosmosError):
    """No token, or a token that failed verification. Redirects to the login page."""

    status_code = 401

    def __init__(self, message: str, redirect_to: str = "/admin/login") -> None:
        self.redirect_to = redirect_to
        super().__init__(message)


class ForbiddenError(CosmosError):
    """Verified token whose role is not allowed to perform the action."""

    status_code = 403


class InternalError(CosmosError):
    """Database or query failure. The message is generic; details go to the log."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class TokenError(Exception):
    """Raised when a session token cannot be accepted."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class TokenNotYetValidError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass
