"""Custom exceptions for the Exa search service."""


class ExaAPIError(Exception):
    """Base exception for Exa API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ExaAuthError(ExaAPIError):
    """Authentication failed (401)."""


class ExaRateLimitError(ExaAPIError):
    """Rate limit exceeded (429)."""


class ExaBadRequestError(ExaAPIError):
    """Invalid request parameters (400)."""


class ExaServerError(ExaAPIError):
    """Server-side error (5xx)."""


def classify_sdk_error(operation: str, error: Exception) -> ExaAPIError:
    """Map an exception raised by the exa_py SDK onto the service hierarchy.

    The SDK surfaces HTTP failures as plain exceptions whose message carries
    the status, so classification is by message text.
    """
    message = str(error).lower()

    if "401" in message or "unauthorized" in message:
        return ExaAuthError(f"{operation}: authentication failed", status_code=401)
    if "429" in message or "rate limit" in message:
        return ExaRateLimitError(f"{operation}: rate limited", status_code=429)
    if "400" in message or "bad request" in message:
        return ExaBadRequestError(f"{operation}: invalid request: {error}", status_code=400)
    for code in ("500", "502", "503", "504"):
        if code in message:
            return ExaServerError(f"{operation}: server error: {error}", status_code=int(code))
    return ExaAPIError(f"{operation} failed: {error}")
