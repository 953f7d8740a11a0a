"""
Duo Auth API Exceptions
=======================
Classified errors raised while signing, sending and parsing Auth API calls.
"""

from typing import Optional, Any


class DuoError(Exception):
    """Base exception for all Duo Auth API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ConfigurationError(DuoError):
    """Raised when the integration credentials are missing or invalid."""
    pass


class EncodingError(DuoError):
    """Raised when a request parameter cannot be encoded for signing."""
    pass


class TransportError(DuoError):
    """Raised on connection failures, timeouts and unexpected HTTP statuses."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = "",
        timeout: bool = False,
        details: Any = None,
    ):
        self.reason = reason
        self.timeout = timeout
        super().__init__(message, status_code=status_code, details=details)


class MalformedResponse(DuoError):
    """Raised when a response body cannot be parsed into the expected shape."""
    pass


class ProviderRejected(DuoError):
    """Raised when Duo answers HTTP 400 with a failure envelope."""

    def __init__(
        self,
        code: Optional[str],
        message: Optional[str],
        message_detail: Optional[str] = None,
    ):
        self.code = code
        self.provider_message = message or ""
        self.message_detail = message_detail or ""
        text = f"Duo rejected request: {self.provider_message}"
        if self.message_detail:
            text += f" ({self.message_detail})"
        if code:
            text = f"[{code}] {text}"
        super().__init__(text, status_code=400)


class UnexpectedStatus(DuoError):
    """Raised for a 'stat', 'result' or 'status' value the client does not act on."""

    def __init__(self, value: Optional[str], field: str = "stat"):
        self.value = value
        self.field = field
        super().__init__(f"Unexpected '{field}' value in Duo response: {value!r}")
