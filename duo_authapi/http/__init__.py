from .exceptions import (
    DuoError,
    ConfigurationError,
    EncodingError,
    TransportError,
    MalformedResponse,
    ProviderRejected,
    UnexpectedStatus,
)
from .client import DuoApiClient, PREAUTH_PATH, AUTH_PATH

__all__ = [
    "DuoApiClient",
    "PREAUTH_PATH",
    "AUTH_PATH",
    "DuoError",
    "ConfigurationError",
    "EncodingError",
    "TransportError",
    "MalformedResponse",
    "ProviderRejected",
    "UnexpectedStatus",
]
