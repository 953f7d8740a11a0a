"""
Duo Responses
=============
Typed Auth API payloads and envelope parsing.
"""

from .models import (
    ApiEnvelope,
    AuthResult,
    AuthResultCode,
    AuthStatus,
    Device,
    DuoModel,
    FailureEnvelope,
    PreauthResult,
    PreauthResultCode,
    ProviderResponse,
)
from .parsing import parse_envelope, parse_failure, STAT_OK

__all__ = [
    # Models
    "ApiEnvelope",
    "AuthResult",
    "AuthResultCode",
    "AuthStatus",
    "Device",
    "DuoModel",
    "FailureEnvelope",
    "PreauthResult",
    "PreauthResultCode",
    "ProviderResponse",
    # Parsing
    "parse_envelope",
    "parse_failure",
    "STAT_OK",
]
