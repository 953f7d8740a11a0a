"""
Duo Auth API Client
===================
Signed Duo Auth API v2 calls and the pre-auth / auth decision flow.
"""

__version__ = "0.1.0"

# Errors and HTTP client (import first: config and signing depend on the errors)
from duo_authapi.http import (
    DuoApiClient,
    DuoError,
    ConfigurationError,
    EncodingError,
    TransportError,
    MalformedResponse,
    ProviderRejected,
    UnexpectedStatus,
    PREAUTH_PATH,
    AUTH_PATH,
)

# Configuration
from duo_authapi.config import DuoIntegration, ClientConfig

# Request parameters
from duo_authapi.params import AuthenticationRequestParams, Factor, DEVICE_AUTO

# Signing
from duo_authapi.signing import (
    CanonicalRequest,
    SignedRequest,
    canonical_query_string,
    sign_request,
)

# Responses
from duo_authapi.responses import (
    AuthResult,
    Device,
    FailureEnvelope,
    PreauthResult,
    parse_envelope,
)

# Decision engine
from duo_authapi.engine import (
    Allowed,
    AuthenticationDecisionEngine,
    AuthenticationOutcome,
    Denied,
    EnrollmentRequired,
    Failed,
    Verdict,
    VerdictKind,
)

# Request extraction
from duo_authapi.extraction import ExtractionConfig, RequestUnsupported, extract_request_params

__all__ = [
    # Errors
    "DuoError",
    "ConfigurationError",
    "EncodingError",
    "TransportError",
    "MalformedResponse",
    "ProviderRejected",
    "UnexpectedStatus",
    # HTTP client
    "DuoApiClient",
    "PREAUTH_PATH",
    "AUTH_PATH",
    # Configuration
    "DuoIntegration",
    "ClientConfig",
    # Request parameters
    "AuthenticationRequestParams",
    "Factor",
    "DEVICE_AUTO",
    # Signing
    "CanonicalRequest",
    "SignedRequest",
    "canonical_query_string",
    "sign_request",
    # Responses
    "AuthResult",
    "Device",
    "FailureEnvelope",
    "PreauthResult",
    "parse_envelope",
    # Decision engine
    "Allowed",
    "AuthenticationDecisionEngine",
    "AuthenticationOutcome",
    "Denied",
    "EnrollmentRequired",
    "Failed",
    "Verdict",
    "VerdictKind",
    # Request extraction
    "ExtractionConfig",
    "RequestUnsupported",
    "extract_request_params",
]
