"""
Request Signing
===============
Canonical request construction and HMAC signatures for the Duo Auth API.
"""

from .models import CanonicalRequest, SignedRequest
from .canonical import (
    canonicalize,
    canonical_query_string,
    encode_component,
    encode_form_body,
    format_date,
)
from .signature import (
    build_authorization,
    compute_signature,
    sign_request,
    SIGNATURE_ALGORITHM,
    SIGNATURE_VERSION,
)

__all__ = [
    # Models
    "CanonicalRequest",
    "SignedRequest",
    # Canonicalization
    "canonicalize",
    "canonical_query_string",
    "encode_component",
    "encode_form_body",
    "format_date",
    # Signature
    "build_authorization",
    "compute_signature",
    "sign_request",
    "SIGNATURE_ALGORITHM",
    "SIGNATURE_VERSION",
]
