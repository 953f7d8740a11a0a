"""
Signature Functions
===================
HMAC-SHA1 request signing for the Duo Auth API.
"""

import base64
import hashlib
import hmac
from datetime import datetime
from typing import Mapping

from duo_authapi.config import DuoIntegration

from .canonical import canonicalize, encode_form_body
from .models import SignedRequest

SIGNATURE_VERSION = 2
SIGNATURE_ALGORITHM = "sha1"


def compute_signature(secret_key: str, canonical: str) -> str:
    """
    Compute the hex HMAC-SHA1 of a canonical request string.

    Args:
        secret_key: Integration secret key
        canonical: Output of CanonicalRequest.to_string()

    Returns:
        Hex-encoded HMAC-SHA1 signature
    """
    return hmac.new(
        secret_key.encode("utf-8"),
        canonical.encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()


def build_authorization(integration_key: str, signature: str) -> str:
    """Basic-scheme header value for ``ikey:signature``."""
    token = base64.b64encode(f"{integration_key}:{signature}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def sign_request(
    method: str,
    host: str,
    path: str,
    params: Mapping[str, str],
    integration: DuoIntegration,
    now: datetime,
) -> SignedRequest:
    """
    Canonicalize and sign one Auth API request.

    The timestamp is always passed in so the result is a pure function of
    the arguments.

    Raises:
        ConfigurationError: a credential is empty or the host is malformed
        EncodingError: a parameter cannot be encoded
    """
    integration.validate()
    canonical = canonicalize(method, host, path, params, now)
    signature = compute_signature(integration.secret_key, canonical.to_string())
    return SignedRequest(
        canonical=canonical,
        authorization=build_authorization(integration.integration_key, signature),
        body=encode_form_body(params),
    )
