"""
Verdict Models
==============
Outcomes of one authentication attempt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from duo_authapi.http.exceptions import DuoError, ProviderRejected, TransportError
from duo_authapi.responses import AuthResult, PreauthResult, ProviderResponse


class VerdictKind(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    ENROLLMENT_REQUIRED = "enrollment_required"
    FAILED = "failed"


GENERIC_FAILURE_MESSAGE = "Two-factor authentication failed."
ENROLLMENT_MESSAGE = "Two-factor enrollment is required before you can sign in."


@dataclass(frozen=True)
class Allowed:
    """
    The provider accepted the user.

    ``bypass`` is True when Duo let the user through without a live factor
    (pre-auth ``allow`` or auth status ``bypass``); auditing keeps the two apart.
    """
    bypass: bool
    status_message: str = ""
    kind = VerdictKind.ALLOWED


@dataclass(frozen=True)
class Denied:
    """Duo explicitly denied the user."""
    reason: str = ""
    kind = VerdictKind.DENIED

    @property
    def public_message(self) -> str:
        return GENERIC_FAILURE_MESSAGE


@dataclass(frozen=True)
class EnrollmentRequired:
    """The user must enroll a device first."""
    portal_url: Optional[str] = None
    reason: str = ""
    kind = VerdictKind.ENROLLMENT_REQUIRED

    @property
    def public_message(self) -> str:
        return ENROLLMENT_MESSAGE


@dataclass(frozen=True)
class Failed:
    """The attempt could not be decided. Never treat as a denial or an allow."""
    error: DuoError
    kind = VerdictKind.FAILED

    @property
    def public_message(self) -> str:
        return GENERIC_FAILURE_MESSAGE


Verdict = Union[Allowed, Denied, EnrollmentRequired, Failed]


@dataclass(frozen=True)
class AuthenticationOutcome:
    """Verdict plus the raw Duo responses, for audit and principal building."""
    username: str
    verdict: Verdict
    preauth: Optional[PreauthResult] = None
    auth: Optional[AuthResult] = None

    @property
    def response(self) -> Optional[ProviderResponse]:
        """The last response received from Duo."""
        return self.auth if self.auth is not None else self.preauth

    @property
    def is_allowed(self) -> bool:
        return isinstance(self.verdict, Allowed)

    def to_audit_dict(self) -> Dict[str, Any]:
        """JSON-safe summary without credentials or passcodes."""
        data: Dict[str, Any] = {
            "username": self.username,
            "verdict": self.verdict.kind.value,
        }
        if self.preauth is not None:
            data["preauth_result"] = self.preauth.result
        if self.auth is not None:
            data["auth_result"] = self.auth.result
            data["auth_status"] = self.auth.status

        verdict = self.verdict
        if isinstance(verdict, Allowed):
            data["bypass"] = verdict.bypass
        elif isinstance(verdict, Denied):
            data["reason"] = verdict.reason
        elif isinstance(verdict, EnrollmentRequired):
            data["portal_url"] = verdict.portal_url
        elif isinstance(verdict, Failed):
            data["error"] = type(verdict.error).__name__
            data["error_message"] = verdict.error.message
            if isinstance(verdict.error, ProviderRejected):
                data["error_code"] = verdict.error.code
            if isinstance(verdict.error, TransportError):
                data["status_code"] = verdict.error.status_code
                data["timeout"] = verdict.error.timeout
        return data
