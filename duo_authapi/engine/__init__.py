"""
Decision Engine
===============
Pre-auth / auth state machine and its verdicts.
"""

from .models import (
    Allowed,
    AuthenticationOutcome,
    Denied,
    EnrollmentRequired,
    Failed,
    Verdict,
    VerdictKind,
    GENERIC_FAILURE_MESSAGE,
    ENROLLMENT_MESSAGE,
)
from .decision import AuthenticationDecisionEngine

__all__ = [
    # Verdicts
    "Allowed",
    "AuthenticationOutcome",
    "Denied",
    "EnrollmentRequired",
    "Failed",
    "Verdict",
    "VerdictKind",
    "GENERIC_FAILURE_MESSAGE",
    "ENROLLMENT_MESSAGE",
    # Engine
    "AuthenticationDecisionEngine",
]
