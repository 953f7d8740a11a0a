"""
Authentication Request Parameters
=================================
The immutable input of one authentication attempt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class Factor(str, Enum):
    """Second factors the Auth API accepts."""
    AUTO = "auto"
    PUSH = "push"
    PASSCODE = "passcode"
    SMS = "sms"
    PHONE = "phone"


DEVICE_AUTO = "auto"


@dataclass(frozen=True)
class AuthenticationRequestParams:
    """
    Username plus the requested factor, device and passcode.

    Callers resolve defaults (factor "auto", device "auto") before building
    this; see duo_authapi.extraction.
    """
    username: str
    factor: Union[Factor, str] = Factor.AUTO
    device: Optional[str] = None
    passcode: Optional[str] = None

    def __post_init__(self):
        if not self.username:
            raise ValueError("username is required")
        if not self.factor:
            raise ValueError("factor is required")
        # Coerce plain strings; unknown factors raise ValueError here.
        object.__setattr__(self, "factor", Factor(self.factor))
        if self.factor is Factor.PASSCODE and not self.passcode:
            raise ValueError("passcode is required when factor is 'passcode'")

    def __repr__(self) -> str:
        return (
            f"AuthenticationRequestParams(username={self.username!r}, "
            f"factor={self.factor.value!r}, device={self.device!r}, "
            f"passcode={'***' if self.passcode else None})"
        )

    def preauth_params(self) -> Dict[str, str]:
        """Parameters for ``/auth/v2/preauth``."""
        return {"username": self.username}

    def auth_params(self) -> Dict[str, str]:
        """Parameters for ``/auth/v2/auth``."""
        params = {
            "username": self.username,
            "factor": self.factor.value,
        }
        if self.device:
            params["device"] = self.device
        if self.passcode and self.factor is Factor.PASSCODE:
            params["passcode"] = self.passcode
        return params
