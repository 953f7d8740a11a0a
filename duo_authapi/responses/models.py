"""
Response Models
===============
Typed payloads returned by the Duo Auth API.

``result`` and ``status`` stay plain strings: values Duo adds later must
reach the decision engine instead of failing the parse.
"""

from enum import Enum
from typing import FrozenSet, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PreauthResultCode(str, Enum):
    """Known pre-auth ``result`` values."""
    ALLOW = "allow"
    AUTH = "auth"
    DENY = "deny"
    ENROLL = "enroll"


class AuthResultCode(str, Enum):
    """Known auth ``result`` values."""
    ALLOW = "allow"
    DENY = "deny"


class AuthStatus(str, Enum):
    """Auth ``status`` values the client distinguishes."""
    ALLOW = "allow"
    BYPASS = "bypass"
    DENY = "deny"


class DuoModel(BaseModel):
    """Base for all payloads: immutable, unknown fields ignored."""
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class Device(DuoModel):
    """A device enrolled for the user, as listed by pre-auth."""
    id: str = Field(default="", alias="device")
    type: Optional[str] = None
    number: Optional[str] = None
    name: Optional[str] = None
    capabilities: FrozenSet[str] = frozenset()

    @field_validator("capabilities", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value if value is not None else frozenset()


class PreauthResult(DuoModel):
    """Response of ``/auth/v2/preauth``."""
    result: str
    status_message: str = Field(default="", alias="status_msg")
    devices: List[Device] = Field(default_factory=list)
    enroll_portal_url: Optional[str] = None

    @field_validator("status_message", mode="before")
    @classmethod
    def _missing_message(cls, value):
        return value if value is not None else ""

    @field_validator("devices", mode="before")
    @classmethod
    def _missing_devices(cls, value):
        return value if value is not None else []


class AuthResult(DuoModel):
    """Response of ``/auth/v2/auth``."""
    result: str
    status: str = ""
    status_message: str = Field(default="", alias="status_msg")
    trusted_device_token: Optional[str] = None

    @field_validator("status", "status_message", mode="before")
    @classmethod
    def _missing_text(cls, value):
        return value if value is not None else ""

    @property
    def is_bypass(self) -> bool:
        return self.status == AuthStatus.BYPASS.value


class FailureEnvelope(DuoModel):
    """Body Duo sends with HTTP 400."""
    stat: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None
    message_detail: Optional[str] = None


T = TypeVar("T", bound=DuoModel)


class ApiEnvelope(DuoModel, Generic[T]):
    """Success wrapper ``{"stat": "OK", "response": {...}}``."""
    stat: Optional[str] = None
    response: Optional[T] = None


# Either payload the invoker can hand back; which one is fixed by the endpoint called.
ProviderResponse = Union[PreauthResult, AuthResult]
