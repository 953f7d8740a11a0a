"""
Duo Configuration
=================
Integration credentials and HTTP client settings.
"""

import os
from dataclasses import dataclass, field

import httpx

from duo_authapi.http.exceptions import ConfigurationError


@dataclass(frozen=True)
class DuoIntegration:
    """
    Credentials for one Duo Auth API application.

    Read-only for the lifetime of the process, so a single instance can be
    shared by every concurrent authentication attempt.
    """
    integration_key: str
    secret_key: str = field(repr=False)
    api_host: str

    def validate(self) -> "DuoIntegration":
        """Raise ConfigurationError unless every credential is present."""
        if not self.integration_key:
            raise ConfigurationError("Duo integration key is not configured")
        if not self.secret_key:
            raise ConfigurationError("Duo secret key is not configured")
        if not self.api_host:
            raise ConfigurationError("Duo API host is not configured")
        try:
            httpx.URL(f"https://{self.api_host}")
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Duo API host is not a valid host: {e}")
        return self

    @classmethod
    def from_env(cls, prefix: str = "DUO_") -> "DuoIntegration":
        """
        Build credentials from environment variables.

        Reads ``{prefix}IKEY``, ``{prefix}SKEY`` and ``{prefix}API_HOST``.
        """
        return cls(
            integration_key=os.environ.get(f"{prefix}IKEY", ""),
            secret_key=os.environ.get(f"{prefix}SKEY", ""),
            api_host=os.environ.get(f"{prefix}API_HOST", ""),
        ).validate()


@dataclass
class ClientConfig:
    """HTTP settings for the Auth API client."""
    timeout: float = float(os.environ.get("DUO_HTTP_TIMEOUT", "10.0"))
    verify_ssl: bool = True
    user_agent: str = "duo-authapi/0.1.0"
