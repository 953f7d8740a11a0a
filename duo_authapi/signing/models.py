"""
Signing Models
==============
Data models for canonical and signed Auth API requests.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class CanonicalRequest:
    """The parts of a request covered by the signature."""
    date: str
    method: str
    host: str
    path: str
    query: str

    def to_string(self) -> str:
        """Newline-joined form over which the HMAC is computed."""
        return "\n".join([self.date, self.method, self.host, self.path, self.query])


@dataclass(frozen=True)
class SignedRequest:
    """A request ready to send. Signatures are time-bound, never cache these."""
    canonical: CanonicalRequest
    authorization: str
    body: str

    @property
    def method(self) -> str:
        return self.canonical.method

    @property
    def url(self) -> str:
        return f"https://{self.canonical.host}{self.canonical.path}"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.authorization,
            "Date": self.canonical.date,
            "Content-Type": "application/x-www-form-urlencoded",
        }
