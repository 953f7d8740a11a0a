import structlog
import httpx
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional, Type, TypeVar

from duo_authapi.config import ClientConfig, DuoIntegration
from duo_authapi.params import AuthenticationRequestParams
from duo_authapi.responses import AuthResult, DuoModel, PreauthResult, parse_envelope
from duo_authapi.signing import sign_request

from .exceptions import ConfigurationError, TransportError

T = TypeVar("T", bound=DuoModel)

PREAUTH_PATH = "/auth/v2/preauth"
AUTH_PATH = "/auth/v2/auth"

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DuoApiClient:
    """
    Async client for the Duo Auth API v2.

    Features:
    - Every call signed with the integration credentials.
    - One POST per invocation; retries are left to the caller.
    - Shared httpx.AsyncClient, safe for concurrent attempts.
    - Transport and protocol failures mapped to DuoError subclasses.
    """

    def __init__(
        self,
        integration: DuoIntegration,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.integration = integration.validate()
        self.config = config or ClientConfig()
        self.clock = clock
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            headers={"User-Agent": self.config.user_agent},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self):
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    def _map_exception(self, exc: httpx.HTTPError, path: str) -> TransportError:
        """Map httpx exceptions to TransportError."""
        if isinstance(exc, httpx.TimeoutException):
            return TransportError(f"Request to {path} timed out", reason="timeout", timeout=True)
        if isinstance(exc, (httpx.ConnectError, httpx.NetworkError)):
            return TransportError(f"Failed to connect: {exc}", reason="connection failed")
        return TransportError(f"HTTP transport error: {exc}", reason=type(exc).__name__)

    async def invoke(
        self,
        path: str,
        params: Mapping[str, str],
        response_model: Type[T],
    ) -> T:
        """
        Sign, send and parse one Auth API call.

        Raises:
            ConfigurationError, EncodingError: before any network traffic
            TransportError, MalformedResponse, ProviderRejected, UnexpectedStatus
        """
        signed = sign_request(
            "POST",
            self.integration.api_host,
            path,
            params,
            self.integration,
            self.clock(),
        )

        try:
            response = await self.client.post(
                signed.url,
                content=signed.body.encode("utf-8"),
                headers=signed.headers,
            )
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid Duo request URL {signed.url}: {e}") from e
        except httpx.HTTPError as e:
            error = self._map_exception(e, path)
            logger.warning("Duo request failed", endpoint=path, error=str(error), timeout=error.timeout)
            raise error from e

        logger.debug("Duo response received", endpoint=path, status_code=response.status_code)
        return parse_envelope(
            response.content,
            response.status_code,
            response_model,
            reason_phrase=response.reason_phrase,
        )

    async def preauth(self, params: AuthenticationRequestParams) -> PreauthResult:
        return await self.invoke(PREAUTH_PATH, params.preauth_params(), PreauthResult)

    async def auth(self, params: AuthenticationRequestParams) -> AuthResult:
        return await self.invoke(AUTH_PATH, params.auth_params(), AuthResult)
