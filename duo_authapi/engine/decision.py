"""
Authentication Decision Engine
==============================
Runs pre-auth, then auth when Duo asks for it, and turns the answers into
a Verdict.

Pre-auth enumerates devices and can settle allow/deny/enroll without
spending a factor attempt; only an ``auth`` result leads to the second,
stateful call. Errors end the attempt as Failed: a denial only ever comes
from Duo saying ``deny``.
"""

import asyncio
from typing import Dict, Optional

import structlog

from duo_authapi.http.client import DuoApiClient
from duo_authapi.http.exceptions import DuoError, TransportError, UnexpectedStatus
from duo_authapi.params import AuthenticationRequestParams
from duo_authapi.responses import AuthResultCode, PreauthResultCode, ProviderResponse

from .models import (
    Allowed,
    AuthenticationOutcome,
    Denied,
    EnrollmentRequired,
    Failed,
    Verdict,
)

logger = structlog.get_logger(__name__)


class AuthenticationDecisionEngine:
    """
    Two-phase Duo decision flow.

    Holds no per-attempt state; one engine can serve concurrent attempts
    as long as its invoker can.
    """

    def __init__(self, invoker: DuoApiClient):
        self.invoker = invoker

    async def authenticate(
        self,
        params: AuthenticationRequestParams,
        timeout: Optional[float] = None,
    ) -> AuthenticationOutcome:
        """
        Decide one authentication attempt.

        Args:
            params: Username and requested factor/device/passcode
            timeout: Optional budget in seconds for the whole attempt; the
                in-flight request is cancelled when it runs out

        Returns:
            AuthenticationOutcome with the verdict and the responses seen
        """
        responses: Dict[str, ProviderResponse] = {}
        try:
            if timeout is None:
                verdict = await self._decide(params, responses)
            else:
                verdict = await asyncio.wait_for(self._decide(params, responses), timeout)
        except asyncio.TimeoutError:
            verdict = Failed(TransportError(
                f"Duo authentication exceeded {timeout}s deadline",
                reason="timeout",
                timeout=True,
            ))
        except DuoError as e:
            verdict = Failed(e)

        outcome = AuthenticationOutcome(
            username=params.username,
            verdict=verdict,
            preauth=responses.get("preauth"),
            auth=responses.get("auth"),
        )
        self._log_outcome(outcome)
        return outcome

    async def _decide(
        self,
        params: AuthenticationRequestParams,
        responses: Dict[str, ProviderResponse],
    ) -> Verdict:
        preauth = await self.invoker.preauth(params)
        responses["preauth"] = preauth

        if preauth.result == PreauthResultCode.ALLOW:
            # User is in bypass mode on the Duo side.
            return Allowed(bypass=True, status_message=preauth.status_message)
        if preauth.result == PreauthResultCode.DENY:
            return Denied(reason=preauth.status_message)
        if preauth.result == PreauthResultCode.ENROLL:
            return EnrollmentRequired(
                portal_url=preauth.enroll_portal_url,
                reason=preauth.status_message,
            )
        if preauth.result != PreauthResultCode.AUTH:
            raise UnexpectedStatus(preauth.result, field="result")

        logger.debug(
            "Duo pre-authentication requires a factor",
            username=params.username,
            factor=params.factor.value,
            devices=len(preauth.devices),
        )

        auth = await self.invoker.auth(params)
        responses["auth"] = auth

        if auth.result == AuthResultCode.ALLOW:
            return Allowed(bypass=auth.is_bypass, status_message=auth.status_message)
        if auth.result == AuthResultCode.DENY:
            return Denied(reason=auth.status_message)
        raise UnexpectedStatus(auth.result, field="result")

    def _log_outcome(self, outcome: AuthenticationOutcome) -> None:
        verdict = outcome.verdict
        if isinstance(verdict, Failed):
            logger.error(
                "Duo authentication produced an error",
                username=outcome.username,
                error_type=type(verdict.error).__name__,
                error=str(verdict.error),
            )
        elif isinstance(verdict, Allowed):
            logger.info(
                "Duo authentication succeeded",
                username=outcome.username,
                bypass=verdict.bypass,
            )
        else:
            logger.info(
                "Duo authentication failed",
                username=outcome.username,
                verdict=verdict.kind.value,
                status_msg=verdict.reason,
            )
