"""
Request Extraction
==================
Reads the Duo factor, device and passcode from an inbound Starlette request.

Headers win over query/form parameters. Empty values are ignored.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import structlog
from starlette.requests import Request

from duo_authapi.http.exceptions import DuoError
from duo_authapi.params import DEVICE_AUTO, AuthenticationRequestParams, Factor

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class RequestUnsupported(DuoError):
    """Raised when an inbound request carries no usable Duo factor."""
    pass


@dataclass
class ExtractionConfig:
    """Where to look for Duo values on the inbound request."""
    auto_authentication_supported: bool = True
    use_headers: bool = True
    use_parameters: bool = True
    factor_header: str = "X-Shibboleth-Duo-Factor"
    device_header: str = "X-Shibboleth-Duo-Device"
    passcode_header: str = "X-Shibboleth-Duo-Passcode"
    factor_parameter: str = "duoFactor"
    device_parameter: str = "duoDevice"
    passcode_parameter: str = "duoPasscode"


async def _request_parameters(request: Request) -> Dict[str, str]:
    """Query string values, falling back to form fields."""
    params: Dict[str, str] = {}
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        for name, value in form.multi_items():
            if isinstance(value, str):
                params.setdefault(name, value)
    # First query value for a name wins over form fields.
    for name in request.query_params.keys():
        value = request.query_params.getlist(name)[0]
        if value:
            params[name] = value
    return params


def _apply(values: Dict[str, Optional[str]], source: Mapping[str, str], names: Dict[str, str]) -> None:
    for key, name in names.items():
        value = source.get(name)
        if value:
            values[key] = value


async def extract_request_params(
    request: Request,
    username: str,
    config: Optional[ExtractionConfig] = None,
) -> AuthenticationRequestParams:
    """
    Build the parameters for one attempt from an inbound request.

    Args:
        request: Inbound Starlette request
        username: Already-established username
        config: Header/parameter names and switches

    Returns:
        AuthenticationRequestParams with defaults resolved

    Raises:
        RequestUnsupported: no factor could be determined, or the values
            do not form a valid request
    """
    config = config or ExtractionConfig()
    values: Dict[str, Optional[str]] = {
        "factor": Factor.AUTO.value if config.auto_authentication_supported else None,
        "device": None,
        "passcode": None,
    }

    if config.use_parameters:
        _apply(values, await _request_parameters(request), {
            "factor": config.factor_parameter,
            "device": config.device_parameter,
            "passcode": config.passcode_parameter,
        })

    if config.use_headers:
        _apply(values, request.headers, {
            "factor": config.factor_header,
            "device": config.device_header,
            "passcode": config.passcode_header,
        })

    if not values["factor"]:
        logger.debug("Request does not contain a Duo factor", username=username)
        raise RequestUnsupported("No Duo factor supplied")

    if (
        config.auto_authentication_supported
        and values["device"] is None
        and values["factor"] != Factor.PASSCODE.value
    ):
        values["device"] = DEVICE_AUTO

    try:
        return AuthenticationRequestParams(username=username, **values)
    except ValueError as e:
        raise RequestUnsupported(f"Invalid Duo request: {e}")
