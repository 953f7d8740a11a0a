"""
Response Parsing
================
Turns an HTTP status and raw body into a typed payload or a classified error.
"""

from typing import Type, TypeVar, Union

from pydantic import ValidationError

from duo_authapi.http.exceptions import (
    MalformedResponse,
    ProviderRejected,
    TransportError,
    UnexpectedStatus,
)

from .models import ApiEnvelope, DuoModel, FailureEnvelope

T = TypeVar("T", bound=DuoModel)

STAT_OK = "OK"


def parse_failure(raw_body: Union[str, bytes]) -> ProviderRejected:
    """
    Parse an HTTP 400 body.

    Returns:
        ProviderRejected carrying Duo's code and messages

    Raises:
        MalformedResponse: body is not a failure envelope
    """
    try:
        failure = FailureEnvelope.model_validate_json(raw_body)
    except ValidationError as e:
        raise MalformedResponse("Unable to parse Duo failure response", status_code=400, details=str(e))
    return ProviderRejected(failure.code, failure.message, failure.message_detail)


def parse_envelope(
    raw_body: Union[str, bytes],
    http_status: int,
    response_model: Type[T],
    reason_phrase: str = "",
) -> T:
    """
    Validate a Duo response and unwrap its payload.

    Args:
        raw_body: Response body as received
        http_status: HTTP status code
        response_model: Payload type expected from the endpoint
        reason_phrase: HTTP reason phrase, kept for diagnostics

    Returns:
        The ``response`` member of a ``stat == "OK"`` envelope

    Raises:
        ProviderRejected: HTTP 400 with a failure envelope
        TransportError: any status other than 200 or 400
        MalformedResponse: body does not parse, or the envelope is empty
        UnexpectedStatus: ``stat`` is not ``"OK"``
    """
    if http_status == 400:
        raise parse_failure(raw_body)

    if http_status != 200:
        raise TransportError(
            f"Non-ok status code ({http_status}) returned from Duo: {reason_phrase}",
            status_code=http_status,
            reason=reason_phrase,
        )

    try:
        envelope = ApiEnvelope[response_model].model_validate_json(raw_body)
    except ValidationError as e:
        raise MalformedResponse("Unable to parse JSON response", status_code=200, details=str(e))

    if envelope.stat != STAT_OK:
        raise UnexpectedStatus(envelope.stat, field="stat")

    if envelope.response is None:
        raise MalformedResponse("Duo response envelope has no 'response' member", status_code=200)

    return envelope.response
