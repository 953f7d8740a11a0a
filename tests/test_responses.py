"""
Unit Tests for Response Parsing
===============================
Envelope validation and error classification.
"""

import json

import pytest


PREAUTH_AUTH = {
    "stat": "OK",
    "response": {
        "result": "auth",
        "status_msg": "Account is active",
        "devices": [
            {
                "device": "DPFZRS9FB0D46QFTM891",
                "type": "phone",
                "number": "XXX-XXX-0100",
                "name": "",
                "capabilities": ["auto", "push", "sms", "phone", "mobile_otp"],
                "sms_nextcode": "1",
            }
        ],
        "new_field": {"nested": True},
    },
}


class TestSuccessEnvelope:
    """Tests for HTTP 200 responses."""

    def test_preauth_devices(self):
        """Devices and capabilities are parsed; unknown fields are ignored."""
        from duo_authapi.responses import PreauthResult, parse_envelope

        result = parse_envelope(json.dumps(PREAUTH_AUTH), 200, PreauthResult)

        assert result.result == "auth"
        assert result.status_message == "Account is active"
        assert len(result.devices) == 1
        device = result.devices[0]
        assert device.id == "DPFZRS9FB0D46QFTM891"
        assert device.type == "phone"
        assert "push" in device.capabilities
        assert result.enroll_portal_url is None

    def test_enroll_portal_url(self):
        """The enrollment portal URL is kept."""
        from duo_authapi.responses import PreauthResult, parse_envelope

        body = {
            "stat": "OK",
            "response": {
                "result": "enroll",
                "status_msg": "Enroll an authentication device to proceed",
                "enroll_portal_url": "https://api-test.duosecurity.com/portal?code=48bac5d9393fb2c2",
            },
        }
        result = parse_envelope(json.dumps(body).encode(), 200, PreauthResult)

        assert result.enroll_portal_url == "https://api-test.duosecurity.com/portal?code=48bac5d9393fb2c2"
        assert result.devices == []

    def test_auth_result(self):
        """Auth responses carry result, status and optional token."""
        from duo_authapi.responses import AuthResult, parse_envelope

        body = {
            "stat": "OK",
            "response": {
                "result": "allow",
                "status": "allow",
                "status_msg": "Success. Logging you in...",
                "trusted_device_token": "token-123",
            },
        }
        result = parse_envelope(json.dumps(body), 200, AuthResult)

        assert result.result == "allow"
        assert result.status == "allow"
        assert result.trusted_device_token == "token-123"
        assert result.is_bypass is False

    def test_bypass_status(self):
        """A bypass status is recognised."""
        from duo_authapi.responses import AuthResult, parse_envelope

        body = {"stat": "OK", "response": {"result": "allow", "status": "bypass"}}
        result = parse_envelope(json.dumps(body), 200, AuthResult)

        assert result.is_bypass is True

    def test_missing_optional_text(self):
        """Missing or null status_msg becomes an empty string."""
        from duo_authapi.responses import AuthResult, PreauthResult, parse_envelope

        preauth = parse_envelope('{"stat": "OK", "response": {"result": "deny"}}', 200, PreauthResult)
        auth = parse_envelope(
            '{"stat": "OK", "response": {"result": "deny", "status_msg": null}}', 200, AuthResult
        )

        assert preauth.status_message == ""
        assert auth.status_message == ""
        assert auth.status == ""

    def test_unknown_result_passes_through(self):
        """Result values the client does not know are not rejected here."""
        from duo_authapi.responses import PreauthResult, parse_envelope

        result = parse_envelope('{"stat": "OK", "response": {"result": "waiting"}}', 200, PreauthResult)

        assert result.result == "waiting"

    def test_stat_not_ok(self):
        """A non-OK stat is an unexpected status."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import UnexpectedStatus

        with pytest.raises(UnexpectedStatus) as exc_info:
            parse_envelope('{"stat": "FAIL", "response": {"result": "allow"}}', 200, PreauthResult)

        assert exc_info.value.value == "FAIL"

    def test_stat_missing(self):
        """A missing stat is an unexpected status."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import UnexpectedStatus

        with pytest.raises(UnexpectedStatus):
            parse_envelope('{"response": {"result": "allow"}}', 200, PreauthResult)

    @pytest.mark.parametrize("body", ["null", "", "not json", "[]", '{"stat": "OK"}'])
    def test_malformed_bodies(self, body):
        """Unparseable or empty envelopes are malformed."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import MalformedResponse

        with pytest.raises(MalformedResponse):
            parse_envelope(body, 200, PreauthResult)

    def test_missing_result_is_malformed(self):
        """A payload without 'result' does not parse."""
        from duo_authapi.responses import AuthResult, parse_envelope
        from duo_authapi.http.exceptions import MalformedResponse

        with pytest.raises(MalformedResponse):
            parse_envelope('{"stat": "OK", "response": {"status": "allow"}}', 200, AuthResult)


class TestFailureResponses:
    """Tests for non-200 statuses."""

    def test_provider_rejected(self):
        """HTTP 400 with a failure envelope is a provider rejection."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import ProviderRejected

        body = {
            "stat": "FAIL",
            "code": 40002,
            "message": "Invalid request parameters",
            "message_detail": "username",
        }
        with pytest.raises(ProviderRejected) as exc_info:
            parse_envelope(json.dumps(body), 400, PreauthResult)

        error = exc_info.value
        assert error.code == "40002"
        assert error.provider_message == "Invalid request parameters"
        assert error.message_detail == "username"
        assert error.status_code == 400

    def test_unparseable_400(self):
        """A 400 without a failure envelope is malformed."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import MalformedResponse

        with pytest.raises(MalformedResponse):
            parse_envelope("<html>Bad Request</html>", 400, PreauthResult)

    @pytest.mark.parametrize("status", [401, 404, 500, 503])
    def test_other_statuses(self, status):
        """Other statuses are transport errors; the body is not read."""
        from duo_authapi.responses import PreauthResult, parse_envelope
        from duo_authapi.http.exceptions import TransportError

        with pytest.raises(TransportError) as exc_info:
            parse_envelope('{"stat": "OK", "response": {"result": "allow"}}', status, PreauthResult, "Oops")

        assert exc_info.value.status_code == status
        assert exc_info.value.reason == "Oops"
