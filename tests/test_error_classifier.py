"""
Tests for the error classifier.
"""

import json

import pytest
import requests

from upload_pipeline.core.errors import (
    AuthError,
    NetworkError,
    QuotaExceededError,
    ServerError,
    ValidationError,
    classify,
)
from upload_pipeline.core.errors.error_classifier import QUOTA_REMEDIATION


class TestClassificationTable:
    """The concrete cases every caller relies on."""

    def test_forbidden_is_auth_error(self):
        body = '{"error":{"message":"forbidden"}}'
        error = classify(403, body)

        assert isinstance(error, AuthError)
        assert error.retriable is False
        assert "forbidden" in error.message
        assert error.message != body
        assert error.raw == body

    def test_upload_limit_is_quota_error_with_remediation(self):
        body = json.dumps({
            "error": {
                "code": 400,
                "message": "The user has exceeded the number of videos they may upload.",
                "errors": [{"reason": "uploadLimitExceeded"}],
            }
        })
        error = classify(400, body)

        assert isinstance(error, QuotaExceededError)
        assert error.retriable is False
        assert error.message == QUOTA_REMEDIATION
        assert "uploadLimitExceeded" not in error.message

    def test_transport_exception_is_network_error(self):
        error = classify(None, requests.ConnectionError("Name or service not known"))

        assert isinstance(error, NetworkError)
        assert error.retriable is True
        assert error.status is None

    def test_internal_error_is_server_error(self):
        error = classify(500, {"error": {"message": "Backend Error"}})

        assert isinstance(error, ServerError)
        assert error.retriable is True
        assert "Backend Error" in error.message


class TestRuleOrder:
    def test_quota_marker_wins_over_auth_status(self):
        error = classify(403, {"error": {"message": "x", "errors": [{"reason": "uploadLimitExceeded"}]}})
        assert isinstance(error, QuotaExceededError)

    def test_quota_marker_found_in_plain_text(self):
        assert isinstance(classify(400, "you exceeded the number of videos"), QuotaExceededError)

    def test_unauthorized_is_auth_error(self):
        assert isinstance(classify(401, "Invalid Credentials"), AuthError)

    @pytest.mark.parametrize("status", [400, 404, 409, 422])
    def test_other_client_errors_are_validation_errors(self, status):
        error = classify(status, {"error": {"message": "bad"}})
        assert isinstance(error, ValidationError)
        assert error.retriable is False
        assert error.status == status

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors_are_retriable(self, status):
        assert classify(status, "").retriable is True


class TestPayloadShapes:
    def test_proxy_error_shape(self):
        error = classify(400, '{"error": "equipoId es requerido"}')
        assert isinstance(error, ValidationError)
        assert "equipoId es requerido" in error.message

    def test_bytes_body(self):
        error = classify(404, b'{"error": {"message": "Video not found", "errors": [{"reason": "videoNotFound"}]}}')
        assert isinstance(error, ValidationError)
        assert error.reason == "videoNotFound"

    def test_unclassified_keeps_raw_message(self):
        error = classify(302, "<html>moved somewhere</html>")
        assert isinstance(error, ServerError)
        assert "moved somewhere" in error.message

    def test_no_status_without_exception_falls_back_to_server_error(self):
        error = classify(None, {"error": "no id returned"})
        assert isinstance(error, ServerError)
        assert "no id returned" in error.message

    def test_to_dict(self):
        assert classify(401, "nope").to_dict() == {
            "kind": "AuthError",
            "message": classify(401, "nope").message,
            "retriable": False,
        }
