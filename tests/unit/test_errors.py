"""
Unit tests for the EmailBison error taxonomy and status classification.
"""
import json
from datetime import datetime

import pytest

from outbound.errors import (
    AuthenticationError,
    EmailBisonError,
    ErrorCode,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
    extract_error_message,
    extract_field_errors,
    extract_retry_after_ms,
    http_error_from_response,
    is_emailbison_error,
    is_retryable_error,
)


class TestStatusClassification:
    """http_error_from_response maps every status to exactly one type."""

    @pytest.mark.parametrize(
        "status,expected_type,expected_status",
        [
            (400, ValidationError, 400),
            (422, ValidationError, 422),
            (401, AuthenticationError, 401),
            (403, ForbiddenError, 403),
            (404, NotFoundError, 404),
            (429, RateLimitError, 429),
            (500, ServerError, 500),
            (502, ServerError, 502),
            (503, ServerError, 503),
            (504, ServerError, 504),
            (599, ServerError, 599),
        ],
    )
    def test_mapped_statuses(self, status, expected_type, expected_status):
        error = http_error_from_response(status, {"message": "nope"})

        assert type(error) is expected_type
        assert error.status_code == expected_status

    @pytest.mark.parametrize("status", [402, 405, 409, 410, 418, 451])
    def test_other_statuses_are_unknown(self, status):
        body = {"foo": "bar"}
        error = http_error_from_response(status, body)

        assert type(error) is EmailBisonError
        assert error.code is ErrorCode.UNKNOWN_ERROR
        assert error.status_code == status
        assert error.details == body

    @pytest.mark.parametrize("status,body", [(409, None), (418, {"foo": "bar"}), (405, {"message": ""})])
    def test_unknown_status_message_falls_back_to_default(self, status, body):
        error = http_error_from_response(status, body)
        assert error.message == "Request failed"

    def test_unknown_status_uses_body_message(self):
        error = http_error_from_response(409, {"message": "Duplicate lead"})
        assert error.message == "Duplicate lead"

    def test_server_error_carries_message(self):
        error = http_error_from_response(503, {"error": "Maintenance"})
        assert error.message == "Maintenance"
        assert error.code is ErrorCode.SERVER_ERROR


class TestValidationErrors:
    def test_laravel_field_errors_extracted(self):
        error = http_error_from_response(422, {"errors": {"email": ["is invalid"]}})

        assert isinstance(error, ValidationError)
        assert error.field_errors["email"] == ["is invalid"]
        assert error.details == {"email": ["is invalid"]}
        assert error.status_code == 422

    def test_list_errors_are_message_not_field_errors(self):
        error = http_error_from_response(400, {"errors": ["name is required"]})

        assert error.message == "name is required"
        assert error.field_errors is None

    def test_defaults(self):
        error = ValidationError()
        assert error.message == "Validation failed"
        assert error.status_code == 400
        assert error.field_errors is None


class TestNotFound:
    def test_wrapped_data_message_used(self):
        body = {"data": {"success": False, "message": "Campaign not found"}}
        error = http_error_from_response(404, body)

        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.message == "Campaign not found"

    def test_top_level_message_preferred_over_wrapped(self):
        body = {"message": "No such campaign", "data": {"message": "Campaign not found"}}
        error = http_error_from_response(404, body)

        assert error.message == "No such campaign"

    def test_no_body_gives_generic_message(self):
        error = http_error_from_response(404, None)
        assert error.message == "Resource not found"

    @pytest.mark.parametrize("body", [{"message": ""}, {"data": {"message": ""}}, {"errors": [""]}])
    def test_empty_body_message_gives_generic_message(self, body):
        error = http_error_from_response(404, body)
        assert error.message == "Resource not found"

    def test_resource_context(self):
        assert NotFoundError("Campaign", 42).message == "Campaign (42) not found"
        assert NotFoundError("Campaign").message == "Campaign not found"


class TestRateLimit:
    def test_retry_after_seconds_converted_to_ms(self):
        error = http_error_from_response(429, {"retry_after": 30})

        assert isinstance(error, RateLimitError)
        assert error.retry_after_ms == 30_000
        assert "Retry after 30s" in error.message

    def test_missing_retry_after(self):
        error = http_error_from_response(429, {"message": "slow down"})

        assert error.retry_after_ms is None
        assert error.message == "Rate limit exceeded"

    @pytest.mark.parametrize("value", ["30", True, None, [30]])
    def test_non_numeric_retry_after_ignored(self, value):
        assert extract_retry_after_ms({"retry_after": value}) is None

    def test_fractional_seconds_round_up_in_message(self):
        error = RateLimitError(1500)
        assert error.message == "Rate limit exceeded. Retry after 2s"


class TestMessageExtraction:
    """Strategies are tried in a fixed order."""

    @pytest.mark.parametrize(
        "body,expected",
        [
            ({"message": "m", "error": "e", "detail": "d"}, "m"),
            ({"error": "e", "detail": "d"}, "e"),
            ({"detail": "d", "data": {"message": "w"}}, "d"),
            ({"data": {"message": "w"}, "errors": ["x"]}, "w"),
            ({"errors": ["first", "second"]}, "first"),
            ({"errors": [{"message": "object message"}]}, "object message"),
            ({"errors": [{"message": 123}]}, "123"),
        ],
    )
    def test_strategy_order(self, body, expected):
        assert extract_error_message(body) == expected

    @pytest.mark.parametrize(
        "body",
        [
            None,
            "plain text",
            [],
            {},
            {"message": 42},
            {"error": {"code": "X"}},
            {"data": "oops"},
            {"errors": []},
            {"errors": [{"code": "X"}]},
        ],
    )
    def test_fallback(self, body):
        assert extract_error_message(body) == "Request failed"

    def test_field_errors_require_mapping(self):
        assert extract_field_errors({"errors": ["a"]}) is None
        assert extract_field_errors(None) is None
        assert extract_field_errors({"errors": {"name": ["required"]}}) == {"name": ["required"]}


class TestRetryability:
    @pytest.mark.parametrize(
        "error",
        [
            NetworkError(),
            RequestTimeoutError(1000),
            RateLimitError(),
            ServerError(),
            ServerError("bad gateway", 502),
        ],
    )
    def test_retryable(self, error):
        assert is_retryable_error(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            AuthenticationError(),
            ForbiddenError(),
            NotFoundError(),
            ValidationError(),
            EmailBisonError("teapot", ErrorCode.UNKNOWN_ERROR, 418),
            ValueError("not ours"),
            TimeoutError("builtin"),
            ConnectionError("builtin"),
            None,
        ],
    )
    def test_not_retryable(self, error):
        assert is_retryable_error(error) is False

    def test_type_guard(self):
        assert is_emailbison_error(NetworkError())
        assert not is_emailbison_error(RuntimeError())


class TestErrorShape:
    def test_transport_errors_have_no_status(self):
        assert NetworkError().status_code is None
        assert NetworkError().code is ErrorCode.NETWORK_ERROR

        timeout = RequestTimeoutError(2500)
        assert timeout.timeout_ms == 2500
        assert timeout.message == "Request timed out after 2500ms"
        assert timeout.status_code is None

    def test_to_dict(self):
        error = http_error_from_response(422, {"errors": {"email": ["is invalid"]}, "message": "Invalid"})
        payload = error.to_dict()

        assert payload["name"] == "ValidationError"
        assert payload["message"] == "Invalid"
        assert payload["code"] == "VALIDATION_ERROR"
        assert payload["status_code"] == 422
        assert payload["details"] == {"email": ["is invalid"]}
        assert datetime.fromisoformat(payload["timestamp"]) == error.timestamp
        # Must survive a JSON round trip for transport across process boundaries
        assert json.loads(json.dumps(payload)) == payload

    def test_is_exception(self):
        with pytest.raises(EmailBisonError) as exc_info:
            raise ForbiddenError()
        assert str(exc_info.value) == "Access denied"
        assert exc_info.value.name == "ForbiddenError"

    def test_timestamp_is_timezone_aware(self):
        assert NetworkError().timestamp.tzinfo is not None
