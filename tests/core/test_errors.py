"""Tests for the error hierarchy — codes, statuses and REST envelope shape."""

from userapi.core.errors import (
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ResourceNotFoundError,
    UserApiError,
)


def test_resource_not_found_is_404():
    err = ResourceNotFoundError("User", "42")
    assert isinstance(err, UserApiError)
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert err.message == "User '42' not found"
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND


def test_database_error_is_critical_500():
    err = DatabaseError("Integrity constraint violated", "create")
    assert err.http_status == 500
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.operation == "create"
    assert "create" in err.message


def test_to_response_envelope_carries_context():
    ctx = ErrorContext(request_id="req-1", user_id=7)
    body = ResourceNotFoundError("User", "7", ctx).to_response()
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["category"] == "resource_not_found"
    assert body["error"]["severity"] == "error"
    assert body["error"]["context"] == {"request_id": "req-1", "user_id": 7}
    assert body["error"]["timestamp"]
