import pytest

from marketplace.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RepositoryError,
    UpstreamError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exception, status_code, error_code",
    [
        (AuthenticationError(), 401, "AUTHENTICATION_ERROR"),
        (AuthorizationError(), 403, "AUTHORIZATION_ERROR"),
        (ValidationError(), 400, "VALIDATION_ERROR"),
        (NotFoundError(), 404, "NOT_FOUND"),
        (ConflictError(), 409, "CONFLICT_ERROR"),
        (RepositoryError(), 500, "REPOSITORY_ERROR"),
    ],
)
def test_status_and_code(exception, status_code, error_code):
    assert exception.status_code == status_code
    assert exception.error_code == error_code


def test_validation_error_collects_field_messages():
    error = ValidationError("Birth date must be in the past", field="birthDate", errors={"name": "required"})

    assert error.details["errors"] == {"name": "required", "birthDate": "Birth date must be in the past"}


def test_conflict_error_records_the_clashing_value():
    error = ConflictError(
        "User with email a@x.com already exists.",
        resource_type="user",
        conflict_field="email",
        existing_value="a@x.com",
    )

    assert error.to_dict() == {
        "error": {
            "code": "CONFLICT_ERROR",
            "message": "User with email a@x.com already exists.",
            "details": {"resource_type": "user", "conflict_field": "email", "existing_value": "a@x.com"},
            "status_code": 409,
        }
    }


@pytest.mark.parametrize("upstream_status, status_code", [(409, 409), (400, 500), (503, 500), (None, 500)])
def test_upstream_error_keeps_only_conflicts(upstream_status, status_code):
    error = UpstreamError("Login taken", service_name="auth-service", upstream_status=upstream_status)

    assert error.status_code == status_code
    assert error.message == "Login taken"
    assert error.details["service"] == "auth-service"
