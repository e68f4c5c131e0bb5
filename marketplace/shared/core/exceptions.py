# 📄 File: marketplace/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the directory service uses to say
# what went wrong (missing user, duplicate card, forbidden access) in a clear way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing error types with HTTP status codes,
# error details and serialization for API responses and error handling.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, external clients, middleware, API exception handlers

from typing import Any, Dict, Optional

from fastapi import status


class MarketplaceException(Exception):
    """
    Base exception class for the directory service.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(MarketplaceException):
    """
    Exception raised when a protected operation is called without a valid token.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(MarketplaceException):
    """
    Exception raised when the caller's role or identity does not satisfy
    the access rule of an operation. Never carries existence information.
    """

    def __init__(
        self,
        message: str = "Access denied",
        operation: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(MarketplaceException):
    """
    Exception raised for malformed or constraint-violating input.
    The details carry a field to message map under ``errors``.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        field_errors = dict(errors or {})
        if field:
            field_errors.setdefault(field, message)
        details["errors"] = field_errors

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(MarketplaceException):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class ConflictError(MarketplaceException):
    """
    Exception raised when a write would violate a uniqueness invariant
    (user email, card number).
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: Optional[str] = None,
        conflict_field: Optional[str] = None,
        existing_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if conflict_field:
            details["conflict_field"] = conflict_field
        if existing_value is not None:
            details["existing_value"] = str(existing_value)

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONFLICT_ERROR"
        )


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class UpstreamError(MarketplaceException):
    """
    Exception raised when the external credential service fails.

    The upstream detail message is passed through unchanged. A conflict
    reported by the upstream stays a conflict; anything else is an
    internal error.
    """

    def __init__(
        self,
        message: str = "Upstream service call failed",
        service_name: Optional[str] = None,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if service_name:
            details["service"] = service_name
        if upstream_status is not None:
            details["upstream_status"] = upstream_status

        self.upstream_status = upstream_status
        is_conflict = upstream_status == status.HTTP_409_CONFLICT

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT if is_conflict else status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="UPSTREAM_CONFLICT" if is_conflict else "UPSTREAM_ERROR"
        )

    @property
    def is_conflict(self) -> bool:
        return self.status_code == status.HTTP_409_CONFLICT


class RepositoryError(MarketplaceException):
    """
    Exception raised for repository/database operation failures.
    Used when database operations fail at the repository layer.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )
