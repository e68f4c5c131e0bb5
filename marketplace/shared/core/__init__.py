"""
Core utilities package for the Marketplace User Service.
Provides exceptions, security, the clock and shared dependencies.
"""

from .exceptions import (
    MarketplaceException,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    UpstreamError,
    RepositoryError,
)

__all__ = [
    "MarketplaceException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
    "RepositoryError",
]
