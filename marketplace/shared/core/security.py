"""
Security utilities for JWT creation and validation.

Tokens carry the user id in ``sub`` and the caller role in ``role``
(``USER`` or ``ADMIN``). Decoding yields a :class:`Principal`.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from ..config.settings import get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Caller roles carried in the access token."""
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller identity."""
    user_id: UUID
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class SecurityManager:
    """
    Centralized security manager for JWT tokens.
    """

    def __init__(self):
        self.settings = get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.JWT_SECRET_KEY
        self.access_token_expire_minutes = self.settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(
        self,
        user_id: UUID,
        role: Role = Role.USER,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create JWT access token for a user.

        Args:
            user_id: Subject of the token
            role: Caller role claim
            expires_delta: Custom expiration time
            extra_claims: Additional claims to embed

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        to_encode = dict(extra_claims or {})
        to_encode.update({
            "sub": str(user_id),
            "role": Role(role).value,
            "exp": expire,
            "iat": now,
            "type": "access"
        })

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user: {user_id}")
        return encoded_jwt

    def verify_token(self, token: str) -> Principal:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Principal: Caller identity from the token

        Raises:
            AuthenticationError: If token is invalid, expired or malformed
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise AuthenticationError("Token expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if payload.get("type", "access") != "access":
            logger.warning(f"Token type mismatch: {payload.get('type')}")
            raise AuthenticationError("Could not validate credentials")

        subject = payload.get("sub")
        if subject is None:
            logger.warning("Token missing subject (user_id)")
            raise AuthenticationError("Could not validate credentials")

        try:
            user_id = UUID(str(subject))
            role = Role(str(payload.get("role", Role.USER.value)).upper())
        except ValueError:
            logger.warning(f"Token carries malformed claims for subject {subject}")
            raise AuthenticationError("Could not validate credentials")

        return Principal(user_id=user_id, role=role)


@lru_cache()
def get_security_manager() -> SecurityManager:
    """Get the process wide security manager."""
    return SecurityManager()


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
