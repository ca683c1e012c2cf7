"""Bearer credential verification.

The verified identity's ``uid`` keys both the conversation and the usage
counter of a user. Two verifiers are available: HS256 JWTs signed with the
service secret (default, also used for local development) and Firebase ID
tokens.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from prompt_refinery.core.errors import UnauthorizedError
from prompt_refinery.settings import settings

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "dev-secret-key-change-in-production"


@dataclass(frozen=True)
class Identity:
    """A verified caller."""

    uid: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


class IdentityVerifier(ABC):
    """Turns a bearer token into an Identity or raises UnauthorizedError."""

    @abstractmethod
    async def verify(self, token: str) -> Identity:
        """Verify a bearer token.

        Args:
            token: Raw token taken from the Authorization header

        Returns:
            The verified identity

        Raises:
            UnauthorizedError: If the token is invalid or expired
        """


class JWTIdentityVerifier(IdentityVerifier):
    """Verifies JWTs signed with the service secret."""

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None) -> None:
        self.secret_key = secret_key or settings.jwt_secret_key
        self.algorithm = algorithm or settings.jwt_algorithm

    async def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"JWT verification failed: {e}")
            raise UnauthorizedError() from e

        uid = payload.get("sub") or payload.get("uid")
        if not uid:
            raise UnauthorizedError()
        return Identity(uid=str(uid), email=payload.get("email"), claims=payload)


class FirebaseIdentityVerifier(IdentityVerifier):
    """Verifies Firebase ID tokens with firebase-admin."""

    def __init__(self, credentials_path: str | None = None) -> None:
        import firebase_admin
        from firebase_admin import credentials

        try:
            self._app = firebase_admin.get_app()
        except ValueError:
            cred = (
                credentials.Certificate(credentials_path)
                if credentials_path
                else credentials.ApplicationDefault()
            )
            self._app = firebase_admin.initialize_app(cred)

    async def verify(self, token: str) -> Identity:
        from firebase_admin import auth, exceptions

        try:
            # verify_id_token is blocking (may fetch Google's public certs)
            decoded = await asyncio.to_thread(auth.verify_id_token, token, self._app)
        except (ValueError, exceptions.FirebaseError) as e:
            logger.info(f"Firebase token verification failed: {e}")
            raise UnauthorizedError() from e

        return Identity(uid=decoded["uid"], email=decoded.get("email"), claims=decoded)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT accepted by JWTIdentityVerifier.

    Args:
        data: Claims to encode; ``sub`` must hold the user id
        expires_delta: Optional expiration time delta (default one hour)

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def get_identity_verifier(provider: str | None = None) -> IdentityVerifier:
    """Return the identity verifier for the configured provider.

    Priority: explicit ``provider`` argument -> ``AUTH_PROVIDER`` setting.
    """
    selected = (provider or settings.auth_provider).lower()

    if selected == "firebase":
        return FirebaseIdentityVerifier(settings.firebase_credentials_path)

    if selected == "jwt":
        if settings.environment == "production" and settings.jwt_secret_key == _DEFAULT_SECRET:
            raise RuntimeError(
                "SECURITY ERROR: JWT_SECRET_KEY environment variable must be set in production. "
                "Cannot use default secret key."
            )
        return JWTIdentityVerifier()

    raise ValueError(f"Unsupported auth provider: {selected}")
