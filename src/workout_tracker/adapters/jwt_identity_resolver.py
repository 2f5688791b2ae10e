"""Session token verification backed by PyJWT."""

import logging
from dataclasses import dataclass
from typing import Any

import jwt

from workout_tracker.config import Settings
from workout_tracker.services.identity import CurrentUser, IdentityResolver

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "
_REQUIRED_CLAIMS = ["exp", "sub"]


@dataclass
class JwtIdentityResolver(IdentityResolver):
    """Resolve the caller from a Clerk-style session JWT.

    RS256 tokens are checked against the JWKS endpoint when one is
    configured; otherwise HS256 tokens are checked against a shared secret.
    """

    jwks_client: jwt.PyJWKClient | None = None
    secret: str | None = None
    issuer: str | None = None
    leeway_seconds: int = 5

    @classmethod
    def create(cls, settings: Settings) -> "JwtIdentityResolver":
        """Build a resolver from application settings."""
        jwks_client = (
            jwt.PyJWKClient(settings.clerk_jwks_url)
            if settings.clerk_jwks_url
            else None
        )
        return cls(
            jwks_client=jwks_client,
            secret=settings.session_jwt_secret,
            issuer=settings.clerk_issuer,
        )

    def resolve(
        self, authorization: str | None, session_cookie: str | None
    ) -> CurrentUser | None:
        """Return the user for a valid token, or None."""
        token = _bearer_token(authorization) or session_cookie
        if not token:
            return None
        try:
            claims = self._decode(token)
        except jwt.PyJWTError as exc:
            logger.info("Rejected session token: %s", exc.__class__.__name__)
            return None
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            return None
        return CurrentUser(id=subject)

    def _decode(self, token: str) -> dict[str, Any]:
        options = {"require": _REQUIRED_CLAIMS}
        if self.jwks_client is not None:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            return jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                issuer=self.issuer,
                leeway=self.leeway_seconds,
                options=options,
            )
        if self.secret:
            return jwt.decode(
                token,
                self.secret,
                algorithms=["HS256"],
                issuer=self.issuer,
                leeway=self.leeway_seconds,
                options=options,
            )
        logger.warning("No session verification key configured")
        raise jwt.InvalidTokenError("no verification key configured")


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith(_BEARER_PREFIX):
        token = authorization[len(_BEARER_PREFIX) :].strip()
        return token or None
    return None
