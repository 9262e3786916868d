import logging
from dataclasses import dataclass
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient

from pokerstats_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Supabase JWKS only publishes asymmetric keys
ALLOWED_ALGORITHMS = ["RS256", "RS384", "RS512", "ES256", "ES384", "ES512"]


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of a request."""

    user_id: str
    email: str | None
    access_token: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class SupabaseJWTBearer:
    """Dependency that verifies a Supabase access token against the project JWKS."""

    def __init__(self) -> None:
        self._jwks_client: PyJWKClient | None = None

    def _get_jwks_client(self, settings: Settings) -> PyJWKClient:
        if self._jwks_client is None:
            logger.debug("Initializing JWKS client with URL: %s", settings.supabase_jwks_url)
            self._jwks_client = PyJWKClient(settings.supabase_jwks_url)
        return self._jwks_client

    def decode(self, token: str, settings: Settings) -> dict:
        algorithm = jwt.get_unverified_header(token).get("alg")
        if algorithm not in ALLOWED_ALGORITHMS:
            raise jwt.InvalidTokenError(f"Algorithm {algorithm} not allowed")

        signing_key = self._get_jwks_client(settings).get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=[algorithm],
            audience="authenticated",
        )

    async def __call__(
        self,
        credentials: Annotated[
            HTTPAuthorizationCredentials | None,
            Depends(HTTPBearer(auto_error=False)),
        ],
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> AuthContext:
        if credentials is None:
            logger.warning("Authentication failed: missing authorization header")
            raise _unauthorized("Missing authorization header")

        token = credentials.credentials
        try:
            payload = self.decode(token, settings)
        except jwt.ExpiredSignatureError:
            logger.warning("Authentication failed: token expired")
            raise _unauthorized("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning("Authentication failed: invalid token - %s", e)
            raise _unauthorized(f"Invalid token: {e}")

        user_id = payload.get("sub")
        if not user_id:
            logger.warning("Authentication failed: token has no subject")
            raise _unauthorized("Invalid token: missing subject")

        logger.debug("JWT validated successfully for user: %s", user_id)
        return AuthContext(user_id=user_id, email=payload.get("email"), access_token=token)


jwt_bearer = SupabaseJWTBearer()

CurrentUser = Annotated[AuthContext, Depends(jwt_bearer)]
