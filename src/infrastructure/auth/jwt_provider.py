"""JWT authentication provider implementation.

Tokens are HS256-signed with the server secret and carry the identity
under a ``user`` claim:

    {
        "user": { "id": "user-uuid" },
        "iat": 1234567890,
        "exp": 1234571490
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from core.config import settings
from core.exceptions import InvalidSignatureError, MalformedTokenError, TokenExpiredError
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


def _timestamp(value: Any) -> datetime | None:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return None


class JWTAuthProvider:
    """JWT-based authentication provider.

    Stateless: verification depends only on the token, the secret and the
    current time, so one instance is shared by all requests.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    def create_token(self, user_id: UUID) -> str:
        """
        Issue a signed token for a user.

        Args:
            user_id: The identity the token is issued for

        Returns:
            The generated JWT string
        """
        issued_at = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "user": {"id": str(user_id)},
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self._expire_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenUser:
        """
        Verify a JWT and extract the identity it was issued for.

        The token is first decoded without verification so that structural
        problems are told apart from signature failures.

        Raises:
            MalformedTokenError: Not a JWT, or the identity claim is missing
            TokenExpiredError: The ``exp`` claim is in the past
            InvalidSignatureError: The signature does not match the secret
        """
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError() from exc

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTClaimsError as exc:
            raise MalformedTokenError("Invalid token claims") from exc
        except JWTError as exc:
            logger.debug("Token signature rejected: %s", exc)
            raise InvalidSignatureError() from exc

        user_claim = payload.get("user")
        raw_id = user_claim.get("id") if isinstance(user_claim, dict) else None
        if not isinstance(raw_id, str):
            raise MalformedTokenError("Token has no user id")
        try:
            user_id = UUID(raw_id)
        except ValueError as exc:
            raise MalformedTokenError("Token user id is not valid") from exc

        return TokenUser(
            id=user_id,
            issued_at=_timestamp(payload.get("iat")),
            expires_at=_timestamp(payload.get("exp")),
        )
