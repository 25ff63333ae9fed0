"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Identity extracted from a verified auth token."""

    id: UUID
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    def create_token(self, user_id: UUID) -> str:
        """
        Create an authentication token for a user.

        Args:
            user_id: The identity the token is issued for

        Returns:
            The generated token string
        """
        ...

    def verify_token(self, token: str) -> TokenUser:
        """
        Verify an authentication token.

        Args:
            token: The token taken from the request

        Returns:
            TokenUser for the token's subject

        Raises:
            TokenError: If the token is expired, badly signed or malformed
        """
        ...
