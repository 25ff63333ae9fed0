"""User (identity) domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlencode
from uuid import UUID, uuid4

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"
MIN_PASSWORD_LENGTH = 6


def default_avatar_url(email: str) -> str:
    """Build the Gravatar URL for an email (200px, G-rated, mystery-person fallback)."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": "200", "r": "g", "d": "mp"})
    return f"{GRAVATAR_BASE_URL}{digest}?{query}"


@dataclass
class User:
    """Domain entity for a registered user.

    ``password_hash`` never leaves the service layer; API schemas omit it.
    """

    email: str
    name: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Derive the avatar from the email when none was stored."""
        if not self.avatar:
            self.avatar = default_avatar_url(self.email)
