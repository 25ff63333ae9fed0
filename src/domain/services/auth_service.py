"""Registration, credential verification and token issuance."""

import asyncio
import logging
from collections.abc import Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.user import MIN_PASSWORD_LENGTH, User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.password import hash_password, verify_password
from infrastructure.auth.provider import IAuthProvider

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for the credential store and login flow."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_provider = auth_provider
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, email: str, name: str, password: str) -> User:
        """Create a user. Email uniqueness is an exact, case-sensitive match."""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters",
                param="password",
            )

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            # bcrypt is CPU-bound; keep it off the event loop
            password_hash = await asyncio.to_thread(
                hash_password, password, self._bcrypt_rounds
            )
            user = User(email=email, name=name, password_hash=password_hash)

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # A concurrent registration took the email first.
                # Re-raise anything else (NOT NULL, FK, etc.).
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    raise UserAlreadyExistsError(email) from exc
                raise

        logger.info("Registered user %s", created.id)
        return created

    async def verify_credentials(self, email: str, password: str) -> User:
        """Return the user for a matching email/password pair.

        Unknown email and wrong password fail identically.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            raise InvalidCredentialsError()
        return user

    async def login(self, email: str, password: str) -> str:
        """Verify credentials and issue a token for the user."""
        user = await self.verify_credentials(email, password)
        return self._auth_provider.create_token(user.id)

    async def get_user(self, user_id: UUID) -> User:
        """Get the user behind a verified token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
