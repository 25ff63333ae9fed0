"""Unit tests for AuthService."""

from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    ErrorCode,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.user import User
from domain.services.auth_service import AuthService
from infrastructure.auth.password import hash_password, verify_password
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def auth_provider() -> MagicMock:
    provider = MagicMock()
    provider.create_token.return_value = "signed-token"
    return provider


@pytest.fixture
def service(uow: FakeUnitOfWork, auth_provider: MagicMock) -> AuthService:
    return AuthService(lambda: uow, auth_provider, bcrypt_rounds=4)


# --- register ---


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(
        self, service: AuthService, uow: FakeUnitOfWork
    ):
        """Registering stores a bcrypt hash and a gravatar."""
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = lambda user: user

        result = await service.register("a@x.com", "Ann", "secret1")

        assert result.email == "a@x.com"
        assert result.password_hash != "secret1"
        assert verify_password("secret1", result.password_hash)
        assert result.avatar.startswith("https://www.gravatar.com/avatar/")
        assert uow.committed

    @pytest.mark.asyncio
    async def test_rejects_duplicate_email(
        self, service: AuthService, uow: FakeUnitOfWork, user: User
    ):
        """An existing email raises UserAlreadyExistsError."""
        uow.users.get_by_email.return_value = user

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await service.register(user.email, "Someone", "secret1")

        assert exc_info.value.status_code == 400
        uow.users.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_rejects_short_password_before_storage(
        self, service: AuthService, uow: FakeUnitOfWork
    ):
        """A short password fails before any lookup."""
        with pytest.raises(ValidationError) as exc_info:
            await service.register("a@x.com", "Ann", "12345")

        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR
        assert exc_info.value.details == {"param": "password"}
        uow.users.get_by_email.assert_not_called()
        uow.users.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_is_conflict(
        self, service: AuthService, uow: FakeUnitOfWork
    ):
        """A unique violation on insert is reported as a duplicate email."""
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("UNIQUE constraint failed: users.email")
        )

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await service.register("a@x.com", "Ann", "secret1")

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == ErrorCode.USER_ALREADY_EXISTS
        assert uow.rolled_back
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_non_unique_integrity_error_is_reraised(
        self, service: AuthService, uow: FakeUnitOfWork
    ):
        """Integrity errors other than unique violations propagate."""
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("NOT NULL constraint failed: users.name")
        )

        with pytest.raises(IntegrityError):
            await service.register("a@x.com", "Ann", "secret1")

        assert uow.rolled_back


# --- verify_credentials / login ---


class TestLogin:
    @pytest.fixture
    def stored(self, user_id: UUID) -> User:
        return User(
            id=user_id,
            email="a@x.com",
            name="Ann",
            password_hash=hash_password("secret1", rounds=4),
        )

    @pytest.mark.asyncio
    async def test_returns_token_for_matching_credentials(
        self,
        service: AuthService,
        uow: FakeUnitOfWork,
        auth_provider: MagicMock,
        stored: User,
    ):
        """Matching credentials yield a signed token."""
        uow.users.get_by_email.return_value = stored

        token = await service.login("a@x.com", "secret1")

        assert token == "signed-token"
        auth_provider.create_token.assert_called_once_with(stored.id)

    @pytest.mark.asyncio
    async def test_wrong_password_fails(
        self, service: AuthService, uow: FakeUnitOfWork, stored: User
    ):
        """A wrong password raises InvalidCredentialsError."""
        uow.users.get_by_email.return_value = stored

        with pytest.raises(InvalidCredentialsError):
            await service.login("a@x.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_unknown_email_fails_the_same_way(
        self, service: AuthService, uow: FakeUnitOfWork
    ):
        """An unknown email fails like a wrong password."""
        uow.users.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.login("nobody@x.com", "secret1")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid credentials"


# --- get_user ---


class TestGetUser:
    @pytest.mark.asyncio
    async def test_returns_user(self, service: AuthService, uow: FakeUnitOfWork, user: User):
        """get_user returns the stored user."""
        uow.users.get.return_value = user

        assert await service.get_user(user.id) is user

    @pytest.mark.asyncio
    async def test_raises_when_missing(self, service: AuthService, uow: FakeUnitOfWork):
        """get_user raises UserNotFoundError for a missing id."""
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.get_user(uuid4())
