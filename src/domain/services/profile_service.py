"""Profile service layer with business logic."""

import logging
from collections.abc import Callable
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.profile import Education, Experience, Profile
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.github.client import GitHubClient

logger = logging.getLogger(__name__)


class ProfileService:
    """Service layer for Profile business logic.

    Every mutation is keyed by the caller's own user id; there is no way to
    address another user's profile for writing.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: Optional[GitHubClient] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._github = github_client or GitHubClient()

    async def get_mine(self, user_id: UUID) -> Profile:
        """Get the caller's profile."""
        return await self.get_by_user(user_id)

    async def get_by_user(self, user_id: UUID) -> Profile:
        """Get the profile owned by a user."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def list_all(self) -> list[Profile]:
        """Get every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Create the caller's profile, or overwrite the given fields of it."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            existing = await uow.profiles.get_by_user(user_id)
            if existing is None:
                profile = Profile(user_id=user_id, status=fields["status"])
                profile.apply(fields)
                profile.owner_name, profile.owner_avatar = user.name, user.avatar
                try:
                    saved = await uow.profiles.create(profile)
                    await uow.commit()
                    logger.info("Created profile for user %s", user_id)
                    return saved  # type: ignore[no-any-return]
                except IntegrityError as exc:
                    await uow.rollback()
                    # Only the one-profile-per-user index is a race; re-raise the rest.
                    orig = str(exc.orig).lower() if exc.orig else ""
                    if not ("unique" in orig or "duplicate" in orig):
                        raise
                    logger.debug(
                        "Profile already created (race condition) for user %s", user_id
                    )
                existing = await uow.profiles.get_by_user(user_id)
                if existing is None:
                    raise ProfileNotFoundError(str(user_id))

            existing.apply(fields)
            saved = await uow.profiles.update(existing)
            await uow.commit()
            return saved  # type: ignore[no-any-return]

    async def add_experience(self, user_id: UUID, entry: Experience) -> Profile:
        """Append an experience entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            return await self._save(uow, profile)

    async def update_experience(
        self, user_id: UUID, entry_id: UUID, changes: dict[str, Any]
    ) -> Profile:
        """Replace fields of one experience entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.update_experience(entry_id, changes):
                raise ExperienceNotFoundError(str(entry_id))
            return await self._save(uow, profile)

    async def remove_experience(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Delete one experience entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_experience(entry_id):
                raise ExperienceNotFoundError(str(entry_id))
            return await self._save(uow, profile)

    async def add_education(self, user_id: UUID, entry: Education) -> Profile:
        """Append an education entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            return await self._save(uow, profile)

    async def update_education(
        self, user_id: UUID, entry_id: UUID, changes: dict[str, Any]
    ) -> Profile:
        """Replace fields of one education entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.update_education(entry_id, changes):
                raise EducationNotFoundError(str(entry_id))
            return await self._save(uow, profile)

    async def remove_education(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Delete one education entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_education(entry_id):
                raise EducationNotFoundError(str(entry_id))
            return await self._save(uow, profile)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the caller's profile and user record.

        Posts, likes and comments by the user are left in place.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            deleted = await uow.users.delete(user_id)
            await uow.commit()

        if deleted:
            logger.info("Deleted account %s", user_id)

    async def get_github_repos(self, username: str) -> list[dict[str, Any]]:
        """Latest public repositories of a GitHub user."""
        return await self._github.get_repos(username)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _save(self, uow: IUnitOfWork, profile: Profile) -> Profile:
        saved = await uow.profiles.update(profile)
        await uow.commit()
        return saved
