"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Education, Experience, Profile, SocialLinks
from infrastructure.database.models import ProfileModel, UserModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _iso_or_none(value: date | None) -> str | None:
    return value.isoformat() if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user, joined with the owner's name/avatar."""
        stmt = (
            select(ProfileModel, UserModel.name, UserModel.avatar)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(ProfileModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        model, name, avatar = row
        return self._to_entity(model, name, avatar)

    async def get_all(self) -> list[Profile]:
        """Get every profile, joined with owner name/avatar."""
        stmt = (
            select(ProfileModel, UserModel.name, UserModel.avatar)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model, name, avatar) for model, name, avatar in result]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model, profile.owner_name, profile.owner_avatar)

    async def update(self, profile: Profile) -> Profile:
        """Write the whole profile document back."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        # Fresh containers so the JSON columns are flagged as changed
        model.handle = profile.handle
        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.status = profile.status
        model.skills = list(profile.skills)
        model.bio = profile.bio
        model.github_username = profile.github_username
        model.social = profile.social.to_dict()
        model.experience = [self._experience_to_dict(e) for e in profile.experience]
        model.education = [self._education_to_dict(e) for e in profile.education]
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model, profile.owner_name, profile.owner_avatar)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(
        self, model: ProfileModel, owner_name: str | None, owner_avatar: str | None
    ) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            handle=model.handle,
            company=model.company,
            website=model.website,
            location=model.location,
            status=model.status,
            skills=list(model.skills or []),
            bio=model.bio,
            github_username=model.github_username,
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_dict(d) for d in model.experience or []],
            education=[self._education_from_dict(d) for d in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
            owner_name=owner_name,
            owner_avatar=owner_avatar,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            handle=entity.handle,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            status=entity.status,
            skills=list(entity.skills),
            bio=entity.bio,
            github_username=entity.github_username,
            social=entity.social.to_dict(),
            experience=[self._experience_to_dict(e) for e in entity.experience],
            education=[self._education_to_dict(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _experience_to_dict(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from_date": entry.from_date.isoformat(),
            "to_date": _iso_or_none(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_dict(data: dict[str, Any]) -> Experience:
        return Experience(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from_date"]),
            to_date=_date_or_none(data.get("to_date")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_dict(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from_date": entry.from_date.isoformat(),
            "to_date": _iso_or_none(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_dict(data: dict[str, Any]) -> Education:
        return Education(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["field_of_study"],
            from_date=date.fromisoformat(data["from_date"]),
            to_date=_date_or_none(data.get("to_date")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
