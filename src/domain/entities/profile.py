"""Profile domain entities."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4


@dataclass
class Experience:
    """A job entry on a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A school entry on a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class SocialLinks:
    """Links to the owner's social accounts."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Only the links that are set."""
        return {key: value for key, value in self.__dict__.items() if value}


def parse_skills(skills: str | list[str]) -> list[str]:
    """Normalize skills given as a comma-separated string or a list."""
    items = skills.split(",") if isinstance(skills, str) else skills
    return [skill.strip() for skill in items if skill and skill.strip()]


@dataclass
class Profile:
    """Domain entity for a user's professional profile.

    Experience and education are ordered; new entries go to the end and
    existing ones are addressed by their id.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    skills: list[str] = field(default_factory=list)
    handle: str | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Populated on read from the owning user
    owner_name: str | None = None
    owner_avatar: str | None = None

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def apply(self, fields: dict[str, Any]) -> None:
        """Overwrite editable top-level fields. ``user_id`` is never touched."""
        for name in (
            "status",
            "handle",
            "company",
            "website",
            "location",
            "bio",
            "github_username",
        ):
            if name in fields:
                setattr(self, name, fields[name])
        if "skills" in fields:
            self.skills = parse_skills(fields["skills"])
        if "social" in fields:
            self.social = SocialLinks(**(fields["social"] or {}))
        self.touch()

    def add_experience(self, entry: Experience) -> None:
        self.experience.append(entry)
        self.touch()

    def update_experience(self, entry_id: UUID, changes: dict[str, Any]) -> bool:
        """Replace fields of an experience entry. False if the id is unknown."""
        for index, entry in enumerate(self.experience):
            if entry.id == entry_id:
                self.experience[index] = replace(entry, **changes)
                self.touch()
                return True
        return False

    def remove_experience(self, entry_id: UUID) -> bool:
        before = len(self.experience)
        self.experience = [e for e in self.experience if e.id != entry_id]
        if len(self.experience) == before:
            return False
        self.touch()
        return True

    def add_education(self, entry: Education) -> None:
        self.education.append(entry)
        self.touch()

    def update_education(self, entry_id: UUID, changes: dict[str, Any]) -> bool:
        """Replace fields of an education entry. False if the id is unknown."""
        for index, entry in enumerate(self.education):
            if entry.id == entry_id:
                self.education[index] = replace(entry, **changes)
                self.touch()
                return True
        return False

    def remove_education(self, entry_id: UUID) -> bool:
        before = len(self.education)
        self.education = [e for e in self.education if e.id != entry_id]
        if len(self.education) == before:
            return False
        self.touch()
        return True

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
