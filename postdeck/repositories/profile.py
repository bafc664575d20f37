"""Profile repository for privilege lookups."""

from sqlalchemy import select

from postdeck.models import ProfileDB
from postdeck.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[ProfileDB]):
    """Repository for operator profiles."""

    model = ProfileDB
    resource = "Profile"

    async def is_admin(self, subject_id: str) -> bool | None:
        """
        Get the administrator flag for a subject.

        Returns:
            bool | None: The flag, or None when no profile exists
        """
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(ProfileDB.is_admin).where(ProfileDB.id == subject_id),
        )
        return result.scalar_one_or_none()
