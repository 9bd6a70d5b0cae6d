from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity


class MenteeProfileRepository:
    """Repository for handling database operations related to MenteeProfileEntity."""

    async def get_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> MenteeProfileEntity | None:
        """Retrieve the MenteeProfileEntity for a given user ID (1:1 relationship)."""
        if not user_id:
            return None

        result = await session.execute(
            select(MenteeProfileEntity).where(MenteeProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def upsert_mentee_profile(
        self, session: AsyncSession, entity: MenteeProfileEntity
    ) -> MenteeProfileEntity:
        """
        Inserts or updates a MenteeProfileEntity in the database.

        Args:
            session (AsyncSession): Active async database session.
            entity (MenteeProfileEntity): The entity containing mentee profile data.

        Returns:
            MenteeProfileEntity: The merged entity instance synchronized with the session.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
