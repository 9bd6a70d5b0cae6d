from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity


class MentorProfileRepository:
    """
    Repository for handling database operations related to MentorProfileEntity.
    """

    async def get_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> MentorProfileEntity | None:
        """
        Retrieve a mentor profile by the owning user's ID.

        Args:
            session (AsyncSession): The active async database session.
            user_id (int): The ID of the user owning the profile.

        Returns:
            MentorProfileEntity | None: The matching profile if found; otherwise None.
        """
        if not user_id:
            return None

        result = await session.execute(
            select(MentorProfileEntity).where(MentorProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_active_mentors(
        self, session: AsyncSession, exclude_user_id: int | None = None
    ) -> list[MentorProfileEntity]:
        """
        Retrieve every active mentor profile, optionally excluding one user.

        Profiles are returned in primary key order so callers see a stable
        retrieval order.

        Args:
            session (AsyncSession): The active async database session.
            exclude_user_id (int | None): User ID to leave out, typically the caller.

        Returns:
            list[MentorProfileEntity]: Active mentor profiles, possibly empty.
        """
        query = select(MentorProfileEntity).where(
            MentorProfileEntity.is_active.is_(True)
        )
        if exclude_user_id is not None:
            query = query.where(MentorProfileEntity.user_id != exclude_user_id)

        result = await session.execute(
            query.order_by(MentorProfileEntity.mentor_profile_id)
        )
        return list(result.scalars().all())

    async def search_active_mentors(
        self,
        session: AsyncSession,
        specialization: str | None = None,
        industry: str | None = None,
        mentorship_style: str | None = None,
    ) -> list[MentorProfileEntity]:
        """
        Retrieve active mentor profiles matching optional filters, best rated first.

        List-valued columns are stored as JSON, so specialization and related
        industry membership are checked after loading.

        Args:
            session (AsyncSession): The active async database session.
            specialization (str | None): Focus area the mentor must specialize in.
            industry (str | None): Industry matching the mentor's primary or related industries.
            mentorship_style (str | None): Required mentorship style.

        Returns:
            list[MentorProfileEntity]: Matching profiles sorted by rating average descending.
        """
        query = select(MentorProfileEntity).where(
            MentorProfileEntity.is_active.is_(True)
        )
        if mentorship_style:
            query = query.where(
                MentorProfileEntity.mentorship_style == mentorship_style
            )

        result = await session.execute(
            query.order_by(
                MentorProfileEntity.rating_average.desc(),
                MentorProfileEntity.mentor_profile_id,
            )
        )
        profiles = list(result.scalars().all())

        if specialization:
            profiles = [p for p in profiles if specialization in (p.specializations or [])]
        if industry:
            profiles = [
                p
                for p in profiles
                if p.industry == industry or industry in (p.related_industries or [])
            ]

        return profiles

    async def count_active_mentors(self, session: AsyncSession) -> int:
        """Count mentor profiles currently accepting mentorship."""
        result = await session.execute(
            select(func.count()).select_from(MentorProfileEntity).where(
                MentorProfileEntity.is_active.is_(True)
            )
        )
        return result.scalar_one()

    async def update_mentor_availability(
        self, session: AsyncSession, user_id: int, delta: int
    ) -> bool:
        """
        Atomically adjust a mentor's current mentee count.

        The capacity check and the write happen in one conditional UPDATE, so two
        concurrent accepts cannot both take the last free slot:
        - delta > 0 only applies while current_mentees + delta <= max_mentees.
        - delta < 0 only applies while current_mentees + delta >= 0.

        Profiles already loaded in the session are not refreshed; re-read them
        with `session.refresh()` when the new count is needed.

        Args:
            session (AsyncSession): The active async database session.
            user_id (int): The mentor's user ID.
            delta (int): Amount to add to current_mentees (usually +1 or -1).

        Returns:
            bool: True if the row was updated, False if the capacity bounds
                  (or a missing profile) prevented the change.
        """
        new_count = MentorProfileEntity.current_mentees + delta
        bound = (
            new_count <= MentorProfileEntity.max_mentees
            if delta > 0
            else new_count >= 0
        )

        result = await session.execute(
            update(MentorProfileEntity)
            .where(MentorProfileEntity.user_id == user_id, bound)
            .values(current_mentees=new_count)
            .execution_options(synchronize_session=False)
        )

        return result.rowcount == 1

    async def upsert_mentor_profile(
        self, session: AsyncSession, entity: MentorProfileEntity
    ) -> MentorProfileEntity:
        """
        Inserts or updates a MentorProfileEntity in the database.

        Args:
            session (AsyncSession): Active async database session.
            entity (MentorProfileEntity): The entity containing mentor profile data.

        Returns:
            MentorProfileEntity: The merged entity instance synchronized with the session.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
