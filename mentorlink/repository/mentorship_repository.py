from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.utils.date_time_util import utc_now
from mentorlink.common.mentorship_enums import (
    MentorshipStatus,
    ParticipantRole,
    OPEN_MENTORSHIP_STATUSES,
)
from sqlalchemy import select, update, or_, func
from sqlalchemy.ext.asyncio import AsyncSession


class MentorshipRepository:
    """
    Repository for handling database operations related to MentorshipEntity.
    """

    async def get_by_id(
        self, session: AsyncSession, mentorship_id: int
    ) -> MentorshipEntity | None:
        """
        Retrieve a mentorship by its ID.

        Args:
            session (AsyncSession): The active async database session.
            mentorship_id (int): The ID of the mentorship.

        Returns:
            MentorshipEntity | None: The matching mentorship or None.
        """
        result = await session.execute(
            select(MentorshipEntity).where(
                MentorshipEntity.mentorship_id == mentorship_id
            )
        )

        return result.scalars().one_or_none()

    async def get_open_by_pair(
        self, session: AsyncSession, mentor_id: int, mentee_id: int
    ) -> MentorshipEntity | None:
        """
        Retrieve the pending or active mentorship between a mentor and a mentee.

        At most one such record exists per pair, enforced by a partial unique index.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (int): The mentor's user ID.
            mentee_id (int): The mentee's user ID.

        Returns:
            MentorshipEntity | None: The open mentorship, or None if the pair has none.
        """
        result = await session.execute(
            select(MentorshipEntity).where(
                MentorshipEntity.mentor_id == mentor_id,
                MentorshipEntity.mentee_id == mentee_id,
                MentorshipEntity.status.in_(OPEN_MENTORSHIP_STATUSES),
            )
        )

        return result.scalars().first()

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: int,
        role: ParticipantRole | None = None,
        status: MentorshipStatus | None = None,
    ) -> list[MentorshipEntity]:
        """
        Retrieve the mentorships a user takes part in, newest first.

        Args:
            session (AsyncSession): The active async database session.
            user_id (int): The user whose mentorships are being retrieved.
            role (ParticipantRole | None): Restrict to mentorships where the user is the
                mentor or the mentee. Both sides are returned when None.
            status (MentorshipStatus | None): Optional status filter.

        Returns:
            list[MentorshipEntity]: Matching mentorships, possibly empty.
        """
        if role == ParticipantRole.MENTOR:
            query = select(MentorshipEntity).where(
                MentorshipEntity.mentor_id == user_id
            )
        elif role == ParticipantRole.MENTEE:
            query = select(MentorshipEntity).where(
                MentorshipEntity.mentee_id == user_id
            )
        else:
            query = select(MentorshipEntity).where(
                or_(
                    MentorshipEntity.mentor_id == user_id,
                    MentorshipEntity.mentee_id == user_id,
                )
            )

        if status:
            query = query.where(MentorshipEntity.status == status)

        result = await session.execute(
            query.order_by(
                MentorshipEntity.created_at.desc(),
                MentorshipEntity.mentorship_id.desc(),
            )
        )
        return list(result.scalars().all())

    async def count_by_status(
        self, session: AsyncSession, status: MentorshipStatus
    ) -> int:
        """Count all mentorships on the platform with the given status."""
        result = await session.execute(
            select(func.count())
            .select_from(MentorshipEntity)
            .where(MentorshipEntity.status == status)
        )
        return result.scalar_one()

    async def upsert_mentorship(
        self, session: AsyncSession, entity: MentorshipEntity
    ) -> MentorshipEntity:
        """
        Inserts or updates a MentorshipEntity in the database.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorshipEntity): The mentorship to persist.

        Returns:
            MentorshipEntity: The entity synchronized with the database, reflecting
            generated keys and default values.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity

    async def transition_status(
        self,
        session: AsyncSession,
        mentorship_id: int,
        from_status: MentorshipStatus,
        to_status: MentorshipStatus,
    ) -> bool:
        """
        Move a mentorship from one status to another in a single conditional UPDATE.

        The row only changes while it still has `from_status`, so of two concurrent
        transitions out of the same status exactly one succeeds.

        Entities already loaded in the session are not refreshed.

        Args:
            session (AsyncSession): The active async database session.
            mentorship_id (int): The ID of the mentorship.
            from_status (MentorshipStatus): The status the row must currently have.
            to_status (MentorshipStatus): The status to set.

        Returns:
            bool: True if the row was updated, False if it no longer had
                  `from_status` (or does not exist).
        """
        result = await session.execute(
            update(MentorshipEntity)
            .where(
                MentorshipEntity.mentorship_id == mentorship_id,
                MentorshipEntity.status == from_status,
            )
            .values(status=to_status, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )

        return result.rowcount == 1
