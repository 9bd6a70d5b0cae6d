from mentorlink.entity.users_entity import UsersEntity
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class UsersRepository:
    """
    Repository for handling database operations related to UsersEntity.
    """

    async def get_user_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> UsersEntity | None:
        """
        Retrieve a users entity by its user ID.

        Args:
            session (AsyncSession): The active async database session.
            user_id (int): The ID of the user to retrieve.

        Returns:
            UsersEntity | None: The matching user entity if found; otherwise None.
        """
        result = await session.execute(
            select(UsersEntity).where(UsersEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_user_by_subject_identifier(
        self, session: AsyncSession, sub: str
    ) -> UsersEntity | None:
        """
        Retrieve a users entity by the subject identifier issued by the auth provider.

        Args:
            session (AsyncSession): The active async database session.
            sub (str): The subject identifier of the user to retrieve.

        Returns:
            UsersEntity | None: The matching user entity if found; otherwise None.
        """
        result = await session.execute(
            select(UsersEntity).where(UsersEntity.subject_identifier == sub)
        )

        return result.scalars().one_or_none()

    async def get_user_by_primary_email(
        self, session: AsyncSession, primary_email: str
    ) -> UsersEntity | None:
        """Retrieve a users entity by its primary email."""
        result = await session.execute(
            select(UsersEntity).where(UsersEntity.primary_email == primary_email)
        )

        return result.scalars().one_or_none()

    async def upsert_users(
        self, session: AsyncSession, entity: UsersEntity
    ) -> UsersEntity:
        """
        Inserts or updates a UsersEntity object in the database.

        Args:
            session (AsyncSession): The active async database session.
            entity: The UsersEntity object containing the user data.

        Returns:
            UsersEntity: The entity synchronized with the database, including generated keys.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
