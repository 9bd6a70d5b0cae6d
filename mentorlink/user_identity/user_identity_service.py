from mentorlink.entity.users_entity import UsersEntity
from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.utils.date_time_util import utc_now


class UserIdentityService:
    """
    Service responsible for resolving internal user identities from external
    authentication identifiers.
    """

    def __init__(self, logger, users_repository):
        self.logger = logger
        self.users_repository = users_repository

    async def get_user(
        self, session: AsyncSession, user_info: UserContextDto
    ) -> tuple[UsersEntity, bool]:
        """
        Resolve internal user entity from external subject identifier.

        This method:
        1. Finds an existing user by subject identifier (sub).
        2. If not found, links a pre-registered user found by primary email.
        3. Otherwise, creates a new user with the provided user context.

        Args:
            session (AsyncSession): Active database async session.
            user_info (UserContextDto): DTO containing user info (sub, email, roles).

        Returns:
            tuple[UsersEntity, bool]:
                - UsersEntity: The user entity, whether it's newly created or existing.
                - bool: True if the user was newly created or linked, otherwise False.
        """
        user = await self.users_repository.get_user_by_subject_identifier(
            session=session, sub=user_info.sub
        )
        if user:
            return user, False

        user = await self.users_repository.get_user_by_primary_email(
            session=session, primary_email=user_info.primary_email
        )
        if user:
            self.logger.info(
                "[UserIdentityService] linking user %s to subject identifier %s",
                user.user_id,
                user_info.sub,
            )
            user.subject_identifier = user_info.sub
            user.updated_timestamp = utc_now()
        else:
            self.logger.info(
                "[UserIdentityService] no user found for sub %s. Creating a new record.",
                user_info.sub,
            )
            user = UsersEntity(
                subject_identifier=user_info.sub,
                primary_email=user_info.primary_email,
                first_name="",
                last_name="",
                is_active=True,
                updated_timestamp=utc_now(),
            )

        try:
            saved_user = await self.users_repository.upsert_users(session, user)
        except Exception as e:
            self.logger.error(
                "[UserIdentityService] failed to save user for sub %s. Error: %s",
                user_info.sub,
                str(e),
            )
            raise

        return saved_user, True

    async def get_user_id(self, session: AsyncSession, user_info: UserContextDto) -> int:
        """
        Resolve the caller's internal user ID, committing if the user record was
        created or linked on the way.
        """
        user, should_commit = await self.get_user(session=session, user_info=user_info)
        if should_commit:
            await session.commit()
        return user.user_id
