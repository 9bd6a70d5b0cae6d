from sqlalchemy.ext.asyncio import AsyncSession

from mentorlink.common.exceptions import NotFoundError
from mentorlink.dto.mentor_profile_dto import MentorMatchDto
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.mentorship.compatibility_scorer import calculate_compatibility_score


def rank_mentors(
    mentee: MenteeProfileEntity, mentors: list[MentorProfileEntity]
) -> list[tuple[MentorProfileEntity, int]]:
    """
    Score every mentor against a mentee and order them best match first.

    Equal scores are ordered by rating average (highest first), then by user ID.

    Returns:
        list[tuple[MentorProfileEntity, int]]: (mentor profile, score) pairs.
    """
    scored = [(mentor, calculate_compatibility_score(mentor, mentee)) for mentor in mentors]
    scored.sort(
        key=lambda pair: (-pair[1], -(pair[0].rating_average or 0.0), pair[0].user_id)
    )
    return scored


class MentorRankingService:
    def __init__(
        self,
        logger,
        user_identity_service,
        mentor_profile_repository,
        mentee_profile_repository,
        profile_mapper,
    ):
        self.logger = logger
        self.user_identity_service = user_identity_service
        self.mentor_profile_repo = mentor_profile_repository
        self.mentee_profile_repo = mentee_profile_repository
        self.profile_mapper = profile_mapper

    async def find_potential_mentors(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[MentorMatchDto]:
        """
        Rank every active mentor by compatibility with the caller's mentee profile.

        The caller is never offered to themself, even if they also mentor.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated caller.

        Returns:
            list[MentorMatchDto]: All active mentors with their score, best first.

        Raises:
            NotFoundError: If the caller has no mentee profile.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        mentee_profile = await self.mentee_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if not mentee_profile:
            raise NotFoundError(
                "Mentee profile not found. Please complete your profile first."
            )

        mentors = await self.mentor_profile_repo.get_active_mentors(
            session=session, exclude_user_id=user_id
        )
        self.logger.debug(
            "[MentorRankingService] scoring %s active mentors for user_id: %s",
            len(mentors),
            user_id,
        )

        return [
            MentorMatchDto(
                mentor_profile=self.profile_mapper.map_to_mentor_profile_dto(mentor),
                compatibility_score=score,
            )
            for mentor, score in rank_mentors(mentee_profile, mentors)
        ]
