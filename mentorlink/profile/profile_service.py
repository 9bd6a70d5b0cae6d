import math
from sqlalchemy.ext.asyncio import AsyncSession

from mentorlink.common.exceptions import (
    ConflictError,
    InvalidOperationError,
    NotFoundError,
)
from mentorlink.common.mentorship_enums import MentorshipStyle
from mentorlink.dto.mentee_profile_dto import MenteeProfileDto
from mentorlink.dto.mentor_profile_dto import MentorListDto, MentorProfileDto
from mentorlink.dto.profile_request_dto import (
    MenteeProfileRequestDto,
    MentorProfileCreateDto,
    MentorProfileUpdateDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity

# Columns a mentor may clear by sending null.
NULLABLE_MENTOR_FIELDS = frozenset({"industry", "experience_years", "personality_traits"})


def recalculate_rating(profile: MentorProfileEntity) -> MentorProfileEntity:
    """
    Recompute a mentor's rating average and count from their testimonials.

    Must be called after every change to `profile.testimonials`; nothing
    recomputes the rating implicitly on save.

    Args:
        profile (MentorProfileEntity): The profile whose testimonials changed.

    Returns:
        MentorProfileEntity: The same profile, updated in place.
    """
    ratings = [t["rating"] for t in profile.testimonials or [] if t.get("rating")]
    profile.rating_count = len(ratings)
    profile.rating_average = sum(ratings) / len(ratings) if ratings else 0.0
    return profile


class ProfileService:
    """
    Service for managing mentor and mentee profiles.

    Writes go through request DTOs that list every updatable field, so derived
    or workflow-owned values (current mentees, testimonials, rating) can only be
    changed by the mentorship workflow itself.
    """

    def __init__(
        self,
        logger,
        mentor_profile_repository,
        mentee_profile_repository,
        user_identity_service,
        profile_mapper,
        date_time_util,
    ):
        """
        Initialize the ProfileService with its dependencies.

        Args:
            logger: The logger instance for logging messages.
            mentor_profile_repository (MentorProfileRepository): Access to mentor profiles.
            mentee_profile_repository (MenteeProfileRepository): Access to mentee profiles.
            user_identity_service (UserIdentityService): Resolves the caller's user ID.
            profile_mapper (ProfileMapper): Converts profile entities to DTOs.
            date_time_util (DateTimeUtil): Clock and datetime formatting helpers.
        """
        self.logger = logger
        self.mentor_profile_repo = mentor_profile_repository
        self.mentee_profile_repo = mentee_profile_repository
        self.user_identity_service = user_identity_service
        self.profile_mapper = profile_mapper
        self.date_time_util = date_time_util

    async def get_mentor_profile(
        self, session: AsyncSession, user_id: int
    ) -> MentorProfileDto:
        """
        Retrieve a mentor profile by the owning user's ID.

        Raises:
            NotFoundError: If the user has no mentor profile.
        """
        profile = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if not profile:
            raise NotFoundError("Mentor profile not found.")

        return self.profile_mapper.map_to_mentor_profile_dto(profile)

    async def get_my_mentor_profile(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> MentorProfileDto:
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        return await self.get_mentor_profile(session=session, user_id=user_id)

    async def create_mentor_profile(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        data: MentorProfileCreateDto,
    ) -> MentorProfileDto:
        """
        Create the caller's mentor profile.

        Raises:
            ConflictError: If the caller already has a mentor profile.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        existing = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if existing:
            raise ConflictError("Mentor profile already exists for this user.")

        values = data.to_db_dict()
        availability = values.pop("availability", None) or {}
        entity = MentorProfileEntity(
            user_id=user_id,
            is_active=True,
            specializations=values.get("specializations", []),
            industry=values.get("industry"),
            related_industries=values.get("related_industries", []),
            skills=values.get("skills", []),
            experience_years=values.get("experience_years"),
            personality_traits=values.get("personality_traits"),
            career_achievements=values.get("career_achievements", []),
            biography=values.get("biography", ""),
            mentorship_style=data.mentorship_style,
            max_mentees=data.availability.max_mentees,
            current_mentees=0,
            schedule=availability.get("schedule", []),
            time_zone=data.availability.time_zone,
            testimonials=[],
            rating_average=0.0,
            rating_count=0,
        )

        saved = await self.mentor_profile_repo.upsert_mentor_profile(
            session=session, entity=entity
        )
        await session.commit()

        self.logger.info(
            "[ProfileService] created mentor profile for user_id: %s", user_id
        )
        return self.profile_mapper.map_to_mentor_profile_dto(saved)

    async def update_mentor_profile(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        data: MentorProfileUpdateDto,
    ) -> MentorProfileDto:
        """
        Apply a partial update to the caller's mentor profile.

        Only fields present in the request are written.

        Raises:
            NotFoundError: If the caller has no mentor profile.
            InvalidOperationError: If max_mentees would drop below the current mentee count.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        profile = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if not profile:
            raise NotFoundError("Mentor profile not found.")

        updates = {
            field_name: value
            for field_name, value in data.to_db_dict().items()
            if value is not None or field_name in NULLABLE_MENTOR_FIELDS
        }
        if "mentorship_style" in updates:
            updates["mentorship_style"] = MentorshipStyle(updates["mentorship_style"])
        max_mentees = updates.get("max_mentees")
        if max_mentees is not None and max_mentees < profile.current_mentees:
            raise InvalidOperationError(
                f"maxMentees cannot be lower than the current number of mentees ({profile.current_mentees})."
            )

        for field_name, value in updates.items():
            self.logger.debug(
                "[ProfileService] updating mentor profile field %s for user_id: %s",
                field_name,
                user_id,
            )
            setattr(profile, field_name, value)
        profile.updated_timestamp = self.date_time_util.now()

        saved = await self.mentor_profile_repo.upsert_mentor_profile(
            session=session, entity=profile
        )
        await session.commit()

        return self.profile_mapper.map_to_mentor_profile_dto(saved)

    async def list_active_mentors(
        self,
        session: AsyncSession,
        specialization: str | None = None,
        industry: str | None = None,
        mentorship_style: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> MentorListDto:
        """
        List active mentors matching the filters, best rated first, one page at a time.

        Args:
            session (AsyncSession): Active database async session.
            specialization (str | None): Focus area filter.
            industry (str | None): Primary or related industry filter.
            mentorship_style (str | None): Mentorship style filter.
            page (int): 1-based page number.
            limit (int): Page size.

        Returns:
            MentorListDto: The requested page plus total page count.
        """
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive integers.")

        profiles = await self.mentor_profile_repo.search_active_mentors(
            session=session,
            specialization=specialization,
            industry=industry,
            mentorship_style=mentorship_style,
        )

        start = (page - 1) * limit
        page_profiles = profiles[start : start + limit]

        return MentorListDto(
            mentors=[
                self.profile_mapper.map_to_mentor_profile_dto(p) for p in page_profiles
            ],
            total_pages=math.ceil(len(profiles) / limit),
            current_page=page,
        )

    async def add_testimonial(
        self,
        session: AsyncSession,
        mentor_id: int,
        mentee_id: int,
        content: str,
        rating: int,
        mentorship_id: int | None = None,
    ) -> MentorProfileEntity | None:
        """
        Add a mentee testimonial to a mentor profile and refresh the rating.

        A mentorship contributes at most one testimonial: when `mentorship_id` is
        given, an earlier testimonial from the same mentorship is replaced instead
        of counted twice.

        The caller owns the transaction; nothing is committed here.

        Returns:
            MentorProfileEntity | None: The updated profile, or None when the mentor
            has no profile to attach the testimonial to.
        """
        profile = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=mentor_id
        )
        if not profile:
            self.logger.warning(
                "[ProfileService] no mentor profile for user_id %s; testimonial skipped.",
                mentor_id,
            )
            return None

        testimonials = [
            testimonial
            for testimonial in profile.testimonials or []
            if mentorship_id is None
            or testimonial.get("mentorship_id") != mentorship_id
        ]

        # JSON columns only detect reassignment, not in-place mutation.
        profile.testimonials = [
            *testimonials,
            {
                "mentee_id": mentee_id,
                "mentorship_id": mentorship_id,
                "content": content or "",
                "rating": rating,
                "date": self.date_time_util.format_datetime_to_iso_utc_z(
                    self.date_time_util.now()
                ),
            },
        ]
        recalculate_rating(profile)

        return await self.mentor_profile_repo.upsert_mentor_profile(
            session=session, entity=profile
        )

    async def get_my_mentee_profile(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> MenteeProfileDto:
        """
        Retrieve the caller's mentee profile.

        Raises:
            NotFoundError: If the caller has not created a mentee profile yet.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        profile = await self.mentee_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if not profile:
            raise NotFoundError(
                "Profile not found. Please complete your profile first."
            )

        return self.profile_mapper.map_to_mentee_profile_dto(profile)

    async def upsert_mentee_profile(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        data: MenteeProfileRequestDto,
    ) -> MenteeProfileDto:
        """Create the caller's mentee profile, or replace it if one exists."""
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        profile = await self.mentee_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )
        if not profile:
            self.logger.info(
                "[ProfileService] no existing mentee profile for user_id: %s. Initializing new record.",
                user_id,
            )
            profile = MenteeProfileEntity(user_id=user_id)

        profile.industry = data.industry
        profile.skills_to_improve = list(data.skills_to_improve)
        profile.career_goals = list(data.career_goals)
        profile.personality_traits = data.personality_traits
        profile.experience_years = data.experience_years
        profile.updated_timestamp = self.date_time_util.now()

        saved = await self.mentee_profile_repo.upsert_mentee_profile(
            session=session, entity=profile
        )
        await session.commit()

        return self.profile_mapper.map_to_mentee_profile_dto(saved)
