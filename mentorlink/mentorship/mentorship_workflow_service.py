import uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mentorlink.common.environment_constants import MENTORSHIP_DEFAULT_PERIOD_MONTHS
from mentorlink.common.exceptions import (
    CapacityExceededError,
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
)
from mentorlink.common.mentorship_enums import MentorshipAction, MentorshipStatus
from mentorlink.dto.mentorship_dto import MentorshipDto
from mentorlink.dto.mentorship_request_dto import MentorshipCreateDto
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.mentorship.compatibility_scorer import calculate_compatibility_score


async def get_participant_mentorship(
    mentorship_repository, session: AsyncSession, mentorship_id: int, user_id: int
) -> MentorshipEntity:
    """
    Load a mentorship the given user takes part in.

    Raises:
        NotFoundError: If the mentorship does not exist.
        ForbiddenError: If the user is neither its mentor nor its mentee.
    """
    mentorship = await mentorship_repository.get_by_id(
        session=session, mentorship_id=mentorship_id
    )
    if not mentorship:
        raise NotFoundError("Mentorship not found.")
    if user_id not in (mentorship.mentor_id, mentorship.mentee_id):
        raise ForbiddenError("You are not a participant in this mentorship.")
    return mentorship


def open_conflict_error(existing: MentorshipEntity) -> ConflictError:
    if existing.status == MentorshipStatus.PENDING:
        return ConflictError("You already have a pending request with this mentor.")
    return ConflictError("You already have an active mentorship with this mentor.")


class MentorshipWorkflowService:
    """
    Drives a mentorship through its lifecycle:

        request -> pending -> accept  -> active -> complete -> completed
                           \\-> decline -> declined   \\-> cancel -> cancelled

    Every status change is claimed with a conditional UPDATE on the expected
    current status before the mentor's current mentee count moves, which it
    does only on accept (+1) and on complete/cancel (-1).
    """

    def __init__(
        self,
        logger,
        user_identity_service,
        mentorship_repository,
        mentor_profile_repository,
        mentee_profile_repository,
        mentorship_mapper,
        date_time_util,
        default_period_months: int = MENTORSHIP_DEFAULT_PERIOD_MONTHS,
    ):
        """
        Initialize the MentorshipWorkflowService with its dependencies.

        Args:
            logger: The logger instance for logging messages.
            user_identity_service (UserIdentityService): Resolves the caller's user ID.
            mentorship_repository (MentorshipRepository): Access to mentorships.
            mentor_profile_repository (MentorProfileRepository): Access to mentor profiles and capacity.
            mentee_profile_repository (MenteeProfileRepository): Access to mentee profiles.
            mentorship_mapper (MentorshipMapper): Converts mentorship entities to DTOs.
            date_time_util (DateTimeUtil): Clock and month arithmetic.
            default_period_months (int): Length of a newly accepted mentorship.
        """
        self.logger = logger
        self.user_identity_service = user_identity_service
        self.mentorship_repo = mentorship_repository
        self.mentor_profile_repo = mentor_profile_repository
        self.mentee_profile_repo = mentee_profile_repository
        self.mentorship_mapper = mentorship_mapper
        self.date_time_util = date_time_util
        self.default_period_months = default_period_months

    async def request_mentorship(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        request_dto: MentorshipCreateDto,
    ) -> MentorshipDto:
        """
        Create a pending mentorship from the caller (mentee) to a mentor.

        The compatibility score is computed once here and stored with the request.

        Raises:
            InvalidOperationError: If the caller targets themself.
            ConflictError: If the pair already has a pending or active mentorship.
            NotFoundError: If the mentor has no active profile or the caller has
                no mentee profile.
        """
        mentee_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        mentor_id = request_dto.mentor_id

        if mentor_id == mentee_id:
            raise InvalidOperationError("You cannot mentor yourself.")

        existing = await self.mentorship_repo.get_open_by_pair(
            session=session, mentor_id=mentor_id, mentee_id=mentee_id
        )
        if existing:
            raise open_conflict_error(existing)

        mentor_profile = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=mentor_id
        )
        if not mentor_profile or not mentor_profile.is_active:
            raise NotFoundError("Mentor not found.")

        mentee_profile = await self.mentee_profile_repo.get_by_user_id(
            session=session, user_id=mentee_id
        )
        if not mentee_profile:
            raise NotFoundError(
                "Mentee profile not found. Please complete your profile first."
            )

        score = calculate_compatibility_score(mentor_profile, mentee_profile)

        mentorship = MentorshipEntity(
            mentor_id=mentor_id,
            mentee_id=mentee_id,
            status=MentorshipStatus.PENDING,
            compatibility_score=score,
            focus_areas=[area.value for area in request_dto.focus_areas],
            goals=[
                {
                    "goal_id": uuid.uuid4().hex,
                    "description": description,
                    "is_completed": False,
                    "completed_at": None,
                }
                for description in request_dto.goals
            ],
            meetings=[],
            notes=[],
        )

        try:
            saved = await self.mentorship_repo.upsert_mentorship(
                session=session, entity=mentorship
            )
        except IntegrityError as e:
            # A concurrent request for the same pair won the unique index.
            self.logger.warning(
                "[MentorshipWorkflowService] duplicate open mentorship for mentor %s and mentee %s: %s",
                mentor_id,
                mentee_id,
                e,
            )
            await session.rollback()
            existing = await self.mentorship_repo.get_open_by_pair(
                session=session, mentor_id=mentor_id, mentee_id=mentee_id
            )
            if existing:
                raise open_conflict_error(existing) from e
            raise ConflictError(
                "You already have an open mentorship with this mentor."
            ) from e
        await session.commit()

        self.logger.info(
            "[MentorshipWorkflowService] mentorship %s requested by mentee %s for mentor %s with score %s",
            saved.mentorship_id,
            mentee_id,
            mentor_id,
            score,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(saved)

    async def respond_to_request(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        action: MentorshipAction,
    ) -> MentorshipDto:
        """
        Accept or decline a pending request as its mentor.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the caller is not the mentor.
            InvalidStateError: If the mentorship is not pending.
            CapacityExceededError: On accept, when the mentor has no free slot.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        mentorship = await self.mentorship_repo.get_by_id(
            session=session, mentorship_id=mentorship_id
        )
        if not mentorship:
            raise NotFoundError("Mentorship request not found.")
        if mentorship.mentor_id != user_id:
            raise ForbiddenError("Only the mentor can respond to this request.")
        if mentorship.status != MentorshipStatus.PENDING:
            raise InvalidStateError(
                f"This mentorship request is already {mentorship.status.value}."
            )

        to_status = (
            MentorshipStatus.ACTIVE
            if action == MentorshipAction.ACCEPT
            else MentorshipStatus.DECLINED
        )
        await self._transition(
            session, mentorship, MentorshipStatus.PENDING, to_status
        )

        now = self.date_time_util.now()
        if action == MentorshipAction.ACCEPT:
            reserved = await self.mentor_profile_repo.update_mentor_availability(
                session=session, user_id=mentorship.mentor_id, delta=1
            )
            if not reserved:
                await session.rollback()
                raise CapacityExceededError("You have reached your maximum number of mentees.")

            mentorship.start_date = now
            mentorship.end_date = self.date_time_util.add_months(
                now, self.default_period_months
            )
        mentorship.status = to_status
        mentorship.updated_at = now

        saved = await self.mentorship_repo.upsert_mentorship(
            session=session, entity=mentorship
        )
        await session.commit()

        self.logger.info(
            "[MentorshipWorkflowService] mentorship %s %s by mentor %s",
            mentorship_id,
            saved.status.value,
            user_id,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(saved)

    async def complete_mentorship(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        final_feedback: str | None = None,
    ) -> MentorshipDto:
        """
        Mark an active mentorship as completed and free the mentor's slot.

        Final feedback, if given, is stored on the caller's side of the feedback.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the caller is not a participant.
            InvalidStateError: If the mentorship is not active.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        mentorship = await get_participant_mentorship(
            self.mentorship_repo, session, mentorship_id, user_id
        )
        if mentorship.status != MentorshipStatus.ACTIVE:
            raise InvalidStateError("Only active mentorships can be completed.")

        if final_feedback:
            side = "mentor" if user_id == mentorship.mentor_id else "mentee"
            mentorship.feedback = {
                **(mentorship.feedback or {}),
                f"{side}_feedback": final_feedback,
            }

        saved = await self._close(
            session, mentorship, MentorshipStatus.COMPLETED, user_id
        )
        return self.mentorship_mapper.map_to_mentorship_dto(saved)

    async def cancel_mentorship(
        self, session: AsyncSession, user_context: UserContextDto, mentorship_id: int
    ) -> MentorshipDto:
        """
        Cancel an active mentorship and free the mentor's slot.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the caller is not a participant.
            InvalidStateError: If the mentorship is not active.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        mentorship = await get_participant_mentorship(
            self.mentorship_repo, session, mentorship_id, user_id
        )
        if mentorship.status != MentorshipStatus.ACTIVE:
            raise InvalidStateError("Only active mentorships can be cancelled.")

        saved = await self._close(
            session, mentorship, MentorshipStatus.CANCELLED, user_id
        )
        return self.mentorship_mapper.map_to_mentorship_dto(saved)

    async def _close(
        self,
        session: AsyncSession,
        mentorship: MentorshipEntity,
        status: MentorshipStatus,
        user_id: int,
    ) -> MentorshipEntity:
        await self._transition(session, mentorship, MentorshipStatus.ACTIVE, status)

        now = self.date_time_util.now()
        mentorship.status = status
        mentorship.end_date = now
        mentorship.updated_at = now

        released = await self.mentor_profile_repo.update_mentor_availability(
            session=session, user_id=mentorship.mentor_id, delta=-1
        )
        if not released:
            self.logger.warning(
                "[MentorshipWorkflowService] mentor %s had no mentee slot to release for mentorship %s",
                mentorship.mentor_id,
                mentorship.mentorship_id,
            )

        saved = await self.mentorship_repo.upsert_mentorship(
            session=session, entity=mentorship
        )
        await session.commit()

        self.logger.info(
            "[MentorshipWorkflowService] mentorship %s %s by user %s",
            mentorship.mentorship_id,
            status.value,
            user_id,
        )
        return saved

    async def _transition(
        self,
        session: AsyncSession,
        mentorship: MentorshipEntity,
        from_status: MentorshipStatus,
        to_status: MentorshipStatus,
    ) -> None:
        """
        Claim the status change in the database before any side effect runs.

        Raises:
            InvalidStateError: If another request already moved the mentorship
                out of `from_status`.
        """
        moved = await self.mentorship_repo.transition_status(
            session=session,
            mentorship_id=mentorship.mentorship_id,
            from_status=from_status,
            to_status=to_status,
        )
        if not moved:
            self.logger.warning(
                "[MentorshipWorkflowService] mentorship %s is no longer %s, cannot move to %s",
                mentorship.mentorship_id,
                from_status.value,
                to_status.value,
            )
            raise InvalidStateError(
                f"This mentorship is no longer {from_status.value}."
            )
