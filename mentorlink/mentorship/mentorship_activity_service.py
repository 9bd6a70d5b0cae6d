import uuid
from sqlalchemy.ext.asyncio import AsyncSession

from mentorlink.common.exceptions import InvalidStateError, NotFoundError
from mentorlink.common.mentorship_enums import (
    MeetingStatus,
    MentorshipStatus,
    ParticipantRole,
)
from mentorlink.dto.mentorship_dto import MentorshipDto
from mentorlink.dto.mentorship_request_dto import (
    FeedbackCreateDto,
    GoalUpdateDto,
    MeetingCreateDto,
    MeetingUpdateDto,
    NoteCreateDto,
)
from mentorlink.dto.mentorship_stats_dto import (
    MentorshipStatsDto,
    ParticipationStatsDto,
    PlatformStatsDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.mentorship.mentorship_workflow_service import (
    get_participant_mentorship,
)


def summarize_participation(
    mentorships: list[MentorshipEntity],
) -> ParticipationStatsDto:
    """Totals for one side of a user's mentorships; hours count completed meetings only."""
    minutes = sum(
        meeting.get("duration") or 0
        for mentorship in mentorships
        for meeting in mentorship.meetings or []
        if meeting.get("status") == MeetingStatus.COMPLETED.value
    )
    return ParticipationStatsDto(
        total=len(mentorships),
        active=sum(1 for m in mentorships if m.status == MentorshipStatus.ACTIVE),
        completed=sum(
            1 for m in mentorships if m.status == MentorshipStatus.COMPLETED
        ),
        meeting_hours=round(minutes / 60, 2),
    )


class MentorshipActivityService:
    """
    Service for what happens inside a mentorship once it exists: listing,
    statistics, meetings, goals, notes and feedback.

    JSON sub-documents are always replaced with new lists/dicts so the ORM
    sees the change.
    """

    def __init__(
        self,
        logger,
        user_identity_service,
        mentorship_repository,
        mentor_profile_repository,
        profile_service,
        mentorship_mapper,
        date_time_util,
    ):
        self.logger = logger
        self.user_identity_service = user_identity_service
        self.mentorship_repo = mentorship_repository
        self.mentor_profile_repo = mentor_profile_repository
        self.profile_service = profile_service
        self.mentorship_mapper = mentorship_mapper
        self.date_time_util = date_time_util

    async def list_mentorships(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        role: ParticipantRole | None = None,
        status: MentorshipStatus | None = None,
    ) -> list[MentorshipDto]:
        """
        List the caller's mentorships, newest first.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): The authenticated caller.
            role (ParticipantRole | None): Only mentorships where the caller has this role.
            status (MentorshipStatus | None): Only mentorships in this status.

        Returns:
            list[MentorshipDto]: Matching mentorships, possibly empty.
        """
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        mentorships = await self.mentorship_repo.get_by_user(
            session=session, user_id=user_id, role=role, status=status
        )
        return self.mentorship_mapper.map_to_mentorship_dtos(mentorships)

    async def get_stats(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> MentorshipStatsDto:
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )

        as_mentor = await self.mentorship_repo.get_by_user(
            session=session, user_id=user_id, role=ParticipantRole.MENTOR
        )
        as_mentee = await self.mentorship_repo.get_by_user(
            session=session, user_id=user_id, role=ParticipantRole.MENTEE
        )
        mentor_profile = await self.mentor_profile_repo.get_by_user_id(
            session=session, user_id=user_id
        )

        platform = PlatformStatsDto(
            total_mentors=await self.mentor_profile_repo.count_active_mentors(
                session=session
            ),
            total_active_mentorships=await self.mentorship_repo.count_by_status(
                session=session, status=MentorshipStatus.ACTIVE
            ),
            total_completed_mentorships=await self.mentorship_repo.count_by_status(
                session=session, status=MentorshipStatus.COMPLETED
            ),
        )

        return MentorshipStatsDto(
            as_mentor=summarize_participation(as_mentor),
            as_mentee=summarize_participation(as_mentee),
            platform=platform,
            is_mentor=bool(mentor_profile and mentor_profile.is_active),
        )

    async def schedule_meeting(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        meeting_dto: MeetingCreateDto,
    ) -> MentorshipDto:
        """
        Add a meeting to an active mentorship.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the caller is not a participant.
            InvalidStateError: If the mentorship is not active.
        """
        user_id, mentorship = await self._load(session, user_context, mentorship_id)
        if mentorship.status != MentorshipStatus.ACTIVE:
            raise InvalidStateError(
                "Meetings can only be scheduled for active mentorships."
            )

        meeting = {
            "meeting_id": uuid.uuid4().hex,
            "scheduled_for": self.date_time_util.format_datetime_to_iso_utc_z(
                meeting_dto.scheduled_for
            ),
            "duration": meeting_dto.duration,
            "status": MeetingStatus.SCHEDULED.value,
            "notes": None,
            "meeting_link": meeting_dto.meeting_link,
        }
        mentorship.meetings = [*(mentorship.meetings or []), meeting]

        self.logger.info(
            "[MentorshipActivityService] user %s scheduled meeting %s on mentorship %s",
            user_id,
            meeting["meeting_id"],
            mentorship_id,
        )
        return await self._save(session, mentorship)

    async def update_meeting(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        meeting_id: str,
        update_dto: MeetingUpdateDto,
    ) -> MentorshipDto:
        _, mentorship = await self._load(session, user_context, mentorship_id)

        meetings = [dict(m) for m in mentorship.meetings or []]
        meeting = next((m for m in meetings if m.get("meeting_id") == meeting_id), None)
        if meeting is None:
            raise NotFoundError("Meeting not found.")

        meeting["status"] = update_dto.status.value
        if update_dto.notes is not None:
            meeting["notes"] = update_dto.notes
        mentorship.meetings = meetings

        return await self._save(session, mentorship)

    async def update_goal(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        goal_id: str,
        update_dto: GoalUpdateDto,
    ) -> MentorshipDto:
        """
        Edit a goal's description or completion flag.

        Completing a goal stamps `completed_at`; reopening it clears the stamp.

        Raises:
            NotFoundError: If the mentorship or the goal does not exist.
            ForbiddenError: If the caller is not a participant.
        """
        _, mentorship = await self._load(session, user_context, mentorship_id)

        goals = [dict(g) for g in mentorship.goals or []]
        goal = next((g for g in goals if g.get("goal_id") == goal_id), None)
        if goal is None:
            raise NotFoundError("Goal not found.")

        if update_dto.description is not None:
            goal["description"] = update_dto.description
        if update_dto.is_completed is not None:
            if update_dto.is_completed and not goal.get("is_completed"):
                goal["completed_at"] = self.date_time_util.format_datetime_to_iso_utc_z(
                    self.date_time_util.now()
                )
            elif not update_dto.is_completed:
                goal["completed_at"] = None
            goal["is_completed"] = update_dto.is_completed
        mentorship.goals = goals

        return await self._save(session, mentorship)

    async def add_note(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        note_dto: NoteCreateDto,
    ) -> MentorshipDto:
        user_id, mentorship = await self._load(session, user_context, mentorship_id)

        mentorship.notes = [
            *(mentorship.notes or []),
            {
                "author_id": user_id,
                "content": note_dto.content,
                "created_at": self.date_time_util.format_datetime_to_iso_utc_z(
                    self.date_time_util.now()
                ),
            },
        ]

        return await self._save(session, mentorship)

    async def provide_feedback(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        feedback_dto: FeedbackCreateDto,
    ) -> MentorshipDto:
        """
        Record the caller's rating and feedback on their side of the mentorship.

        Feedback is only accepted once the mentorship is completed. A rating given
        by the mentee also becomes the mentorship's testimonial on the mentor's
        profile; rating again replaces it, and the mentor's rating is refreshed.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the caller is not a participant.
            InvalidStateError: If the mentorship is not completed.
        """
        user_id, mentorship = await self._load(session, user_context, mentorship_id)
        if mentorship.status != MentorshipStatus.COMPLETED:
            raise InvalidStateError(
                "Feedback can only be given on completed mentorships."
            )
        side = "mentor" if user_id == mentorship.mentor_id else "mentee"

        mentorship.feedback = {
            **(mentorship.feedback or {}),
            f"{side}_rating": feedback_dto.rating,
            f"{side}_feedback": feedback_dto.feedback,
        }

        if side == "mentee" and feedback_dto.rating:
            await self.profile_service.add_testimonial(
                session=session,
                mentor_id=mentorship.mentor_id,
                mentee_id=user_id,
                content=feedback_dto.feedback,
                rating=feedback_dto.rating,
                mentorship_id=mentorship.mentorship_id,
            )

        self.logger.info(
            "[MentorshipActivityService] %s %s left feedback on mentorship %s",
            side,
            user_id,
            mentorship_id,
        )
        return await self._save(session, mentorship)

    async def _load(
        self, session: AsyncSession, user_context: UserContextDto, mentorship_id: int
    ) -> tuple[int, MentorshipEntity]:
        user_id = await self.user_identity_service.get_user_id(
            session=session, user_info=user_context
        )
        mentorship = await get_participant_mentorship(
            self.mentorship_repo, session, mentorship_id, user_id
        )
        return user_id, mentorship

    async def _save(
        self, session: AsyncSession, mentorship: MentorshipEntity
    ) -> MentorshipDto:
        mentorship.updated_at = self.date_time_util.now()
        saved = await self.mentorship_repo.upsert_mentorship(
            session=session, entity=mentorship
        )
        await session.commit()
        return self.mentorship_mapper.map_to_mentorship_dto(saved)
