from http import HTTPStatus
from fastapi import APIRouter, Query

from mentorlink.common.api_endpoints import (
    MENTORSHIP_CANCEL_ENDPOINT,
    MENTORSHIP_COMPLETE_ENDPOINT,
    MENTORSHIP_ENDPOINT,
    MENTORSHIP_FEEDBACK_ENDPOINT,
    MENTORSHIP_GOAL_ENDPOINT,
    MENTORSHIP_MEETING_ENDPOINT,
    MENTORSHIP_MEETINGS_ENDPOINT,
    MENTORSHIP_NOTES_ENDPOINT,
    MENTORSHIP_REQUESTS_ENDPOINT,
    MENTORSHIP_RESPOND_ENDPOINT,
    MENTORSHIP_STATS_ENDPOINT,
    POTENTIAL_MENTORS_ENDPOINT,
)
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.mentorship_enums import (
    MentorshipAction,
    MentorshipStatus,
    ParticipantRole,
)
from mentorlink.common.user_role import UserRole
from mentorlink.dto.mentorship_request_dto import (
    FeedbackCreateDto,
    GoalUpdateDto,
    MeetingCreateDto,
    MeetingUpdateDto,
    MentorshipCompleteDto,
    MentorshipCreateDto,
    MentorshipRespondDto,
    NoteCreateDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.utils.permission_decorators import authenticate


class MentorshipController:
    """
    FastAPI controller exposing mentor matching and the mentorship lifecycle.

    Each endpoint opens one database session; the services commit it.
    """

    def __init__(
        self,
        mentor_ranking_service,
        mentorship_workflow_service,
        mentorship_activity_service,
        database,
    ):
        """
        Initialize the MentorshipController with required dependencies and register routes.

        Args:
            mentor_ranking_service (MentorRankingService): Ranks mentors for the caller.
            mentorship_workflow_service (MentorshipWorkflowService): Request/respond/complete/cancel.
            mentorship_activity_service (MentorshipActivityService): Listing, stats, meetings, goals, notes, feedback.
            database (Database): Database access object providing async session management.
        """
        if (
            not mentor_ranking_service
            or not mentorship_workflow_service
            or not mentorship_activity_service
        ):
            raise ValueError("All mentorship service instances are required.")

        self.mentor_ranking_service = mentor_ranking_service
        self.mentorship_workflow_service = mentorship_workflow_service
        self.mentorship_activity_service = mentorship_activity_service
        self.database = database

        self.router = APIRouter(tags=["mentorship"])
        mentorship_only = authenticate(roles=[UserRole.MENTORSHIP])

        # Static paths go before "/mentorship/{mentorshipId}/..." style routes.
        routes = [
            (POTENTIAL_MENTORS_ENDPOINT, self.get_potential_mentors, "GET"),
            (MENTORSHIP_STATS_ENDPOINT, self.get_stats, "GET"),
            (MENTORSHIP_ENDPOINT, self.list_mentorships, "GET"),
            (MENTORSHIP_REQUESTS_ENDPOINT, self.request_mentorship, "POST"),
            (MENTORSHIP_RESPOND_ENDPOINT, self.respond_to_request, "POST"),
            (MENTORSHIP_COMPLETE_ENDPOINT, self.complete_mentorship, "POST"),
            (MENTORSHIP_CANCEL_ENDPOINT, self.cancel_mentorship, "POST"),
            (MENTORSHIP_MEETINGS_ENDPOINT, self.schedule_meeting, "POST"),
            (MENTORSHIP_MEETING_ENDPOINT, self.update_meeting, "PATCH"),
            (MENTORSHIP_GOAL_ENDPOINT, self.update_goal, "PATCH"),
            (MENTORSHIP_NOTES_ENDPOINT, self.add_note, "POST"),
            (MENTORSHIP_FEEDBACK_ENDPOINT, self.provide_feedback, "POST"),
        ]
        for path, handler, method in routes:
            self.router.add_api_route(
                path,
                endpoint=mentorship_only(handler),
                methods=[method],
                response_model=None,
            )

    async def get_potential_mentors(self, current_user: UserContextDto):
        """
        Rank every active mentor for the current user's mentee profile.

        Example:
            {
                "success": true,
                "message": "Potential mentors fetched successfully.",
                "data": [{"mentorProfile": {...}, "compatibilityScore": 87}]
            }
        """
        async with self.database.session() as session:
            matches = await self.mentor_ranking_service.find_potential_mentors(
                session=session, user_context=current_user
            )

        return api_response(
            message="Potential mentors fetched successfully.", data=matches
        )

    async def request_mentorship(
        self, body: MentorshipCreateDto, current_user: UserContextDto
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_workflow_service.request_mentorship(
                session=session, user_context=current_user, request_dto=body
            )

        return api_response(
            message="Mentorship request sent successfully.",
            data={"mentorship": mentorship},
            status_code=HTTPStatus.CREATED,
        )

    async def respond_to_request(
        self,
        mentorshipId: int,
        body: MentorshipRespondDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_workflow_service.respond_to_request(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                action=body.action,
            )

        verb = "accepted" if body.action == MentorshipAction.ACCEPT else "declined"
        return api_response(
            message=f"Mentorship request {verb}.",
            data={"mentorship": mentorship},
        )

    async def complete_mentorship(
        self,
        mentorshipId: int,
        current_user: UserContextDto,
        body: MentorshipCompleteDto | None = None,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_workflow_service.complete_mentorship(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                final_feedback=body.final_feedback if body else None,
            )

        return api_response(
            message="Mentorship completed successfully.",
            data={"mentorship": mentorship},
        )

    async def cancel_mentorship(self, mentorshipId: int, current_user: UserContextDto):
        async with self.database.session() as session:
            mentorship = await self.mentorship_workflow_service.cancel_mentorship(
                session=session, user_context=current_user, mentorship_id=mentorshipId
            )

        return api_response(
            message="Mentorship cancelled successfully.",
            data={"mentorship": mentorship},
        )

    async def list_mentorships(
        self,
        current_user: UserContextDto,
        role: ParticipantRole | None = Query(None),
        status: MentorshipStatus | None = Query(None),
    ):
        """
        List the current user's mentorships, newest first.

        Query Parameters:
            role (ParticipantRole | None): "mentor" or "mentee"; both when omitted.
            status (MentorshipStatus | None): Optional status filter.
        """
        async with self.database.session() as session:
            mentorships = await self.mentorship_activity_service.list_mentorships(
                session=session, user_context=current_user, role=role, status=status
            )

        return api_response(
            message="Mentorships fetched successfully.", data=mentorships
        )

    async def get_stats(self, current_user: UserContextDto):
        async with self.database.session() as session:
            stats = await self.mentorship_activity_service.get_stats(
                session=session, user_context=current_user
            )

        return api_response(
            message="Mentorship stats fetched successfully.", data={"stats": stats}
        )

    async def schedule_meeting(
        self,
        mentorshipId: int,
        body: MeetingCreateDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_activity_service.schedule_meeting(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                meeting_dto=body,
            )

        return api_response(
            message="Meeting scheduled successfully.",
            data={"mentorship": mentorship},
            status_code=HTTPStatus.CREATED,
        )

    async def update_meeting(
        self,
        mentorshipId: int,
        meetingId: str,
        body: MeetingUpdateDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_activity_service.update_meeting(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                meeting_id=meetingId,
                update_dto=body,
            )

        return api_response(
            message="Meeting updated successfully.", data={"mentorship": mentorship}
        )

    async def update_goal(
        self,
        mentorshipId: int,
        goalId: str,
        body: GoalUpdateDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_activity_service.update_goal(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                goal_id=goalId,
                update_dto=body,
            )

        return api_response(
            message="Goal updated successfully.", data={"mentorship": mentorship}
        )

    async def add_note(
        self,
        mentorshipId: int,
        body: NoteCreateDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_activity_service.add_note(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                note_dto=body,
            )

        return api_response(
            message="Note added successfully.",
            data={"mentorship": mentorship},
            status_code=HTTPStatus.CREATED,
        )

    async def provide_feedback(
        self,
        mentorshipId: int,
        body: FeedbackCreateDto,
        current_user: UserContextDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_activity_service.provide_feedback(
                session=session,
                user_context=current_user,
                mentorship_id=mentorshipId,
                feedback_dto=body,
            )

        return api_response(
            message="Feedback submitted successfully.",
            data={"mentorship": mentorship},
        )
