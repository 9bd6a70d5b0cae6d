import unittest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from mentorlink.common.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from mentorlink.common.mentorship_enums import (
    MeetingStatus,
    MentorshipStatus,
    ParticipantRole,
)
from mentorlink.dto.mentorship_request_dto import (
    FeedbackCreateDto,
    GoalUpdateDto,
    MeetingCreateDto,
    MeetingUpdateDto,
    NoteCreateDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.mentorship.mentorship_activity_service import (
    MentorshipActivityService,
    summarize_participation,
)
from mentorlink.utils.date_time_util import DateTimeUtil

MENTOR_ID = 10
MENTEE_ID = 20


def make_mentorship(status=MentorshipStatus.ACTIVE, **overrides):
    values = dict(
        mentorship_id=1,
        mentor_id=MENTOR_ID,
        mentee_id=MENTEE_ID,
        status=status,
        compatibility_score=75,
        focus_areas=[],
        goals=[
            {
                "goal_id": "g1",
                "description": "Learn SQL",
                "is_completed": False,
                "completed_at": None,
            }
        ],
        meetings=[
            {
                "meeting_id": "m1",
                "scheduled_for": "2025-01-10T10:00:00.000000Z",
                "duration": 45,
                "status": "scheduled",
                "notes": None,
                "meeting_link": None,
            }
        ],
        notes=[],
        feedback=None,
    )
    values.update(overrides)
    return MentorshipEntity(**values)


class TestSummarizeParticipation(unittest.TestCase):
    def test_counts_and_completed_meeting_hours(self):
        mentorships = [
            make_mentorship(
                MentorshipStatus.ACTIVE,
                meetings=[
                    {"duration": 90, "status": "completed"},
                    {"duration": 60, "status": "scheduled"},
                ],
            ),
            make_mentorship(
                MentorshipStatus.COMPLETED,
                meetings=[{"duration": 30, "status": "completed"}],
            ),
            make_mentorship(MentorshipStatus.DECLINED, meetings=[]),
        ]

        stats = summarize_participation(mentorships)

        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.active, 1)
        self.assertEqual(stats.completed, 1)
        self.assertEqual(stats.meeting_hours, 2.0)

    def test_empty(self):
        stats = summarize_participation([])

        self.assertEqual((stats.total, stats.meeting_hours), (0, 0.0))


class TestMentorshipActivityService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.mock_session = AsyncMock()

        self.mock_identity_service = MagicMock()
        self.mock_identity_service.get_user_id = AsyncMock(return_value=MENTEE_ID)

        self.mentorship = make_mentorship()
        self.mock_mentorship_repo = MagicMock()
        self.mock_mentorship_repo.get_by_id = AsyncMock(return_value=self.mentorship)
        self.mock_mentorship_repo.get_by_user = AsyncMock(return_value=[])
        self.mock_mentorship_repo.count_by_status = AsyncMock(return_value=0)
        self.mock_mentorship_repo.upsert_mentorship = AsyncMock(
            side_effect=lambda session, entity: entity
        )

        self.mock_mentor_profile_repo = MagicMock()
        self.mock_mentor_profile_repo.get_by_user_id = AsyncMock(return_value=None)
        self.mock_mentor_profile_repo.count_active_mentors = AsyncMock(return_value=4)

        self.mock_profile_service = MagicMock()
        self.mock_profile_service.add_testimonial = AsyncMock()

        self.mock_mapper = MagicMock()
        self.mock_mapper.map_to_mentorship_dto.side_effect = lambda entity: entity
        self.mock_mapper.map_to_mentorship_dtos.side_effect = lambda entities: entities

        self.now = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
        real_util = DateTimeUtil(logger=self.logger)
        self.mock_date_time_util = MagicMock()
        self.mock_date_time_util.now.return_value = self.now
        self.mock_date_time_util.format_datetime_to_iso_utc_z.side_effect = (
            real_util.format_datetime_to_iso_utc_z
        )

        self.service = MentorshipActivityService(
            logger=self.logger,
            user_identity_service=self.mock_identity_service,
            mentorship_repository=self.mock_mentorship_repo,
            mentor_profile_repository=self.mock_mentor_profile_repo,
            profile_service=self.mock_profile_service,
            mentorship_mapper=self.mock_mapper,
            date_time_util=self.mock_date_time_util,
        )
        self.user_context = UserContextDto(sub="sub", primary_email="m@example.com")

    async def test_list_mentorships_passes_filters(self):
        expected = [make_mentorship()]
        self.mock_mentorship_repo.get_by_user.return_value = expected

        result = await self.service.list_mentorships(
            self.mock_session,
            self.user_context,
            role=ParticipantRole.MENTEE,
            status=MentorshipStatus.ACTIVE,
        )

        self.assertEqual(result, expected)
        self.mock_mentorship_repo.get_by_user.assert_awaited_once_with(
            session=self.mock_session,
            user_id=MENTEE_ID,
            role=ParticipantRole.MENTEE,
            status=MentorshipStatus.ACTIVE,
        )

    async def test_get_stats(self):
        as_mentor = [make_mentorship(MentorshipStatus.COMPLETED)]
        as_mentee = [make_mentorship(), make_mentorship(MentorshipStatus.PENDING)]
        self.mock_mentorship_repo.get_by_user.side_effect = [as_mentor, as_mentee]
        self.mock_mentorship_repo.count_by_status.side_effect = [7, 3]
        self.mock_mentor_profile_repo.get_by_user_id.return_value = MentorProfileEntity(
            user_id=MENTEE_ID, is_active=True
        )

        stats = await self.service.get_stats(self.mock_session, self.user_context)

        self.assertEqual(stats.as_mentor.completed, 1)
        self.assertEqual(stats.as_mentee.total, 2)
        self.assertEqual(stats.as_mentee.active, 1)
        self.assertEqual(stats.platform.total_mentors, 4)
        self.assertEqual(stats.platform.total_active_mentorships, 7)
        self.assertEqual(stats.platform.total_completed_mentorships, 3)
        self.assertTrue(stats.is_mentor)

    async def test_schedule_meeting_appends(self):
        original_meetings = self.mentorship.meetings

        result = await self.service.schedule_meeting(
            self.mock_session,
            self.user_context,
            1,
            MeetingCreateDto(
                scheduled_for=datetime(2025, 3, 5, 15, 0, tzinfo=timezone.utc),
                meeting_link="https://meet.example.com/abc",
            ),
        )

        self.assertEqual(len(result.meetings), 2)
        new_meeting = result.meetings[-1]
        self.assertEqual(new_meeting["duration"], 30)
        self.assertEqual(new_meeting["status"], "scheduled")
        self.assertEqual(new_meeting["scheduled_for"], "2025-03-05T15:00:00.000000Z")
        self.assertIsNot(result.meetings, original_meetings)
        self.assertEqual(result.updated_at, self.now)
        self.mock_session.commit.assert_awaited_once()

    async def test_schedule_meeting_requires_active(self):
        self.mock_mentorship_repo.get_by_id.return_value = make_mentorship(
            MentorshipStatus.PENDING
        )

        with self.assertRaises(InvalidStateError):
            await self.service.schedule_meeting(
                self.mock_session,
                self.user_context,
                1,
                MeetingCreateDto(scheduled_for=self.now),
            )

    async def test_schedule_meeting_by_outsider(self):
        self.mock_identity_service.get_user_id.return_value = 999

        with self.assertRaises(ForbiddenError):
            await self.service.schedule_meeting(
                self.mock_session,
                self.user_context,
                1,
                MeetingCreateDto(scheduled_for=self.now),
            )

    async def test_update_meeting(self):
        result = await self.service.update_meeting(
            self.mock_session,
            self.user_context,
            1,
            "m1",
            MeetingUpdateDto(status=MeetingStatus.COMPLETED, notes="Went well"),
        )

        self.assertEqual(result.meetings[0]["status"], "completed")
        self.assertEqual(result.meetings[0]["notes"], "Went well")

    async def test_update_meeting_unknown_id(self):
        with self.assertRaises(NotFoundError):
            await self.service.update_meeting(
                self.mock_session,
                self.user_context,
                1,
                "nope",
                MeetingUpdateDto(status=MeetingStatus.CANCELLED),
            )

    async def test_update_goal_completion_sets_timestamp(self):
        result = await self.service.update_goal(
            self.mock_session,
            self.user_context,
            1,
            "g1",
            GoalUpdateDto(is_completed=True),
        )

        goal = result.goals[0]
        self.assertTrue(goal["is_completed"])
        self.assertEqual(goal["completed_at"], "2025-03-01T09:30:00.000000Z")
        self.assertEqual(goal["description"], "Learn SQL")

    async def test_update_goal_reopen_clears_timestamp(self):
        self.mentorship.goals = [
            {
                "goal_id": "g1",
                "description": "Learn SQL",
                "is_completed": True,
                "completed_at": "2025-02-01T00:00:00.000000Z",
            }
        ]

        result = await self.service.update_goal(
            self.mock_session,
            self.user_context,
            1,
            "g1",
            GoalUpdateDto(description="Master SQL", is_completed=False),
        )

        goal = result.goals[0]
        self.assertFalse(goal["is_completed"])
        self.assertIsNone(goal["completed_at"])
        self.assertEqual(goal["description"], "Master SQL")

    async def test_update_goal_unknown_id(self):
        with self.assertRaises(NotFoundError):
            await self.service.update_goal(
                self.mock_session,
                self.user_context,
                1,
                "missing",
                GoalUpdateDto(is_completed=True),
            )

    async def test_add_note(self):
        result = await self.service.add_note(
            self.mock_session, self.user_context, 1, NoteCreateDto(content="Read ch. 3")
        )

        self.assertEqual(
            result.notes,
            [
                {
                    "author_id": MENTEE_ID,
                    "content": "Read ch. 3",
                    "created_at": "2025-03-01T09:30:00.000000Z",
                }
            ],
        )

    async def test_mentee_feedback_adds_testimonial(self):
        self.mentorship.status = MentorshipStatus.COMPLETED

        result = await self.service.provide_feedback(
            self.mock_session,
            self.user_context,
            1,
            FeedbackCreateDto(rating=5, feedback="Very helpful"),
        )

        self.assertEqual(
            result.feedback, {"mentee_rating": 5, "mentee_feedback": "Very helpful"}
        )
        self.mock_profile_service.add_testimonial.assert_awaited_once_with(
            session=self.mock_session,
            mentor_id=MENTOR_ID,
            mentee_id=MENTEE_ID,
            content="Very helpful",
            rating=5,
            mentorship_id=1,
        )
        self.mock_session.commit.assert_awaited_once()

    async def test_mentor_feedback_has_no_testimonial(self):
        self.mock_identity_service.get_user_id.return_value = MENTOR_ID
        self.mentorship.status = MentorshipStatus.COMPLETED

        result = await self.service.provide_feedback(
            self.mock_session,
            self.user_context,
            1,
            FeedbackCreateDto(rating=4, feedback="Engaged mentee"),
        )

        self.assertEqual(
            result.feedback, {"mentor_rating": 4, "mentor_feedback": "Engaged mentee"}
        )
        self.mock_profile_service.add_testimonial.assert_not_awaited()

    async def test_feedback_on_missing_mentorship(self):
        self.mock_mentorship_repo.get_by_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.provide_feedback(
                self.mock_session, self.user_context, 1, FeedbackCreateDto(rating=3)
            )

    async def test_feedback_requires_completed_mentorship(self):
        for status in (
            MentorshipStatus.PENDING,
            MentorshipStatus.ACTIVE,
            MentorshipStatus.DECLINED,
            MentorshipStatus.CANCELLED,
        ):
            with self.subTest(status=status):
                self.mentorship.status = status
                with self.assertRaises(InvalidStateError):
                    await self.service.provide_feedback(
                        self.mock_session,
                        self.user_context,
                        1,
                        FeedbackCreateDto(rating=5, feedback="Great"),
                    )

        self.assertIsNone(self.mentorship.feedback)
        self.mock_profile_service.add_testimonial.assert_not_awaited()
        self.mock_session.commit.assert_not_awaited()

    async def test_mentee_rating_again_targets_same_mentorship(self):
        self.mentorship.status = MentorshipStatus.COMPLETED

        await self.service.provide_feedback(
            self.mock_session, self.user_context, 1, FeedbackCreateDto(rating=2)
        )
        result = await self.service.provide_feedback(
            self.mock_session,
            self.user_context,
            1,
            FeedbackCreateDto(rating=4, feedback="Grew on me"),
        )

        self.assertEqual(
            result.feedback, {"mentee_rating": 4, "mentee_feedback": "Grew on me"}
        )
        self.assertEqual(
            [
                call.kwargs["mentorship_id"]
                for call in self.mock_profile_service.add_testimonial.await_args_list
            ],
            [1, 1],
        )


if __name__ == "__main__":
    unittest.main()
