import unittest
from datetime import datetime, timezone

from mentorlink.common.mentorship_enums import (
    FocusArea,
    MeetingStatus,
    MentorshipStatus,
)
from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.mentorship.mentorship_mapper import MentorshipMapper


class TestMentorshipMapper(unittest.TestCase):
    def setUp(self):
        self.mapper = MentorshipMapper()
        self.entity = MentorshipEntity(
            mentorship_id=5,
            mentor_id=1,
            mentee_id=2,
            status=MentorshipStatus.ACTIVE,
            compatibility_score=88,
            focus_areas=["leadership", "networking"],
            goals=[
                {
                    "goal_id": "g1",
                    "description": "Lead a project",
                    "is_completed": True,
                    "completed_at": "2025-02-01T10:00:00.000000Z",
                }
            ],
            meetings=[
                {
                    "meeting_id": "m1",
                    "scheduled_for": "2025-02-03T15:00:00.000000Z",
                    "duration": 30,
                    "status": "scheduled",
                    "notes": None,
                    "meeting_link": "https://meet.example.com/x",
                }
            ],
            notes=[
                {
                    "author_id": 1,
                    "content": "Kickoff done",
                    "created_at": "2025-02-01T09:00:00.000000Z",
                }
            ],
            feedback={"mentee_rating": 5, "mentee_feedback": "Great"},
            start_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
            end_date=datetime(2025, 4, 1, tzinfo=timezone.utc),
        )

    def test_map_to_mentorship_dto(self):
        dto = self.mapper.map_to_mentorship_dto(self.entity)

        self.assertEqual(dto.id, 5)
        self.assertEqual(dto.status, MentorshipStatus.ACTIVE)
        self.assertEqual(dto.focus_areas, [FocusArea.LEADERSHIP, FocusArea.NETWORKING])
        self.assertTrue(dto.goals[0].is_completed)
        self.assertEqual(
            dto.goals[0].completed_at,
            datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc),
        )
        self.assertEqual(dto.meetings[0].status, MeetingStatus.SCHEDULED)
        self.assertEqual(dto.notes[0].content, "Kickoff done")
        self.assertEqual(dto.feedback.mentee_rating, 5)
        self.assertIsNone(dto.feedback.mentor_rating)

    def test_map_to_mentorship_dto_serializes_camel_case(self):
        payload = self.mapper.map_to_mentorship_dto(self.entity).model_dump(
            by_alias=True, mode="json"
        )

        self.assertEqual(payload["mentorId"], 1)
        self.assertEqual(payload["compatibilityScore"], 88)
        self.assertEqual(payload["meetings"][0]["meetingLink"], "https://meet.example.com/x")

    def test_map_without_optional_documents(self):
        self.entity.feedback = None
        self.entity.goals = None

        dto = self.mapper.map_to_mentorship_dto(self.entity)

        self.assertIsNone(dto.feedback)
        self.assertEqual(dto.goals, [])

    def test_map_to_mentorship_dtos(self):
        dtos = self.mapper.map_to_mentorship_dtos([self.entity, self.entity])

        self.assertEqual([d.id for d in dtos], [5, 5])


if __name__ == "__main__":
    unittest.main()
