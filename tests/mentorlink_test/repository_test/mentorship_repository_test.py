import unittest
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError

from mentorlink.common.mentorship_enums import MentorshipStatus, ParticipantRole
from mentorlink.entity.mentorship_entity import MentorshipEntity
from mentorlink.entity.users_entity import UsersEntity
from mentorlink.repository.mentorship_repository import MentorshipRepository
from tests.mentorlink_test.repository_test.base_repository_test_lib import (
    BaseRepositoryTestLib,
)


class TestMentorshipRepository(BaseRepositoryTestLib):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.repo = MentorshipRepository()

        self.mentor, self.mentee, self.other = [
            UsersEntity(primary_email=f"{name}@example.com", subject_identifier=name)
            for name in ("mentor", "mentee", "other")
        ]
        await self.insert_entities([self.mentor, self.mentee, self.other])

        base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.completed = MentorshipEntity(
            mentor_id=self.mentor.user_id,
            mentee_id=self.mentee.user_id,
            status=MentorshipStatus.COMPLETED,
            compatibility_score=70,
            created_at=base_time,
        )
        self.active = MentorshipEntity(
            mentor_id=self.mentor.user_id,
            mentee_id=self.mentee.user_id,
            status=MentorshipStatus.ACTIVE,
            compatibility_score=80,
            created_at=base_time + timedelta(days=1),
        )
        self.pending_reverse = MentorshipEntity(
            mentor_id=self.mentee.user_id,
            mentee_id=self.other.user_id,
            status=MentorshipStatus.PENDING,
            compatibility_score=55,
            created_at=base_time + timedelta(days=2),
        )
        await self.insert_entities(
            [self.completed, self.active, self.pending_reverse]
        )

    async def test_get_by_id(self):
        mentorship = await self.repo.get_by_id(self.session, self.active.mentorship_id)

        self.assertEqual(mentorship.status, MentorshipStatus.ACTIVE)
        self.assertEqual(mentorship.goals, [])

    async def test_get_by_id_not_found(self):
        self.assertIsNone(await self.repo.get_by_id(self.session, 9999))

    async def test_get_open_by_pair_ignores_closed(self):
        mentorship = await self.repo.get_open_by_pair(
            self.session, self.mentor.user_id, self.mentee.user_id
        )

        self.assertEqual(mentorship.mentorship_id, self.active.mentorship_id)

    async def test_get_open_by_pair_is_directional(self):
        self.assertIsNone(
            await self.repo.get_open_by_pair(
                self.session, self.mentee.user_id, self.mentor.user_id
            )
        )

    async def test_get_by_user_both_roles_newest_first(self):
        mentorships = await self.repo.get_by_user(self.session, self.mentee.user_id)

        self.assertEqual(
            [m.mentorship_id for m in mentorships],
            [
                self.pending_reverse.mentorship_id,
                self.active.mentorship_id,
                self.completed.mentorship_id,
            ],
        )

    async def test_get_by_user_filtered_by_role_and_status(self):
        as_mentor = await self.repo.get_by_user(
            self.session, self.mentee.user_id, role=ParticipantRole.MENTOR
        )
        completed_as_mentee = await self.repo.get_by_user(
            self.session,
            self.mentee.user_id,
            role=ParticipantRole.MENTEE,
            status=MentorshipStatus.COMPLETED,
        )

        self.assertEqual(
            [m.mentorship_id for m in as_mentor], [self.pending_reverse.mentorship_id]
        )
        self.assertEqual(
            [m.mentorship_id for m in completed_as_mentee],
            [self.completed.mentorship_id],
        )

    async def test_count_by_status(self):
        self.assertEqual(
            await self.repo.count_by_status(self.session, MentorshipStatus.ACTIVE), 1
        )
        self.assertEqual(
            await self.repo.count_by_status(self.session, MentorshipStatus.DECLINED), 0
        )

    async def test_upsert_mentorship_persists_json_documents(self):
        self.active.goals = [
            {
                "goal_id": "g1",
                "description": "Ship a side project",
                "is_completed": False,
                "completed_at": None,
            }
        ]

        await self.repo.upsert_mentorship(self.session, self.active)
        self.session.expunge_all()
        fetched = await self.repo.get_by_id(self.session, self.active.mentorship_id)

        self.assertEqual(fetched.goals[0]["description"], "Ship a side project")

    async def test_transition_status_moves_matching_row(self):
        moved = await self.repo.transition_status(
            self.session,
            self.active.mentorship_id,
            MentorshipStatus.ACTIVE,
            MentorshipStatus.COMPLETED,
        )

        self.assertTrue(moved)
        await self.session.refresh(self.active)
        self.assertEqual(self.active.status, MentorshipStatus.COMPLETED)

    async def test_transition_status_only_one_concurrent_caller_wins(self):
        other_session = self.session_maker()
        try:
            # Both requests have already read the mentorship as active.
            first_view = await self.repo.get_by_id(
                self.session, self.active.mentorship_id
            )
            second_view = await self.repo.get_by_id(
                other_session, self.active.mentorship_id
            )
            self.assertEqual(first_view.status, MentorshipStatus.ACTIVE)
            self.assertEqual(second_view.status, MentorshipStatus.ACTIVE)

            completed = await self.repo.transition_status(
                self.session,
                self.active.mentorship_id,
                MentorshipStatus.ACTIVE,
                MentorshipStatus.COMPLETED,
            )
            cancelled = await self.repo.transition_status(
                other_session,
                self.active.mentorship_id,
                MentorshipStatus.ACTIVE,
                MentorshipStatus.CANCELLED,
            )
        finally:
            await other_session.close()

        self.assertTrue(completed)
        self.assertFalse(cancelled)
        await self.session.refresh(self.active)
        self.assertEqual(self.active.status, MentorshipStatus.COMPLETED)

    async def test_transition_status_missing_row(self):
        self.assertFalse(
            await self.repo.transition_status(
                self.session,
                9999,
                MentorshipStatus.PENDING,
                MentorshipStatus.ACTIVE,
            )
        )

    async def test_second_open_mentorship_for_pair_is_rejected(self):
        duplicate = MentorshipEntity(
            mentor_id=self.mentor.user_id,
            mentee_id=self.mentee.user_id,
            status=MentorshipStatus.PENDING,
            compatibility_score=60,
        )

        with self.assertRaises(IntegrityError):
            await self.repo.upsert_mentorship(self.session, duplicate)


if __name__ == "__main__":
    unittest.main()
