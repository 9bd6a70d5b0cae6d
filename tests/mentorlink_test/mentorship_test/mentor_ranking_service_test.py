import unittest
from unittest.mock import AsyncMock, MagicMock

from mentorlink.common.exceptions import NotFoundError
from mentorlink.common.mentorship_enums import MentorshipStyle
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.mentorship.mentor_ranking_service import (
    MentorRankingService,
    rank_mentors,
)
from mentorlink.profile.profile_mapper import ProfileMapper


def make_mentor(user_id, industry=None, rating_average=0.0):
    return MentorProfileEntity(
        user_id=user_id,
        is_active=True,
        industry=industry,
        related_industries=[],
        skills=[],
        specializations=[],
        career_achievements=[],
        max_mentees=3,
        current_mentees=0,
        schedule=[],
        time_zone="UTC",
        testimonials=[],
        rating_average=rating_average,
        rating_count=0,
        mentorship_style=MentorshipStyle.SITUATIONAL,
    )


class TestRankMentors(unittest.TestCase):
    def setUp(self):
        self.mentee = MenteeProfileEntity(user_id=1, industry="Tech")

    def test_sorted_by_score_descending(self):
        mentors = [make_mentor(2, "Retail"), make_mentor(3, "Tech")]

        ranked = rank_mentors(self.mentee, mentors)

        self.assertEqual([(m.user_id, s) for m, s in ranked], [(3, 100), (2, 0)])

    def test_ties_broken_by_rating_then_user_id(self):
        mentors = [
            make_mentor(7, "Tech", rating_average=4.0),
            make_mentor(5, "Tech", rating_average=4.0),
            make_mentor(9, "Tech", rating_average=4.9),
        ]

        ranked = rank_mentors(self.mentee, mentors)

        self.assertEqual([m.user_id for m, _ in ranked], [9, 5, 7])

    def test_empty_input(self):
        self.assertEqual(rank_mentors(self.mentee, []), [])


class TestMentorRankingService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.mock_session = AsyncMock()

        self.mock_identity_service = MagicMock()
        self.mock_identity_service.get_user_id = AsyncMock(return_value=1)

        self.mock_mentor_profile_repo = MagicMock()
        self.mock_mentor_profile_repo.get_active_mentors = AsyncMock()

        self.mock_mentee_profile_repo = MagicMock()
        self.mock_mentee_profile_repo.get_by_user_id = AsyncMock(
            return_value=MenteeProfileEntity(user_id=1, industry="Tech")
        )

        self.service = MentorRankingService(
            logger=self.logger,
            user_identity_service=self.mock_identity_service,
            mentor_profile_repository=self.mock_mentor_profile_repo,
            mentee_profile_repository=self.mock_mentee_profile_repo,
            profile_mapper=ProfileMapper(),
        )
        self.user_context = UserContextDto(sub="sub", primary_email="m@example.com")

    async def test_find_potential_mentors_ranked(self):
        self.mock_mentor_profile_repo.get_active_mentors.return_value = [
            make_mentor(2, "Retail"),
            make_mentor(3, "Tech"),
        ]

        matches = await self.service.find_potential_mentors(
            self.mock_session, self.user_context
        )

        self.assertEqual([m.mentor_profile.user_id for m in matches], [3, 2])
        self.assertEqual([m.compatibility_score for m in matches], [100, 0])
        self.mock_mentor_profile_repo.get_active_mentors.assert_awaited_once_with(
            session=self.mock_session, exclude_user_id=1
        )

    async def test_find_potential_mentors_without_mentee_profile(self):
        self.mock_mentee_profile_repo.get_by_user_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.find_potential_mentors(
                self.mock_session, self.user_context
            )

        self.mock_mentor_profile_repo.get_active_mentors.assert_not_awaited()

    async def test_find_potential_mentors_no_mentors(self):
        self.mock_mentor_profile_repo.get_active_mentors.return_value = []

        matches = await self.service.find_potential_mentors(
            self.mock_session, self.user_context
        )

        self.assertEqual(matches, [])
        self.mock_session.commit.assert_not_awaited()


if __name__ == "__main__":
    unittest.main()
