from mentorlink.dto.mentee_profile_dto import MenteeProfileDto
from mentorlink.dto.mentor_profile_dto import (
    AvailabilityDto,
    MentorProfileDto,
    MentorTestimonialDto,
    RatingDto,
    ScheduleSlotDto,
)
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity


class ProfileMapper:
    """
    Mapper for converting mentor and mentee profile entities to DTOs.
    """

    def map_to_mentor_profile_dto(
        self, entity: MentorProfileEntity
    ) -> MentorProfileDto:
        """
        Maps a MentorProfileEntity to a MentorProfileDto.

        Flat capacity and rating columns are regrouped into the nested
        `availability` and `rating` objects exposed by the API.
        """
        return MentorProfileDto(
            user_id=entity.user_id,
            is_active=entity.is_active,
            specializations=entity.specializations or [],
            industry=entity.industry,
            related_industries=entity.related_industries or [],
            skills=entity.skills or [],
            experience_years=entity.experience_years,
            personality_traits=entity.personality_traits,
            career_achievements=entity.career_achievements or [],
            biography=entity.biography or "",
            mentorship_style=entity.mentorship_style,
            availability=AvailabilityDto(
                max_mentees=entity.max_mentees,
                current_mentees=entity.current_mentees,
                schedule=[
                    ScheduleSlotDto.model_validate(slot)
                    for slot in entity.schedule or []
                ],
                time_zone=entity.time_zone,
            ),
            testimonials=[
                MentorTestimonialDto.model_validate(t)
                for t in entity.testimonials or []
            ],
            rating=RatingDto(
                average=entity.rating_average or 0.0, count=entity.rating_count or 0
            ),
        )

    def map_to_mentee_profile_dto(
        self, entity: MenteeProfileEntity
    ) -> MenteeProfileDto:
        """Maps a MenteeProfileEntity to a MenteeProfileDto."""
        return MenteeProfileDto.model_validate(entity)
