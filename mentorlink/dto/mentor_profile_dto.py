from datetime import datetime
from pydantic import Field
from mentorlink.dto.base_dto import BaseDto
from mentorlink.common.mentorship_enums import MentorshipStyle, WeekDay


class ScheduleSlotDto(BaseDto):
    day: WeekDay
    start_time: str
    end_time: str


class AvailabilityDto(BaseDto):
    max_mentees: int
    current_mentees: int
    schedule: list[ScheduleSlotDto] = Field(default_factory=list)
    time_zone: str


class MentorTestimonialDto(BaseDto):
    mentee_id: int
    mentorship_id: int | None = None
    content: str
    rating: int
    date: datetime | None = None


class RatingDto(BaseDto):
    average: float
    count: int


class MentorProfileDto(BaseDto):
    user_id: int
    is_active: bool
    specializations: list[str] = Field(default_factory=list)
    industry: str | None = None
    related_industries: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    experience_years: int | None = None
    personality_traits: dict[str, float] | None = None
    career_achievements: list[str] = Field(default_factory=list)
    biography: str = ""
    mentorship_style: MentorshipStyle
    availability: AvailabilityDto
    testimonials: list[MentorTestimonialDto] = Field(default_factory=list)
    rating: RatingDto


class MentorMatchDto(BaseDto):
    mentor_profile: MentorProfileDto
    compatibility_score: int


class MentorListDto(BaseDto):
    mentors: list[MentorProfileDto] = Field(default_factory=list)
    total_pages: int
    current_page: int
