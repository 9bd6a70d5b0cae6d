from pydantic import Field, field_validator
from mentorlink.dto.base_request_dto import BaseRequestDto
from mentorlink.common.constants import DEFAULT_MAX_MENTEES, DEFAULT_MENTOR_TIME_ZONE
from mentorlink.common.mentorship_enums import (
    FocusArea,
    MentorshipStyle,
    PersonalityTrait,
    WeekDay,
)


def _validate_traits(traits: dict[str, float] | None) -> dict[str, float] | None:
    if traits is None:
        return None
    allowed = {trait.value for trait in PersonalityTrait}
    for name, value in traits.items():
        if name not in allowed:
            raise ValueError(f"Unknown personality trait: {name}")
        if not 0 <= value <= 10:
            raise ValueError(f"Personality trait {name} must be between 0 and 10")
    return traits


class ScheduleSlotRequestDto(BaseRequestDto):
    day: WeekDay
    start_time: str
    end_time: str


class MentorAvailabilityRequestDto(BaseRequestDto):
    max_mentees: int = Field(default=DEFAULT_MAX_MENTEES, ge=0)
    schedule: list[ScheduleSlotRequestDto] = Field(default_factory=list)
    time_zone: str = DEFAULT_MENTOR_TIME_ZONE


class MentorProfileCreateDto(BaseRequestDto):
    specializations: list[FocusArea] = Field(default_factory=list)
    industry: str | None = None
    related_industries: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    experience_years: int | None = Field(default=None, ge=0)
    personality_traits: dict[str, float] | None = None
    career_achievements: list[str] = Field(default_factory=list)
    biography: str = ""
    mentorship_style: MentorshipStyle = MentorshipStyle.SITUATIONAL
    availability: MentorAvailabilityRequestDto = Field(
        default_factory=MentorAvailabilityRequestDto
    )

    @field_validator("personality_traits")
    @classmethod
    def check_personality_traits(cls, traits):
        return _validate_traits(traits)


class MentorProfileUpdateDto(BaseRequestDto):
    """
    Fields a mentor may change on their own profile.

    Counters and derived values (current mentees, testimonials, rating) are not
    part of this model and therefore cannot be written through the API.
    """

    is_active: bool | None = None
    specializations: list[FocusArea] | None = None
    industry: str | None = None
    related_industries: list[str] | None = None
    skills: list[str] | None = None
    experience_years: int | None = Field(default=None, ge=0)
    personality_traits: dict[str, float] | None = None
    career_achievements: list[str] | None = None
    biography: str | None = None
    mentorship_style: MentorshipStyle | None = None
    max_mentees: int | None = Field(default=None, ge=0)
    schedule: list[ScheduleSlotRequestDto] | None = None
    time_zone: str | None = None

    @field_validator("personality_traits")
    @classmethod
    def check_personality_traits(cls, traits):
        return _validate_traits(traits)


class MenteeProfileRequestDto(BaseRequestDto):
    industry: str | None = None
    skills_to_improve: list[str] = Field(default_factory=list)
    career_goals: list[str] = Field(default_factory=list)
    personality_traits: dict[str, float] | None = None
    experience_years: int | None = Field(default=None, ge=0)

    @field_validator("personality_traits")
    @classmethod
    def check_personality_traits(cls, traits):
        return _validate_traits(traits)
