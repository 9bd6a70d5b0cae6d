from pydantic import Field
from mentorlink.dto.base_dto import BaseDto


class MenteeProfileDto(BaseDto):
    user_id: int
    industry: str | None = None
    skills_to_improve: list[str] = Field(default_factory=list)
    career_goals: list[str] = Field(default_factory=list)
    personality_traits: dict[str, float] | None = None
    experience_years: int | None = None
