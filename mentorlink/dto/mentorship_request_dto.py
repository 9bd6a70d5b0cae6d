from datetime import datetime
from pydantic import Field, field_validator
from mentorlink.dto.base_request_dto import BaseRequestDto
from mentorlink.common.constants import DEFAULT_MEETING_DURATION_MINUTES
from mentorlink.common.mentorship_enums import (
    FocusArea,
    MeetingStatus,
    MentorshipAction,
)


class MentorshipCreateDto(BaseRequestDto):
    mentor_id: int
    focus_areas: list[FocusArea] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)

    @field_validator("goals")
    @classmethod
    def drop_blank_goals(cls, goals: list[str]) -> list[str]:
        return [goal.strip() for goal in goals if goal and goal.strip()]


class MentorshipRespondDto(BaseRequestDto):
    action: MentorshipAction


class MentorshipCompleteDto(BaseRequestDto):
    final_feedback: str | None = None


class MeetingCreateDto(BaseRequestDto):
    scheduled_for: datetime
    duration: int = Field(default=DEFAULT_MEETING_DURATION_MINUTES, gt=0)
    meeting_link: str | None = None


class MeetingUpdateDto(BaseRequestDto):
    status: MeetingStatus
    notes: str | None = None


class GoalUpdateDto(BaseRequestDto):
    description: str | None = None
    is_completed: bool | None = None


class NoteCreateDto(BaseRequestDto):
    content: str = Field(min_length=1)


class FeedbackCreateDto(BaseRequestDto):
    rating: int | None = Field(default=None, ge=1, le=5)
    feedback: str | None = None
