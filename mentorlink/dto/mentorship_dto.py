from datetime import datetime
from pydantic import Field
from mentorlink.dto.base_dto import BaseDto
from mentorlink.common.mentorship_enums import (
    FocusArea,
    MeetingStatus,
    MentorshipStatus,
)


class GoalDto(BaseDto):
    goal_id: str
    description: str
    is_completed: bool = False
    completed_at: datetime | None = None


class MeetingDto(BaseDto):
    meeting_id: str
    scheduled_for: datetime
    duration: int
    status: MeetingStatus
    notes: str | None = None
    meeting_link: str | None = None


class NoteDto(BaseDto):
    author_id: int
    content: str
    created_at: datetime


class FeedbackDto(BaseDto):
    mentor_rating: int | None = None
    mentee_rating: int | None = None
    mentor_feedback: str | None = None
    mentee_feedback: str | None = None


class MentorshipDto(BaseDto):
    id: int
    mentor_id: int
    mentee_id: int
    status: MentorshipStatus
    compatibility_score: int
    focus_areas: list[FocusArea] = Field(default_factory=list)
    goals: list[GoalDto] = Field(default_factory=list)
    meetings: list[MeetingDto] = Field(default_factory=list)
    notes: list[NoteDto] = Field(default_factory=list)
    feedback: FeedbackDto | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
