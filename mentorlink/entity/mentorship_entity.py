from datetime import datetime
from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.utils.date_time_util import utc_now
from mentorlink.common.base import Base, JsonType
from mentorlink.common.mentorship_enums import MentorshipStatus

_OPEN_STATUS_CLAUSE = text("status IN ('pending', 'active')")


class MentorshipEntity(Base):
    __tablename__ = "mentorships"

    mentorship_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    mentor_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), index=True)
    mentee_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), index=True)
    status: Mapped[MentorshipStatus] = mapped_column(
        Enum(
            MentorshipStatus,
            name="mentorship_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=MentorshipStatus.PENDING,
    )
    compatibility_score: Mapped[int] = mapped_column(Integer, default=0)

    focus_areas: Mapped[list] = mapped_column(JsonType, default=list)
    # [{"goal_id": "...", "description": "...", "is_completed": false, "completed_at": null}]
    goals: Mapped[list] = mapped_column(JsonType, default=list)
    # [{"meeting_id": "...", "scheduled_for": "iso", "duration": 30, "status": "scheduled",
    #   "notes": null, "meeting_link": null}]
    meetings: Mapped[list] = mapped_column(JsonType, default=list)
    # [{"author_id": 1, "content": "...", "created_at": "iso"}]
    notes: Mapped[list] = mapped_column(JsonType, default=list)
    feedback: Mapped[dict | None] = mapped_column(JsonType)

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint("mentor_id <> mentee_id", name="check_different_ids"),
        CheckConstraint(
            "compatibility_score >= 0 AND compatibility_score <= 100",
            name="check_compatibility_score_range",
        ),
        Index(
            "uq_open_mentorship_per_pair",
            "mentor_id",
            "mentee_id",
            unique=True,
            postgresql_where=_OPEN_STATUS_CLAUSE,
            sqlite_where=_OPEN_STATUS_CLAUSE,
        ),
    )
