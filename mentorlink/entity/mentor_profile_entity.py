from datetime import datetime
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.utils.date_time_util import utc_now
from mentorlink.common.base import Base, JsonType
from mentorlink.common.mentorship_enums import MentorshipStyle


class MentorProfileEntity(Base):
    __tablename__ = "mentor_profiles"

    mentor_profile_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), index=True, unique=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # list[FocusArea values]
    specializations: Mapped[list] = mapped_column(JsonType, default=list)
    industry: Mapped[str | None] = mapped_column(String)
    related_industries: Mapped[list] = mapped_column(JsonType, default=list)
    skills: Mapped[list] = mapped_column(JsonType, default=list)
    experience_years: Mapped[int | None] = mapped_column(Integer)
    # trait name -> 0..10
    personality_traits: Mapped[dict | None] = mapped_column(JsonType)
    career_achievements: Mapped[list] = mapped_column(JsonType, default=list)

    biography: Mapped[str] = mapped_column(Text, default="")
    mentorship_style: Mapped[MentorshipStyle] = mapped_column(
        SAEnum(
            MentorshipStyle,
            name="mentorship_style_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=MentorshipStyle.SITUATIONAL,
    )

    max_mentees: Mapped[int] = mapped_column(Integer, default=3)
    current_mentees: Mapped[int] = mapped_column(Integer, default=0)
    # [{"day": "monday", "start_time": "09:00", "end_time": "10:00"}]
    schedule: Mapped[list] = mapped_column(JsonType, default=list)
    time_zone: Mapped[str] = mapped_column(String, default="UTC")

    # [{"mentee_id": 1, "content": "...", "rating": 5, "date": "iso"}]
    testimonials: Mapped[list] = mapped_column(JsonType, default=list)
    rating_average: Mapped[float] = mapped_column(Float, default=0.0)
    rating_count: Mapped[int] = mapped_column(Integer, default=0)

    updated_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint(
            "current_mentees >= 0 AND current_mentees <= max_mentees",
            name="check_mentor_capacity",
        ),
    )
