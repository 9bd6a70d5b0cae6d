from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.utils.date_time_util import utc_now
from mentorlink.common.base import Base, JsonType


class MenteeProfileEntity(Base):
    __tablename__ = "mentee_profiles"

    mentee_profile_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), index=True, unique=True
    )
    industry: Mapped[str | None] = mapped_column(String)
    skills_to_improve: Mapped[list] = mapped_column(JsonType, default=list)
    career_goals: Mapped[list] = mapped_column(JsonType, default=list)
    personality_traits: Mapped[dict | None] = mapped_column(JsonType)
    experience_years: Mapped[int | None] = mapped_column(Integer)

    updated_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
