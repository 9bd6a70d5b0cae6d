from datetime import datetime
from sqlalchemy import Boolean, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.utils.date_time_util import utc_now
from mentorlink.common.base import Base


class UsersEntity(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(String, default="")
    last_name: Mapped[str] = mapped_column(String, default="")

    primary_email: Mapped[str] = mapped_column(String, unique=True)

    subject_identifier: Mapped[str] = mapped_column(String, unique=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    updated_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
