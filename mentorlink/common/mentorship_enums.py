from enum import Enum


class MentorshipStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    DECLINED = "declined"
    CANCELLED = "cancelled"


OPEN_MENTORSHIP_STATUSES = (MentorshipStatus.PENDING, MentorshipStatus.ACTIVE)


class MentorshipAction(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


class ParticipantRole(str, Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"


class FocusArea(str, Enum):
    CAREER_ADVANCEMENT = "career_advancement"
    LEADERSHIP = "leadership"
    TECHNICAL_SKILLS = "technical_skills"
    WORK_LIFE_BALANCE = "work_life_balance"
    NETWORKING = "networking"
    COMMUNICATION = "communication"
    NEGOTIATION = "negotiation"
    INDUSTRY_SPECIFIC = "industry_specific"
    ENTREPRENEURSHIP = "entrepreneurship"
    PERSONAL_DEVELOPMENT = "personal_development"


class MeetingStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class MentorshipStyle(str, Enum):
    DIRECTIVE = "directive"
    NON_DIRECTIVE = "non_directive"
    SITUATIONAL = "situational"
    TRANSFORMATIONAL = "transformational"
    DEVELOPMENTAL = "developmental"


class PersonalityTrait(str, Enum):
    COMMUNICATION_STYLE = "communication_style"
    LEARNING_PREFERENCE = "learning_preference"
    FEEDBACK_APPROACH = "feedback_approach"
    WORK_STYLE = "work_style"
    GOAL_ORIENTATION = "goal_orientation"


class WeekDay(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
