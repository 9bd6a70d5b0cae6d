from enum import Enum


class UserRole(str, Enum):
    MENTORSHIP = "mentorship"
