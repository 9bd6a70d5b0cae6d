from mentorlink.dto.base_dto import BaseDto


class ParticipationStatsDto(BaseDto):
    total: int = 0
    active: int = 0
    completed: int = 0
    meeting_hours: float = 0.0


class PlatformStatsDto(BaseDto):
    total_mentors: int = 0
    total_active_mentorships: int = 0
    total_completed_mentorships: int = 0


class MentorshipStatsDto(BaseDto):
    as_mentor: ParticipationStatsDto
    as_mentee: ParticipationStatsDto
    platform: PlatformStatsDto
    is_mentor: bool = False
