from mentorlink.dto.mentorship_dto import (
    FeedbackDto,
    GoalDto,
    MeetingDto,
    MentorshipDto,
    NoteDto,
)
from mentorlink.entity.mentorship_entity import MentorshipEntity


class MentorshipMapper:
    """
    Mapper for converting mentorship entities to DTOs.
    """

    def map_to_mentorship_dto(self, entity: MentorshipEntity) -> MentorshipDto:
        """Maps a MentorshipEntity, including its JSON sub-documents, to a MentorshipDto."""
        return MentorshipDto(
            id=entity.mentorship_id,
            mentor_id=entity.mentor_id,
            mentee_id=entity.mentee_id,
            status=entity.status,
            compatibility_score=entity.compatibility_score,
            focus_areas=entity.focus_areas or [],
            goals=[GoalDto.model_validate(g) for g in entity.goals or []],
            meetings=[MeetingDto.model_validate(m) for m in entity.meetings or []],
            notes=[NoteDto.model_validate(n) for n in entity.notes or []],
            feedback=FeedbackDto.model_validate(entity.feedback)
            if entity.feedback
            else None,
            start_date=entity.start_date,
            end_date=entity.end_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def map_to_mentorship_dtos(
        self, entities: list[MentorshipEntity]
    ) -> list[MentorshipDto]:
        return [self.map_to_mentorship_dto(e) for e in entities]
