from mentorlink.common.mentorship_enums import PersonalityTrait

PERSONALITY_TRAITS = [trait.value for trait in PersonalityTrait]

# Traits where mentor and mentee should be alike; the rest reward moderate contrast.
SIMILARITY_PREFERRED_TRAITS = frozenset(
    {PersonalityTrait.LEARNING_PREFERENCE.value, PersonalityTrait.WORK_STYLE.value}
)

PERSONALITY_WEIGHT = 30
INDUSTRY_WEIGHT = 20
RELATED_INDUSTRY_POINTS = 10
SKILLS_WEIGHT = 20
EXPERIENCE_WEIGHT = 15
POSITIVE_EXPERIENCE_GAP_POINTS = 10
IDEAL_EXPERIENCE_GAP_MIN = 3
IDEAL_EXPERIENCE_GAP_MAX = 15
CAREER_GOALS_WEIGHT = 15

TRAIT_MAX_SCORE = 10
NEUTRAL_COMPATIBILITY_SCORE = 50

DEFAULT_MEETING_DURATION_MINUTES = 30
DEFAULT_MAX_MENTEES = 3
DEFAULT_MENTOR_TIME_ZONE = "UTC"
