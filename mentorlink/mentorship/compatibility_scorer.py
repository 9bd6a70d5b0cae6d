"""
Mentor/mentee compatibility scoring.

The score is a weighted sum over four independent factor groups. Each group only
counts when both sides carry the data it needs; the earned points are then
normalized by the weight of the groups that applied:

    score = round(earned / applicable_weight * 100)

    group                    weight
    personality traits       30
    industry                 20
      skills (with industry) 20
    experience gap           15
    career goals             15

When no group applies the neutral score of 50 is returned.

Everything in this module is pure: no I/O, no logging and no exceptions for missing
or malformed optional fields. Profiles are read by attribute, so ORM entities and
DTOs can both be scored.
"""

import math
from dataclasses import dataclass
from numbers import Real

from mentorlink.common.constants import (
    CAREER_GOALS_WEIGHT,
    EXPERIENCE_WEIGHT,
    IDEAL_EXPERIENCE_GAP_MAX,
    IDEAL_EXPERIENCE_GAP_MIN,
    INDUSTRY_WEIGHT,
    NEUTRAL_COMPATIBILITY_SCORE,
    PERSONALITY_TRAITS,
    PERSONALITY_WEIGHT,
    POSITIVE_EXPERIENCE_GAP_POINTS,
    RELATED_INDUSTRY_POINTS,
    SIMILARITY_PREFERRED_TRAITS,
    SKILLS_WEIGHT,
    TRAIT_MAX_SCORE,
)


@dataclass(frozen=True)
class FactorScore:
    earned: float
    weight: int


def _trait_value(traits: dict, trait: str) -> float | None:
    value = traits.get(trait)
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return float(value)


def score_trait(trait: str, mentor_value: float, mentee_value: float) -> float:
    """
    Score a single personality trait on a 0-10 scale.

    Similarity-preferred traits lose 2 points per unit of difference. The other
    traits reward moderate contrast: a difference of 3-4 scores 10, a difference
    of 2 or less scores 5, anything larger scores 7.
    """
    difference = abs(mentor_value - mentee_value)

    if trait in SIMILARITY_PREFERRED_TRAITS:
        return min(TRAIT_MAX_SCORE, max(0.0, TRAIT_MAX_SCORE - difference * 2))

    if difference <= 2:
        return 5
    if 3 <= difference <= 4:
        return 10
    return 7


def score_personality(mentor, mentee) -> FactorScore | None:
    mentor_traits = getattr(mentor, "personality_traits", None)
    mentee_traits = getattr(mentee, "personality_traits", None)
    if not isinstance(mentor_traits, dict) or not isinstance(mentee_traits, dict):
        return None

    total = 0.0
    trait_count = 0
    for trait in PERSONALITY_TRAITS:
        mentor_value = _trait_value(mentor_traits, trait)
        mentee_value = _trait_value(mentee_traits, trait)
        if mentor_value is None or mentee_value is None:
            continue
        total += score_trait(trait, mentor_value, mentee_value)
        trait_count += 1

    if trait_count == 0:
        return None

    return FactorScore(
        earned=total / (trait_count * TRAIT_MAX_SCORE) * PERSONALITY_WEIGHT,
        weight=PERSONALITY_WEIGHT,
    )


def score_industry(mentor, mentee) -> FactorScore | None:
    mentor_industry = getattr(mentor, "industry", None)
    mentee_industry = getattr(mentee, "industry", None)
    if not mentor_industry or not mentee_industry:
        return None

    if mentor_industry == mentee_industry:
        earned = INDUSTRY_WEIGHT
    elif mentee_industry in (getattr(mentor, "related_industries", None) or []):
        earned = RELATED_INDUSTRY_POINTS
    else:
        earned = 0

    return FactorScore(earned=earned, weight=INDUSTRY_WEIGHT)


def score_skills(mentor, mentee) -> FactorScore | None:
    """
    Share of the mentee's desired skills the mentor has, case-insensitively.

    Skills belong to the industry group: they only count when both profiles
    have an industry set.
    """
    if not getattr(mentor, "industry", None) or not getattr(mentee, "industry", None):
        return None

    mentor_skills = getattr(mentor, "skills", None)
    desired_skills = [
        skill
        for skill in (getattr(mentee, "skills_to_improve", None) or [])
        if isinstance(skill, str)
    ]
    if mentor_skills is None or not desired_skills:
        return None

    mentor_skill_set = {
        skill.lower() for skill in mentor_skills if isinstance(skill, str)
    }
    matched = sum(1 for skill in desired_skills if skill.lower() in mentor_skill_set)

    return FactorScore(
        earned=matched / len(desired_skills) * SKILLS_WEIGHT, weight=SKILLS_WEIGHT
    )


def score_experience(mentor, mentee) -> FactorScore | None:
    mentor_years = getattr(mentor, "experience_years", None)
    mentee_years = getattr(mentee, "experience_years", None)
    if not isinstance(mentor_years, Real) or not isinstance(mentee_years, Real):
        return None

    gap = mentor_years - mentee_years
    if IDEAL_EXPERIENCE_GAP_MIN <= gap <= IDEAL_EXPERIENCE_GAP_MAX:
        earned = EXPERIENCE_WEIGHT
    elif gap > 0:
        earned = POSITIVE_EXPERIENCE_GAP_POINTS
    else:
        earned = 0

    return FactorScore(earned=earned, weight=EXPERIENCE_WEIGHT)


def score_career_goals(mentor, mentee) -> FactorScore | None:
    """
    Share of the mentee's goals found inside any of the mentor's achievements.

    Matching is a case-insensitive substring test.
    """
    achievements = getattr(mentor, "career_achievements", None)
    goals = [
        goal
        for goal in (getattr(mentee, "career_goals", None) or [])
        if isinstance(goal, str)
    ]
    if achievements is None or not goals:
        return None

    lowered_achievements = [
        achievement.lower() for achievement in achievements if isinstance(achievement, str)
    ]
    matched = sum(
        1
        for goal in goals
        if any(goal.lower() in achievement for achievement in lowered_achievements)
    )

    return FactorScore(
        earned=matched / len(goals) * CAREER_GOALS_WEIGHT, weight=CAREER_GOALS_WEIGHT
    )


FACTOR_SCORERS = (
    score_personality,
    score_industry,
    score_skills,
    score_experience,
    score_career_goals,
)


def calculate_compatibility_score(mentor, mentee) -> int:
    """
    Score how well a mentor fits a mentee.

    The score is asymmetric: swapping the arguments generally changes the result.

    Args:
        mentor: Mentor-side profile (industry, related_industries, skills,
            experience_years, personality_traits, career_achievements).
        mentee: Mentee-side profile (industry, skills_to_improve, career_goals,
            personality_traits, experience_years).

    Returns:
        int: Compatibility score between 0 and 100, or 50 when no factor applies.
    """
    factors = [
        factor
        for factor in (scorer(mentor, mentee) for scorer in FACTOR_SCORERS)
        if factor is not None
    ]
    applicable_weight = sum(factor.weight for factor in factors)
    if applicable_weight == 0:
        return NEUTRAL_COMPATIBILITY_SCORE

    earned = sum(factor.earned for factor in factors)
    # Half rounds up, never to even.
    score = math.floor(earned / applicable_weight * 100 + 0.5)
    return max(0, min(100, score))
