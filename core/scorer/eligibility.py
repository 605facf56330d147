#!/usr/bin/env python3
"""
Eligibility Scoring - Rule-based additive match between profile and scholarship.

Each dimension present in the profile contributes at most its weight.
The score is not normalized: only present dimensions can contribute, so
callers should treat it as a relative signal (max 110 with default
weights), not a percentage.

Reasons are added only for restrictive criteria that matched; a match
against an open-to-all criterion says nothing about the student.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from core.config_loader import EligibilityWeights
from core.matcher.models import Eligibility, StudentProfile, parse_income
from core.matcher.vocabulary import format_inr

# Number of allowed states listed in a state-mismatch warning
MAX_STATES_IN_WARNING = 3


@dataclass
class EligibilityResult:
    score: int = 0
    reasons: List[str] = field(default_factory=list)


def score_eligibility(
    profile: StudentProfile,
    eligibility: Eligibility,
    weights: Optional[EligibilityWeights] = None
) -> EligibilityResult:
    """
    Score a profile against a scholarship's eligibility criteria.

    Raises:
        MalformedInputError: if the profile income is not a whole number
    """
    weights = weights or EligibilityWeights()
    result = EligibilityResult()

    if profile.state:
        if eligibility.states.is_universal:
            result.score += weights.state_universal
        elif eligibility.states.allows(profile.state):
            result.score += weights.state_specific
            result.reasons.append(f"Available in {profile.state}")

    if profile.category and eligibility.categories.allows(profile.category):
        result.score += weights.category
        if not eligibility.categories.is_universal:
            result.reasons.append(f"Matches your category ({profile.category})")

    income = parse_income(profile.income)
    if income is not None:
        if eligibility.max_income is None:
            result.score += weights.income
        elif income <= eligibility.max_income:
            result.score += weights.income
            result.reasons.append(f"Within income limit (Rs. {format_inr(eligibility.max_income)})")

    if profile.education_level and eligibility.education_levels.allows(profile.education_level):
        result.score += weights.education_level
        if not eligibility.education_levels.is_universal:
            result.reasons.append("Matches your education level")

    if profile.gender and eligibility.gender.allows(profile.gender):
        result.score += weights.gender
        if not eligibility.gender.is_universal:
            result.reasons.append(f"For {profile.gender} students")

    if profile.disability is not None:
        if not eligibility.disability:
            result.score += weights.disability
        elif profile.disability:
            result.score += weights.disability
            result.reasons.append("For students with disabilities")

    if profile.religion and eligibility.religion.allows(profile.religion):
        result.score += weights.religion
        if not eligibility.religion.is_universal:
            result.reasons.append(f"For {profile.religion} community")

    if profile.area and eligibility.area.allows(profile.area):
        result.score += weights.area
        if not eligibility.area.is_universal:
            result.reasons.append(f"For {profile.area} area students")

    if profile.course and eligibility.courses.allows(profile.course):
        result.score += weights.course
        if not eligibility.courses.is_universal:
            result.reasons.append(f"Matches your field ({profile.course})")

    return result


def eligibility_warnings(profile: StudentProfile, eligibility: Eligibility) -> List[str]:
    """
    Describe criteria the profile does not meet.

    Informational only: used for semantic suggestions that did not clear
    the eligibility bar. Covers income, state, gender and category.
    """
    warnings: List[str] = []

    income = parse_income(profile.income)
    if income is not None and eligibility.max_income is not None and income > eligibility.max_income:
        warnings.append(f"Income limit is Rs. {format_inr(eligibility.max_income)}")

    states = eligibility.states
    if profile.state and not states.allows(profile.state):
        listed = ', '.join(states.values[:MAX_STATES_IN_WARNING])
        if len(states.values) > MAX_STATES_IN_WARNING:
            listed += '...'
        warnings.append(f"Only for students from {listed}")

    gender = eligibility.gender
    if profile.gender and not gender.allows(profile.gender):
        warnings.append(f"Only for {'/'.join(gender.values)} students")

    categories = eligibility.categories
    if profile.category and not categories.allows(profile.category):
        warnings.append(f"Only for {', '.join(categories.values)} categories")

    return warnings
