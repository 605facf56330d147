#!/usr/bin/env python3
"""
Profile Text Encoder - Render a student profile for embedding.

The phrasing mirrors scholarship_text so both sides of the comparison
land in the same region of the embedding space: same income brackets,
same education-level aliases, same category names.
"""
from typing import List

from core.matcher.models import StudentProfile, WILDCARD, parse_income
from core.matcher.vocabulary import CATEGORY_NAMES, format_inr, income_bracket

EMPTY_PROFILE_TEXT = "Student seeking scholarship opportunities in India, nationwide scholarships"

CACHE_KEY_DELIMITER = "|"

EDUCATION_LEVEL_PHRASES = {
    'class_1_to_8': 'Studying in Class 1 to 8, primary school, elementary, middle school student',
    'class_9': 'Studying in Class 9, 9th grade, secondary school student',
    'class_10': 'Studying in Class 10, 10th grade, SSLC, matric level student',
    'class_11': 'Studying in Class 11, 11th grade, plus one, intermediate first year, junior college',
    'class_12': 'Studying in Class 12, 12th grade, plus two, HSC, pre-university, intermediate second year',
    'undergraduate': 'Undergraduate student, pursuing bachelor degree, graduation, UG, college student, BA, BSc, BCom, BTech, BE',
    'postgraduate': 'Postgraduate student, pursuing master degree, PG, post graduation, MA, MSc, MCom, MTech, ME, MBA',
    'professional': 'Professional course student, engineering, medical, law, MBBS, LLB student',
    'diploma': 'Diploma student, polytechnic, ITI, vocational training',
    'phd': 'PhD student, doctoral researcher, pursuing doctorate',
}

INCOME_PHRASES = {
    'economically_weaker': 'Economically weaker family, very low income, BPL, below poverty line',
    'low': 'Low income family, economically disadvantaged, needs financial support',
    'lower_middle': 'Lower middle income family',
    'middle': 'Middle income family',
}


def profile_to_text(profile: StudentProfile) -> str:
    """
    Convert a profile into a natural-language description.

    Emits one clause group per present field. An empty profile yields a
    fixed generic sentence, never an empty string.

    Raises:
        MalformedInputError: if the income is not a whole number
    """
    parts: List[str] = []

    if profile.state:
        parts.append(f"Student from {profile.state}")
        parts.append(f"Looking for scholarships in {profile.state}")
        parts.append(f"State-specific scholarship seeker from {profile.state}")

    if profile.category:
        name = CATEGORY_NAMES.get(profile.category)
        if name and profile.category == 'General':
            parts.append('General category student')
        elif name:
            parts.append(f"{name} student, {profile.category} category eligible")
        else:
            parts.append(f"Category: {profile.category}")

    if profile.gender == 'female':
        parts.append('Female student, girl student, women scholarship seeker')
    elif profile.gender == 'male':
        parts.append('Male student')

    if profile.education_level:
        parts.append(
            EDUCATION_LEVEL_PHRASES.get(profile.education_level)
            or f"Education level: {profile.education_level}"
        )

    if profile.course:
        parts.append(f"Field of study: {profile.course}")
        parts.append(f"Studying {profile.course}")

    income = parse_income(profile.income)
    if income is not None:
        parts.append(f"Family income: Rs. {format_inr(income)} per annum")
        bracket = income_bracket(income)
        if bracket:
            parts.append(INCOME_PHRASES[bracket])

    if profile.disability:
        parts.append('Student with disability, PwD, differently abled, special needs')

    if profile.religion and profile.religion != WILDCARD:
        parts.append(f"{profile.religion} community student")
        parts.append(f"Religion: {profile.religion}")

    if profile.area == 'rural':
        parts.append('Rural area student, from village, countryside')
    elif profile.area == 'urban':
        parts.append('Urban area student, from city, metropolitan')

    if not parts:
        return EMPTY_PROFILE_TEXT

    return '. '.join(parts) + '.'


def profile_cache_key(profile: StudentProfile) -> str:
    """
    Deterministic cache key for a profile.

    Fields are emitted in a fixed order; absent fields become empty strings
    and the disability flag is normalized to '1', '0' or '' (absent).
    """
    if profile.disability is None:
        disability = ''
    else:
        disability = '1' if profile.disability else '0'

    key_parts = [
        profile.state or '',
        profile.category or '',
        profile.income or '',
        profile.education_level or '',
        profile.gender or '',
        disability,
        profile.religion or '',
        profile.area or '',
        profile.course or '',
    ]
    return CACHE_KEY_DELIMITER.join(key_parts)
