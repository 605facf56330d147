#!/usr/bin/env python3
"""
Scholarship Text Encoder - Render a scholarship for embedding.

The text is tuned for semantic matching against student profiles:
- state lists are phrased twice to reinforce state matching
- categories and education levels are expanded into aliases
- income limits map onto the same brackets as profile_text
- gender/disability/religion/area clauses appear only when restrictive

The rendering must stay deterministic: the text hash stored with each
embedding is how stale embeddings are detected. Bump EMBEDDING_VERSION
whenever the phrasing below changes.
"""
import hashlib
from typing import List

from core.matcher.models import Scholarship
from core.matcher.vocabulary import CATEGORY_NAMES, CATEGORY_ORDER, format_inr, income_bracket

# Current embedding schema version - increment when text format changes
EMBEDDING_VERSION = "1.1.0"

TEXT_HASH_LENGTH = 16

EDUCATION_LEVEL_PHRASES = {
    'class_1_to_8': 'Class 1 to 8, primary school, elementary, middle school',
    'class_9': 'Class 9, 9th grade, secondary school',
    'class_10': 'Class 10, 10th grade, SSLC, matric, secondary school',
    'class_11': 'Class 11, 11th grade, plus one, intermediate first year, junior college',
    'class_12': 'Class 12, 12th grade, plus two, HSC, pre-university, intermediate second year',
    'undergraduate': 'Undergraduate, bachelor degree, graduation, UG, college, BA, BSc, BCom, BTech, BE',
    'postgraduate': 'Postgraduate, master degree, PG, post graduation, MA, MSc, MCom, MTech, ME, MBA',
    'professional': 'Professional courses, engineering, medical, law, MBBS, LLB, chartered accountancy',
    'diploma': 'Diploma courses, polytechnic, ITI, vocational training',
    'phd': 'PhD, doctoral, research, doctorate',
}

INCOME_PHRASES = {
    'economically_weaker': 'For economically weaker families, very low income, BPL, below poverty line',
    'low': 'For low income families, economically disadvantaged',
    'lower_middle': 'For lower middle income families',
    'middle': 'For middle income families',
}


def _category_clauses(categories) -> List[str]:
    known = [c for c in CATEGORY_ORDER if categories.allows(c)]
    unknown = [c for c in categories.values if c not in CATEGORY_NAMES]

    phrases = [f"{CATEGORY_NAMES[category]} students eligible" for category in known]
    for category in unknown:
        phrases.append(f"{category} category students eligible")
    return phrases


def scholarship_to_text(s: Scholarship) -> str:
    """Convert a scholarship into a rich text representation for embedding."""
    parts: List[str] = []
    elig = s.eligibility

    # Core identity
    parts.append(f"{s.name} scholarship")
    if s.type == 'private':
        parts.append('Private scholarship offered by a donor')
    if s.description:
        parts.append(s.description)

    # State, phrased twice for specific lists
    if elig.states.is_universal:
        parts.append('Available across all states in India, nationwide scholarship, pan-India')
    else:
        states = ', '.join(elig.states.values)
        parts.append(f"For students from {states}")
        parts.append(f"State-specific scholarship for {states}")

    # Category with full names
    if elig.categories.is_universal:
        parts.append('Open to all categories')
    else:
        phrases = _category_clauses(elig.categories)
        if phrases:
            parts.append('. '.join(phrases))

    # Income with bracket semantics
    if elig.max_income is not None:
        parts.append(f"Family income limit: Rs. {format_inr(elig.max_income)} per annum")
        bracket = income_bracket(elig.max_income)
        if bracket:
            parts.append(INCOME_PHRASES[bracket])
    else:
        parts.append('No income restriction, open to all income levels')

    # Education level with aliases
    levels = elig.education_levels
    if not levels.is_universal and levels.values:
        expanded = '; '.join(EDUCATION_LEVEL_PHRASES.get(l, l) for l in levels.values)
        parts.append(f"Education levels: {expanded}")

    gender = elig.gender
    if not gender.is_universal:
        if gender.allows('female') and not gender.allows('male'):
            parts.append('For female students only, girls scholarship, women empowerment')
        elif gender.allows('male') and not gender.allows('female'):
            parts.append('For male students only')

    if elig.disability:
        parts.append('For students with disabilities, PwD, differently abled, special needs')

    if not elig.religion.is_universal:
        parts.append(f"For {', '.join(elig.religion.values)} community students")

    area = elig.area
    if not area.is_universal:
        if area.allows('rural') and not area.allows('urban'):
            parts.append('For rural area students, village, countryside')
        elif area.allows('urban') and not area.allows('rural'):
            parts.append('For urban area students, city, metropolitan')

    courses = elig.courses
    if not courses.is_universal and courses.values:
        parts.append(f"Field of study: {', '.join(courses.values)}")

    if s.benefits:
        parts.append(f"Benefits: {s.benefits}")

    return '. '.join(parts)


def generate_text_hash(text: str) -> str:
    """Short content hash used to detect stale embeddings."""
    return hashlib.md5(text.encode('utf-8')).hexdigest()[:TEXT_HASH_LENGTH]


def scholarship_text_hash(s: Scholarship) -> str:
    return generate_text_hash(scholarship_to_text(s))
