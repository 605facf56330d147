"""
Tests for profile text rendering and cache keys.
"""
import pytest

from core.exceptions import MalformedInputError
from core.matcher.models import StudentProfile
from core.matcher.profile_text import EMPTY_PROFILE_TEXT, profile_cache_key, profile_to_text
from core.matcher.vocabulary import format_inr, income_bracket


class TestProfileToText:

    def test_empty_profile_uses_generic_sentence(self):
        text = profile_to_text(StudentProfile())
        assert text == EMPTY_PROFILE_TEXT
        assert text.strip()

    def test_state_clauses(self):
        text = profile_to_text(StudentProfile(state="Kerala"))
        assert "Student from Kerala" in text
        assert "Looking for scholarships in Kerala" in text

    def test_category_expanded(self):
        text = profile_to_text(StudentProfile(category="SC"))
        assert "Scheduled Caste (SC) student" in text

    def test_general_category(self):
        assert "General category student" in profile_to_text(StudentProfile(category="General"))

    def test_unknown_category_kept_verbatim(self):
        assert "Category: Minority" in profile_to_text(StudentProfile(category="Minority"))

    @pytest.mark.parametrize("income,phrase", [
        ("90000", "Economically weaker family"),
        ("100000", "Economically weaker family"),
        ("200000", "Low income family"),
        ("450000", "Lower middle income family"),
        ("700000", "Middle income family"),
    ])
    def test_income_brackets(self, income, phrase):
        assert phrase in profile_to_text(StudentProfile(income=income))

    def test_income_above_brackets_has_amount_only(self):
        text = profile_to_text(StudentProfile(income="1200000"))
        assert "Family income: Rs. 12,00,000 per annum" in text
        assert "income family" not in text

    def test_non_numeric_income_raises(self):
        with pytest.raises(MalformedInputError):
            profile_to_text(StudentProfile(income="about two lakh"))

    def test_education_level_aliases(self):
        text = profile_to_text(StudentProfile(education_level="postgraduate"))
        assert "master degree" in text
        assert "PG" in text

    def test_disability_only_when_true(self):
        assert "PwD" in profile_to_text(StudentProfile(disability=True))
        assert profile_to_text(StudentProfile(disability=False)) == EMPTY_PROFILE_TEXT

    def test_rural_area(self):
        assert "Rural area student" in profile_to_text(StudentProfile(area="rural"))

    def test_deterministic(self):
        profile = StudentProfile(state="Bihar", category="OBC", income="150000", gender="female")
        assert profile_to_text(profile) == profile_to_text(profile)

    def test_ends_with_period(self):
        assert profile_to_text(StudentProfile(state="Goa")).endswith(".")


class TestProfileCacheKey:

    def test_empty_profile_key(self):
        assert profile_cache_key(StudentProfile()) == "||||||||"

    def test_field_order_is_fixed(self):
        profile = StudentProfile(
            state="Assam", category="ST", income="50000", education_level="class_12",
            gender="male", disability=True, religion="Christian", area="rural", course="arts"
        )
        assert profile_cache_key(profile) == "Assam|ST|50000|class_12|male|1|Christian|rural|arts"

    def test_disability_normalized(self):
        assert profile_cache_key(StudentProfile(disability=False)).split("|")[5] == "0"
        assert profile_cache_key(StudentProfile(disability=True)).split("|")[5] == "1"
        assert profile_cache_key(StudentProfile()).split("|")[5] == ""

    def test_equal_profiles_share_key(self):
        a = StudentProfile.from_dict({"state": "Goa", "income": 100000})
        b = StudentProfile.from_dict({"state": "Goa", "income": "100000"})
        assert profile_cache_key(a) == profile_cache_key(b)

    def test_different_fields_different_keys(self):
        assert profile_cache_key(StudentProfile(state="Goa")) != profile_cache_key(StudentProfile(course="Goa"))


class TestVocabulary:

    @pytest.mark.parametrize("amount,expected", [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (250000, "2,50,000"),
        (12345678, "1,23,45,678"),
    ])
    def test_format_inr(self, amount, expected):
        assert format_inr(amount) == expected

    def test_bracket_bounds_inclusive(self):
        assert income_bracket(100000) == "economically_weaker"
        assert income_bracket(100001) == "low"
        assert income_bracket(800000) == "middle"
        assert income_bracket(800001) is None
