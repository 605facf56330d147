"""
Tests for scholarship text rendering and content hashing.
"""
from core.matcher.scholarship_text import (
    EMBEDDING_VERSION,
    TEXT_HASH_LENGTH,
    generate_text_hash,
    scholarship_text_hash,
    scholarship_to_text,
)
from tests.mocks.embedding_mocks import make_scholarship


class TestScholarshipToText:

    def test_identity_and_description(self):
        text = scholarship_to_text(make_scholarship("abc", name="Merit Award", description="For toppers"))
        assert text.startswith("Merit Award scholarship. For toppers")

    def test_universal_state_phrase(self):
        text = scholarship_to_text(make_scholarship())
        assert "Available across all states in India" in text

    def test_specific_states_rendered_twice(self):
        text = scholarship_to_text(make_scholarship(eligibility={"states": ["Kerala", "Goa"]}))
        assert "For students from Kerala, Goa" in text
        assert "State-specific scholarship for Kerala, Goa" in text

    def test_open_categories(self):
        assert "Open to all categories" in scholarship_to_text(make_scholarship())

    def test_categories_expanded_in_fixed_order(self):
        text = scholarship_to_text(make_scholarship(eligibility={"categories": ["OBC", "SC"]}))
        sc = text.index("Scheduled Caste (SC) students eligible")
        obc = text.index("Other Backward Class (OBC) students eligible")
        assert sc < obc

    def test_income_limit_with_bracket(self):
        text = scholarship_to_text(make_scholarship(eligibility={"maxIncome": 250000}))
        assert "Family income limit: Rs. 2,50,000 per annum" in text
        assert "For low income families" in text

    def test_no_income_limit(self):
        assert "No income restriction" in scholarship_to_text(make_scholarship())

    def test_education_aliases(self):
        text = scholarship_to_text(make_scholarship(eligibility={"educationLevels": ["postgraduate"]}))
        assert "master degree, PG, post graduation" in text

    def test_open_dimensions_omitted(self):
        text = scholarship_to_text(make_scholarship())
        assert "female" not in text
        assert "disabilities" not in text
        assert "community" not in text
        assert "rural" not in text

    def test_restrictive_dimensions_included(self):
        text = scholarship_to_text(make_scholarship(eligibility={
            "gender": "female",
            "disability": True,
            "religion": ["Muslim", "Sikh"],
            "area": "rural",
            "courses": ["engineering"],
        }))
        assert "For female students only" in text
        assert "For students with disabilities" in text
        assert "For Muslim, Sikh community students" in text
        assert "For rural area students" in text
        assert "Field of study: engineering" in text

    def test_private_scholarship_marked(self):
        text = scholarship_to_text(make_scholarship(type="private", status="approved"))
        assert "Private scholarship offered by a donor" in text

    def test_benefits_clause(self):
        assert "Benefits: Rs. 10,000 per year" in scholarship_to_text(make_scholarship())


class TestTextHash:

    def test_hash_length(self):
        assert len(generate_text_hash("anything")) == TEXT_HASH_LENGTH

    def test_known_md5_prefix(self):
        # md5("hello") = 5d41402abc4b2a76b9719d911017c592
        assert generate_text_hash("hello") == "5d41402abc4b2a76"

    def test_deterministic_for_same_content(self):
        assert scholarship_text_hash(make_scholarship("x")) == scholarship_text_hash(make_scholarship("x"))

    def test_changes_with_content(self):
        before = scholarship_text_hash(make_scholarship("x"))
        after = scholarship_text_hash(make_scholarship("x", benefits="Rs. 20,000 per year"))
        assert before != after

    def test_version_constant(self):
        assert EMBEDDING_VERSION == "1.1.0"
