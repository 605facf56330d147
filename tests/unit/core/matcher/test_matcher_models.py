"""
Tests for matcher domain models: restrictions, profiles, scholarships, records.
"""
import unittest
from datetime import datetime, timezone

from core.exceptions import MalformedInputError
from core.matcher.models import (
    EmbeddingRecord,
    Eligibility,
    RestrictedTo,
    Scholarship,
    StudentProfile,
    UNIVERSAL,
    parse_income,
    parse_restriction,
)
from tests.mocks.embedding_mocks import make_scholarship_dict


class TestRestriction(unittest.TestCase):

    def test_wildcard_list_is_universal(self):
        self.assertIs(parse_restriction(["all"]), UNIVERSAL)

    def test_wildcard_anywhere_is_universal(self):
        self.assertTrue(parse_restriction(["Kerala", "all"]).is_universal)

    def test_single_string(self):
        restriction = parse_restriction("female")
        self.assertEqual(restriction, RestrictedTo(("female",)))
        self.assertTrue(restriction.allows("female"))
        self.assertFalse(restriction.allows("male"))

    def test_none_is_universal(self):
        self.assertTrue(parse_restriction(None).is_universal)

    def test_empty_list_allows_nothing(self):
        restriction = parse_restriction([])
        self.assertFalse(restriction.is_universal)
        self.assertFalse(restriction.allows("anything"))

    def test_universal_allows_everything(self):
        self.assertTrue(UNIVERSAL.allows("whatever"))


class TestParseIncome(unittest.TestCase):

    def test_absent(self):
        self.assertIsNone(parse_income(None))
        self.assertIsNone(parse_income(""))

    def test_integer_string(self):
        self.assertEqual(parse_income("150000"), 150000)
        self.assertEqual(parse_income(" 42 "), 42)

    def test_non_numeric_fails_fast(self):
        for bad in ("1.5 lakh", "abc", "12,000", "1e5"):
            with self.assertRaises(MalformedInputError):
                parse_income(bad)


class TestStudentProfile(unittest.TestCase):

    def test_from_dict_camel_case(self):
        profile = StudentProfile.from_dict({
            "state": "Punjab",
            "educationLevel": "undergraduate",
            "income": 300000,
            "disability": "true",
        })
        self.assertEqual(profile.state, "Punjab")
        self.assertEqual(profile.education_level, "undergraduate")
        self.assertEqual(profile.income, "300000")
        self.assertTrue(profile.disability)

    def test_blank_fields_are_absent(self):
        profile = StudentProfile.from_dict({"state": "", "income": "", "category": None})
        self.assertTrue(profile.is_empty())

    def test_validate_rejects_bad_income(self):
        with self.assertRaises(MalformedInputError):
            StudentProfile(income="lots").validate()

    def test_income_amount(self):
        self.assertEqual(StudentProfile(income="5000").income_amount, 5000)


class TestScholarship(unittest.TestCase):

    def test_from_dict_defaults_to_approved(self):
        scholarship = Scholarship.from_dict(make_scholarship_dict("x"))
        self.assertTrue(scholarship.is_approved)
        self.assertEqual(scholarship.type, "public")

    def test_status_and_owner(self):
        scholarship = Scholarship.from_dict(make_scholarship_dict(
            "p1", status="pending", type="private", createdBy="donor-7",
            createdAt="2026-01-05T10:00:00Z"
        ))
        self.assertFalse(scholarship.is_approved)
        self.assertEqual(scholarship.owner_id, "donor-7")
        self.assertEqual(scholarship.created_at, datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc))

    def test_default_status_override(self):
        data = make_scholarship_dict("p2")
        scholarship = Scholarship.from_dict(data, default_status="pending")
        self.assertEqual(scholarship.status, "pending")

    def test_eligibility_parsing(self):
        scholarship = Scholarship.from_dict(make_scholarship_dict("x", eligibility={
            "states": ["Kerala"],
            "maxIncome": 0,
            "religion": "Muslim",
        }))
        elig = scholarship.eligibility
        self.assertEqual(elig.states, RestrictedTo(("Kerala",)))
        self.assertEqual(elig.max_income, 0)
        self.assertEqual(elig.religion, RestrictedTo(("Muslim",)))

    def test_eligibility_to_dict(self):
        elig = Eligibility.from_dict({"states": ["all"], "gender": "female", "maxIncome": 100})
        data = elig.to_dict()
        self.assertEqual(data["states"], ["all"])
        self.assertEqual(data["gender"], "female")
        self.assertEqual(data["maxIncome"], 100)

    def test_summary_is_camel_case(self):
        summary = Scholarship.from_dict(make_scholarship_dict("x")).to_summary()
        self.assertEqual(summary["id"], "x")
        self.assertIn("applicationSteps", summary)
        self.assertIn("officialUrl", summary)


class TestEmbeddingRecord(unittest.TestCase):

    def test_dict_uses_stored_file_format(self):
        record = EmbeddingRecord(
            id="x",
            embedding=[0.1, 0.2],
            model="text-embedding-ada-002",
            version="1.1.0",
            generated_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
            text_hash="abcdef0123456789",
        )
        data = record.to_dict()
        self.assertEqual(set(data), {"id", "embedding", "model", "version", "generatedAt", "textHash"})
        self.assertEqual(EmbeddingRecord.from_dict(data), record)

    def test_legacy_record_without_metadata(self):
        record = EmbeddingRecord.from_dict({"id": 7, "embedding": [1, 2]})
        self.assertEqual(record.id, "7")
        self.assertEqual(record.embedding, [1.0, 2.0])
        self.assertIsNone(record.text_hash)
        self.assertIsNone(record.version)


if __name__ == '__main__':
    unittest.main()
