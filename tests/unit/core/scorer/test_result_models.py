"""
Tests for ranking result serialization.
"""
from core.scorer.models import RecommendationResult, ScoredScholarship, STRATEGY_HYBRID, STRATEGY_RULE_BASED
from tests.mocks.embedding_mocks import make_scholarship


def _scored(sid="a", **kwargs):
    defaults = dict(match_score=71, eligibility_score=80, semantic_score=50, match_reasons=["Available in Goa"])
    defaults.update(kwargs)
    return ScoredScholarship(scholarship=make_scholarship(sid), **defaults)


class TestScoredScholarship:

    def test_hybrid_breakdown(self):
        data = _scored().to_dict(include_breakdown=True)
        assert data["id"] == "a"
        assert data["matchScore"] == 71
        assert data["matchReasons"] == ["Available in Goa"]
        assert data["scoreBreakdown"] == {"eligibility": 80, "semantic": 50, "final": 71}
        assert "eligibilityWarnings" not in data

    def test_rule_based_breakdown_has_final_only(self):
        data = _scored(semantic_score=None, match_score=80).to_dict()
        assert data["scoreBreakdown"] == {"final": 80}

    def test_warnings_included_when_present(self):
        data = _scored(warnings=["Only for female students"]).to_dict()
        assert data["eligibilityWarnings"] == ["Only for female students"]


class TestRecommendationResult:

    def test_response_shape(self):
        result = RecommendationResult(
            recommendations=[_scored("a"), _scored("b")],
            suggestions=[_scored("c", match_score=55, match_reasons=[], warnings=["Income limit is Rs. 1,00,000"])],
            strategy=STRATEGY_HYBRID,
        )
        data = result.to_dict()

        assert set(data) == {"recommendations", "semanticSuggestions", "totalMatches", "strategy"}
        assert data["totalMatches"] == 2
        assert data["strategy"] == "hybrid"
        assert data["recommendations"][0]["scoreBreakdown"]["semantic"] == 50
        assert data["semanticSuggestions"][0]["id"] == "c"

    def test_rule_based_result(self):
        result = RecommendationResult(recommendations=[_scored(semantic_score=None)], strategy=STRATEGY_RULE_BASED)
        data = result.to_dict()
        assert not result.is_hybrid
        assert data["semanticSuggestions"] == []
        assert data["recommendations"][0]["scoreBreakdown"] == {"final": 71}
