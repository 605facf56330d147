#!/usr/bin/env python3
"""
Scoring Models - Data structures for ranking results.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from core.matcher.models import Scholarship

STRATEGY_HYBRID = "hybrid"
STRATEGY_RULE_BASED = "rule-based"


@dataclass
class ScoredScholarship:
    """Scored scholarship with score breakdown, reasons and warnings."""
    scholarship: Scholarship

    match_score: int = 0
    eligibility_score: int = 0
    semantic_score: Optional[int] = None  # None = no stored vector / not requested

    match_reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def scholarship_id(self) -> str:
        return self.scholarship.id

    def to_dict(self, include_breakdown: bool = False) -> Dict[str, Any]:
        data = self.scholarship.to_summary()
        data['matchScore'] = self.match_score
        data['matchReasons'] = list(self.match_reasons)
        if self.warnings:
            data['eligibilityWarnings'] = list(self.warnings)
        if include_breakdown:
            data['scoreBreakdown'] = {
                'eligibility': self.eligibility_score,
                'semantic': self.semantic_score,
                'final': self.match_score,
            }
        else:
            data['scoreBreakdown'] = {'final': self.match_score}
        return data


@dataclass
class RecommendationResult:
    """Ranked recommendations plus 'you might also like' suggestions."""
    recommendations: List[ScoredScholarship] = field(default_factory=list)
    suggestions: List[ScoredScholarship] = field(default_factory=list)
    strategy: str = STRATEGY_RULE_BASED

    @property
    def total_matches(self) -> int:
        return len(self.recommendations)

    @property
    def is_hybrid(self) -> bool:
        return self.strategy == STRATEGY_HYBRID

    def to_dict(self) -> Dict[str, Any]:
        return {
            'recommendations': [r.to_dict(include_breakdown=self.is_hybrid) for r in self.recommendations],
            'semanticSuggestions': [s.to_dict() for s in self.suggestions],
            'totalMatches': self.total_matches,
            'strategy': self.strategy,
        }
