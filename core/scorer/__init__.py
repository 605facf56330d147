#!/usr/bin/env python3
"""
Scoring Module - Eligibility scoring and hybrid ranking.

Public API:
- RecommendationService: Hybrid ranker (eligibility + semantic fusion)
- ScoredScholarship / RecommendationResult: ranking outputs
- score_eligibility / eligibility_warnings: rule-based scoring

Modules:
- eligibility.py: Additive per-dimension eligibility scoring and warnings
- models.py: Result data structures
- service.py: RecommendationService orchestrator
"""

from core.scorer.eligibility import EligibilityResult, score_eligibility, eligibility_warnings
from core.scorer.models import (
    RecommendationResult,
    ScoredScholarship,
    STRATEGY_HYBRID,
    STRATEGY_RULE_BASED,
)
from core.scorer.service import RecommendationService, fuse_scores, semantic_score_from_similarity

__all__ = [
    'RecommendationService',
    'RecommendationResult',
    'ScoredScholarship',
    'EligibilityResult',
    'score_eligibility',
    'eligibility_warnings',
    'fuse_scores',
    'semantic_score_from_similarity',
    'STRATEGY_HYBRID',
    'STRATEGY_RULE_BASED',
]
