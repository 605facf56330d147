#!/usr/bin/env python3
"""
Recommendation Service - Hybrid ranking of scholarships for a student profile.

Fuses two signals:
- Eligibility score: rule-based match on structured criteria (always)
- Semantic score: cosine similarity between profile and scholarship
  embeddings, scaled 0-100 (only when requested and available)

The semantic path is best effort. Provider or store failures are logged
and the request falls back to rule-based scoring; only malformed profile
input propagates to the caller.
"""

from typing import List, Optional, Dict, Sequence
import logging
import math

from core.cache.profile_embedding_cache import ProfileEmbeddingCache
from core.config_loader import RankingConfig
from core.exceptions import ProviderUnavailableError, StoreUnavailableError
from core.llm.interfaces import EmbeddingProvider
from core.matcher.embedding_store import EmbeddingStore
from core.matcher.models import EmbeddingRecord, Scholarship, StudentProfile
from core.matcher.similarity import SimilarityCalculator

from core.scorer.eligibility import eligibility_warnings, score_eligibility
from core.scorer.models import (
    RecommendationResult,
    ScoredScholarship,
    STRATEGY_HYBRID,
    STRATEGY_RULE_BASED,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def fuse_scores(eligibility_score: int, semantic_score: int, config: RankingConfig) -> int:
    """Weighted blend of eligibility and semantic scores, rounded to an integer."""
    return round_half_up(
        config.eligibility_weight * eligibility_score + config.semantic_weight * semantic_score
    )


def semantic_score_from_similarity(similarity: float) -> int:
    """Scale cosine similarity to 0-100, flooring negative similarity at zero."""
    return round_half_up(max(0.0, similarity) * 100)


class RecommendationService:
    """
    Hybrid ranker over the approved scholarship set.

    Collaborators are injected so tests can use isolated instances:
    the profile cache (and its provider) for profile vectors, the
    embedding store for scholarship vectors.
    """

    def __init__(
        self,
        profile_cache: ProfileEmbeddingCache,
        store: EmbeddingStore,
        config: Optional[RankingConfig] = None,
        provider: Optional[EmbeddingProvider] = None
    ):
        self.profile_cache = profile_cache
        self.store = store
        self.config = config or RankingConfig()
        self.provider = provider or profile_cache.provider
        self.similarity_calc = SimilarityCalculator()

    def _profile_vector(self, profile: StudentProfile) -> Optional[List[float]]:
        try:
            return self.profile_cache.get_or_compute(profile)
        except ProviderUnavailableError as e:
            logger.warning(f"Profile embedding unavailable, using rule-based scoring: {e}")
            return None

    def _stored_vectors(self, scholarships: Sequence[Scholarship]) -> Dict[str, EmbeddingRecord]:
        wanted = {s.id for s in scholarships}
        try:
            records = self.store.list_all()
        except StoreUnavailableError as e:
            logger.warning(f"Embedding store unavailable, skipping semantic scores: {e}")
            return {}
        return {r.id: r for r in records if r.id in wanted}

    def _semantic_reason(self, semantic_score: int) -> Optional[str]:
        if semantic_score >= self.config.strong_semantic_match:
            return f"Strong profile match ({semantic_score}% similarity)"
        if semantic_score >= self.config.good_semantic_match:
            return f"Good profile match ({semantic_score}% similarity)"
        return None

    def recommend(
        self,
        profile: StudentProfile,
        scholarships: Sequence[Scholarship],
        use_semantic_matching: bool = True
    ) -> RecommendationResult:
        """
        Rank scholarships for a profile.

        Args:
            profile: Student profile
            scholarships: Approved scholarships, in catalog order
            use_semantic_matching: Blend in embedding similarity when available

        Returns:
            RecommendationResult with ranked recommendations, semantic
            suggestions and the strategy that was actually used

        Raises:
            MalformedInputError: if the profile is malformed
        """
        profile.validate()
        scholarships = [s for s in scholarships if s.is_approved]

        vectors: Dict[str, EmbeddingRecord] = {}
        profile_vector = None
        if use_semantic_matching and scholarships:
            profile_vector = self._profile_vector(profile)
            if profile_vector is not None:
                vectors = self._stored_vectors(scholarships)

        hybrid = profile_vector is not None and bool(vectors)
        strategy = STRATEGY_HYBRID if hybrid else STRATEGY_RULE_BASED

        scored: List[ScoredScholarship] = []
        for scholarship in scholarships:
            eligibility = score_eligibility(profile, scholarship.eligibility, self.config.eligibility_weights)
            item = ScoredScholarship(
                scholarship=scholarship,
                match_score=eligibility.score,
                eligibility_score=eligibility.score,
                match_reasons=list(eligibility.reasons),
            )

            record = vectors.get(scholarship.id) if hybrid else None
            if record is not None:
                similarity = self.similarity_calc.calculate(profile_vector, record.embedding)
                item.semantic_score = semantic_score_from_similarity(similarity)
                item.match_score = fuse_scores(item.eligibility_score, item.semantic_score, self.config)
                reason = self._semantic_reason(item.semantic_score)
                if reason:
                    item.match_reasons.append(reason)

            logger.debug(
                f"Scholarship {scholarship.id}: eligibility={item.eligibility_score}, "
                f"semantic={item.semantic_score if item.semantic_score is not None else 'N/A'}, "
                f"final={item.match_score}"
            )
            scored.append(item)

        # Stable sort keeps catalog order among equal scores
        recommendations = [s for s in scored if s.match_score >= self.config.min_recommendation_score]
        recommendations.sort(key=lambda s: s.match_score, reverse=True)
        recommendations = recommendations[:self.config.max_recommendations]

        suggestions: List[ScoredScholarship] = []
        if hybrid:
            suggestions = self._semantic_suggestions(profile, scored, recommendations)

        logger.info(
            f"Ranked {len(scholarships)} scholarships ({strategy}): "
            f"{len(recommendations)} recommendations, {len(suggestions)} suggestions"
        )

        return RecommendationResult(
            recommendations=recommendations,
            suggestions=suggestions,
            strategy=strategy
        )

    def _semantic_suggestions(
        self,
        profile: StudentProfile,
        scored: List[ScoredScholarship],
        recommendations: List[ScoredScholarship]
    ) -> List[ScoredScholarship]:
        """Semantically close scholarships that did not make the primary list."""
        selected = {r.scholarship_id for r in recommendations}

        suggestions = []
        for item in scored:
            if item.scholarship_id in selected or item.semantic_score is None:
                continue
            if item.semantic_score < self.config.min_semantic_suggestion_score:
                continue
            suggestions.append(ScoredScholarship(
                scholarship=item.scholarship,
                match_score=item.semantic_score,
                eligibility_score=item.eligibility_score,
                semantic_score=item.semantic_score,
                warnings=eligibility_warnings(profile, item.scholarship.eligibility),
            ))

        suggestions.sort(key=lambda s: s.match_score, reverse=True)
        return suggestions[:self.config.max_semantic_suggestions]

    def search(
        self,
        query: str,
        scholarships: Sequence[Scholarship],
        top_k: Optional[int] = None
    ) -> List[Scholarship]:
        """
        Free-text semantic search over approved scholarships.

        Falls back to the first ``top_k`` scholarships in catalog order when
        no embeddings exist or the provider/store is unavailable.
        """
        k = top_k if top_k is not None else self.config.search_top_k
        scholarships = [s for s in scholarships if s.is_approved]
        fallback = scholarships[:k]

        by_id = {s.id: s for s in scholarships}
        try:
            records = [r for r in self.store.list_all() if r.id in by_id]
        except StoreUnavailableError as e:
            logger.warning(f"Embedding store unavailable, returning unranked results: {e}")
            return fallback

        if not records:
            return fallback

        try:
            query_vector = self.provider.generate_embedding(query)
        except ProviderUnavailableError as e:
            logger.warning(f"Query embedding unavailable, returning unranked results: {e}")
            return fallback

        ranked = self.similarity_calc.top_k(query_vector, records, k)
        return [by_id[scholarship_id] for scholarship_id, _ in ranked]
