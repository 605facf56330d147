#!/usr/bin/env python3
"""
Recommendation endpoints - hybrid ranking and free-text search.
"""

import logging

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_app_context
from ..models.requests import RecommendationRequest, SearchRequest
from ..models.responses import RecommendationResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recommendations"])


@router.post("/recommendations", response_model=RecommendationResponse)
def get_recommendations(
    request: RecommendationRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Rank approved scholarships for a student profile.

    Semantic matching is best effort: if embeddings are unavailable the
    response is rule-based and ``strategy`` says so.
    """
    profile = request.to_profile()
    scholarships = ctx.catalog.list_approved()

    result = ctx.recommendation_service.recommend(
        profile,
        scholarships,
        use_semantic_matching=request.use_semantic_matching
    )
    return result.to_dict()


@router.post("/search", response_model=SearchResponse)
def search_scholarships(
    request: SearchRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """Semantic search over approved scholarships."""
    scholarships = ctx.catalog.list_approved()
    results = ctx.recommendation_service.search(request.query, scholarships, top_k=request.top_k)
    return {
        "results": [s.to_summary() for s in results],
        "count": len(results)
    }
