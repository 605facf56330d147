#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Any


class RecommendationResponse(BaseModel):
    """Ranked scholarships for a profile."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "recommendations": [{
                    "id": "nsp-post-matric-sc",
                    "name": "Post Matric Scholarship for SC Students",
                    "matchScore": 71,
                    "matchReasons": ["Matches your category (SC)", "Good profile match (50% similarity)"],
                    "scoreBreakdown": {"eligibility": 80, "semantic": 50, "final": 71}
                }],
                "semanticSuggestions": [],
                "totalMatches": 1,
                "strategy": "hybrid"
            }
        }
    )

    recommendations: List[Dict[str, Any]]
    semantic_suggestions: List[Dict[str, Any]] = Field(alias="semanticSuggestions")
    total_matches: int = Field(alias="totalMatches", ge=0)
    strategy: str


class SearchResponse(BaseModel):
    """Scholarships ranked by similarity to a free-text query."""
    results: List[Dict[str, Any]]
    count: int = Field(ge=0)


class HealthResponse(BaseModel):
    status: str
    service: str
    scholarships: int = Field(ge=0)
