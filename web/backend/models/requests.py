#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union

from core.matcher.models import StudentProfile


class RecommendationRequest(BaseModel):
    """Student profile plus matching options. All profile fields are optional."""
    model_config = ConfigDict(populate_by_name=True)

    state: Optional[str] = None
    category: Optional[str] = None
    income: Optional[str] = Field(None, description="Annual family income in rupees, digits only")
    education_level: Optional[str] = Field(None, alias="educationLevel")
    gender: Optional[str] = None
    disability: Optional[bool] = None
    religion: Optional[str] = None
    area: Optional[str] = None
    course: Optional[str] = None
    use_semantic_matching: bool = Field(True, alias="useSemanticMatching")

    @field_validator("income", mode="before")
    @classmethod
    def _income_as_text(cls, value: Optional[Union[str, int]]) -> Optional[str]:
        # Numbers pass through as text; non-numeric text is rejected by the core
        if isinstance(value, bool):
            raise ValueError("income must be a number or numeric string")
        if isinstance(value, int):
            return str(value)
        return value

    def to_profile(self) -> StudentProfile:
        return StudentProfile.from_dict(
            self.model_dump(by_alias=True, exclude={"use_semantic_matching"})
        )


class SearchRequest(BaseModel):
    """Free-text scholarship search."""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1, description="What the student is looking for")
    top_k: Optional[int] = Field(None, ge=1, le=50, alias="topK", description="Maximum results (default 5)")
