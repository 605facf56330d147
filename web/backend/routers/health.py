#!/usr/bin/env python3
"""
Health endpoint.
"""

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from core.exceptions import CatalogUnavailableError
from ..dependencies import get_app_context
from ..models.responses import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(ctx: AppContext = Depends(get_app_context)):
    try:
        count = len(ctx.catalog.list_approved())
    except CatalogUnavailableError:
        return {"status": "degraded", "service": "scholarscout-api", "scholarships": 0}
    return {"status": "healthy", "service": "scholarscout-api", "scholarships": count}
