#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from core.app_context import AppContext
from .config import get_config


@lru_cache()
def get_app_context() -> AppContext:
    """
    FastAPI dependency that returns the process-wide AppContext.

    Tests replace it via ``app.dependency_overrides[get_app_context]``.

    Usage:
        @router.post("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_app_context)):
            ...
    """
    return AppContext.build(get_config())
