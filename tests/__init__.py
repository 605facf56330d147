#!/usr/bin/env python3
"""
Test suite for the ScholarScout recommendation engine.

All tests run without network or database access:

    # Run all tests
    uv run python -m pytest tests/ -v

    # Using unittest (TestCase-style modules only)
    uv run python -m unittest discover tests -v
"""
