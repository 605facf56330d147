"""
Error types shared by the recommendation engine.

Provider and store failures are recoverable: the ranker degrades to
rule-based scoring and the lifecycle manager logs and moves on.
Malformed input is a caller error and always propagates.
"""


class ScholarScoutError(Exception):
    """Base exception for engine errors."""
    pass


class ProviderUnavailableError(ScholarScoutError):
    """Raised when the embedding provider fails, times out or runs out of retries."""
    pass


class StoreUnavailableError(ScholarScoutError):
    """Raised when the embedding store cannot be read or written."""
    pass


class MalformedInputError(ScholarScoutError, ValueError):
    """Raised for caller errors: vector length mismatch, non-numeric income, empty text."""
    pass


class CatalogUnavailableError(ScholarScoutError):
    """Raised when the scholarship catalog cannot be loaded."""
    pass
