"""Módulo de utilidades"""

from .cache import AssetCache
from .backoff import (
    APIError,
    AssetGenerationError,
    AuthenticationError,
    RateLimiter,
    RateLimitError,
    with_retry,
)

__all__ = [
    "AssetCache",
    "APIError",
    "AssetGenerationError",
    "AuthenticationError",
    "RateLimiter",
    "RateLimitError",
    "with_retry",
]
