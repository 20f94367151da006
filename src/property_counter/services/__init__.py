from .checker_cache import (
    KNOWN_PRIMES,
    CacheStats,
    CheckerCache,
    CheckerCacheService,
    PerfectCacheKVStore,
    PrimeCacheKVStore,
)
from .checkers import (
    PropertyCheckers,
    all_of,
    any_of,
    default_checkers,
    is_palindrome,
    is_perfect,
    is_prime,
)
from .counter import CountCacheKVStore, PropertyCounter

__all__ = [
    "KNOWN_PRIMES",
    "CacheStats",
    "CheckerCache",
    "CheckerCacheService",
    "CountCacheKVStore",
    "PerfectCacheKVStore",
    "PrimeCacheKVStore",
    "PropertyCheckers",
    "PropertyCounter",
    "all_of",
    "any_of",
    "default_checkers",
    "is_palindrome",
    "is_perfect",
    "is_prime",
]
