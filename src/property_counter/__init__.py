from .domain import (
    CountResult,
    ElementEvaluationFailure,
    InvalidArgumentError,
    Partition,
    PropertyChecker,
    PropertyCounterError,
)
from .services import (
    CacheStats,
    CheckerCache,
    PropertyCheckers,
    PropertyCounter,
    all_of,
    any_of,
    default_checkers,
    is_palindrome,
    is_perfect,
    is_prime,
)

__all__ = [
    "CacheStats",
    "CheckerCache",
    "CountResult",
    "ElementEvaluationFailure",
    "InvalidArgumentError",
    "Partition",
    "PropertyChecker",
    "PropertyCheckers",
    "PropertyCounter",
    "PropertyCounterError",
    "all_of",
    "any_of",
    "default_checkers",
    "is_palindrome",
    "is_perfect",
    "is_prime",
]
