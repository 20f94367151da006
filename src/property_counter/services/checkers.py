from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sized
from dataclasses import dataclass, field
from typing import Any

from property_counter.domain.checker import PropertyChecker, as_checker
from property_counter.domain.errors import InvalidArgumentError, require
from property_counter.services.checker_cache import CacheStats, CheckerCache

# Heuristic shape check for local@domain.tld; deliberately not RFC 5322.
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_WHITESPACE = re.compile(r"\s+")


@dataclass(slots=True)
class PropertyCheckers:
    """Library of ready-made checkers bound to one explicit memo cache.

    Numeric checkers that are expensive to evaluate (primality, perfection)
    record confirmed results in ``cache``; everything else is stateless.
    Two libraries never share a cache unless the caller passes the same one.
    """

    cache: CheckerCache = field(default_factory=CheckerCache.seeded)

    # Numeric checkers

    def odd_numbers(self) -> PropertyChecker[int]:
        return PropertyChecker(lambda n: n is not None and n % 2 != 0, name="odd")

    def even_numbers(self) -> PropertyChecker[int]:
        return PropertyChecker(lambda n: n is not None and n % 2 == 0, name="even")

    def prime_numbers(self) -> PropertyChecker[int]:
        return PropertyChecker(self._is_prime_cached, name="prime")

    def perfect_numbers(self) -> PropertyChecker[int]:
        return PropertyChecker(self._is_perfect_cached, name="perfect")

    def in_range(self, minimum: Any, maximum: Any) -> PropertyChecker[Any]:
        if minimum is None or maximum is None:
            raise InvalidArgumentError("Range bounds cannot be None")
        try:
            inverted = minimum > maximum
        except TypeError as exc:
            raise InvalidArgumentError(f"Range bounds must be comparable: {exc}") from exc
        if inverted:
            raise InvalidArgumentError("Minimum value cannot be greater than maximum value")
        return PropertyChecker(
            lambda n: n is not None and minimum <= n <= maximum,
            name=f"in_range[{minimum}, {maximum}]",
        )

    def positive_numbers(self) -> PropertyChecker[Any]:
        return PropertyChecker(lambda n: n is not None and n > 0, name="positive")

    def negative_numbers(self) -> PropertyChecker[Any]:
        return PropertyChecker(lambda n: n is not None and n < 0, name="negative")

    # String checkers

    def palindromes(self) -> PropertyChecker[str]:
        return PropertyChecker(lambda s: s is not None and is_palindrome(s), name="palindrome")

    def contains_pattern(self, pattern: str, ignore_case: bool = False) -> PropertyChecker[str]:
        if pattern is None:
            raise InvalidArgumentError("Pattern cannot be None")
        needle = pattern.lower() if ignore_case else pattern

        def _contains(text: str) -> bool:
            if text is None:
                return False
            haystack = text.lower() if ignore_case else text
            return needle in haystack

        return PropertyChecker(_contains, name=f"contains[{pattern!r}]")

    def has_length(self, length: int) -> PropertyChecker[str]:
        require(length, "Length")
        if length < 0:
            raise InvalidArgumentError("Length cannot be negative")
        return PropertyChecker(lambda s: s is not None and len(s) == length, name=f"length[{length}]")

    def valid_emails(self) -> PropertyChecker[str]:
        return PropertyChecker(lambda s: s is not None and EMAIL_PATTERN.fullmatch(s) is not None, name="email")

    # Collection checkers

    def empty_collections(self) -> PropertyChecker[Sized]:
        return PropertyChecker(lambda c: c is not None and len(c) == 0, name="empty")

    def has_size(self, size: int) -> PropertyChecker[Sized]:
        require(size, "Size")
        if size < 0:
            raise InvalidArgumentError("Size cannot be negative")
        return PropertyChecker(lambda c: c is not None and len(c) == size, name=f"size[{size}]")

    # Composition

    def all_of(self, checkers: Iterable[Any] | None) -> PropertyChecker[Any]:
        return all_of(checkers)

    def any_of(self, checkers: Iterable[Any] | None) -> PropertyChecker[Any]:
        return any_of(checkers)

    # Cache management

    def clear_caches(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def _is_prime_cached(self, n: int) -> bool:
        if n is None or n < 2:
            return False
        if n == 2:
            return True
        if n % 2 == 0:
            return False
        if self.cache.contains_prime(n):
            return True
        prime = is_prime(n)
        if prime:
            self.cache.add_prime(n)
        return prime

    def _is_perfect_cached(self, n: int) -> bool:
        if n is None or n < 2:
            return False
        if self.cache.contains_perfect(n):
            return True
        perfect = is_perfect(n)
        if perfect:
            self.cache.add_perfect(n)
        return perfect


def is_prime(n: int) -> bool:
    # Trial division over 6k +/- 1 candidates up to isqrt(n).
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    limit = math.isqrt(n)
    i = 5
    while i <= limit:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def is_perfect(n: int) -> bool:
    # 1 is not perfect: its only proper divisor sum is 0.
    if n < 2:
        return False
    total = 1
    limit = math.isqrt(n)
    for i in range(2, limit + 1):
        if n % i == 0:
            total += i
            if i != n // i:
                total += n // i
    return total == n


def is_palindrome(text: str) -> bool:
    normalized = _WHITESPACE.sub("", text).lower()
    left, right = 0, len(normalized) - 1
    while left < right:
        if normalized[left] != normalized[right]:
            return False
        left += 1
        right -= 1
    return True


def all_of(checkers: Iterable[Any] | None) -> PropertyChecker[Any]:
    # Empty input is the AND identity. None entries never match.
    members = [None if c is None else as_checker(c) for c in checkers or ()]
    if not members:
        return PropertyChecker.always_true()

    def _all(element: Any) -> bool:
        for checker in members:
            if checker is None or not checker.has_property(element):
                return False
        return True

    return PropertyChecker(_all, name="all_of(" + ", ".join(_names(members)) + ")")


def any_of(checkers: Iterable[Any] | None) -> PropertyChecker[Any]:
    # Empty input is the OR identity. None entries are skipped.
    members = [None if c is None else as_checker(c) for c in checkers or ()]
    if not members:
        return PropertyChecker.always_false()

    def _any(element: Any) -> bool:
        for checker in members:
            if checker is not None and checker.has_property(element):
                return True
        return False

    return PropertyChecker(_any, name="any_of(" + ", ".join(_names(members)) + ")")


def _names(members: list[PropertyChecker[Any] | None]) -> list[str]:
    return ["None" if c is None else c.name for c in members]


# Convenience library for callers that do not manage their own cache.
default_checkers = PropertyCheckers()
