from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Protocol, runtime_checkable

from property_counter.integration.kv_store import InMemoryKvStore, KVStore

# Primes below 100 are seeded so the common range is served from cache immediately.
KNOWN_PRIMES: tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41,
    43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)


class PrimeCacheKVStore(InMemoryKvStore):
    # Marker KV contract for confirmed primes.
    pass


class PerfectCacheKVStore(InMemoryKvStore):
    # Marker KV contract for confirmed perfect numbers.
    pass


@dataclass(frozen=True, slots=True)
class CacheStats:
    primes: int
    perfect_numbers: int

    def __str__(self) -> str:
        return f"Cache Stats - Primes: {self.primes}, Perfect Numbers: {self.perfect_numbers}"


@runtime_checkable
class CheckerCacheService(Protocol):
    # Memo sets used by the numeric checkers; entries only ever record confirmed facts.
    def contains_prime(self, n: int) -> bool:
        ...

    def add_prime(self, n: int) -> None:
        ...

    def contains_perfect(self, n: int) -> bool:
        ...

    def add_perfect(self, n: int) -> None:
        ...

    def clear(self) -> None:
        ...

    def stats(self) -> CacheStats:
        ...


@dataclass(slots=True)
class CheckerCache(CheckerCacheService):
    # Lifecycle: create -> insert* -> clear -> (reusable). Clearing never changes results, only latency.
    primes: KVStore = field(default_factory=PrimeCacheKVStore)
    perfect_numbers: KVStore = field(default_factory=PerfectCacheKVStore)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    @classmethod
    def seeded(cls, primes: tuple[int, ...] = KNOWN_PRIMES) -> CheckerCache:
        cache = cls()
        for prime in primes:
            cache.add_prime(prime)
        return cache

    def contains_prime(self, n: int) -> bool:
        with self._lock:
            return self.primes.get(_key(n)) is True

    def add_prime(self, n: int) -> None:
        # Re-inserting a known prime is idempotent, so check-then-insert races are harmless.
        with self._lock:
            self.primes.set(_key(n), True)

    def contains_perfect(self, n: int) -> bool:
        with self._lock:
            return self.perfect_numbers.get(_key(n)) is True

    def add_perfect(self, n: int) -> None:
        with self._lock:
            self.perfect_numbers.set(_key(n), True)

    def clear(self) -> None:
        # Both sets are emptied under one lock so no reader sees a half-cleared state.
        with self._lock:
            self.primes.clear()
            self.perfect_numbers.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(primes=self.primes.size(), perfect_numbers=self.perfect_numbers.size())


def _key(n: int) -> str:
    return str(n)
