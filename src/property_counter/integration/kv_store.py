from __future__ import annotations

from threading import Lock


class KVStore:
    # Generic keyed state port used by the memoization caches.
    def get(self, key: str) -> object | None:
        raise NotImplementedError("KVStore.get must be implemented")

    def set(self, key: str, value: object) -> None:
        raise NotImplementedError("KVStore.set must be implemented")

    def clear(self) -> None:
        raise NotImplementedError("KVStore.clear must be implemented")

    def size(self) -> int:
        raise NotImplementedError("KVStore.size must be implemented")


class InMemoryKvStore(KVStore):
    # In-memory KV adapter; every operation holds the lock so concurrent workers never corrupt it.
    def __init__(self) -> None:
        self._store: dict[str, object] = {}
        self._lock = Lock()

    def get(self, key: str) -> object | None:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: object) -> None:
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._store)
