from .kv_store import InMemoryKvStore, KVStore

__all__ = ["InMemoryKvStore", "KVStore"]
