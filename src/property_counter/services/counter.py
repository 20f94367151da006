from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from property_counter.domain.checker import PropertyChecker, as_checker
from property_counter.domain.errors import ElementEvaluationFailure, InvalidArgumentError, require
from property_counter.domain.results import CountResult, Partition
from property_counter.integration.kv_store import InMemoryKvStore, KVStore
from property_counter.observability.logging import StdoutLogSink
from property_counter.ports.log_sink import LogSink
from property_counter.services.checkers import all_of

CheckerLike = PropertyChecker[Any] | Callable[[Any], bool]


class CountCacheKVStore(InMemoryKvStore):
    # Marker KV contract for named count results.
    pass


@dataclass(slots=True)
class PropertyCounter:
    """Counting, partitioning and transformation engine over a property checker.

    Malformed inputs raise ``InvalidArgumentError`` before any element is
    evaluated. A checker that raises for one element never aborts the whole
    operation: the element counts as a non-match and the failure is emitted
    to ``log_sink`` as a warning.

    With ``max_workers > 1`` sequences of at least ``parallel_threshold``
    elements are evaluated on a thread pool. Results are identical to the
    sequential scan because evaluation order is preserved.
    """

    log_sink: LogSink = field(default_factory=StdoutLogSink)
    result_cache: KVStore = field(default_factory=CountCacheKVStore)
    max_workers: int = 1
    parallel_threshold: int = 10_000

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise InvalidArgumentError("max_workers must be at least 1")
        if self.parallel_threshold < 1:
            raise InvalidArgumentError("parallel_threshold must be at least 1")

    def count(self, sequence: Iterable[Any] | None, checker: CheckerLike | None) -> int:
        items, resolved = self._validate(sequence, checker)
        return sum(self._evaluate(items, resolved))

    def count_with_cache(
        self,
        sequence: Iterable[Any] | None,
        checker: CheckerLike | None,
        key: str | None,
    ) -> int:
        # The caller guarantees that one key always names the same (sequence, checker) query.
        items, resolved = self._validate(sequence, checker)
        if key is not None:
            cached = self.result_cache.get(key)
            if isinstance(cached, int):
                return cached

        result = sum(self._evaluate(items, resolved))
        if key is not None:
            self.result_cache.set(key, result)
        return result

    def count_with_details(self, sequence: Iterable[Any] | None, checker: CheckerLike | None) -> CountResult:
        items, resolved = self._validate(sequence, checker)
        flags = self._evaluate(items, resolved)
        matches = [item for item, flag in zip(items, flags) if flag]
        try:
            matches.sort()
        except TypeError as exc:
            raise InvalidArgumentError(f"Matching elements must be orderable: {exc}") from exc
        return CountResult.from_matches(matches, len(items))

    def partition_by_property(self, sequence: Iterable[Any] | None, checker: CheckerLike | None) -> Partition:
        items, resolved = self._validate(sequence, checker)
        flags = self._evaluate(items, resolved)
        matches: list[Any] = []
        non_matches: list[Any] = []
        for item, flag in zip(items, flags):
            (matches if flag else non_matches).append(item)
        return Partition(matches=tuple(matches), non_matches=tuple(non_matches))

    def count_multiple_properties(
        self,
        sequence: Iterable[Any] | None,
        checkers: Iterable[CheckerLike] | None,
    ) -> int:
        require(sequence, "Sequence")
        require(checkers, "Property checkers")
        # Materialize once so generators survive validation.
        members = list(checkers)
        if not members:
            raise InvalidArgumentError("At least one property checker must be provided")
        if any(c is None for c in members):
            raise InvalidArgumentError("Property checkers cannot contain None")
        return self.count(sequence, all_of(members))

    def count_after_transform(
        self,
        sequence: Iterable[Any] | None,
        transformer: Callable[[Any], Any] | None,
        checker: CheckerLike | None,
    ) -> int:
        if transformer is None or not callable(transformer):
            raise InvalidArgumentError("Transformer must be a callable")
        items, resolved = self._validate(sequence, checker)
        name = getattr(transformer, "__name__", "transform")
        composed = PropertyChecker(
            lambda element: resolved.has_property(transformer(element)),
            name=f"{resolved.name} after {name}",
        )
        return sum(self._evaluate(items, composed))

    def clear_cache(self) -> None:
        self.result_cache.clear()

    def cache_size(self) -> int:
        return self.result_cache.size()

    def _validate(
        self,
        sequence: Iterable[Any] | None,
        checker: CheckerLike | None,
    ) -> tuple[list[Any], PropertyChecker[Any]]:
        require(sequence, "Sequence")
        require(checker, "PropertyChecker")
        if not callable(checker):
            raise InvalidArgumentError("PropertyChecker must be callable")
        if isinstance(sequence, (str, bytes)):
            raise InvalidArgumentError("Sequence must be a collection of elements, not a string")
        return list(sequence), as_checker(checker)

    def _evaluate(self, items: list[Any], checker: PropertyChecker[Any]) -> list[bool]:
        if self.max_workers > 1 and len(items) >= self.parallel_threshold:
            # Executor.map yields in input order, so flags line up with items.
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                return list(pool.map(lambda item: self._check_one(item, checker), items))
        return [self._check_one(item, checker) for item in items]

    def _check_one(self, element: Any, checker: PropertyChecker[Any]) -> bool:
        try:
            return checker.has_property(element)
        except Exception as exc:
            failure = ElementEvaluationFailure(element=element, checker=checker.name, error=exc)
            self.log_sink.emit(failure.to_log_message())
            return False
