from __future__ import annotations

import json

from property_counter.observability.logging import InMemoryLogSink
from property_counter.services.checker_cache import CheckerCache
from property_counter.services.checkers import PropertyCheckers
from property_counter.services.counter import PropertyCounter
from property_counter.usecases.checker_registry import default_registry
from property_counter.usecases.config_models import AppConfig
from property_counter.usecases.report import ReportRunner, format_line, write_report


class _ListSink:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.closed = False

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    def close(self) -> None:
        self.closed = True


def _runner(counter: PropertyCounter | None = None) -> ReportRunner:
    library = PropertyCheckers(cache=CheckerCache.seeded())
    return ReportRunner(counter=counter or PropertyCounter(), registry=default_registry(library))


def _config(queries: list[dict[str, object]]) -> AppConfig:
    return AppConfig.model_validate(
        {
            "version": 1,
            "datasets": {
                "numbers": {"range": {"start": 1, "stop": 100}},
                "words": {"values": ["radar", "hello", "A man a plan a canal Panama", ""]},
                "collections": {"values": [[1, 2], [], [3]]},
                "mixed": {"values": [1, "two", 3]},
            },
            "queries": queries,
        }
    )


def test_report_runs_every_operation() -> None:
    config = _config(
        [
            {"name": "odd", "dataset": "numbers", "checkers": [{"kind": "odd"}]},
            {"name": "primes", "dataset": "numbers", "operation": "count_with_cache", "checkers": [{"kind": "prime"}]},
            {
                "name": "small_primes",
                "dataset": "numbers",
                "operation": "details",
                "checkers": [{"kind": "prime"}, {"kind": "in_range", "params": {"min": 1, "max": 10}}],
            },
            {"name": "palindromes", "dataset": "words", "operation": "partition", "checkers": [{"kind": "palindrome"}]},
            {
                "name": "odd_primes",
                "dataset": "numbers",
                "operation": "multiple",
                "checkers": [{"kind": "odd"}, {"kind": "prime"}],
            },
            {
                "name": "non_empty",
                "dataset": "collections",
                "operation": "after_transform",
                "transform": "size",
                "checkers": [{"kind": "positive"}],
            },
        ]
    )
    lines = _runner().run(config)
    results = {line.query: line.to_dict()["result"] for line in lines}
    assert [line.query for line in lines] == [q.name for q in config.queries]
    assert results["odd"] == 50
    assert results["primes"] == 25
    assert results["small_primes"] == {
        "match_count": 4,
        "total_count": 100,
        "matching_elements": [2, 3, 5, 7],
        "percentage": 4.0,
    }
    assert results["palindromes"] == {
        "matches": ["radar", "A man a plan a canal Panama", ""],
        "non_matches": ["hello"],
    }
    assert results["odd_primes"] == 24
    assert results["non_empty"] == 2


def test_count_with_cache_defaults_key_to_query_name() -> None:
    counter = PropertyCounter()
    config = _config(
        [{"name": "primes", "dataset": "numbers", "operation": "count_with_cache", "checkers": [{"kind": "prime"}]}]
    )
    _runner(counter).run(config)
    assert counter.result_cache.get("primes") == 25


def test_any_combination_and_negation() -> None:
    config = _config(
        [
            {
                "name": "odd_or_prime",
                "dataset": "numbers",
                "combine": "any",
                "checkers": [{"kind": "odd"}, {"kind": "prime"}],
            },
            {"name": "not_prime", "dataset": "numbers", "checkers": [{"kind": "prime", "negate": True}]},
        ]
    )
    results = [line.result for line in _runner().run(config)]
    assert results == [51, 75]


def test_evaluation_failures_reach_the_log_sink() -> None:
    # A string in a numeric dataset is logged and counted as a non-match.
    sink = InMemoryLogSink()
    config = _config([{"name": "odd", "dataset": "mixed", "checkers": [{"kind": "odd"}]}])
    lines = _runner(PropertyCounter(log_sink=sink)).run(config)
    assert lines[0].result == 2
    assert len(sink.messages) == 1
    assert sink.messages[0].fields["element"] == "'two'"


def test_write_report_emits_compact_json_lines() -> None:
    config = _config([{"name": "odd", "dataset": "numbers", "checkers": [{"kind": "odd"}]}])
    sink = _ListSink()
    written = write_report(_runner().run(config), sink)
    assert written == 1
    assert json.loads(sink.lines[0]) == {"query": "odd", "operation": "count", "dataset": "numbers", "result": 50}
    assert format_line(_runner().run(config)[0]) == sink.lines[0]
