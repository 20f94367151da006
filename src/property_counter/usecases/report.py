from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from property_counter.domain.results import CountResult, Partition
from property_counter.ports.output_sink import OutputSink
from property_counter.services.counter import PropertyCounter
from property_counter.usecases.checker_registry import CheckerRegistry
from property_counter.usecases.config_models import AppConfig, QueryConfig

# Transformers available to after_transform queries.
TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "size": len,
    "length": len,
    "abs": abs,
}


@dataclass(frozen=True, slots=True)
class ReportLine:
    # One executed query; result is an int, a CountResult or a Partition.
    query: str
    operation: str
    dataset: str
    result: int | CountResult | Partition

    def to_dict(self) -> dict[str, object]:
        result = self.result
        payload: object = result.to_dict() if isinstance(result, (CountResult, Partition)) else result
        return {
            "query": self.query,
            "operation": self.operation,
            "dataset": self.dataset,
            "result": payload,
        }


@dataclass(frozen=True, slots=True)
class ReportRunner:
    # Executes configured queries in declaration order against one counter.
    counter: PropertyCounter
    registry: CheckerRegistry

    def run(self, config: AppConfig) -> list[ReportLine]:
        datasets = {name: decl.materialize() for name, decl in config.datasets.items()}
        return [self.run_query(query, datasets[query.dataset]) for query in config.queries]

    def run_query(self, query: QueryConfig, data: list[Any]) -> ReportLine:
        result: int | CountResult | Partition
        if query.operation == "multiple":
            checkers = [self.registry.build(decl) for decl in query.checkers]
            result = self.counter.count_multiple_properties(data, checkers)
        else:
            checker = self.registry.build_combined(query.checkers, combine=query.combine)
            if query.operation == "count":
                result = self.counter.count(data, checker)
            elif query.operation == "count_with_cache":
                result = self.counter.count_with_cache(data, checker, query.cache_key or query.name)
            elif query.operation == "details":
                result = self.counter.count_with_details(data, checker)
            elif query.operation == "partition":
                result = self.counter.partition_by_property(data, checker)
            else:
                assert query.transform is not None
                result = self.counter.count_after_transform(data, TRANSFORMS[query.transform], checker)
        return ReportLine(query=query.name, operation=query.operation, dataset=query.dataset, result=result)


def format_line(line: ReportLine) -> str:
    # Compact JSON keeps one report line per output line.
    return json.dumps(line.to_dict(), separators=(",", ":"), ensure_ascii=False, default=str)


def write_report(lines: Iterable[ReportLine], sink: OutputSink) -> int:
    written = 0
    for line in lines:
        sink.write_line(format_line(line))
        written += 1
    return written
