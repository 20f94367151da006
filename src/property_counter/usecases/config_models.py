from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

# Config models map YAML sections to typed structures.

Operation = Literal["count", "count_with_cache", "details", "partition", "multiple", "after_transform"]
Transform = Literal["size", "length", "abs"]


class RangeDataset(BaseModel):
    # Inclusive integer range; stop may equal start for a one-element dataset.
    model_config = ConfigDict(extra="forbid")
    start: int
    stop: int

    @model_validator(mode="after")
    def _ordered(self) -> RangeDataset:
        if self.start > self.stop:
            raise ValueError("range.start must not be greater than range.stop")
        return self


class DatasetConfig(BaseModel):
    # Exactly one source: a generated range or literal values.
    model_config = ConfigDict(extra="forbid")
    range: RangeDataset | None = None
    values: list[Any] | None = None

    @model_validator(mode="after")
    def _one_source(self) -> DatasetConfig:
        if (self.range is None) == (self.values is None):
            raise ValueError("dataset requires exactly one of 'range' or 'values'")
        return self

    def materialize(self) -> list[Any]:
        if self.range is not None:
            return list(range(self.range.start, self.range.stop + 1))
        assert self.values is not None
        return list(self.values)


class CheckerDecl(BaseModel):
    # Checker declaration resolved through the checker registry.
    model_config = ConfigDict(extra="forbid")
    kind: str
    params: dict[str, Any] = Field(default_factory=dict)
    negate: bool = False


class QueryConfig(BaseModel):
    # One report line: an operation over a dataset with a combined checker.
    model_config = ConfigDict(extra="forbid")
    name: str
    dataset: str
    operation: Operation = "count"
    checkers: list[CheckerDecl] = Field(default_factory=list)
    combine: Literal["all", "any"] = "all"
    transform: Transform | None = None
    cache_key: str | None = None

    @model_validator(mode="after")
    def _operation_requirements(self) -> QueryConfig:
        if self.operation == "after_transform" and self.transform is None:
            raise ValueError(f"query '{self.name}': after_transform requires 'transform'")
        if self.operation == "multiple" and not self.checkers:
            raise ValueError(f"query '{self.name}': multiple requires at least one checker")
        return self


class CounterConfig(BaseModel):
    # Engine settings; parallel scan is opt-in.
    model_config = ConfigDict(extra="forbid")
    max_workers: int = Field(default=1, ge=1)
    parallel_threshold: int = Field(default=10_000, ge=1)


class LoggingConfig(BaseModel):
    # Log sink selector for evaluation failures.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stdout", "jsonl", "memory", "none"] = "stdout"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path(self) -> LoggingConfig:
        # For jsonl sink, a path is required to avoid silent defaults.
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when sink is 'jsonl'")
        return self


class OutputConfig(BaseModel):
    # Output file for report lines; stdout when absent.
    model_config = ConfigDict(extra="forbid")
    file_path: str | None = Field(default=None, validation_alias=AliasChoices("file_path", "file"))
    atomic_replace: bool = False


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int
    datasets: dict[str, DatasetConfig]
    queries: list[QueryConfig]
    counter: CounterConfig = Field(default_factory=CounterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def _known_datasets(self) -> AppConfig:
        for query in self.queries:
            if query.dataset not in self.datasets:
                raise ValueError(f"query '{query.name}' refers to unknown dataset '{query.dataset}'")
        return self
