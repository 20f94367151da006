from __future__ import annotations

from pathlib import Path

from property_counter.adapters.output_sink import FileOutputSink, StdoutOutputSink
from property_counter.observability.logging import InMemoryLogSink, NullLogSink, log_jsonl, log_stdout
from property_counter.ports.log_sink import LogSink
from property_counter.ports.output_sink import OutputSink
from property_counter.usecases.config_models import LoggingConfig, OutputConfig


def log_sink_from_config(config: LoggingConfig) -> LogSink:
    # Factory for the log sink selected by logging.sink.
    if config.sink == "stdout":
        return log_stdout({})
    if config.sink == "jsonl":
        return log_jsonl({"path": config.path})
    if config.sink == "memory":
        return InMemoryLogSink()
    return NullLogSink()


def output_sink_from_config(config: OutputConfig) -> OutputSink:
    # Factory for report output: file when configured, stdout otherwise.
    if config.file_path:
        return FileOutputSink(Path(config.file_path), atomic_replace=config.atomic_replace)
    return StdoutOutputSink()
