from .logging import (
    InMemoryLogSink,
    JsonlLogSink,
    LogMessage,
    NullLogSink,
    StdoutLogSink,
    log_jsonl,
    log_stdout,
    log_to_dict,
)

__all__ = [
    "InMemoryLogSink",
    "JsonlLogSink",
    "LogMessage",
    "NullLogSink",
    "StdoutLogSink",
    "log_jsonl",
    "log_stdout",
    "log_to_dict",
]
