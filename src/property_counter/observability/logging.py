from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import TextIO


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload; per-element evaluation failures are reported through it.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")


class StdoutLogSink:
    # Minimal structured log sink: one compact JSON object per line on stdout.
    def __init__(self) -> None:
        self._lock = Lock()

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(log_to_dict(message), separators=(",", ":"), ensure_ascii=False)
        # Parallel scans emit from worker threads; keep each record on its own line.
        with self._lock:
            print(payload)

    def close(self) -> None:
        return None


class JsonlLogSink:
    # File-backed structured log sink; the file is opened lazily and flushed per record.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._file: TextIO | None = None
        self._lock = Lock()

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(log_to_dict(message), separators=(",", ":"), ensure_ascii=False)
        with self._lock:
            if self._file is None:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._file = self._path.open("a", encoding="utf-8")
            self._file.write(payload + "\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            if self._file is None:
                return
            self._file.close()
            self._file = None


class InMemoryLogSink:
    # Collects records for inspection in tests and the "memory" logging option.
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []
        self._lock = Lock()

    def emit(self, message: LogMessage) -> None:
        with self._lock:
            self.messages.append(message)

    def close(self) -> None:
        return None


class NullLogSink:
    def emit(self, message: LogMessage) -> None:
        _ = message

    def close(self) -> None:
        return None


def log_stdout(settings: dict[str, object]) -> StdoutLogSink:
    _ = settings
    return StdoutLogSink()


def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log_jsonl.settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


def log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
