from __future__ import annotations

from dataclasses import dataclass

from property_counter.observability.logging import LogMessage


class PropertyCounterError(Exception):
    # Base error for the package; callers can catch this to handle all library failures.
    pass


class InvalidArgumentError(PropertyCounterError, ValueError):
    # Absent or malformed required input; always raised synchronously, never retried.
    pass


@dataclass(frozen=True, slots=True)
class ElementEvaluationFailure:
    # One recovered per-element failure: the element is counted as a non-match and reported.
    element: object
    checker: str
    error: Exception

    def to_log_message(self) -> LogMessage:
        return LogMessage(
            level="warning",
            message="property check failed for element",
            fields={
                "element": repr(self.element),
                "checker": self.checker,
                "error_type": type(self.error).__name__,
                "error": str(self.error),
            },
        )


def require(value: object, what: str) -> None:
    # Shared guard for required arguments.
    if value is None:
        raise InvalidArgumentError(f"{what} cannot be None")
