from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CountResult:
    # Immutable snapshot produced once per count_with_details call.
    match_count: int
    total_count: int
    matching_elements: tuple[Any, ...]
    percentage: float

    def __post_init__(self) -> None:
        if self.match_count < 0 or self.match_count > self.total_count:
            raise ValueError("CountResult requires 0 <= match_count <= total_count")
        if not 0.0 <= self.percentage <= 100.0:
            raise ValueError("CountResult percentage must be within [0, 100]")

    @classmethod
    def from_matches(cls, matches: list[Any], total: int) -> CountResult:
        return cls(
            match_count=len(matches),
            total_count=total,
            matching_elements=tuple(matches),
            percentage=calculate_percentage(len(matches), total),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "match_count": self.match_count,
            "total_count": self.total_count,
            "matching_elements": list(self.matching_elements),
            "percentage": round(self.percentage, 2),
        }

    def __str__(self) -> str:
        return (
            f"CountResult{{matches={self.match_count}, total={self.total_count}, "
            f"percentage={self.percentage:.2f}%, elements={list(self.matching_elements)}}}"
        )


@dataclass(frozen=True, slots=True)
class Partition:
    # Complete, non-overlapping split of an input sequence; input order kept on each side.
    matches: tuple[Any, ...]
    non_matches: tuple[Any, ...]

    def for_flag(self, flag: bool) -> tuple[Any, ...]:
        return self.matches if flag else self.non_matches

    def to_dict(self) -> dict[str, object]:
        return {"matches": list(self.matches), "non_matches": list(self.non_matches)}


def calculate_percentage(matches: int, total: int) -> float:
    # Empty input yields 0 rather than a division error.
    if total == 0:
        return 0.0
    return (matches * 100.0) / total
