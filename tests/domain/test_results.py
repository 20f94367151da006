from __future__ import annotations

import pytest

from property_counter.domain.results import CountResult, Partition, calculate_percentage


def test_percentage_of_empty_total_is_zero() -> None:
    # No division error for an empty sequence.
    assert calculate_percentage(0, 0) == 0.0


def test_percentage_bounds() -> None:
    assert calculate_percentage(1, 4) == 25.0
    assert calculate_percentage(4, 4) == 100.0


def test_count_result_from_matches() -> None:
    result = CountResult.from_matches([2, 3, 5], 10)
    assert result.match_count == 3
    assert result.total_count == 10
    assert result.matching_elements == (2, 3, 5)
    assert result.percentage == 30.0


def test_count_result_rejects_impossible_counts() -> None:
    # match_count can never exceed total_count.
    with pytest.raises(ValueError):
        CountResult(match_count=3, total_count=2, matching_elements=(1, 2, 3), percentage=100.0)
    with pytest.raises(ValueError):
        CountResult(match_count=1, total_count=2, matching_elements=(1,), percentage=150.0)


def test_count_result_is_immutable() -> None:
    result = CountResult.from_matches([1], 1)
    with pytest.raises(AttributeError):
        result.match_count = 5  # type: ignore[misc]


def test_count_result_rendering() -> None:
    result = CountResult.from_matches([2, 3], 3)
    assert str(result) == "CountResult{matches=2, total=3, percentage=66.67%, elements=[2, 3]}"
    assert result.to_dict() == {
        "match_count": 2,
        "total_count": 3,
        "matching_elements": [2, 3],
        "percentage": 66.67,
    }


def test_partition_flag_lookup() -> None:
    partition = Partition(matches=(1, 3), non_matches=(2,))
    assert partition.for_flag(True) == (1, 3)
    assert partition.for_flag(False) == (2,)
    assert partition.to_dict() == {"matches": [1, 3], "non_matches": [2]}
