"""
Integer rounding helpers for quiz scores.
Half values round up (12.5 -> 13), matching how scores are shown to students.
"""
from datetime import datetime, timezone
from typing import Sequence


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest int, halves rounding up."""
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100 * correct, total)


def rounded_mean(values: Sequence[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values), len(values))


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-11-25T10:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
