from dataclasses import dataclass
from typing import List


@dataclass
class StatSummary:
    """Statistical summary of a list of durations (ms)"""
    min: float
    max: float
    p50: float
    avg: float


def calculate_stat_summary(values: List[int]) -> StatSummary:
    """Calculate statistical summary from a list of numeric values"""
    if not values:
        return StatSummary(min=0, max=0, p50=0, avg=0)

    sorted_values = sorted(values)
    n = len(sorted_values)

    return StatSummary(
        min=sorted_values[0],
        max=sorted_values[-1],
        p50=sorted_values[int(n * 0.50)],
        avg=sum(sorted_values) / n
    )
