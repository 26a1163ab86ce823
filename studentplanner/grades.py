"""
GPA core: grade scale, aggregation, performance classification and projection.

All functions here are pure. They never raise for empty input, zero credits
or out-of-range GPA values; those cases have explicit fallbacks.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Protocol, Sequence

from studentplanner.model import GpaResult


class Weighted(Protocol):
    credits: int
    grade: float


# (letter, 4.0-scale value, 10-point equivalent), best first.
# A+ and A share 4.0, so value -> letter lookups return the first match.
GRADE_SCALE: list[tuple[str, float, float]] = [
    ("A+", 4.0, 9.5),
    ("A", 4.0, 9.0),
    ("B+", 3.5, 8.0),
    ("B", 3.0, 7.0),
    ("C+", 2.5, 6.0),
    ("C", 2.0, 5.0),
    ("D+", 1.5, 4.0),
    ("D", 1.0, 3.0),
    ("F", 0.0, 0.0),
]

# Scanned top to bottom, first match wins. Must stay strictly decreasing.
PERFORMANCE_THRESHOLDS: list[tuple[float, str]] = [
    (3.6, "Excellent"),
    (3.2, "Very Good"),
    (2.5, "Good"),
    (2.0, "Average"),
    (1.0, "Weak"),
]
LOWEST_TIER = "Poor"

PERFORMANCE_TIERS: list[str] = [label for _, label in PERFORMANCE_THRESHOLDS] + [LOWEST_TIER]


def letter_for(value: float) -> Optional[str]:
    for letter, scale_value, _ in GRADE_SCALE:
        if scale_value == value:
            return letter
    return None


def value_for(letter: str) -> float:
    """
    Return the 4.0-scale value of a letter grade (case-insensitive).
    Raises ValueError for letters that are not on the scale.
    """
    wanted = letter.strip().upper()
    for scale_letter, scale_value, _ in GRADE_SCALE:
        if scale_letter == wanted:
            return scale_value
    raise ValueError(f"Unknown letter grade: {letter!r}")


def ten_point_for(value: float) -> Optional[float]:
    for _, scale_value, ten in GRADE_SCALE:
        if scale_value == value:
            return ten
    return None


def _totals(items: Iterable[Weighted]) -> tuple[float, int]:
    points: list[float] = []
    credits = 0
    for item in items:
        points.append(item.grade * item.credits)
        credits += item.credits
    # fsum is exactly rounded, so the result does not depend on input order
    return math.fsum(points), credits


def aggregate(courses: Iterable[Weighted]) -> GpaResult:
    """
    Reduce courses to a credit-weighted GPA and the total credit count.

    Empty input (or only zero-credit courses) gives gpa 0. No rounding is
    applied; formatting to two decimals is left to the views.
    """
    total_points, total_credits = _totals(courses)
    if total_credits <= 0:
        return GpaResult(gpa=0.0, total_credits=total_credits, total_points=total_points)
    return GpaResult(gpa=total_points / total_credits, total_credits=total_credits, total_points=total_points)


def project(base: GpaResult, hypothetical: Sequence[Weighted]) -> GpaResult:
    """
    Extend an already aggregated result with hypothetical courses.

    Same result as aggregate(base_courses + hypothetical), without
    re-reading the base courses.
    """
    extra_points, extra_credits = _totals(hypothetical)
    total_points = math.fsum([base.total_points, extra_points])
    total_credits = base.total_credits + extra_credits
    gpa = total_points / total_credits if total_credits > 0 else 0.0
    return GpaResult(gpa=gpa, total_credits=total_credits, total_points=total_points)


def classify(gpa: float) -> str:
    """
    Map a GPA to its performance tier.

    Out-of-range input is accepted: above 4 lands in the top tier, below 0
    in the bottom one.
    """
    for threshold, label in PERFORMANCE_THRESHOLDS:
        if gpa >= threshold:
            return label
    return LOWEST_TIER


def tier_rank(tier: str) -> int:
    """Position of a tier in PERFORMANCE_TIERS, 0 being the best."""
    return PERFORMANCE_TIERS.index(tier)
