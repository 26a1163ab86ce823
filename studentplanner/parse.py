"""
Parsing of user input (CLI arguments and interactive prompts).

Every parser either returns a clean value or raises ValueError with a
message that can be shown to the user as-is.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from studentplanner.grades import value_for
from studentplanner.model import EVENT_TYPES, SimulatedCourse, make_id


def parse_grade(text: str) -> float:
    """
    Accept a letter grade ("B+", case-insensitive) or a number on [0, 4].
    """
    raw = text.strip()
    if not raw:
        raise ValueError("Please provide a grade.")

    try:
        value = float(raw)
    except ValueError:
        return value_for(raw)

    if not (0.0 <= value <= 4.0):
        raise ValueError(f"Grade must be between 0 and 4, got {raw!r}")
    return value


def parse_credits(text: str | int) -> int:
    raw = str(text).strip()
    try:
        credits = int(raw)
    except ValueError:
        raise ValueError(f"Credits must be a whole number, got {raw!r}") from None
    if credits < 0:
        raise ValueError(f"Credits cannot be negative, got {credits}")
    return credits


def parse_date(text: str) -> date:
    raw = text.strip()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date {raw!r}, expected YYYY-MM-DD") from None


def parse_time(text: Optional[str]) -> Optional[time]:
    """
    Parse 'HH:MM'. Blank input means "no time".
    """
    raw = (text or "").strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError:
        raise ValueError(f"Invalid time {raw!r}, expected HH:MM") from None


def parse_event_type(text: str) -> str:
    kind = text.strip().lower()
    if kind not in EVENT_TYPES:
        raise ValueError(f"Unknown event type {text!r}, choose one of: {', '.join(EVENT_TYPES)}")
    return kind


def parse_simulated(token: str) -> SimulatedCourse:
    """
    Parse one 'CREDITS:GRADE' pair, e.g. '3:A' or '4:3.5'.
    """
    parts = token.split(":")
    if len(parts) != 2:
        raise ValueError(f"Expected CREDITS:GRADE, got {token!r}")
    credits = parse_credits(parts[0])
    grade = parse_grade(parts[1])
    return SimulatedCourse(id=make_id(), credits=credits, grade=grade)
