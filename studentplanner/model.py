"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and AcademicEvent
records so that:
- the GPA core, the grouping helpers, storage and both UIs share the same field names
- stored records stay immutable (frozen dataclasses); changing data means
  building a new list, never editing a record in place
- JSON (de)serialization lives next to the type it belongs to
"""

from __future__ import annotations

import math
import time as _time
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional

EVENT_TYPES = ("class", "exam", "assignment", "deadline")

EVENT_TYPE_NAMES = {
    "class": "Class",
    "exam": "Exam",
    "assignment": "Assignment",
    "deadline": "Deadline",
}


def make_id() -> str:
    """
    Return a new timestamp-derived record id.

    Uniqueness is best effort: two ids created within the same microsecond collide.
    """
    return str(_time.time_ns() // 1000)


@dataclass(frozen=True)
class Course:
    """
    One graded course as stored under the "courses" key.
    """

    id: str
    name: str
    credits: int
    grade: float
    semester: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "credits": self.credits,
            "grade": self.grade,
            "semester": self.semester,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Course:
        """
        Build a Course from its stored dict.

        Raises KeyError, TypeError or ValueError for records that do not match the shape.
        """
        credits = data["credits"]
        grade = data["grade"]
        # bool is an int subclass, but never a valid credit count
        if isinstance(credits, bool) or not isinstance(credits, (int, float)) or not float(credits).is_integer() or credits < 0:
            raise ValueError(f"Invalid credits: {credits!r}")
        if isinstance(grade, bool) or not isinstance(grade, (int, float)) or not math.isfinite(grade):
            raise ValueError(f"Invalid grade: {grade!r}")
        if not (0.0 <= grade <= 4.0):
            raise ValueError(f"Grade out of range [0, 4]: {grade!r}")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            credits=int(credits),
            grade=float(grade),
            semester=str(data["semester"]),
        )


@dataclass(frozen=True)
class AcademicEvent:
    """
    One calendar entry (class, exam, assignment or deadline) on a single date.
    """

    id: str
    title: str
    type: str
    date: date
    time: Optional[time] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "date": self.date.isoformat(),
        }
        if self.time is not None:
            out["time"] = self.time.strftime("%H:%M")
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AcademicEvent:
        kind = str(data["type"])
        if kind not in EVENT_TYPES:
            raise ValueError(f"Invalid event type: {kind!r}")

        day = datetime.strptime(str(data["date"]), "%Y-%m-%d").date()

        # "" is what an empty time input stores
        raw_time = data.get("time")
        at: Optional[time] = None
        if raw_time:
            at = datetime.strptime(str(raw_time), "%H:%M").time()

        return cls(id=str(data["id"]), title=str(data["title"]), type=kind, date=day, time=at)


@dataclass(frozen=True)
class GpaResult:
    """
    Derived aggregate of a course collection. Recomputed on demand, never stored.

    total_points keeps the exact credit-weighted point sum so a projection can
    extend it without rebuilding points from gpa * total_credits. When it is
    not given, it is derived as gpa * total_credits.
    """

    gpa: float
    total_credits: int
    total_points: Optional[float] = None

    def __post_init__(self) -> None:
        if self.total_points is None:
            object.__setattr__(self, "total_points", self.gpa * self.total_credits)


@dataclass
class SimulatedCourse:
    """
    A hypothetical course row in the GPA simulator (editable, never persisted).
    """

    id: str
    name: str = "New course"
    credits: int = 3
    grade: float = 4.0
