"""
Grouping and calendar helpers shared by the CLI and the interactive views.

- courses group by semester label (exact string match, no normalization)
- events group by calendar date (exact equality)
- weeks start on Monday

Grouping is stable: records keep their input order inside a group.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, time, timedelta
from typing import Iterable

from studentplanner.grades import aggregate
from studentplanner.model import AcademicEvent, Course, GpaResult


def group_by_semester(courses: Iterable[Course]) -> dict[str, list[Course]]:
    groups: dict[str, list[Course]] = defaultdict(list)
    for c in courses:
        groups[c.semester].append(c)
    return dict(groups)


def semester_gpas(courses: Iterable[Course], descending: bool = False) -> list[tuple[str, GpaResult]]:
    """
    Aggregate every semester on its own, sorted by semester label.

    Ascending order feeds the GPA trend; the grade manager lists newest first.
    """
    groups = group_by_semester(courses)
    return [(sem, aggregate(groups[sem])) for sem in sorted(groups, reverse=descending)]


def group_by_date(events: Iterable[AcademicEvent]) -> dict[date, list[AcademicEvent]]:
    groups: dict[date, list[AcademicEvent]] = defaultdict(list)
    for ev in events:
        groups[ev.date].append(ev)
    return dict(groups)


def sort_events(events: Iterable[AcademicEvent]) -> list[AcademicEvent]:
    """Storage order: by date, then time, untimed events first within a day."""
    return sorted(events, key=lambda ev: (ev.date, ev.time or time.min))


def events_on(events: Iterable[AcademicEvent], day: date) -> list[AcademicEvent]:
    """Events of one day ordered by time, untimed events last."""
    todays = [ev for ev in events if ev.date == day]
    return sorted(todays, key=lambda ev: (ev.time is None, ev.time or time.min))


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_dates(day: date) -> list[date]:
    """The seven dates (Monday to Sunday) of the week containing day."""
    monday = week_start(day)
    return [monday + timedelta(days=i) for i in range(7)]


def shift_week(day: date, weeks: int) -> date:
    return day + timedelta(weeks=weeks)
