"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    studentplanner dashboard
    studentplanner add-course "Web Programming" --credits 3 --grade B+ --semester "2024-1"
    studentplanner gpa --semester 2024-1
    studentplanner simulate 3:A 4:B
    studentplanner add-event "Final exam" --type exam --date 2024-06-12 --time 09:00
    studentplanner week --offset 1
    studentplanner export out.ics
    studentplanner interactive

Note:
- The interactive UI lives in studentplanner/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from studentplanner.export_ics import export_events_to_ics
from studentplanner.grades import GRADE_SCALE, aggregate, classify, letter_for, project
from studentplanner.grouping import (
    events_on,
    group_by_semester,
    semester_gpas,
    shift_week,
    sort_events,
    week_dates,
)
from studentplanner.model import EVENT_TYPE_NAMES, EVENT_TYPES, AcademicEvent, Course, make_id
from studentplanner.parse import (
    parse_credits,
    parse_date,
    parse_event_type,
    parse_grade,
    parse_simulated,
    parse_time,
)
from studentplanner.storage import load_courses, load_events, save_courses, save_events

logger = logging.getLogger(__name__)


def _event_line(ev: AcademicEvent) -> str:
    bits = [ev.time.strftime("%H:%M") if ev.time else "--:--", ev.title, f"({EVENT_TYPE_NAMES[ev.type]})", ev.id]
    return " | ".join(bits)


def _course_line(c: Course) -> str:
    letter = letter_for(c.grade) or "N/A"
    return f"{c.id} | {c.name} | {c.credits} cr | {c.grade:.1f} ({letter})"


def _cmd_dashboard(courses: list[Course], events: list[AcademicEvent]) -> int:
    """
    Print CPA, performance tier, course counts, today's events and the GPA trend.
    """
    overall = aggregate(courses)
    semesters = group_by_semester(courses)
    today = date.today()
    todays = events_on(events, today)

    print(f"CPA: {overall.gpa:.2f} ({classify(overall.gpa)})")
    print(f"Credits earned: {overall.total_credits}")
    print(f"Courses: {len(courses)} across {len(semesters)} semesters")
    print(f"Events today: {len(todays)}")

    trend = semester_gpas(courses)
    print("\nGPA trend:")
    if len(trend) < 2:
        print("  At least 2 semesters are needed to show a trend.")
    else:
        for sem, res in trend:
            print(f"  {sem}: {res.gpa:.2f}")

    print(f"\nToday ({today.isoformat()}):")
    if not todays:
        print("  No events today.")
    for ev in todays:
        print(f"  - {_event_line(ev)}")
    return 0


def _cmd_courses(courses: list[Course]) -> int:
    """
    List courses grouped by semester (newest label first) with semester GPA.
    """
    if not courses:
        print("No courses yet. Add one with 'add-course'.")
        return 0

    groups = group_by_semester(courses)
    for sem, res in semester_gpas(courses, descending=True):
        print(f"\n{sem}  (GPA {res.gpa:.2f})")
        for c in groups[sem]:
            print(f"  - {_course_line(c)}")

    overall = aggregate(courses)
    print(f"\nCPA: {overall.gpa:.2f} ({classify(overall.gpa)}) | {overall.total_credits} credits")
    return 0


def _cmd_add_course(args: argparse.Namespace, courses: list[Course], data_path: Optional[Path]) -> int:
    name = (args.name or "").strip()
    semester = (args.semester or "").strip()
    if not name:
        print("Please provide a course name.")
        return 1
    if not semester:
        print("Please provide a semester.")
        return 1

    try:
        credits = parse_credits(args.credits)
        grade = parse_grade(args.grade)
    except ValueError as exc:
        print(str(exc))
        return 1
    if credits <= 0:
        print("Credits must be greater than 0.")
        return 1

    course = Course(id=make_id(), name=name, credits=credits, grade=grade, semester=semester)
    save_courses([*courses, course], data_path)
    print(f"Added: {_course_line(course)} [{semester}]")
    return 0


def _cmd_remove_course(args: argparse.Namespace, courses: list[Course], data_path: Optional[Path]) -> int:
    cid = (args.course_id or "").strip()
    remaining = [c for c in courses if c.id != cid]
    if len(remaining) == len(courses):
        print(f"Course not found: {cid}")
        return 1

    save_courses(remaining, data_path)
    print(f"Removed: {cid} (courses: {len(remaining)})")
    return 0


def _cmd_gpa(args: argparse.Namespace, courses: list[Course]) -> int:
    semester = args.semester
    if semester is not None:
        courses = group_by_semester(courses).get(semester, [])
        if not courses:
            print(f"No courses in semester: {semester}")
            return 1

    res = aggregate(courses)
    label = semester if semester is not None else "CPA"
    print(f"{label}: {res.gpa:.2f} ({classify(res.gpa)}) | {res.total_credits} credits")
    return 0


def _cmd_simulate(args: argparse.Namespace, courses: list[Course]) -> int:
    """
    Compare the current CPA with the CPA after hypothetical CREDITS:GRADE courses.
    """
    try:
        hypothetical = [parse_simulated(tok) for tok in args.pairs]
    except ValueError as exc:
        print(str(exc))
        return 1

    base = aggregate(courses)
    projected = project(base, hypothetical)
    print(f"Current CPA:   {base.gpa:.2f} | {base.total_credits} credits")
    print(f"Projected CPA: {projected.gpa:.2f} ({classify(projected.gpa)}) | {projected.total_credits} credits")
    return 0


def _cmd_add_event(args: argparse.Namespace, events: list[AcademicEvent], data_path: Optional[Path]) -> int:
    title = (args.title or "").strip()
    if not title:
        print("Please provide an event title.")
        return 1

    try:
        kind = parse_event_type(args.type)
        day = parse_date(args.date) if args.date else date.today()
        at = parse_time(args.time)
    except ValueError as exc:
        print(str(exc))
        return 1

    ev = AcademicEvent(id=make_id(), title=title, type=kind, date=day, time=at)
    save_events(sort_events([*events, ev]), data_path)
    print(f"Added: {day.isoformat()} {_event_line(ev)}")
    return 0


def _cmd_remove_event(args: argparse.Namespace, events: list[AcademicEvent], data_path: Optional[Path]) -> int:
    eid = (args.event_id or "").strip()
    remaining = [ev for ev in events if ev.id != eid]
    if len(remaining) == len(events):
        print(f"Event not found: {eid}")
        return 1

    save_events(remaining, data_path)
    print(f"Removed: {eid} (events: {len(remaining)})")
    return 0


def _cmd_week(args: argparse.Namespace, events: list[AcademicEvent]) -> int:
    """
    Print the Monday-to-Sunday week containing --date, shifted by --offset weeks.
    """
    try:
        anchor = parse_date(args.date) if args.date else date.today()
    except ValueError as exc:
        print(str(exc))
        return 1

    days = week_dates(shift_week(anchor, args.offset))
    print(f"Week of {days[0].strftime('%B %Y')} ({days[0].isoformat()} - {days[-1].isoformat()})")
    for d in days:
        print(f"\n{d.strftime('%a')} {d.isoformat()}")
        for ev in events_on(events, d):
            print(f"  - {_event_line(ev)}")
    return 0


def _cmd_scale() -> int:
    print("Letter | 4.0 | 10-pt")
    for letter, value, ten in GRADE_SCALE:
        print(f"{letter:<6} | {value:.1f} | {ten:.1f}")
    return 0


def _cmd_export(args: argparse.Namespace, events: list[AcademicEvent]) -> int:
    """
    Export all events into an iCalendar (.ics) file.
    """
    if not events:
        print("No events to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    try:
        n = export_events_to_ics(events, out_path)
    except OSError as exc:
        print(f"Cannot write {out_path}: {exc}")
        return 1
    print(f"Exported {n} events to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="studentplanner", description="Student Planner CLI")
    parser.add_argument("--data", type=Path, default=None, help="Data file (default: ~/.studentplanner/planner.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("dashboard", help="Show CPA, today's events and the GPA trend")
    sub.add_parser("courses", help="List courses grouped by semester")

    p_add = sub.add_parser("add-course", help="Add a graded course")
    p_add.add_argument("name", type=str, help="Course name")
    p_add.add_argument("--credits", type=str, default="3", help="Credits (default: 3)")
    p_add.add_argument("--grade", type=str, required=True, help="Letter (e.g. B+) or 0-4 value")
    p_add.add_argument("--semester", type=str, required=True, help="Semester label")

    p_rm = sub.add_parser("remove-course", help="Remove a course by id")
    p_rm.add_argument("course_id", type=str, help="Course id")

    p_gpa = sub.add_parser("gpa", help="Show GPA and performance tier")
    p_gpa.add_argument("--semester", type=str, default=None, help="Only this semester")

    p_sim = sub.add_parser("simulate", help="Project CPA with hypothetical courses")
    p_sim.add_argument("pairs", nargs="+", metavar="CREDITS:GRADE", help="e.g. 3:A 4:3.5")

    p_ev = sub.add_parser("add-event", help="Add a calendar event")
    p_ev.add_argument("title", type=str, help="Event title")
    p_ev.add_argument("--type", type=str, default="class", help=f"One of: {', '.join(EVENT_TYPES)}")
    p_ev.add_argument("--date", type=str, default=None, help="YYYY-MM-DD (default: today)")
    p_ev.add_argument("--time", type=str, default=None, help="HH:MM (optional)")

    p_rme = sub.add_parser("remove-event", help="Remove an event by id")
    p_rme.add_argument("event_id", type=str, help="Event id")

    p_week = sub.add_parser("week", help="Show one week of events")
    p_week.add_argument("--date", type=str, default=None, help="Any date in the week (default: today)")
    p_week.add_argument("--offset", type=int, default=0, help="Shift by N weeks (negative = back)")

    sub.add_parser("scale", help="Show the grade scale")

    p_export = sub.add_parser("export", help="Export events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    data_path: Optional[Path] = args.data
    courses = load_courses(data_path)
    events = load_events(data_path)
    logger.debug("Loaded %d courses and %d events", len(courses), len(events))

    if args.command == "dashboard":
        raise SystemExit(_cmd_dashboard(courses, events))
    if args.command == "courses":
        raise SystemExit(_cmd_courses(courses))
    if args.command == "add-course":
        raise SystemExit(_cmd_add_course(args, courses, data_path))
    if args.command == "remove-course":
        raise SystemExit(_cmd_remove_course(args, courses, data_path))
    if args.command == "gpa":
        raise SystemExit(_cmd_gpa(args, courses))
    if args.command == "simulate":
        raise SystemExit(_cmd_simulate(args, courses))
    if args.command == "add-event":
        raise SystemExit(_cmd_add_event(args, events, data_path))
    if args.command == "remove-event":
        raise SystemExit(_cmd_remove_event(args, events, data_path))
    if args.command == "week":
        raise SystemExit(_cmd_week(args, events))
    if args.command == "scale":
        raise SystemExit(_cmd_scale())
    if args.command == "export":
        raise SystemExit(_cmd_export(args, events))

    if args.command == "interactive":
        from studentplanner.interactive import run_interactive

        run_interactive(data_path)
        raise SystemExit(0)

    raise SystemExit(2)
