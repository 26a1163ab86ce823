from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studentplanner.export_ics import export_events_to_ics
from studentplanner.grades import GRADE_SCALE, aggregate, classify, letter_for, project
from studentplanner.grouping import events_on, group_by_semester, semester_gpas, shift_week, sort_events, week_dates
from studentplanner.model import EVENT_TYPE_NAMES, EVENT_TYPES, AcademicEvent, Course, SimulatedCourse, make_id
from studentplanner.parse import parse_credits, parse_date, parse_event_type, parse_grade, parse_time
from studentplanner.storage import load_courses, load_events, save_courses, save_events

console = Console()

EVENT_STYLES = {
    "class": "blue",
    "exam": "red",
    "assignment": "yellow",
    "deadline": "magenta",
}


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg, markup=False)


def _confirm(msg: str) -> bool:
    return _prompt(f"{msg} [y/N]: ").strip().lower() == "y"


def _pick_index(msg: str, n: int) -> Optional[int]:
    """
    Ask for a 1-based number and return the 0-based index, or None on blank / invalid input.
    """
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdecimal():
        _println("Not a number.")
        return None
    i = int(pick)
    if not (1 <= i <= n):
        _println("Out of range.")
        return None
    return i - 1


def _event_label(ev: AcademicEvent) -> str:
    style = EVENT_STYLES.get(ev.type, "white")
    at = ev.time.strftime("%H:%M") if ev.time else ""
    bits = [f"[{style}]{escape(ev.title)}[/]", EVENT_TYPE_NAMES[ev.type]]
    if at:
        bits.append(at)
    return " | ".join(bits)


def _grade_choices() -> str:
    return ", ".join(f"{letter} ({value:.1f})" for letter, value, _ in GRADE_SCALE)


def run_interactive(data_path: Optional[Path] = None) -> None:
    """
    Interactive menu loop over the four views plus .ics export.
    """
    while True:
        courses = load_courses(data_path)
        events = load_events(data_path)

        _println("\n=== Student Planner ===")
        _println(f"Courses: {len(courses)} | Events: {len(events)}")

        choice = _prompt(
            "\n[1] Dashboard\n"
            "[2] Grade manager\n"
            "[3] GPA simulator\n"
            "[4] Scheduler\n"
            "[5] Export .ics\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            _flow_dashboard(courses, events)
        elif choice == "2":
            _flow_grade_manager(courses, data_path)
        elif choice == "3":
            _flow_simulator(courses)
        elif choice == "4":
            _flow_scheduler(events, data_path)
        elif choice == "5":
            _flow_export(events)
        else:
            _println("Invalid choice.")


def _flow_dashboard(courses: list[Course], events: list[AcademicEvent], today: Optional[date] = None) -> None:
    today = today or date.today()
    cpa = aggregate(courses)
    todays = events_on(events, today)

    summary = Table(box=box.SIMPLE, show_header=False)
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    summary.add_row("Cumulative CPA", f"[bold blue]{cpa.gpa:.2f}[/] ({classify(cpa.gpa)})")
    summary.add_row("Credits earned", str(cpa.total_credits))
    summary.add_row("Courses", f"{len(courses)} across {len(group_by_semester(courses))} semesters")
    summary.add_row("Events today", f"{len(todays)} ({'to do' if todays else 'quiet day!'})")
    console.print(summary)

    trend = semester_gpas(courses)
    if len(trend) < 2:
        _println("GPA trend: at least 2 semesters are needed.")
    else:
        table = Table(title="GPA trend", box=box.SIMPLE)
        table.add_column("Semester")
        table.add_column("GPA", justify="right")
        table.add_column("")
        for sem, res in trend:
            # one block per 0.25 grade point
            table.add_row(escape(sem), f"{res.gpa:.2f}", "█" * int(round(res.gpa * 4)))
        console.print(table)

    _println(f"\nToday ({today.isoformat()}):")
    if not todays:
        _println("  No events today. Take a rest!")
    for ev in todays:
        _println(f"  - {_event_label(ev)}")


def _print_courses(courses: list[Course]) -> list[Course]:
    """
    Print courses per semester (newest label first) and return them in displayed order.
    """
    groups = group_by_semester(courses)
    ordered: list[Course] = []
    for sem, res in semester_gpas(courses, descending=True):
        table = Table(title=f"{escape(sem)}  GPA {res.gpa:.2f}", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Course")
        table.add_column("Credits", justify="right")
        table.add_column("Grade", justify="right")
        table.add_column("Letter", justify="center")
        for c in groups[sem]:
            ordered.append(c)
            table.add_row(str(len(ordered)), escape(c.name), str(c.credits), f"{c.grade:.1f}", letter_for(c.grade) or "N/A")
        console.print(table)

    cpa = aggregate(courses)
    _println(f"CPA: [bold blue]{cpa.gpa:.2f}[/] ({classify(cpa.gpa)}) | {cpa.total_credits} credits")
    return ordered


def _flow_grade_manager(courses: list[Course], data_path: Optional[Path]) -> None:
    while True:
        if courses:
            ordered = _print_courses(courses)
        else:
            ordered = []
            _println("No courses yet. Add the first one to get started!")

        choice = _prompt("\n[a] Add course  [d] Delete course  [blank] Back: ").strip().lower()
        if not choice:
            return
        if choice == "a":
            course = _ask_course()
            if course is not None:
                courses = [*courses, course]
                save_courses(courses, data_path)
                _println(f"Added: {escape(course.name)}")
        elif choice == "d":
            if not ordered:
                _println("No courses to delete.")
                continue
            idx = _pick_index("Number to delete: ", len(ordered))
            if idx is None:
                continue
            target = ordered[idx]
            if _confirm(f"Delete '{target.name}'?"):
                courses = [c for c in courses if c.id != target.id]
                save_courses(courses, data_path)
                _println(f"Deleted: {escape(target.name)}")
        else:
            _println("Invalid choice.")


def _ask_course() -> Optional[Course]:
    name = _prompt("Course name: ").strip()
    semester = _prompt("Semester (e.g. 2023-2024 S1): ").strip()
    try:
        credits = parse_credits(_prompt("Credits [3]: ").strip() or "3")
        grade = parse_grade(_prompt(f"Grade, one of {_grade_choices()} [A]: ").strip() or "A")
    except ValueError as exc:
        _println(f"[red]{escape(str(exc))}[/]")
        return None

    if not name or not semester or credits <= 0:
        _println("[red]Name and semester are required and credits must be greater than 0.[/]")
        return None
    return Course(id=make_id(), name=name, credits=credits, grade=grade, semester=semester)


def _print_simulation(base_courses: list[Course], simulated: list[SimulatedCourse]) -> None:
    if simulated:
        table = Table(title="Simulated courses", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Name")
        table.add_column("Credits", justify="right")
        table.add_column("Grade", justify="right")
        for i, s in enumerate(simulated, start=1):
            table.add_row(str(i), escape(s.name), str(s.credits), f"{letter_for(s.grade) or '?'} ({s.grade:.1f})")
        console.print(table)
    else:
        _println('Press "a" to add a course and start simulating.')

    base = aggregate(base_courses)
    projected = project(base, simulated)
    _println(f"Current CPA:   {base.gpa:.2f} | {base.total_credits} credits")
    _println(
        f"Projected CPA: [bold blue]{projected.gpa:.2f}[/] ({classify(projected.gpa)}) | "
        f"{projected.total_credits} credits"
    )


def _flow_simulator(courses: list[Course]) -> None:
    """
    Session-only what-if rows on top of the recorded courses. Nothing here is saved.
    """
    simulated: list[SimulatedCourse] = []
    while True:
        _print_simulation(courses, simulated)
        choice = _prompt("\n[a] Add  [e] Edit  [r] Remove  [blank] Back: ").strip().lower()
        if not choice:
            return
        if choice == "a":
            simulated.append(SimulatedCourse(id=make_id()))
        elif choice in ("e", "r"):
            if not simulated:
                _println("No simulated courses.")
                continue
            idx = _pick_index("Number: ", len(simulated))
            if idx is None:
                continue
            if choice == "r":
                simulated.pop(idx)
            else:
                _edit_simulated(simulated[idx])
        else:
            _println("Invalid choice.")


def _edit_simulated(row: SimulatedCourse) -> None:
    """
    Update one simulated row in place. Blank answers keep the current value.
    """
    name = _prompt(f"Name [{row.name}]: ").strip()
    credits_in = _prompt(f"Credits [{row.credits}]: ").strip()
    grade_in = _prompt(f"Grade [{letter_for(row.grade) or row.grade}]: ").strip()
    try:
        credits = parse_credits(credits_in) if credits_in else row.credits
        grade = parse_grade(grade_in) if grade_in else row.grade
    except ValueError as exc:
        _println(f"[red]{escape(str(exc))}[/]")
        return

    if name:
        row.name = name
    row.credits = credits
    row.grade = grade


def _print_week(events: list[AcademicEvent], anchor: date) -> list[AcademicEvent]:
    """
    Print the Monday-to-Sunday week of anchor and return its events in displayed order.
    """
    days = week_dates(anchor)
    today = date.today()

    table = Table(title=days[0].strftime("%B %Y"), box=box.SIMPLE)
    buckets: list[list[AcademicEvent]] = []
    for d in days:
        header = f"{d.strftime('%a')} {d.day}"
        table.add_column(f"[bold blue]{header}[/]" if d == today else header)
        buckets.append(events_on(events, d))

    ordered: list[AcademicEvent] = []
    max_len = max(len(b) for b in buckets)
    for r in range(max_len):
        row = []
        for bucket in buckets:
            if r < len(bucket):
                ordered.append(bucket[r])
                row.append(f"{len(ordered)}. {_event_label(bucket[r])}")
            else:
                row.append("")
        table.add_row(*row)
    console.print(table)
    return ordered


def _flow_scheduler(events: list[AcademicEvent], data_path: Optional[Path]) -> None:
    anchor = date.today()
    while True:
        shown = _print_week(events, anchor)
        choice = _prompt("\n[p] Previous week  [n] Next week  [a] Add event  [d] Delete event  [blank] Back: ")
        choice = choice.strip().lower()
        if not choice:
            return
        if choice == "p":
            anchor = shift_week(anchor, -1)
        elif choice == "n":
            anchor = shift_week(anchor, 1)
        elif choice == "a":
            ev = _ask_event()
            if ev is not None:
                events = sort_events([*events, ev])
                save_events(events, data_path)
                _println(f"Added: {escape(ev.title)}")
        elif choice == "d":
            if not shown:
                _println("No events this week.")
                continue
            idx = _pick_index("Number to delete: ", len(shown))
            if idx is None:
                continue
            target = shown[idx]
            if _confirm(f"Delete '{target.title}'?"):
                events = [ev for ev in events if ev.id != target.id]
                save_events(events, data_path)
                _println(f"Deleted: {escape(target.title)}")
        else:
            _println("Invalid choice.")


def _ask_event() -> Optional[AcademicEvent]:
    title = _prompt("Title: ").strip()
    if not title:
        _println("[red]Title is required.[/]")
        return None
    try:
        kind = parse_event_type(_prompt(f"Type ({', '.join(EVENT_TYPES)}) [class]: ").strip() or "class")
        date_in = _prompt(f"Date YYYY-MM-DD [{date.today().isoformat()}]: ").strip()
        day = parse_date(date_in) if date_in else date.today()
        at = parse_time(_prompt("Time HH:MM (optional): "))
    except ValueError as exc:
        _println(f"[red]{escape(str(exc))}[/]")
        return None
    return AcademicEvent(id=make_id(), title=title, type=kind, date=day, time=at)


def _flow_export(events: list[AcademicEvent]) -> None:
    if not events:
        _println("No events to export.")
        return

    downloads = Path.home() / "Downloads"
    default_name = "studentplanner.ics"

    out_in = _prompt(f"Please enter desired file name, default is [{default_name}]: ").strip()
    out_path = downloads / out_in if out_in else downloads / default_name

    if out_path.suffix.lower() != ".ics":
        out_path = out_path.with_suffix(".ics")

    try:
        n = export_events_to_ics(events, out_path)
    except OSError as exc:
        _println(f"[red]Cannot write {escape(str(out_path))}: {escape(str(exc))}[/]")
        return
    _println(f"\nExported {n} events.")
    _println(f"Saved to: {escape(str(out_path.resolve()))}")
