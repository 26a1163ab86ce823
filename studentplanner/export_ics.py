"""
iCalendar (.ics) export.

Academic events become VEVENTs that can be imported into Google Calendar,
Outlook or Apple Calendar:
- timed events start at their local time and last one hour
- untimed events become all-day entries
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from studentplanner.model import AcademicEvent, EVENT_TYPE_NAMES

logger = logging.getLogger(__name__)

TIMED_EVENT_LENGTH = timedelta(hours=1)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _event_lines(ev: AcademicEvent, dtstamp: str) -> list[str]:
    lines = ["BEGIN:VEVENT", f"UID:{_ics_escape(ev.id)}@studentplanner", f"DTSTAMP:{dtstamp}"]

    if ev.time is None:
        lines.append(f"DTSTART;VALUE=DATE:{ev.date.strftime('%Y%m%d')}")
        lines.append(f"DTEND;VALUE=DATE:{(ev.date + timedelta(days=1)).strftime('%Y%m%d')}")
    else:
        start = datetime.combine(ev.date, ev.time)
        end = start + TIMED_EVENT_LENGTH
        lines.append(f"DTSTART:{start.strftime('%Y%m%dT%H%M00')}")
        lines.append(f"DTEND:{end.strftime('%Y%m%dT%H%M00')}")

    summary = ev.title.strip() or "Student Planner Event"
    lines.append(f"SUMMARY:{_ics_escape(summary)}")
    lines.append(f"CATEGORIES:{_ics_escape(EVENT_TYPE_NAMES.get(ev.type, ev.type))}")
    lines.append("END:VEVENT")
    return lines


def export_events_to_ics(events: Iterable[AcademicEvent], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//StudentPlanner//EN",
        "CALSCALE:GREGORIAN",
    ]

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for ev in events:
        lines.extend(_event_lines(ev, dtstamp))
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    logger.debug("Wrote %d events to %s", count, out)
    return count
