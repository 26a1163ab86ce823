"""
Persistent storage for the user's courses and events.

Everything lives in one JSON document:

    ~/.studentplanner/planner.json

    {"courses": [...], "events": [...]}

The document behaves like a small key-value store with two fixed keys.
Reading is forgiving: a missing, unreadable or corrupted file means
"no data", and single malformed records are skipped. Writing is a
read-modify-write of the whole document that keeps the other key intact.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable

from studentplanner.model import AcademicEvent, Course

logger = logging.getLogger(__name__)

COURSES_KEY = "courses"
EVENTS_KEY = "events"

DATA_ENV_VAR = "STUDENTPLANNER_DATA"


def default_data_path() -> Path:
    """
    Return the store location: $STUDENTPLANNER_DATA if set, otherwise a file in the home directory.

    A function instead of a constant so tests and the CLI --data option can override it.
    """
    env = os.environ.get(DATA_ENV_VAR, "").strip()
    if env:
        return Path(env).expanduser()
    return Path.home() / ".studentplanner" / "planner.json"


def _resolve(path: str | Path | None) -> Path:
    return Path(path) if path is not None else default_data_path()


def _read_document(path: Path) -> dict[str, Any]:
    # First run: file does not exist yet
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable data file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring data file %s: top level is not an object", path)
        return {}
    return data


def load_collection(key: str, path: str | Path | None = None) -> list[Any]:
    """
    Return the raw list stored under key, or [] when absent or unparseable.
    """
    value = _read_document(_resolve(path)).get(key, [])
    if not isinstance(value, list):
        logger.warning("Ignoring %r: expected a list, got %s", key, type(value).__name__)
        return []
    return value


def save_collection(key: str, records: Iterable[Any], path: str | Path | None = None) -> None:
    """
    Store records under key, keeping every other key of the document.

    Creates parent directories if needed. OSError from writing propagates.
    """
    data_path = _resolve(path)
    data_path.parent.mkdir(parents=True, exist_ok=True)

    doc = _read_document(data_path)
    doc[key] = list(records)

    data_path.write_text(json.dumps(doc, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved %d %s to %s", len(doc[key]), key, data_path)


def load_courses(path: str | Path | None = None) -> list[Course]:
    out: list[Course] = []
    for raw in load_collection(COURSES_KEY, path):
        try:
            out.append(Course.from_dict(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed course record %r: %s", raw, exc)
    return out


def save_courses(courses: Iterable[Course], path: str | Path | None = None) -> None:
    save_collection(COURSES_KEY, [c.to_dict() for c in courses], path)


def load_events(path: str | Path | None = None) -> list[AcademicEvent]:
    out: list[AcademicEvent] = []
    for raw in load_collection(EVENTS_KEY, path):
        try:
            out.append(AcademicEvent.from_dict(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed event record %r: %s", raw, exc)
    return out


def save_events(events: Iterable[AcademicEvent], path: str | Path | None = None) -> None:
    save_collection(EVENTS_KEY, [ev.to_dict() for ev in events], path)
