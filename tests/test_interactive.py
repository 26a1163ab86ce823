"""
Scripted runs of the interactive menu.

_prompt is replaced by a list of answers and the rich console writes into a buffer.
"""

import io
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

from rich.console import Console

import studentplanner.interactive as interactive
from studentplanner.model import AcademicEvent, Course
from studentplanner.storage import load_courses, load_events, save_courses, save_events


class InteractiveTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "planner.json"
        self.buf = io.StringIO()
        console = Console(file=self.buf, width=200, color_system=None)
        patcher = mock.patch.object(interactive, "console", console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_with(self, answers: list[str]) -> str:
        with mock.patch.object(interactive, "_prompt", side_effect=answers):
            interactive.run_interactive(self.path)
        return self.buf.getvalue()


class TestGradeManager(InteractiveTestCase):
    def test_add_course(self) -> None:
        out = self.run_with(["2", "a", "Algebra", "S1", "3", "B+", "", "0"])
        courses = load_courses(self.path)
        self.assertEqual(len(courses), 1)
        self.assertEqual(courses[0].name, "Algebra")
        self.assertEqual(courses[0].grade, 3.5)
        self.assertIn("Added: Algebra", out)

    def test_add_course_requires_positive_credits(self) -> None:
        self.run_with(["2", "a", "Algebra", "S1", "0", "A", "", "0"])
        self.assertEqual(load_courses(self.path), [])

    def test_delete_needs_confirmation(self) -> None:
        save_courses([Course(id="c1", name="Algebra", credits=3, grade=4.0, semester="S1")], self.path)
        self.run_with(["2", "d", "1", "n", "", "0"])
        self.assertEqual(len(load_courses(self.path)), 1)

        self.run_with(["2", "d", "1", "y", "", "0"])
        self.assertEqual(load_courses(self.path), [])

    def test_non_decimal_digits_are_rejected(self) -> None:
        save_courses([Course(id="c1", name="Algebra", credits=3, grade=4.0, semester="S1")], self.path)
        out = self.run_with(["2", "d", "²", "", "0"])
        self.assertIn("Not a number.", out)
        self.assertEqual(len(load_courses(self.path)), 1)


class TestSimulator(InteractiveTestCase):
    def test_projection_with_edited_row(self) -> None:
        save_courses(
            [
                Course(id="1", name="A", credits=3, grade=4.0, semester="S1"),
                Course(id="2", name="B", credits=4, grade=3.0, semester="S1"),
            ],
            self.path,
        )
        out = self.run_with(["3", "a", "e", "1", "Capstone", "4", "B", "", "0"])
        self.assertIn("Current CPA:   3.43 | 7 credits", out)
        # default row: 3 credits of 4.0 -> (24 + 12) / 10
        self.assertIn("Projected CPA: 3.60 (Excellent) | 10 credits", out)
        # edited row: 4 credits of 3.0 -> (24 + 12) / 11
        self.assertIn("Projected CPA: 3.27 (Very Good) | 11 credits", out)
        self.assertIn("Capstone", out)

    def test_simulation_is_not_saved(self) -> None:
        self.run_with(["3", "a", "a", "r", "1", "", "0"])
        self.assertEqual(load_courses(self.path), [])


class TestScheduler(InteractiveTestCase):
    def test_add_and_delete_event(self) -> None:
        today = date.today().isoformat()
        self.run_with(["4", "a", "Stats exam", "exam", today, "09:00", "", "0"])
        events = load_events(self.path)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].type, "exam")
        self.assertEqual(events[0].time.strftime("%H:%M"), "09:00")

        out = self.run_with(["4", "d", "1", "y", "", "0"])
        self.assertIn("Deleted: Stats exam", out)
        self.assertEqual(load_events(self.path), [])

    def test_invalid_event_type_is_rejected(self) -> None:
        self.run_with(["4", "a", "Party", "party", "", "", "0"])
        self.assertEqual(load_events(self.path), [])


class TestDashboard(InteractiveTestCase):
    def test_dashboard_shows_cpa_and_today(self) -> None:
        save_courses(
            [
                Course(id="1", name="A", credits=3, grade=4.0, semester="S1"),
                Course(id="2", name="B", credits=4, grade=3.0, semester="S2"),
            ],
            self.path,
        )
        save_events([AcademicEvent(id="e", title="Hand in essay", type="deadline", date=date.today())], self.path)
        out = self.run_with(["1", "0"])
        self.assertIn("3.43 (Very Good)", out)
        self.assertIn("GPA trend", out)
        self.assertIn("Hand in essay", out)


if __name__ == "__main__":
    unittest.main()
