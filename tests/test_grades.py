"""
Unit tests for the GPA core.

Contract:
- aggregate([]) -> gpa 0, 0 credits
- zero-credit courses change nothing
- aggregation does not depend on input order
- project(aggregate(base), extra) == aggregate(base + extra)
- classify is monotonic and never fails, even outside [0, 4]
"""

import itertools
import random
import unittest

from studentplanner.grades import (
    GRADE_SCALE,
    PERFORMANCE_TIERS,
    aggregate,
    classify,
    letter_for,
    project,
    ten_point_for,
    tier_rank,
    value_for,
)
from studentplanner.model import Course, GpaResult, SimulatedCourse


def _course(credits: int, grade: float, semester: str = "S1", cid: str = "") -> Course:
    return Course(id=cid or f"{credits}-{grade}-{semester}", name="Course", credits=credits, grade=grade, semester=semester)


SCALE_VALUES = sorted({value for _, value, _ in GRADE_SCALE})


class TestAggregate(unittest.TestCase):
    def test_empty_input(self) -> None:
        res = aggregate([])
        self.assertEqual(res.gpa, 0)
        self.assertEqual(res.total_credits, 0)

    def test_two_courses_end_to_end(self) -> None:
        res = aggregate([_course(3, 4.0), _course(4, 3.0)])
        self.assertEqual(res.total_credits, 7)
        self.assertEqual(res.gpa, 24 / 7)
        self.assertAlmostEqual(res.gpa, 3.4285714, places=6)
        self.assertEqual(classify(res.gpa), "Very Good")

    def test_only_zero_credit_courses(self) -> None:
        res = aggregate([_course(0, 4.0), _course(0, 2.0)])
        self.assertEqual(res, GpaResult(gpa=0.0, total_credits=0, total_points=0.0))

    def test_zero_credit_courses_are_ignored(self) -> None:
        base = [_course(3, 3.5), _course(2, 2.0), _course(4, 1.0)]
        with_zero = base[:1] + [_course(0, 4.0), _course(0, 0.0)] + base[1:]
        self.assertEqual(aggregate(with_zero), aggregate(base))

    def test_no_rounding(self) -> None:
        res = aggregate([_course(3, 4.0), _course(3, 3.5), _course(3, 3.0)])
        self.assertEqual(res.gpa, 3.5)
        res = aggregate([_course(1, 4.0), _course(2, 3.0)])
        self.assertEqual(res.gpa, 10 / 3)

    def test_order_independent(self) -> None:
        courses = [_course(3, 4.0), _course(4, 3.5), _course(2, 1.5), _course(1, 0.0)]
        expected = aggregate(courses)
        for perm in itertools.permutations(courses):
            self.assertEqual(aggregate(perm), expected)

    def test_order_independent_arbitrary_grades(self) -> None:
        rng = random.Random(7)
        courses = [_course(rng.randint(0, 6), rng.uniform(0, 4), cid=str(i)) for i in range(12)]
        expected = aggregate(courses)
        for _ in range(50):
            shuffled = courses[:]
            rng.shuffle(shuffled)
            self.assertEqual(aggregate(shuffled), expected)

    def test_accepts_generators(self) -> None:
        res = aggregate(c for c in [_course(3, 4.0), _course(4, 3.0)])
        self.assertEqual(res.total_credits, 7)


class TestProject(unittest.TestCase):
    def test_matches_aggregate_of_concatenation(self) -> None:
        rng = random.Random(42)
        for _ in range(200):
            base = [_course(rng.randint(0, 5), rng.choice(SCALE_VALUES)) for _ in range(rng.randint(0, 8))]
            extra = [_course(rng.randint(0, 5), rng.choice(SCALE_VALUES)) for _ in range(rng.randint(0, 5))]
            self.assertEqual(project(aggregate(base), extra), aggregate(base + extra))

    def test_every_split_of_one_history(self) -> None:
        courses = [_course(3, 4.0), _course(4, 3.0), _course(2, 2.5), _course(0, 1.0), _course(5, 3.5)]
        expected = aggregate(courses)
        for i in range(len(courses) + 1):
            self.assertEqual(project(aggregate(courses[:i]), courses[i:]), expected)

    def test_simulated_courses(self) -> None:
        base = aggregate([_course(3, 4.0), _course(4, 3.0)])
        projected = project(base, [SimulatedCourse(id="x", credits=4, grade=3.0)])
        self.assertEqual(projected.total_credits, 11)
        self.assertEqual(projected.gpa, 36 / 11)
        self.assertEqual(classify(projected.gpa), "Very Good")

    def test_empty_everything(self) -> None:
        self.assertEqual(project(aggregate([]), []), GpaResult(gpa=0.0, total_credits=0, total_points=0.0))

    def test_base_without_total_points(self) -> None:
        # points are derived as gpa * total_credits when not given
        base = GpaResult(gpa=3.0, total_credits=10)
        self.assertEqual(base.total_points, 30.0)
        projected = project(base, [_course(10, 3.0)])
        self.assertEqual(projected.gpa, 3.0)
        self.assertEqual(projected.total_credits, 20)

        projected = project(GpaResult(gpa=24 / 7, total_credits=7), [_course(4, 3.0)])
        self.assertAlmostEqual(projected.gpa, 36 / 11)

    def test_no_hypothetical_keeps_base(self) -> None:
        base = aggregate([_course(3, 2.5)])
        self.assertEqual(project(base, []), base)


class TestClassify(unittest.TestCase):
    def test_boundaries(self) -> None:
        self.assertEqual(classify(3.6), "Excellent")
        self.assertEqual(classify(3.5999), "Very Good")
        self.assertEqual(classify(3.2), "Very Good")
        self.assertEqual(classify(2.5), "Good")
        self.assertEqual(classify(2.0), "Average")
        self.assertEqual(classify(1.0), "Weak")
        self.assertEqual(classify(0.999), "Poor")
        self.assertEqual(classify(0), "Poor")

    def test_out_of_range_values(self) -> None:
        self.assertEqual(classify(4.5), "Excellent")
        self.assertEqual(classify(-1), "Poor")

    def test_monotonic(self) -> None:
        grid = [x / 100 for x in range(-100, 501)]
        ranks = [tier_rank(classify(g)) for g in grid]
        # rank 0 is the best tier, so ranks must never go up as gpa goes up
        for lower, higher in zip(ranks, ranks[1:]):
            self.assertLessEqual(higher, lower)

    def test_every_tier_is_reachable(self) -> None:
        seen = {classify(x / 10) for x in range(0, 41)}
        self.assertEqual(seen, set(PERFORMANCE_TIERS))
        self.assertEqual(len(PERFORMANCE_TIERS), 6)


class TestGradeScale(unittest.TestCase):
    def test_letter_for_returns_first_match(self) -> None:
        self.assertEqual(letter_for(4.0), "A+")
        self.assertEqual(letter_for(3.5), "B+")
        self.assertEqual(letter_for(0.0), "F")
        self.assertIsNone(letter_for(3.7))

    def test_value_for_is_case_insensitive(self) -> None:
        self.assertEqual(value_for("b+"), 3.5)
        self.assertEqual(value_for(" A "), 4.0)
        with self.assertRaises(ValueError):
            value_for("E")

    def test_ten_point(self) -> None:
        self.assertEqual(ten_point_for(3.0), 7.0)
        self.assertEqual(ten_point_for(4.0), 9.5)
        self.assertIsNone(ten_point_for(0.7))


if __name__ == "__main__":
    unittest.main()
