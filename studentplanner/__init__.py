"""
Student Planner: course grades, GPA/CPA tracking, GPA simulation and a weekly academic calendar.
"""

from studentplanner.grades import aggregate, classify, project
from studentplanner.model import AcademicEvent, Course, GpaResult

__all__ = ["AcademicEvent", "Course", "GpaResult", "aggregate", "classify", "project"]
