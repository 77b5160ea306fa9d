from models.course import Course
from models.student import Student
from models.grading import GRADE_LETTERS, PASS_MARK, grade_letter, passed

__all__ = [
    "Course",
    "Student",
    "GRADE_LETTERS",
    "PASS_MARK",
    "grade_letter",
    "passed",
]
