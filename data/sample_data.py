"""Beispieldatensätze für Demo und Tests.

Drei Schüler mit je drei Fächern; Durchschnitte 85.33 (A), 91.17 (A+) und
58.50 (D, bestanden).
"""

from models.course import Course
from models.student import Student

_SAMPLE_ROWS: list[tuple[str, str, int, list[tuple[str, float]]]] = [
    ("S001", "John Doe", 20, [
        ("Mathematics", 85.5), ("Computer Science", 92.0), ("Physics", 78.5),
    ]),
    ("S002", "Jane Smith", 19, [
        ("Mathematics", 90.0), ("Computer Science", 95.5), ("Physics", 88.0),
    ]),
    ("S003", "Alex Brown", 21, [
        ("Mathematics", 62.5), ("Computer Science", 58.0), ("Physics", 55.0),
    ]),
]


def sample_students() -> list[Student]:
    """Gibt die drei Beispiel-Schüler in fester Reihenfolge zurück."""
    return [
        Student(
            id=sid, name=name, age=age,
            courses=tuple(Course(name=c, marks=m) for c, m in courses),
        )
        for sid, name, age, courses in _SAMPLE_ROWS
    ]
