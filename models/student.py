"""Datenmodell für eine Schülerin / einen Schüler mit abgeleiteten Kennzahlen."""

from typing import Sequence

from pydantic import BaseModel, ConfigDict

from models.course import Course
from models.grading import grade_letter, passed


def average(courses: Sequence[Course]) -> float:
    """Arithmetisches Mittel der Punktzahlen; 0.0 ohne Fächer."""
    if not courses:
        return 0.0
    return sum(c.marks for c in courses) / len(courses)


def grade_letter_for(courses: Sequence[Course]) -> str:
    return grade_letter(average(courses))


def passed_for(courses: Sequence[Course]) -> bool:
    return passed(average(courses))


class Student(BaseModel):
    """Ein Schülerdatensatz.

    Unveränderlich: Änderungen erzeugen über ``model_copy(update=...)``
    einen neuen Wert. ``id`` ist der natürliche Schlüssel; die Eindeutigkeit
    stellt das Repository sicher.
    """

    model_config = ConfigDict(frozen=True)

    id: str                          # "S001"
    name: str                        # "John Doe"
    age: int
    courses: tuple[Course, ...] = () # Reihenfolge wie in der Quelle

    @property
    def average(self) -> float:
        """Gesamtdurchschnitt über alle Fächer."""
        return average(self.courses)

    @property
    def grade_letter(self) -> str:
        return grade_letter_for(self.courses)

    @property
    def passed(self) -> bool:
        return passed_for(self.courses)
