"""Eingabe-Parser für das Konsolenmenü.

Reine Funktionen: sie lesen nichts von der Konsole, sondern bewerten einen
eingegebenen Text und liefern Wert plus optionale Warnung. Ungültige Eingaben
werden nie abgelehnt, sondern auf einen Standardwert gesetzt.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_AGE = 18
MIN_AGE, MAX_AGE = 0, 120
MIN_COURSES, MAX_COURSES = 1, 10
MIN_MARKS, MAX_MARKS = 0.0, 100.0


class ParsedValue(BaseModel, Generic[T]):
    """Ergebnis eines Parsers: übernommener Wert und ggf. Hinweis für den Nutzer."""

    value: T
    warning: Optional[str] = None


def parse_age(text: str) -> ParsedValue[int]:
    """Alter 0–120, sonst 18."""
    try:
        value = int(text.strip())
    except ValueError:
        return ParsedValue[int](
            value=DEFAULT_AGE,
            warning=f"'{text}' ist keine gültige Zahl. Verwende {DEFAULT_AGE}.",
        )
    if value < MIN_AGE or value > MAX_AGE:
        return ParsedValue[int](
            value=DEFAULT_AGE,
            warning=f"Alter muss zwischen {MIN_AGE} und {MAX_AGE} liegen. "
                    f"Verwende {DEFAULT_AGE}.",
        )
    return ParsedValue[int](value=value)


def parse_course_count(text: str) -> ParsedValue[int]:
    """Anzahl Fächer, begrenzt auf 1–10."""
    try:
        value = int(text.strip())
    except ValueError:
        return ParsedValue[int](
            value=MIN_COURSES,
            warning=f"'{text}' ist keine gültige Zahl. Verwende {MIN_COURSES}.",
        )
    if value < MIN_COURSES:
        return ParsedValue[int](
            value=MIN_COURSES,
            warning=f"Mindestens {MIN_COURSES} Fach erforderlich. Verwende {MIN_COURSES}.",
        )
    if value > MAX_COURSES:
        return ParsedValue[int](
            value=MAX_COURSES,
            warning=f"Höchstens {MAX_COURSES} Fächer erlaubt. Verwende {MAX_COURSES}.",
        )
    return ParsedValue[int](value=value)


def parse_marks(text: str) -> ParsedValue[float]:
    """Punktzahl 0–100, sonst 0.0."""
    try:
        value = float(text.strip())
    except ValueError:
        return ParsedValue[float](
            value=0.0,
            warning=f"'{text}' ist keine gültige Zahl. Verwende 0.0.",
        )
    if not MIN_MARKS <= value <= MAX_MARKS:
        return ParsedValue[float](
            value=0.0,
            warning=f"Punktzahl muss zwischen {MIN_MARKS:g} und {MAX_MARKS:g} "
                    f"liegen. Verwende 0.0.",
        )
    return ParsedValue[float](value=value)


def parse_optional_age(text: str, current: int) -> int:
    """Beim Bearbeiten: leere oder ungültige Eingabe behält den aktuellen Wert."""
    if not text.strip():
        return current
    try:
        return int(text.strip())
    except ValueError:
        return current


def validate_new_student(student_id: str, name: str, course_count: int) -> Optional[str]:
    """Fehlermeldung für einen unvollständigen neuen Datensatz, sonst None."""
    if not student_id.strip():
        return "Die Schüler-ID darf nicht leer sein."
    if not name.strip():
        return "Der Name darf nicht leer sein."
    if course_count < 1:
        return "Mindestens ein Fach ist erforderlich."
    return None
