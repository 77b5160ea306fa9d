"""Umwandlung zwischen Student-Datensätzen und MongoDB-Dokumenten.

Kodieren ist verlustfrei und kann nicht fehlschlagen. Dekodieren ist
fehlertolerant: Dokumente können von Hand bearbeitet oder mit einem älteren
Schema geschrieben worden sein. Fehlende oder falsch typisierte Felder werden
durch Standardwerte ersetzt und als Warnung geloggt, statt den ganzen
Datensatz zu verwerfen. Nur ein Dokument, das überhaupt keine Abbildung
(Mapping) ist, führt zu einem ``DocumentDecodeError``.

Dokumentform::

    {"id": str, "name": str, "age": int,
     "courses": [{"name": str, "marks": float}, ...]}
"""

import logging
import math
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from bson import Decimal128, ObjectId

from models.course import Course
from models.student import Student

logger = logging.getLogger(__name__)

DEFAULT_ID = "unknown-id"
DEFAULT_STUDENT_NAME = "Unknown Student"
DEFAULT_COURSE_NAME = "Unknown"
DEFAULT_AGE = 0
DEFAULT_MARKS = 0.0

# Textdarstellung eines geboxten Strings aus älteren Treiber-Versionen
_BOXED_STRING = re.compile(r"BsonString\{value='(.*?)'\}", re.DOTALL)


class DocumentDecodeError(ValueError):
    """Das Dokument lässt sich strukturell nicht als Datensatz lesen."""


def placeholder_course() -> Course:
    """Sichtbarer Platzhalter für ein unlesbares Fach."""
    return Course(name=DEFAULT_COURSE_NAME, marks=DEFAULT_MARKS)


# ─── Kodieren ─────────────────────────────────────────────────────────────────

def student_to_document(student: Student) -> dict:
    """Student → Dokument. Feldnamen entsprechen exakt dem Speicherformat."""
    return {
        "id": student.id,
        "name": student.name,
        "age": student.age,
        "courses": [
            {"name": course.name, "marks": course.marks}
            for course in student.courses
        ],
    }


# ─── Einzelwerte ──────────────────────────────────────────────────────────────

def unwrap_text(value: Any) -> str:
    """Wandelt einen (ggf. vom Treiber geboxten) Wert in einen einfachen String.

    Echte Strings bleiben unverändert; nur die Textdarstellung fremder
    Wrapper-Objekte wird nach ``BsonString{value=...}`` durchsucht. Scheitert
    das Auspacken, wird die Standard-Textdarstellung verwendet.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return str(value)
    if isinstance(value, Decimal128):
        return str(value.to_decimal())
    text = str(value)
    match = _BOXED_STRING.fullmatch(text)
    return match.group(1) if match else text


def _to_text(value: Any) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple, set, bool)):
        raise TypeError(f"kein Textwert: {type(value).__name__}")
    if isinstance(value, (str, bytes, Decimal128, ObjectId, int, float)):
        return unwrap_text(value)
    raise TypeError(f"kein Textwert: {type(value).__name__}")


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise TypeError(f"keine Zahl: {value!r}")
    if isinstance(value, Decimal128):
        value = value.to_decimal()
    if isinstance(value, (int, float, Decimal)):
        result = float(value)
    elif isinstance(value, str):
        result = float(value.strip())
    else:
        raise TypeError(f"keine Zahl: {type(value).__name__}")
    if not math.isfinite(result):
        raise ValueError(f"keine endliche Zahl: {value!r}")
    return result


def _to_int(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise TypeError(f"keine Ganzzahl: {value!r}")
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    number = _to_float(value)
    if not number.is_integer():
        raise ValueError(f"keine Ganzzahl: {value!r}")
    return int(number)


def safe_get_string(doc: Mapping, key: str, default: str) -> str:
    """Liest ein Textfeld; fehlt es oder ist es unbrauchbar → ``default``."""
    if key not in doc:
        return default
    try:
        return _to_text(doc[key])
    except (TypeError, ValueError) as e:
        logger.warning(f"Textwert für '{key}' unbrauchbar: {e}")
        return default


def safe_get_float(doc: Mapping, key: str, default: float = DEFAULT_MARKS) -> float:
    """Liest ein Zahlenfeld als float; Fehler → ``default`` + Warnung."""
    if key not in doc:
        return default
    try:
        return _to_float(doc[key])
    except (TypeError, ValueError, InvalidOperation) as e:
        logger.warning(f"Zahlenwert für '{key}' unbrauchbar: {e}")
        return default


def safe_get_int(doc: Mapping, key: str, default: int = DEFAULT_AGE) -> int:
    """Liest ein Ganzzahlfeld; Fehler → ``default`` + Warnung."""
    if key not in doc:
        return default
    try:
        return _to_int(doc[key])
    except (TypeError, ValueError, InvalidOperation, OverflowError) as e:
        logger.warning(f"Ganzzahl für '{key}' unbrauchbar: {e}")
        return default


# ─── Fächer ───────────────────────────────────────────────────────────────────

def _course_from_document(course_doc: Mapping) -> Course:
    return Course(
        name=safe_get_string(course_doc, "name", DEFAULT_COURSE_NAME),
        marks=safe_get_float(course_doc, "marks", DEFAULT_MARKS),
    )


def _courses_from_documents(values: list) -> list[Course]:
    """Weg (a): Liste aus Unterdokumenten.

    Wirft TypeError, sobald ein Element kein Dokument ist; dann übernimmt
    ``_courses_from_values``.
    """
    if not all(isinstance(v, Mapping) for v in values):
        raise TypeError("courses enthält Elemente, die keine Dokumente sind")
    courses = []
    for course_doc in values:
        try:
            courses.append(_course_from_document(course_doc))
        except Exception as e:
            logger.warning(f"Fach nicht lesbar: {e}")
            courses.append(placeholder_course())
    return courses


def _courses_from_values(values: list) -> list[Course]:
    """Weg (b): beliebige Werteliste, jedes Element einzeln."""
    courses = []
    for value in values:
        if not isinstance(value, Mapping):
            logger.warning(
                f"Fach-Eintrag ist kein Dokument ({type(value).__name__}), "
                f"verwende Platzhalter"
            )
            courses.append(placeholder_course())
            continue
        try:
            courses.append(_course_from_document(value))
        except Exception as e:
            logger.warning(f"Fach-Eintrag nicht lesbar: {e}")
            courses.append(placeholder_course())
    return courses


def extract_courses(doc: Mapping) -> list[Course]:
    """Liest das Feld ``courses``. Liefert immer eine Liste.

    Fehlt das Feld oder ist es kein Array, besteht das Ergebnis aus genau
    einem Platzhalter-Fach. Ein leeres Array bleibt leer.
    """
    if "courses" not in doc:
        return [placeholder_course()]
    raw = doc["courses"]
    if not isinstance(raw, (list, tuple)):
        logger.warning(
            f"Feld 'courses' ist kein Array ({type(raw).__name__}), "
            f"verwende Platzhalter"
        )
        return [placeholder_course()]
    values = list(raw)
    try:
        return _courses_from_documents(values)
    except TypeError as e:
        logger.warning(f"courses nicht als Dokumentliste lesbar: {e}")
    try:
        return _courses_from_values(values)
    except Exception as e:
        logger.warning(f"courses nicht lesbar: {e}")
        return [placeholder_course()]


# ─── Dekodieren ───────────────────────────────────────────────────────────────

def document_to_student(doc: Any) -> Student:
    """Dokument → Student. Jedes Feld erhält einen Wert.

    Raises:
        DocumentDecodeError: wenn ``doc`` kein Dokument (Mapping) ist.
    """
    if not isinstance(doc, Mapping):
        logger.error(
            f"Dokument kann nicht in einen Datensatz umgewandelt werden: "
            f"{type(doc).__name__}"
        )
        raise DocumentDecodeError(
            f"Erwartet ein Dokument, erhalten: {type(doc).__name__}"
        )
    return Student(
        id=safe_get_string(doc, "id", DEFAULT_ID),
        name=safe_get_string(doc, "name", DEFAULT_STUDENT_NAME),
        age=safe_get_int(doc, "age", DEFAULT_AGE),
        courses=extract_courses(doc),
    )
