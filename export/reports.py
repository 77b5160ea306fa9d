"""Textberichte: Zeugnis (ein Schüler) und Klassenbericht.

Feste Spaltenbreiten: Fach/Name 20 Zeichen linksbündig, Zahlen 10 Zeichen.
Die Breiten sind Teil des Ausgabeformats (Berichte werden zeilenweise
verglichen) und dürfen nicht verändert werden.
"""

from datetime import datetime
from typing import Optional, Sequence

from analysis.class_statistics import ClassAnalyzer
from data.document_mapper import unwrap_text
from models.student import Student

RULE = "=" * 49
LINE = "-" * 50
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

EMPTY_CLASS_MESSAGE = "No students found to generate class report."


def _timestamp(generated_at: Optional[datetime]) -> str:
    return (generated_at or datetime.now()).strftime(TIMESTAMP_FORMAT)


def render_report_card(student: Student, generated_at: Optional[datetime] = None) -> str:
    """Zeugnis mit Fächertabelle, Gesamtdurchschnitt und Ergebniszeile.

    Funktioniert auch ohne Fächer (leere Tabelle, Durchschnitt 0.00).
    """
    lines = [
        RULE,
        "                  REPORT CARD                    ",
        RULE,
        f"Date: {_timestamp(generated_at)}",
        "",
        f"Student ID: {unwrap_text(student.id)}",
        f"Name: {unwrap_text(student.name)}",
        f"Age: {student.age}",
        "",
        "COURSE RESULTS",
        LINE,
        f"{'Subject':<20} {'Marks':<10} {'Grade':<10}",
        LINE,
    ]
    for course in student.courses:
        lines.append(
            f"{unwrap_text(course.name):<20} {course.marks:<10.1f} "
            f"{course.grade_letter:<10}"
        )
    lines += [
        LINE,
        f"{'Overall Average:':<20} {student.average:<10.2f} "
        f"{student.grade_letter:<10}",
        LINE,
        f"Result: {'PASSED' if student.passed else 'FAILED'}",
        RULE,
    ]
    return "\n".join(lines) + "\n"


def render_class_report(
    students: Sequence[Student],
    generated_at: Optional[datetime] = None,
    top_n: int = 3,
) -> str:
    """Klassenbericht mit Statistik, Bestenliste und Notenverteilung.

    Bei leerer Liste nur die Hinweiszeile, ohne weitere Abschnitte.
    """
    if not students:
        return EMPTY_CLASS_MESSAGE

    stats = ClassAnalyzer().analyze(students, top_n=top_n)

    lines = [
        RULE,
        "                 CLASS REPORT                    ",
        RULE,
        f"Date: {_timestamp(generated_at)}",
        "",
        f"Total students: {stats.total_students}",
        "",
        "CLASS STATISTICS",
        LINE,
        f"Overall Class Average: {stats.class_average:.2f}",
        f"Pass Rate: {stats.pass_rate:.2f}% "
        f"({stats.pass_count}/{stats.total_students})",
        "",
        "TOP PERFORMING STUDENTS",
        LINE,
    ]
    for p in stats.top_performers:
        lines.append(
            f"{p.rank}. {unwrap_text(p.name):<20} "
            f"Average: {p.average:.2f} ({p.grade_letter})"
        )
    lines += [
        "",
        "GRADE DISTRIBUTION",
        LINE,
    ]
    for bucket in stats.grade_distribution:
        lines.append(f"{bucket.grade}: {bucket.count} ({bucket.percentage:.2f}%)")
    lines.append(RULE)
    return "\n".join(lines) + "\n"
