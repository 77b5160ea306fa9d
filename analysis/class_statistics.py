"""Klassenstatistik: Durchschnitt, Bestehensquote, Beste und Notenverteilung.

Grundlage für den Klassenbericht (Text) und die Rich-Ausgabe von ``stats``.
"""

from collections import defaultdict
from typing import Sequence

from pydantic import BaseModel

from models.grading import GRADE_LETTERS
from models.student import Student


# ─── Statistik-Modelle ────────────────────────────────────────────────────────

class TopPerformer(BaseModel):
    """Ein Platz in der Bestenliste."""

    rank: int
    student_id: str
    name: str
    average: float
    grade_letter: str


class GradeBucket(BaseModel):
    """Anzahl Schüler mit einem Notenbuchstaben."""

    grade: str
    count: int
    percentage: float  # Anteil an der Klassengröße, 0–100


class SubjectAverage(BaseModel):
    """Durchschnitt eines Fachs über alle Schüler, die es belegt haben."""

    subject: str
    average: float
    participants: int


class ClassStatistics(BaseModel):
    """Aggregierte Kennzahlen einer nicht-leeren Klasse."""

    total_students: int
    class_average: float           # Mittel der Schüler-Durchschnitte
    pass_count: int
    pass_rate: float               # 0–100
    top_performers: list[TopPerformer]
    grade_distribution: list[GradeBucket]  # immer alle sieben Stufen
    subject_averages: list[SubjectAverage]
    students_by_grade: dict[str, list[str]]


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class ClassAnalyzer:
    """Berechnet Klassenkennzahlen aus einer Liste von Schülern."""

    def analyze(self, students: Sequence[Student], top_n: int = 3) -> ClassStatistics:
        """Hauptmethode.

        Raises:
            ValueError: bei leerer Schülerliste.
        """
        if not students:
            raise ValueError("Keine Schüler für die Klassenstatistik.")

        n = len(students)
        averages = [s.average for s in students]
        pass_count = sum(1 for s in students if s.passed)

        return ClassStatistics(
            total_students=n,
            class_average=sum(averages) / n,
            pass_count=pass_count,
            pass_rate=pass_count / n * 100,
            top_performers=self._top_performers(students, top_n),
            grade_distribution=self._grade_distribution(students),
            subject_averages=self._subject_averages(students),
            students_by_grade=self._students_by_grade(students),
        )

    def print_rich(self, stats: ClassStatistics) -> None:
        """Gibt die Statistik formatiert über Rich aus."""
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()

        rate_color = (
            "green" if stats.pass_rate >= 90
            else "yellow" if stats.pass_rate >= 60
            else "red"
        )
        console.print(Panel(
            f"Schüler: [bold]{stats.total_students}[/bold] | "
            f"Klassendurchschnitt: [bold]{stats.class_average:.2f}[/bold]\n"
            f"Bestanden: [{rate_color}]{stats.pass_rate:.2f}%[/{rate_color}] "
            f"({stats.pass_count}/{stats.total_students})",
            title="Klassenstatistik – Übersicht",
            border_style="cyan",
        ))

        top = Table(title="Beste Schüler", box=box.ROUNDED)
        top.add_column("Platz", justify="right", width=6)
        top.add_column("ID", width=10)
        top.add_column("Name", width=25)
        top.add_column("Ø", justify="right", width=8)
        top.add_column("Note", width=5)
        for p in stats.top_performers:
            top.add_row(str(p.rank), escape(p.student_id), escape(p.name),
                        f"{p.average:.2f}", p.grade_letter)
        console.print(top)

        dist = Table(title="Notenverteilung", box=box.ROUNDED)
        dist.add_column("Note", width=5)
        dist.add_column("Anzahl", justify="right", width=7)
        dist.add_column("Anteil", justify="right", width=8)
        dist.add_column("Schüler")
        for b in stats.grade_distribution:
            names = escape(", ".join(stats.students_by_grade.get(b.grade, [])))
            dist.add_row(b.grade, str(b.count), f"{b.percentage:.2f}%", names)
        console.print(dist)

        subj = Table(title="Fach-Durchschnitte", box=box.ROUNDED)
        subj.add_column("Fach", width=20)
        subj.add_column("Ø", justify="right", width=8)
        subj.add_column("Teilnehmer", justify="right", width=10)
        for sa in stats.subject_averages:
            subj.add_row(escape(sa.subject), f"{sa.average:.2f}", str(sa.participants))
        console.print(subj)

    # ── Private Berechnungen ──────────────────────────────────────────────────

    def _top_performers(
        self, students: Sequence[Student], top_n: int
    ) -> list[TopPerformer]:
        """Absteigend nach Durchschnitt; bei Gleichstand bleibt die Eingabereihenfolge."""
        ranked = sorted(students, key=lambda s: -s.average)[:top_n]
        return [
            TopPerformer(
                rank=i + 1, student_id=s.id, name=s.name,
                average=s.average, grade_letter=s.grade_letter,
            )
            for i, s in enumerate(ranked)
        ]

    def _grade_distribution(self, students: Sequence[Student]) -> list[GradeBucket]:
        counts: dict[str, int] = defaultdict(int)
        for s in students:
            counts[s.grade_letter] += 1
        n = len(students)
        return [
            GradeBucket(grade=g, count=counts[g], percentage=counts[g] / n * 100)
            for g in GRADE_LETTERS
        ]

    def _subject_averages(self, students: Sequence[Student]) -> list[SubjectAverage]:
        """Fächer in Reihenfolge ihres ersten Auftretens."""
        marks: dict[str, list[float]] = defaultdict(list)
        for s in students:
            for c in s.courses:
                marks[c.name].append(c.marks)
        return [
            SubjectAverage(subject=name, average=sum(m) / len(m), participants=len(m))
            for name, m in marks.items()
        ]

    def _students_by_grade(self, students: Sequence[Student]) -> dict[str, list[str]]:
        groups: dict[str, list[str]] = defaultdict(list)
        for s in students:
            groups[s.grade_letter].append(s.name)
        return dict(groups)
