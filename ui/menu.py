"""Interaktives Konsolenmenü für die Schülerverwaltung.

Jede Aktion meldet Erfolg, ein leeres Ergebnis oder eine lesbare
Fehlermeldung. Repository-Fehler beenden das Menü nicht.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich import box

from config.schema import AppConfig
from data.repository import RepositoryError, StudentRepository
from export.helpers import class_report_filename, report_card_filename, save_report
from export.reports import render_class_report, render_report_card
from models.course import Course
from models.student import Student
from ui.prompts import (
    parse_age,
    parse_course_count,
    parse_marks,
    parse_optional_age,
    validate_new_student,
)

logger = logging.getLogger(__name__)

console = Console()

MENU_ENTRIES = [
    ("1", "Neuen Schüler anlegen"),
    ("2", "Alle Schüler anzeigen"),
    ("3", "Schüler nach ID suchen"),
    ("4", "Schüler nach Namen suchen"),
    ("5", "Schüler bearbeiten"),
    ("6", "Schüler löschen"),
    ("7", "Zeugnis erstellen"),
    ("8", "Klassenbericht erstellen"),
    ("9", "Beenden"),
]


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {escape(text)}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {escape(text)}")


def _error(text: str) -> None:
    console.print(f"[red]{escape(text)}[/red]")


def show_student_table(students: Sequence[Student], title: str = "Schüler") -> None:
    """Übersichtstabelle: ID, Name, Alter, Durchschnitt, Note."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", width=10)
    table.add_column("Name", width=20)
    table.add_column("Alter", justify="right", width=5)
    table.add_column("Ø Punkte", justify="right", width=10)
    table.add_column("Note", width=5)
    for s in students:
        table.add_row(
            escape(s.id), escape(s.name), str(s.age), f"{s.average:.2f}", s.grade_letter,
        )
    console.print(table)


def show_student_detail(student: Student) -> None:
    """Einzelansicht mit allen Fächern."""
    table = Table(box=box.SIMPLE, show_header=True)
    table.add_column("Fach", width=20)
    table.add_column("Punkte", justify="right", width=8)
    for c in student.courses:
        table.add_row(escape(c.name), f"{c.marks:.1f}")
    console.print(Panel(
        f"ID: [bold]{escape(student.id)}[/bold]\n"
        f"Name: {escape(student.name)}\n"
        f"Alter: {student.age}",
        title="Schüler gefunden",
        border_style="cyan",
    ))
    console.print(table)
    console.print(f"Durchschnitt: [bold]{student.average:.2f}[/bold]")
    console.print(f"Note: [bold]{student.grade_letter}[/bold]")


class StudentMenu:
    """Menüschleife und Einzelaktionen; die Aktionen nutzt auch die CLI."""

    def __init__(self, repository: StudentRepository, config: AppConfig):
        self.repository = repository
        self.config = config

    @property
    def output_dir(self) -> Path:
        return Path(self.config.reports.output_dir)

    # ─── Schleife ───

    def run(self) -> None:
        while True:
            console.print()
            console.print(Panel(
                "\n".join(f"  [bold]{key}.[/bold] {label}" for key, label in MENU_ENTRIES),
                title="Notenbuch",
                border_style="cyan",
            ))
            try:
                choice = Prompt.ask("Auswahl", default="9")
            except (KeyboardInterrupt, EOFError):
                console.print()
                break
            if choice == "9":
                break
            try:
                self.dispatch(choice)
            except KeyboardInterrupt:
                console.print("\n[yellow]Abgebrochen.[/yellow]")
            except Exception as e:
                logger.exception("Menü-Aktion fehlgeschlagen")
                _error(f"Fehler: {e}")
                console.print("Bitte erneut versuchen.")

        console.print("Vielen Dank für die Nutzung des Notenbuchs!")

    def dispatch(self, choice: str) -> None:
        actions = {
            "1": self.add_student,
            "2": self.view_all,
            "3": self.find_by_id,
            "4": self.find_by_name,
            "5": self.update_student,
            "6": self.delete_student,
            "7": self.report_card,
            "8": self.class_report,
        }
        action = actions.get(choice)
        if action is None:
            _warn("Ungültige Auswahl. Bitte eine Zahl zwischen 1 und 9 eingeben.")
            return
        action()

    # ─── Eingabe ───

    def _ask_courses(self, count: int) -> list[Course]:
        courses = []
        for i in range(1, count + 1):
            name = Prompt.ask(f"Name von Fach {i}")
            marks = parse_marks(Prompt.ask(f"Punkte für {escape(name)} (0-100)"))
            if marks.warning:
                _warn(marks.warning)
            courses.append(Course(name=name, marks=marks.value))
        return courses

    # ─── Aktionen ───

    def add_student(self) -> Optional[Student]:
        _header("Neuen Schüler anlegen")
        student_id = Prompt.ask("Schüler-ID")
        name = Prompt.ask("Name")
        age = parse_age(Prompt.ask("Alter"))
        if age.warning:
            _warn(age.warning)
        count = parse_course_count(Prompt.ask("Anzahl Fächer (1-10)"))
        if count.warning:
            _warn(count.warning)
        courses = self._ask_courses(count.value)

        problem = validate_new_student(student_id, name, len(courses))
        if problem:
            _error(f"Fehler: {problem} Bitte erneut versuchen.")
            return None

        student = Student(id=student_id, name=name, age=age.value, courses=tuple(courses))
        try:
            self.repository.create_student(student)
        except RepositoryError as e:
            _error(f"Schüler konnte nicht angelegt werden: {e}")
            return None
        _success(f"Schüler {name} erfolgreich angelegt!")
        return student

    def view_all(self) -> None:
        _header("Alle Schüler")
        try:
            students = self.repository.get_all()
        except RepositoryError as e:
            _error(f"Schüler konnten nicht geladen werden: {e}")
            return
        if not students:
            console.print("[dim]Keine Schüler im System.[/dim]")
            return
        show_student_table(students)
        console.print(f"\nGesamt: {len(students)} Schüler")

    def find_by_id(self, student_id: Optional[str] = None) -> Optional[Student]:
        if student_id is None:
            _header("Schüler nach ID suchen")
            student_id = Prompt.ask("Schüler-ID")
        try:
            student = self.repository.get_student_by_id(student_id)
        except RepositoryError as e:
            _error(f"Suche fehlgeschlagen: {e}")
            return None
        if student is None:
            console.print(f"Kein Schüler mit ID {escape(student_id)} gefunden.")
            return None
        show_student_detail(student)
        return student

    def find_by_name(
        self,
        text: Optional[str] = None,
        case_insensitive: bool = True,
        prefix_only: bool = False,
    ) -> list[Student]:
        if text is None:
            _header("Schüler nach Namen suchen")
            text = Prompt.ask("Name (Teilsuche)")
        try:
            students = self.repository.search_by_name(
                text, case_insensitive=case_insensitive, prefix_only=prefix_only,
            )
        except RepositoryError as e:
            _error(f"Suche fehlgeschlagen: {e}")
            return []
        if not students:
            console.print(f"Keine Schüler gefunden für: {escape(text)}")
            return []
        show_student_table(students, title=f"{len(students)} Treffer")
        return students

    def update_student(self, student_id: Optional[str] = None) -> Optional[Student]:
        _header("Schüler bearbeiten")
        if student_id is None:
            student_id = Prompt.ask("Schüler-ID")
        try:
            current = self.repository.get_student_by_id(student_id)
        except RepositoryError as e:
            _error(f"Suche fehlgeschlagen: {e}")
            return None
        if current is None:
            console.print(f"Kein Schüler mit ID {escape(student_id)} gefunden.")
            return None

        console.print(f"Bearbeite: [bold]{escape(current.name)}[/bold]")
        name = Prompt.ask(f"Neuer Name (aktuell: {escape(current.name)})", default="")
        age_text = Prompt.ask(f"Neues Alter (aktuell: {current.age})", default="")
        courses = current.courses
        if Confirm.ask("Fächer ersetzen?", default=False):
            count = parse_course_count(Prompt.ask("Anzahl Fächer (1-10)"))
            if count.warning:
                _warn(count.warning)
            courses = tuple(self._ask_courses(count.value))

        updated = current.model_copy(update={
            "name": name if name.strip() else current.name,
            "age": parse_optional_age(age_text, current.age),
            "courses": courses,
        })
        try:
            self.repository.update_student(student_id, updated)
        except RepositoryError as e:
            _error(f"Schüler konnte nicht aktualisiert werden: {e}")
            return None
        _success("Schüler erfolgreich aktualisiert!")
        return updated

    def delete_student(
        self, student_id: Optional[str] = None, confirmed: bool = False
    ) -> bool:
        _header("Schüler löschen")
        if student_id is None:
            student_id = Prompt.ask("Schüler-ID")
        try:
            student = self.repository.get_student_by_id(student_id)
        except RepositoryError as e:
            _error(f"Suche fehlgeschlagen: {e}")
            return False
        if student is None:
            console.print(f"Kein Schüler mit ID {escape(student_id)} gefunden.")
            return False
        if not confirmed and not Confirm.ask(
            f"Schüler {escape(student.name)} wirklich löschen?", default=False
        ):
            console.print("[yellow]Löschen abgebrochen.[/yellow]")
            return False
        try:
            self.repository.delete_student(student_id)
        except RepositoryError as e:
            _error(f"Schüler konnte nicht gelöscht werden: {e}")
            return False
        _success("Schüler erfolgreich gelöscht!")
        return True

    def report_card(
        self, student_id: Optional[str] = None, save: Optional[bool] = None
    ) -> Optional[str]:
        _header("Zeugnis erstellen")
        if student_id is None:
            student_id = Prompt.ask("Schüler-ID")
        try:
            student = self.repository.get_student_by_id(student_id)
        except RepositoryError as e:
            _error(f"Suche fehlgeschlagen: {e}")
            return None
        if student is None:
            console.print(f"Kein Schüler mit ID {escape(student_id)} gefunden.")
            return None

        report = render_report_card(student)
        console.print(report, markup=False, highlight=False)
        if save is None:
            save = Confirm.ask("Bericht als Datei speichern?", default=False)
        if save:
            self._save(report, report_card_filename(student), "Zeugnis")
        return report

    def class_report(self, save: Optional[bool] = None) -> Optional[str]:
        _header("Klassenbericht erstellen")
        try:
            students = self.repository.get_all()
        except RepositoryError as e:
            _error(f"Schüler konnten nicht geladen werden: {e}")
            return None

        report = render_class_report(
            students, top_n=self.config.reports.top_performers,
        )
        if not students:
            console.print(report)
            return report

        console.print(report, markup=False, highlight=False)
        if save is None:
            save = Confirm.ask("Bericht als Datei speichern?", default=False)
        if save:
            self._save(report, class_report_filename(datetime.now()), "Klassenbericht")
        return report

    def _save(self, report: str, filename: str, label: str) -> None:
        try:
            path = save_report(report, self.output_dir / filename)
        except OSError as e:
            _error(f"{label} konnte nicht gespeichert werden: {e}")
            return
        _success(f"{label} gespeichert: {path}")
