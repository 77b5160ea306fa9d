"""Notenbuch — Haupt-CLI.

Verwendung:
  python main.py                          Interaktives Menü
  python main.py menu                     Interaktives Menü
  python main.py add                      Schüler anlegen (interaktiv)
  python main.py list                     Alle Schüler anzeigen
  python main.py show <id>                Schüler anzeigen
  python main.py search <text>            Schüler nach Namen suchen
  python main.py update <id>              Schüler bearbeiten (interaktiv)
  python main.py delete <id>              Schüler löschen
  python main.py report-card <id>         Zeugnis erstellen
  python main.py class-report             Klassenbericht erstellen
  python main.py stats                    Klassenstatistik anzeigen
  python main.py seed                     Beispieldaten anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py config init              Standardkonfiguration schreiben
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(config) -> None:
    """Log-Level der Anwendung und des MongoDB-Treibers setzen."""
    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format=config.logging.format,
    )
    logging.getLogger("pymongo").setLevel(getattr(logging, config.logging.driver_level))


def _open_repository(config):
    """Verbindet mit MongoDB oder bricht mit Fehlermeldung ab."""
    from data.repository import StoreUnavailableError, StudentRepository

    repo = StudentRepository.from_config(config.database)
    try:
        if repo.ensure_collection():
            console.print(f"Collection angelegt: {escape(config.database.collection_name)}")
    except StoreUnavailableError as e:
        repo.close()
        console.print(
            f"[red]Keine Verbindung zu MongoDB: {escape(str(e))}[/red]\n"
            f"Läuft MongoDB unter [bold]{escape(config.database.connection_string)}[/bold]?"
        )
        sys.exit(1)
    return repo


def _menu(ctx: click.Context):
    from ui.menu import StudentMenu

    config = ctx.obj["config"]
    repo = _open_repository(config)
    ctx.call_on_close(repo.close)
    return StudentMenu(repo, config)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(path_type=Path),
              default=None, help="Pfad zur YAML-Konfiguration.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Notenbuch: Schülerdaten in MongoDB verwalten, Zeugnisse und
    Klassenberichte erstellen.

    Ohne Befehl startet das interaktive Menü.
    """
    from config.manager import ConfigManager

    mgr = ConfigManager(config_path)
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    _setup_logging(config)
    ctx.obj = {"config": config, "config_manager": mgr}

    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_menu)


# ─── MENÜ ─────────────────────────────────────────────────────────────────────

@cli.command("menu")
@click.pass_context
def cmd_menu(ctx: click.Context):
    """Startet das interaktive Menü."""
    menu = _menu(ctx)
    console.print(Panel(
        "[bold]Willkommen im Notenbuch![/bold]\n\n"
        "Schülerdaten verwalten, suchen und Berichte erstellen.\n"
        "Alle Daten werden in MongoDB gespeichert.",
        border_style="cyan",
    ))
    menu.run()


# ─── CRUD ─────────────────────────────────────────────────────────────────────

@cli.command("add")
@click.pass_context
def cmd_add(ctx: click.Context):
    """Legt einen neuen Schüler interaktiv an."""
    if _menu(ctx).add_student() is None:
        sys.exit(1)


@cli.command("list")
@click.pass_context
def cmd_list(ctx: click.Context):
    """Zeigt alle Schüler an."""
    _menu(ctx).view_all()


@cli.command("show")
@click.argument("student_id")
@click.pass_context
def cmd_show(ctx: click.Context, student_id: str):
    """Zeigt einen Schüler mit allen Fächern an."""
    if _menu(ctx).find_by_id(student_id) is None:
        sys.exit(1)


@cli.command("search")
@click.argument("text")
@click.option("--prefix", is_flag=True, default=False,
              help="Nur Namen, die mit TEXT beginnen.")
@click.option("--case-sensitive", is_flag=True, default=False,
              help="Groß-/Kleinschreibung beachten.")
@click.pass_context
def cmd_search(ctx: click.Context, text: str, prefix: bool, case_sensitive: bool):
    """Sucht Schüler nach (Teil-)Namen."""
    _menu(ctx).find_by_name(
        text, case_insensitive=not case_sensitive, prefix_only=prefix,
    )


@cli.command("update")
@click.argument("student_id")
@click.pass_context
def cmd_update(ctx: click.Context, student_id: str):
    """Bearbeitet einen Schüler interaktiv."""
    if _menu(ctx).update_student(student_id) is None:
        sys.exit(1)


@cli.command("delete")
@click.argument("student_id")
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Ohne Rückfrage löschen.")
@click.pass_context
def cmd_delete(ctx: click.Context, student_id: str, yes: bool):
    """Löscht einen Schüler."""
    if not _menu(ctx).delete_student(student_id, confirmed=yes):
        sys.exit(1)


# ─── BERICHTE ─────────────────────────────────────────────────────────────────

@cli.command("report-card")
@click.argument("student_id")
@click.option("--save/--no-save", default=False,
              help="Zeugnis im Berichtsverzeichnis speichern.")
@click.pass_context
def cmd_report_card(ctx: click.Context, student_id: str, save: bool):
    """Erstellt das Zeugnis eines Schülers."""
    if _menu(ctx).report_card(student_id, save=save) is None:
        sys.exit(1)


@cli.command("class-report")
@click.option("--save/--no-save", default=False,
              help="Klassenbericht im Berichtsverzeichnis speichern.")
@click.pass_context
def cmd_class_report(ctx: click.Context, save: bool):
    """Erstellt den Klassenbericht über alle Schüler."""
    if _menu(ctx).class_report(save=save) is None:
        sys.exit(1)


@cli.command("stats")
@click.pass_context
def cmd_stats(ctx: click.Context):
    """Zeigt die Klassenstatistik inkl. Fach-Durchschnitten an."""
    from analysis.class_statistics import ClassAnalyzer
    from data.repository import RepositoryError

    config = ctx.obj["config"]
    repo = _open_repository(config)
    try:
        students = repo.get_all()
    except RepositoryError as e:
        console.print(f"[red]Schüler konnten nicht geladen werden: {escape(str(e))}[/red]")
        sys.exit(1)
    finally:
        repo.close()

    if not students:
        console.print("[dim]Keine Schüler im System.[/dim]")
        return
    analyzer = ClassAnalyzer()
    analyzer.print_rich(analyzer.analyze(students, top_n=config.reports.top_performers))


@cli.command("seed")
@click.pass_context
def cmd_seed(ctx: click.Context):
    """Legt die Beispiel-Schüler an (vorhandene IDs werden übersprungen)."""
    from data.repository import DuplicateStudentError, RepositoryError
    from data.sample_data import sample_students

    config = ctx.obj["config"]
    repo = _open_repository(config)
    created = 0
    try:
        for student in sample_students():
            try:
                repo.create_student(student)
                created += 1
            except DuplicateStudentError:
                console.print(f"[dim]{escape(student.id)} existiert bereits – übersprungen.[/dim]")
    except RepositoryError as e:
        console.print(f"[red]Beispieldaten konnten nicht angelegt werden: {escape(str(e))}[/red]")
        sys.exit(1)
    finally:
        repo.close()
    console.print(f"[green]✓[/green] {created} Beispiel-Schüler angelegt.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@cli.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    config = ctx.obj["config"]
    mgr = ctx.obj["config_manager"]

    source = "Standardwerte" if mgr.first_run_check() else str(mgr.DEFAULT_CONFIG)
    console.print(Panel(f"Quelle: [bold]{escape(source)}[/bold]",
                        title="Konfiguration", border_style="cyan"))

    table = Table(box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Parameter")
    table.add_column("Wert")
    for section, values in config.model_dump().items():
        for key, value in values.items():
            table.add_row(section, key, escape(str(value)))
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
@click.pass_context
def config_init(ctx: click.Context, force: bool):
    """Schreibt die Standardkonfiguration als YAML."""
    from config.defaults import default_app_config

    mgr = ctx.obj["config_manager"]
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {escape(str(mgr.DEFAULT_CONFIG))}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_app_config())


def main():
    """Einstiegspunkt."""
    cli()


if __name__ == "__main__":
    main()
