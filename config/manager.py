"""Konfigurationsmanager: Laden, Speichern und Validieren.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_app_config
from config.schema import AppConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Notenbuch — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "database": (
        "Datenbank",
        "MongoDB-Verbindung. Der Timeout gilt pro Anfrage.",
    ),
    "reports": (
        "Berichte",
        "Zielverzeichnis für gespeicherte Zeugnisse und Klassenberichte.",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "notenbuch.yaml"

    def __init__(self, path: Optional[Path] = None):
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)
            self.CONFIG_DIR = self.DEFAULT_CONFIG.parent

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self) -> AppConfig:
        """Lädt die Config, ohne Datei gelten die Standardwerte."""
        if self.first_run_check():
            return default_app_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {escape(str(target))}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        db_map = CommentedMap(cm["database"])
        db_map.yaml_add_eol_comment("Sekunden", "timeout_seconds")
        cm["database"] = db_map

        return cm
