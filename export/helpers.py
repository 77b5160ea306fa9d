"""Dateinamen und Ablage für gespeicherte Berichte."""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from models.student import Student


def report_card_filename(student: Student) -> str:
    """``report_card_<id>_<name>.txt``; Leerraum im Namen wird zu ``_``."""
    name = re.sub(r"\s+", "_", student.name)
    return f"report_card_{student.id}_{name}.txt"


def class_report_filename(generated_at: Optional[datetime] = None) -> str:
    """``class_report_YYYYMMDD_HHMMSS.txt``"""
    ts = (generated_at or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"class_report_{ts}.txt"


def save_report(text: str, path: Path) -> Path:
    """Schreibt einen Bericht als UTF-8-Textdatei; legt Verzeichnisse an."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
