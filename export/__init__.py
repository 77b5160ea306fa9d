"""Export-Modul: Textberichte (Zeugnis, Klassenbericht) und deren Ablage."""

from export.helpers import class_report_filename, report_card_filename, save_report
from export.reports import render_class_report, render_report_card

__all__ = [
    "render_report_card",
    "render_class_report",
    "report_card_filename",
    "class_report_filename",
    "save_report",
]
