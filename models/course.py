"""Datenmodell für ein belegtes Fach mit Punktzahl (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict

from models.grading import grade_letter


class Course(BaseModel):
    """Ein Fach mit der erreichten Punktzahl. Unveränderlich."""

    model_config = ConfigDict(frozen=True)

    name: str      # "Mathematics"
    marks: float   # erwartet 0–100, wird hier nicht erzwungen

    @property
    def grade_letter(self) -> str:
        """Notenbuchstabe für die Punktzahl dieses Fachs."""
        return grade_letter(self.marks)
