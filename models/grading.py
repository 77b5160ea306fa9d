"""Notenschema: Durchschnitt → Notenbuchstabe und Bestanden/Nicht bestanden.

Reine Funktionen ohne Zustand. Werte außerhalb von 0–100 werden nicht
abgelehnt; die Datenqualität ist Sache des Aufrufers.
"""

# Schwellen absteigend, jeweils inklusive (>=)
GRADE_THRESHOLDS: list[tuple[float, str]] = [
    (90.0, "A+"),
    (80.0, "A"),
    (70.0, "B"),
    (60.0, "C"),
    (50.0, "D"),
    (40.0, "E"),
]

FAILING_GRADE = "F"

# Alle Notenbuchstaben in Berichts-Reihenfolge
GRADE_LETTERS: tuple[str, ...] = tuple(g for _, g in GRADE_THRESHOLDS) + (FAILING_GRADE,)

PASS_MARK = 40.0


def grade_letter(average: float) -> str:
    """Notenbuchstabe für einen Durchschnitt (Schwellen von oben nach unten)."""
    for threshold, letter in GRADE_THRESHOLDS:
        if average >= threshold:
            return letter
    return FAILING_GRADE


def passed(average: float) -> bool:
    """True wenn der Durchschnitt die Bestehensgrenze erreicht."""
    return average >= PASS_MARK
