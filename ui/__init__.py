"""Konsolen-Oberfläche: Menü und Eingabe-Parser."""
