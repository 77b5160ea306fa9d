from pydantic import BaseModel, Field
from typing import Literal


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# ─── DATENBANK ───

class DatabaseConfig(BaseModel):
    """Verbindung zur MongoDB-Collection mit den Schülerdaten."""
    # Verbindungs-URI des MongoDB-Servers
    connection_string: str = Field("mongodb://localhost:27017",
        description="MongoDB-Verbindungs-URI")
    # Name der Datenbank
    database_name: str = Field("studentRecordSystem",
        description="Name der Datenbank")
    # Name der Collection für Schülerdatensätze
    collection_name: str = Field("students",
        description="Collection für Schülerdatensätze")
    # Maximale Wartezeit pro Datenbank-Anfrage
    timeout_seconds: float = Field(10.0, gt=0, le=300,
        description="Timeout pro Datenbank-Anfrage (Sekunden)")

    @property
    def timeout_ms(self) -> int:
        """Timeout in Millisekunden (für pymongo)."""
        return int(self.timeout_seconds * 1000)


# ─── BERICHTE ───

class ReportConfig(BaseModel):
    """Ablage der gespeicherten Berichte."""
    # Verzeichnis, in das Zeugnisse und Klassenberichte geschrieben werden
    output_dir: str = Field("reports",
        description="Zielverzeichnis für Berichtsdateien")
    # Anzahl der Besten im Klassenbericht
    top_performers: int = Field(3, ge=1, le=20,
        description="Anzahl der Besten im Klassenbericht")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe der Anwendung."""
    # Log-Level der Anwendung
    level: LogLevel = Field("WARNING",
        description="Log-Level der Anwendung")
    # Log-Level des MongoDB-Treibers (gedämpft, damit das Menü lesbar bleibt)
    driver_level: LogLevel = Field("ERROR",
        description="Log-Level des MongoDB-Treibers")
    # Format der Log-Zeilen
    format: str = Field("%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Format der Log-Zeilen")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration des Notenbuchs."""
    # MongoDB-Verbindung
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    # Berichtsablage
    reports: ReportConfig = Field(default_factory=ReportConfig)
    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
