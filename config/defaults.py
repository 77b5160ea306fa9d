from config.schema import (
    AppConfig,
    DatabaseConfig,
    LoggingConfig,
    ReportConfig,
)


def default_database() -> DatabaseConfig:
    """Lokale MongoDB-Instanz ohne Authentifizierung.

    mongodb://localhost:27017 → Datenbank "studentRecordSystem",
    Collection "students", 10 Sekunden Timeout pro Anfrage.
    """
    return DatabaseConfig(
        connection_string="mongodb://localhost:27017",
        database_name="studentRecordSystem",
        collection_name="students",
        timeout_seconds=10.0,
    )


def default_reports() -> ReportConfig:
    return ReportConfig(output_dir="reports", top_performers=3)


def default_app_config() -> AppConfig:
    """Vollständige Standardkonfiguration."""
    return AppConfig(
        database=default_database(),
        reports=default_reports(),
        logging=LoggingConfig(),
    )
