"""Tests für das Konfigurationssystem."""

from pathlib import Path

import pytest

from config.defaults import default_app_config, default_database, default_reports
from config.manager import ConfigManager
from config.schema import AppConfig, DatabaseConfig, LoggingConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_database(self):
        db = default_database()
        assert db.connection_string == "mongodb://localhost:27017"
        assert db.database_name == "studentRecordSystem"
        assert db.collection_name == "students"
        assert db.timeout_seconds == 10.0
        assert db.timeout_ms == 10000

    def test_default_reports(self):
        rc = default_reports()
        assert rc.output_dir == "reports"
        assert rc.top_performers == 3

    def test_default_app_config_matches_schema_defaults(self):
        assert default_app_config() == AppConfig()

    def test_logging_defaults(self):
        lc = LoggingConfig()
        assert lc.level == "WARNING"
        assert lc.driver_level == "ERROR"


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_timeout_must_be_positive(self):
        with pytest.raises(Exception):
            DatabaseConfig(timeout_seconds=0)

    def test_invalid_log_level(self):
        with pytest.raises(Exception):
            LoggingConfig(level="LOUD")

    def test_partial_config_filled_with_defaults(self):
        config = AppConfig.model_validate({"database": {"database_name": "schule"}})
        assert config.database.database_name == "schule"
        assert config.database.collection_name == "students"
        assert config.reports.output_dir == "reports"


# ─── YAML SPEICHERN / LADEN ───────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren — vollständiger Roundtrip."""
        config = default_app_config().model_copy(update={
            "database": DatabaseConfig(database_name="test_db", timeout_seconds=2.5),
        })
        mgr = ConfigManager(tmp_path / "notenbuch.yaml")

        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert "Datenbank" in text

        loaded = mgr.load()
        assert loaded == config

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "notenbuch.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "missing.yaml")
        assert mgr.load_or_default() == default_app_config()

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("database:\n  timeout_seconds: -1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigManager(path).load() == default_app_config()
