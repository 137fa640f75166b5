"""
Unit tests for configuration loading and validation.

Tests defaults, strict key checking and error handling for settings files.
"""

import os
import tempfile

import pytest
import yaml

from invoicing_dao.config.loader import (
    DatabaseConfig,
    LoggingConfig,
    Settings,
    load_settings
)


class TestSettingsLoading:
    """Test settings loading and validation."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_data, filename: str = "config.yaml") -> str:
        """Write configuration data to temporary file."""
        config_path = os.path.join(self.temp_dir, filename)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f)
        return config_path

    def test_valid_config_loads_correctly(self):
        """Test that a complete configuration loads correctly."""
        config_path = self._write_config({
            "database": {"path": "/var/lib/invoicing/prod.db"},
            "logging": {"level": "debug"}
        })

        settings = load_settings(config_path)

        assert settings.database.path == "/var/lib/invoicing/prod.db"
        assert settings.logging.level == "DEBUG"

    def test_sections_are_optional(self):
        """Test missing sections fall back to defaults."""
        config_path = self._write_config({"database": {"path": "other.db"}})

        settings = load_settings(config_path)

        assert settings.database.path == "other.db"
        assert settings.logging == LoggingConfig()

    def test_empty_section_uses_defaults(self):
        """Test a section present without keys uses defaults."""
        config_path = self._write_config({"database": None, "logging": {}})

        settings = load_settings(config_path)

        assert settings == Settings()

    def test_defaults(self):
        """Test the built-in defaults."""
        settings = Settings()
        assert settings.database.path == "invoicing.db"
        assert settings.logging.level == "INFO"

    def test_missing_file(self):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(os.path.join(self.temp_dir, "missing.yaml"))

    def test_empty_file(self):
        """Test an empty file is rejected."""
        config_path = os.path.join(self.temp_dir, "empty.yaml")
        open(config_path, 'w').close()

        with pytest.raises(ValueError, match="empty"):
            load_settings(config_path)

    def test_invalid_yaml(self):
        """Test malformed YAML is reported with the file name."""
        config_path = os.path.join(self.temp_dir, "bad.yaml")
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write("database: [unclosed\n")

        with pytest.raises(yaml.YAMLError, match="bad.yaml"):
            load_settings(config_path)

    def test_non_mapping_document(self):
        """Test a YAML list is rejected."""
        config_path = self._write_config(["database", "logging"])

        with pytest.raises(ValueError, match="mapping"):
            load_settings(config_path)

    def test_unknown_top_level_key(self):
        """Test typos at the top level are rejected."""
        config_path = self._write_config({"databse": {"path": "x.db"}})

        with pytest.raises(ValueError, match="Unknown configuration keys"):
            load_settings(config_path)

    def test_unknown_section_key(self):
        """Test typos inside a section are rejected."""
        config_path = self._write_config({"database": {"file": "x.db"}})

        with pytest.raises(ValueError, match="Unknown keys in database"):
            load_settings(config_path)

    def test_section_must_be_mapping(self):
        """Test a scalar section is rejected."""
        config_path = self._write_config({"logging": "DEBUG"})

        with pytest.raises(ValueError, match="'logging' must be a dictionary"):
            load_settings(config_path)

    def test_blank_database_path(self):
        """Test an empty database path is rejected."""
        config_path = self._write_config({"database": {"path": "  "}})

        with pytest.raises(ValueError, match="non-empty string"):
            load_settings(config_path)

    def test_invalid_log_level(self):
        """Test an unknown log level is rejected."""
        config_path = self._write_config({"logging": {"level": "verbose"}})

        with pytest.raises(ValueError, match="logging level must be one of"):
            load_settings(config_path)

    def test_non_string_log_level(self):
        """Test a numeric log level is rejected."""
        config_path = self._write_config({"logging": {"level": 10}})

        with pytest.raises(ValueError, match="must be a string"):
            load_settings(config_path)


class TestConfigDataclasses:
    """Test validation on direct construction."""

    def test_database_config_rejects_empty_path(self):
        with pytest.raises(ValueError):
            DatabaseConfig(path="")

    def test_logging_config_rejects_lowercase(self):
        """Test levels are expected upper-case once loaded."""
        with pytest.raises(ValueError):
            LoggingConfig(level="info")

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(Exception):
            settings.database = DatabaseConfig(path="other.db")
