"""Tests for settings loading and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from fieldmap.config import Config, LoggingConfig, configure_logging
from fieldmap.domain.field.model.rule import RuleKind

RULES_YAML = """\
logging:
  level: WARNING

rules:
  - kind: field_name
    field_name: title
    setting_type: text
    attributes:
      boost: 2.0
  - kind: field_type_name
    setting_type: date
    field_type_name: "date|datetime"
  - kind: type_match
    setting_type: numeric
    type: decimal.Decimal
"""


class TestConfig:
    def test_defaults(self):
        config = Config()

        assert config.rules == []
        assert config.discover_plugins is True
        assert config.logging.level == "INFO"

    def test_rules_loaded_from_yaml_file(self, tmp_path, monkeypatch):
        path = tmp_path / "fieldmap.yaml"
        path.write_text(RULES_YAML)
        monkeypatch.setenv("FIELDMAP_CONFIG_FILE", str(path))

        config = Config()

        assert [rule.kind for rule in config.rules] == [
            RuleKind.FIELD_NAME,
            RuleKind.FIELD_TYPE_NAME,
            RuleKind.TYPE_MATCH,
        ]
        assert config.rules[0].attributes == {"boost": "2.0"}
        assert config.rules[1].field_type_names == ["date", "datetime"]
        assert config.logging.level == "WARNING"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "fieldmap.yaml"
        path.write_text(RULES_YAML)
        monkeypatch.setenv("FIELDMAP_CONFIG_FILE", str(path))
        monkeypatch.setenv("FIELDMAP_LOGGING__LEVEL", "ERROR")

        assert Config().logging.level == "ERROR"

    def test_missing_yaml_file_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FIELDMAP_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        assert Config().rules == []

    def test_invalid_rule_kind_fails(self, tmp_path, monkeypatch):
        path = tmp_path / "fieldmap.yaml"
        path.write_text("rules:\n  - kind: nonsense\n")
        monkeypatch.setenv("FIELDMAP_CONFIG_FILE", str(path))

        with pytest.raises(ValidationError):
            Config()


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_stderr_handler_by_default(self):
        configure_logging(LoggingConfig(level="WARNING"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler_when_log_file_set(self, tmp_path, monkeypatch):
        log_file = tmp_path / "logs" / "fieldmap.log"
        monkeypatch.setenv("FIELDMAP_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig())

        root = logging.getLogger()
        assert isinstance(root.handlers[0], logging.FileHandler)
        assert log_file.parent.is_dir()
        root.handlers[0].close()
