"""Tests for the check and resolve CLI commands."""

import os
from pathlib import Path

import pytest

from fieldmap.cli.commands.check import check
from fieldmap.cli.commands.resolve import resolve
from fieldmap.config import CONFIG_FILE_ENV

RULES_YAML = """\
discover_plugins: false
rules:
  - kind: field_name
    field_name: title
    setting_type: text
    attributes:
      boost: 2.0
  - kind: field_type_name
    setting_type: date
    field_type_name: "system.datetime"
  - kind: type_match
    setting_type: numeric
    type: decimal.Decimal
"""


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch):
    """Keep rich from wrapping table cells."""
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "fieldmap.yaml"
    path.write_text(RULES_YAML)
    return path


class TestCheck:
    def test_lists_registered_entries(self, config_file: Path, capsys):
        check(config=config_file)

        out = capsys.readouterr().out
        assert "TextFieldConfiguration" in out
        assert "system.datetime" in out
        assert "decimal.Decimal" in out
        assert "3 field configuration(s) registered" in out

    def test_config_path_does_not_leak_into_environment(self, config_file: Path):
        check(config=config_file)

        assert CONFIG_FILE_ENV not in os.environ

    def test_config_path_restores_previous_environment(self, config_file: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_FILE_ENV, "elsewhere.yaml")

        check(config=config_file)

        assert os.environ[CONFIG_FILE_ENV] == "elsewhere.yaml"

    def test_missing_config_file_exits(self, tmp_path: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            check(config=tmp_path / "absent.yaml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_malformed_rule_exits_with_message(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "discover_plugins: false\n"
            "rules:\n"
            "  - kind: type_match\n"
            "    setting_type: date\n"
            "    type: no.such.Type\n"
        )

        with pytest.raises(SystemExit) as exc_info:
            check(config=path)

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "type_match" in err
        assert "no.such.Type" in err

    def test_invalid_config_schema_exits(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("rules:\n  - kind: nonsense\n")

        with pytest.raises(SystemExit) as exc_info:
            check(config=path)

        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err


class TestResolve:
    def test_resolves_by_name(self, config_file: Path, capsys):
        resolve(name="Title", type_key="string", config=config_file)

        out = capsys.readouterr().out
        assert "TextFieldConfiguration" in out
        assert "boost=2.0" in out

    def test_resolves_by_type_key(self, config_file: Path, capsys):
        resolve(type_key="System.DateTime", config=config_file)

        assert "DateFieldConfiguration" in capsys.readouterr().out

    def test_resolves_by_native_type(self, config_file: Path, capsys):
        resolve(name="price", type_key="money", native_type="decimal.Decimal", config=config_file)

        assert "NumericFieldConfiguration" in capsys.readouterr().out

    def test_unmatched_field_exits_with_warning(self, config_file: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            resolve(name="body", type_key="rich text", config=config_file)

        assert exc_info.value.code == 1
        assert "No configuration applies" in capsys.readouterr().out

    def test_unknown_native_type_exits(self, config_file: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            resolve(native_type="no.such.Type", config=config_file)

        assert exc_info.value.code == 2
        assert "Unknown native type" in capsys.readouterr().err
