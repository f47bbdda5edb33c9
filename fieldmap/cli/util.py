"""Shared helpers for CLI commands."""

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from fieldmap.application.di import create_container
from fieldmap.cli.console import Console
from fieldmap.config import CONFIG_FILE_ENV, Config
from fieldmap.domain.field.model.configuration import FieldConfiguration
from fieldmap.domain.field.model.field_map import FieldMap
from fieldmap.domain.shared.error import FieldMapError
from fieldmap.infrastructure.types import qualified_name


@contextmanager
def _config_file_env(path: Path) -> Iterator[None]:
    """Point FIELDMAP_CONFIG_FILE at ``path`` for the duration of the block."""
    previous = os.environ.get(CONFIG_FILE_ENV)
    os.environ[CONFIG_FILE_ENV] = str(path)
    try:
        yield
    finally:
        if previous is None:
            del os.environ[CONFIG_FILE_ENV]
        else:
            os.environ[CONFIG_FILE_ENV] = previous


def load_config(path: Path | None = None) -> Config:
    """Load settings, reading rules from ``path`` when given.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    if path is None:
        return Config()
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    with _config_file_env(path):
        return Config()


def build_field_map(console: Console, config_path: Path | None) -> FieldMap:
    """Load config and build the field map, exiting with status 1 on failure."""
    try:
        config = load_config(config_path)
        container = create_container(config)
        try:
            return container.get(FieldMap)
        finally:
            container.close()
    except FileNotFoundError as e:
        console.error(str(e))
        sys.exit(1)
    except ValidationError as e:
        console.error(f"Invalid configuration: {e}")
        sys.exit(1)
    except FieldMapError as e:
        console.error(e.message, hint=f"code: {e.code}")
        sys.exit(1)


def describe_configuration(configuration: FieldConfiguration) -> dict[str, str]:
    """Flatten a configuration into display strings."""
    attributes = ", ".join(f"{k}={v}" for k, v in sorted(configuration.attributes.items()))
    return {
        "variant": type(configuration).__name__,
        "field_name": configuration.field_name or "",
        "type_name": configuration.type_name or "",
        "bound_type": qualified_name(configuration.bound_type) if configuration.bound_type else "",
        "boost": f"{configuration.boost:g}",
        "attributes": attributes,
    }
