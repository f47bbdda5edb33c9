"""Resolve command - show which configuration governs a field."""

import sys
from pathlib import Path

import cyclopts
from rich.markup import escape

from fieldmap.cli.console import Console
from fieldmap.cli.util import build_field_map, describe_configuration
from fieldmap.domain.field.model.descriptor import IndexableField
from fieldmap.infrastructure.types import find_type

app = cyclopts.App(name="resolve", help="Resolve the configuration for a field")


@app.default
def resolve(
    *,
    name: str = "",
    type_key: str = "",
    native_type: str | None = None,
    config: Path | None = None,
) -> None:
    """Resolve a field the way the indexing pipeline would.

    Args:
        name: Field name (matched case-insensitively).
        type_key: Declared field type identifier, e.g. "single-line text".
        native_type: Runtime type of the field's values, e.g. "datetime".
        config: YAML config file. Defaults to $FIELDMAP_CONFIG_FILE.
    """
    console = Console()

    field_type = None
    if native_type is not None:
        field_type = find_type(native_type)
        if field_type is None:
            console.error(f"Unknown native type: {native_type}")
            sys.exit(2)

    field_map = build_field_map(console, config)
    field = IndexableField(name=name, type_key=type_key, field_type=field_type)
    configuration = field_map.get_field_configuration(field)

    if configuration is None:
        console.warning("No configuration applies to this field")
        sys.exit(1)

    described = describe_configuration(configuration)
    lines = [f"[cyan]{key}:[/cyan] {escape(value)}" for key, value in described.items() if value]
    console.panel("\n".join(lines), title=described["variant"], border_style="blue")
