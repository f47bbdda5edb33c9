"""Check command - build the field map and list its entries."""

from pathlib import Path

import cyclopts

from fieldmap.cli.console import Console
from fieldmap.cli.util import build_field_map, describe_configuration

app = cyclopts.App(name="check", help="Validate field rules and list registered entries")

COLUMNS = [
    ("table", "Table"),
    ("key", "Key"),
    ("variant", "Variant"),
    ("boost", "Boost"),
    ("attributes", "Attributes"),
]


@app.default
def check(*, config: Path | None = None) -> None:
    """Build the field map from the configured rules.

    Args:
        config: YAML config file. Defaults to $FIELDMAP_CONFIG_FILE.
    """
    console = Console()
    field_map = build_field_map(console, config)

    rows: list[dict[str, str]] = []
    for key, configuration in field_map.field_name_entries():
        rows.append({"table": "field name", "key": key, **describe_configuration(configuration)})
    for key, configuration in field_map.field_type_name_entries():
        rows.append({"table": "field type name", "key": key, **describe_configuration(configuration)})
    for configuration in field_map.available_types:
        described = describe_configuration(configuration)
        rows.append({"table": "type match", "key": described["bound_type"], **described})

    if rows:
        console.table(rows, COLUMNS, title="Field configurations")
    console.success(f"{len(rows)} field configuration(s) registered")
