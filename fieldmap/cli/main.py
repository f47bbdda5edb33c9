"""Main CLI application using Cyclopts.

The CLI builds the field map from local configuration; it is a diagnostic
tool for rule authors, not part of the indexing pipeline.
"""

import cyclopts
from pydantic import ValidationError

from fieldmap.cli.commands import check, resolve
from fieldmap.config import Config, LoggingConfig, configure_logging

app = cyclopts.App(
    name="fieldmap",
    help="Field configuration registry - CLI",
)

app.command(check.app, name="check")
app.command(resolve.app, name="resolve")


def main() -> None:
    try:
        logging_config = Config().logging
    except ValidationError:
        # Invalid rules are reported by the command itself.
        logging_config = LoggingConfig()
    configure_logging(logging_config)
    app()


if __name__ == "__main__":
    main()
