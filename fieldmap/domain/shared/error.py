"""Error hierarchy for fieldmap.

Error layers:
- FieldMapError: Base class for all fieldmap errors
- ConfigurationError: Malformed or incomplete declarative rules (fatal to setup)
- InvalidArgumentError: Empty or missing keys passed at a call site (programmer error)

Lookups never raise for a missing configuration; absence is returned as None.
"""


class FieldMapError(Exception):
    """Base class for all fieldmap errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Setup Errors (raised while populating the registry)
# =============================================================================


class ConfigurationError(FieldMapError):
    """A declarative rule is malformed or cannot be applied.

    Keyword context (field name, type name, setting type, ...) is kept on the
    error and appended to the message so a failing rule can be found among
    the many read from one configuration source.
    """

    def __init__(self, message: str, code: str | None = None, **context: str | None) -> None:
        self.context = {key: value for key, value in context.items() if value is not None}
        if self.context:
            details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
            message = f"{message} ({details})"
        super().__init__(message, code=code)


class FactoryResolutionError(ConfigurationError):
    """A setting type cannot be resolved to a constructible configuration variant."""


class ConstructionError(ConfigurationError):
    """A configuration variant raised while being constructed."""


# =============================================================================
# Call-site Errors
# =============================================================================


class InvalidArgumentError(FieldMapError):
    """A required argument was empty or missing."""

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message, code="INVALID_ARGUMENT")
        self.argument = argument
