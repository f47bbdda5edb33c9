"""Field configuration variants.

A configuration is resolved once per field by the registry and then tells the
indexing pipeline how to treat that field's values. Every variant shares the
same small capability set (``boost``, ``get``, ``format_value``); variants only
differ in the typed settings they read from the attribute bag.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator
from typing_extensions import Self

from fieldmap.domain.field.model.rule import FieldRule, read_only
from fieldmap.domain.shared.model.value import ValueObject


class FieldConfiguration(ValueObject):
    """Base configuration, also used as the bare "generic override".

    Attributes:
        type_name: Type identifier this configuration targets (type-name entries).
        field_name: Exact field name (field-name entries).
        attributes: Declarative key/value settings from the rule.
        bound_type: Runtime type (type-match entries).
        rule: The declarative rule this configuration was built from.
        boost: Relevance boost, read from the ``boost`` attribute.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type_name: str | None = None
    field_name: str | None = None
    attributes: Mapping[str, str] = Field(default_factory=lambda: read_only({}))
    bound_type: type[Any] | None = None
    rule: FieldRule | None = None
    boost: float = 1.0

    @field_validator("attributes")
    @classmethod
    def validate_read_only_attributes(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only(value)

    @classmethod
    def create(
        cls,
        *,
        field_name: str | None = None,
        bound_type: type[Any] | None = None,
        type_name: str | None = None,
        attributes: Mapping[str, str] | None = None,
        rule: FieldRule | None = None,
    ) -> Self:
        """Build a configuration from a rule's attribute bag."""
        attributes = dict(attributes or {})
        return cls(
            type_name=type_name,
            field_name=field_name,
            attributes=attributes,
            bound_type=bound_type,
            rule=rule,
            **cls.settings_from_attributes(attributes),
        )

    @classmethod
    def settings_from_attributes(cls, attributes: Mapping[str, str]) -> dict[str, Any]:
        """Extract typed settings for this variant; validated by pydantic."""
        settings: dict[str, Any] = {}
        if "boost" in attributes:
            settings["boost"] = attributes["boost"]
        return settings

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    def format_value(self, value: Any) -> Any:
        """Convert a raw field value into the form written to the index."""
        return value


class TextFieldConfiguration(FieldConfiguration):
    """Analyzed text field."""

    analyzer: str = "standard"

    @classmethod
    def settings_from_attributes(cls, attributes: Mapping[str, str]) -> dict[str, Any]:
        settings = super().settings_from_attributes(attributes)
        if "analyzer" in attributes:
            settings["analyzer"] = attributes["analyzer"]
        return settings

    def format_value(self, value: Any) -> Any:
        if value is None:
            return None
        return str(value)


class DateFieldConfiguration(FieldConfiguration):
    """Date/time field stored as a sortable string."""

    format: str = "%Y%m%dT%H%M%S"

    @classmethod
    def settings_from_attributes(cls, attributes: Mapping[str, str]) -> dict[str, Any]:
        settings = super().settings_from_attributes(attributes)
        if "format" in attributes:
            settings["format"] = attributes["format"]
        return settings

    def format_value(self, value: Any) -> Any:
        if isinstance(value, (date, datetime)):
            return value.strftime(self.format)
        return value


class NumericFieldConfiguration(FieldConfiguration):
    """Numeric field, optionally rounded to ``precision`` decimal places."""

    precision: int | None = None

    @classmethod
    def settings_from_attributes(cls, attributes: Mapping[str, str]) -> dict[str, Any]:
        settings = super().settings_from_attributes(attributes)
        if "precision" in attributes:
            settings["precision"] = attributes["precision"]
        return settings

    def format_value(self, value: Any) -> Any:
        if value is None:
            return None
        number = float(value)
        if self.precision is not None:
            number = round(number, self.precision)
        return number
