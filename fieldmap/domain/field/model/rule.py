"""Declarative field rules, as extracted from a configuration source."""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import Field, field_validator

from fieldmap.domain.shared.model.value import ValueObject

TYPE_NAME_SEPARATOR = "|"


class RuleKind(StrEnum):
    """Which table a rule populates."""

    TYPE_MATCH = "type_match"
    FIELD_NAME = "field_name"
    FIELD_TYPE_NAME = "field_type_name"


class FieldRule(ValueObject):
    """One declarative rule instructing the registry to add a mapping.

    Which of ``field_name``, ``type`` and ``field_type_name`` is required
    depends on ``kind``; completeness is checked at registration time so the
    error can name the table being populated.
    """

    kind: RuleKind
    setting_type: str | None = None  # Factory tag, e.g. "text", "date"
    attributes: Mapping[str, str] = Field(default_factory=lambda: read_only({}))
    field_name: str | None = None  # field_name rules
    type: str | None = None  # type_match rules: runtime type, e.g. "datetime.datetime"
    field_type_name: str | None = None  # field_type_name rules: "single-line text|rich text"

    @field_validator("attributes", mode="before")
    @classmethod
    def stringify_attributes(cls, value: Any) -> Any:
        # YAML turns `boost: 2.0` into a float; attribute bags are strings only.
        if isinstance(value, Mapping):
            return {str(k): v if isinstance(v, str) else _scalar_to_str(v) for k, v in value.items()}
        return value

    @field_validator("attributes")
    @classmethod
    def validate_read_only_attributes(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only(value)

    @property
    def field_type_names(self) -> list[str]:
        """Type identifiers of a ``field_type_name`` rule, empty segments dropped."""
        if not self.field_type_name:
            return []
        return [name for name in self.field_type_name.split(TYPE_NAME_SEPARATOR) if name]

    def describe(self) -> dict[str, str | None]:
        """Identifying context of this rule for error messages."""
        return {
            "kind": self.kind.value,
            "setting_type": self.setting_type,
            "field_name": self.field_name,
            "type": self.type,
            "field_type_name": self.field_type_name,
        }


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def read_only(attributes: Mapping[str, str]) -> Mapping[str, str]:
    """Copy an attribute bag into a mapping that cannot be changed in place."""
    return MappingProxyType(dict(attributes))
