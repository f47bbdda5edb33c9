"""Unit tests for field configuration variants."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from fieldmap.domain.field.model.configuration import (
    DateFieldConfiguration,
    FieldConfiguration,
    NumericFieldConfiguration,
    TextFieldConfiguration,
)
from fieldmap.domain.field.model.rule import FieldRule, RuleKind


class TestFieldConfiguration:
    def test_create_keeps_attributes_and_rule(self):
        rule = FieldRule(kind=RuleKind.FIELD_NAME, field_name="title", attributes={"stored": "yes"})

        configuration = FieldConfiguration.create(
            field_name="title", attributes=rule.attributes, rule=rule
        )

        assert configuration.field_name == "title"
        assert configuration.get("stored") == "yes"
        assert configuration.get("missing", "fallback") == "fallback"
        assert configuration.rule is rule

    def test_boost_defaults_to_one(self):
        assert FieldConfiguration.create().boost == 1.0

    def test_invalid_boost_fails_validation(self):
        with pytest.raises(ValidationError):
            FieldConfiguration.create(attributes={"boost": "very"})

    def test_is_immutable(self):
        configuration = FieldConfiguration.create(field_name="title")

        with pytest.raises(ValidationError):
            configuration.field_name = "other"  # type: ignore[misc]

    def test_attribute_bag_is_read_only(self):
        """The bag stays consistent with the settings parsed from it."""
        configuration = TextFieldConfiguration.create(attributes={"boost": "2.0"})

        with pytest.raises(TypeError):
            configuration.attributes["boost"] = "9"  # type: ignore[index]

        assert configuration.get("boost") == "2.0"
        assert configuration.boost == 2.0

    def test_default_attribute_bag_is_read_only(self):
        with pytest.raises(TypeError):
            FieldConfiguration().attributes["boost"] = "9"  # type: ignore[index]

    def test_create_copies_attribute_bag(self):
        attributes = {"boost": "2"}
        configuration = FieldConfiguration.create(attributes=attributes)

        attributes["boost"] = "3"

        assert configuration.attributes == {"boost": "2"}

    def test_format_value_passes_through(self):
        assert FieldConfiguration().format_value([1, 2]) == [1, 2]


class TestTextFieldConfiguration:
    def test_analyzer_from_attributes(self):
        configuration = TextFieldConfiguration.create(attributes={"analyzer": "keyword"})

        assert configuration.analyzer == "keyword"

    def test_default_analyzer(self):
        assert TextFieldConfiguration.create().analyzer == "standard"

    def test_format_value_stringifies(self):
        configuration = TextFieldConfiguration.create()

        assert configuration.format_value(42) == "42"
        assert configuration.format_value(None) is None


class TestDateFieldConfiguration:
    def test_formats_dates_with_configured_format(self):
        configuration = DateFieldConfiguration.create(attributes={"format": "%Y-%m-%d"})

        assert configuration.format_value(date(2024, 3, 1)) == "2024-03-01"

    def test_default_format_is_sortable(self):
        configuration = DateFieldConfiguration.create()

        assert configuration.format_value(datetime(2024, 3, 1, 12, 30, 5)) == "20240301T123005"

    def test_non_date_values_pass_through(self):
        assert DateFieldConfiguration.create().format_value("yesterday") == "yesterday"


class TestNumericFieldConfiguration:
    def test_rounds_to_precision(self):
        configuration = NumericFieldConfiguration.create(attributes={"precision": "2"})

        assert configuration.precision == 2
        assert configuration.format_value("3.14159") == 3.14

    def test_without_precision_converts_to_float(self):
        assert NumericFieldConfiguration.create().format_value(7) == 7.0

    def test_invalid_precision_fails_validation(self):
        with pytest.raises(ValidationError):
            NumericFieldConfiguration.create(attributes={"precision": "two"})
