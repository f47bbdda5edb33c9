"""fieldmap - resolves which configuration governs a document field at index time."""

from fieldmap.domain.field.model.configuration import (
    DateFieldConfiguration,
    FieldConfiguration,
    NumericFieldConfiguration,
    TextFieldConfiguration,
)
from fieldmap.domain.field.model.descriptor import FieldDescriptor, IndexableField
from fieldmap.domain.field.model.field_map import FieldMap
from fieldmap.domain.field.model.rule import FieldRule, RuleKind
from fieldmap.domain.field.service.registration import FieldRegistrationService
from fieldmap.domain.shared.error import (
    ConfigurationError,
    ConstructionError,
    FactoryResolutionError,
    FieldMapError,
    InvalidArgumentError,
)
from fieldmap.infrastructure.factory.registry import FactoryRegistry

__all__ = [
    "ConfigurationError",
    "ConstructionError",
    "DateFieldConfiguration",
    "FactoryRegistry",
    "FactoryResolutionError",
    "FieldConfiguration",
    "FieldDescriptor",
    "FieldMap",
    "FieldMapError",
    "FieldRegistrationService",
    "FieldRule",
    "IndexableField",
    "InvalidArgumentError",
    "NumericFieldConfiguration",
    "RuleKind",
    "TextFieldConfiguration",
]
