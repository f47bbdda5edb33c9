"""Field map - resolves which configuration governs a field.

Three tables back the map, each keyed by a different facet of a field:

- field names (highest priority),
- declared type identifiers,
- runtime types (ordered, first registration wins).

``get_field_configuration`` walks them in that order. Population happens
once at startup; afterwards the map is only read and may be shared between
threads without locking. Lookups never import modules: runtime types are
resolved when a type-match rule is registered.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fieldmap.domain.field.model.configuration import FieldConfiguration
from fieldmap.domain.field.model.descriptor import FieldDescriptor
from fieldmap.domain.field.model.rule import FieldRule
from fieldmap.domain.field.model.table import FieldNameTable, FieldTypeNameTable, TypeMatchTable
from fieldmap.domain.field.port.factory import ConfigurationFactory, SettingType
from fieldmap.domain.shared.error import ConfigurationError, InvalidArgumentError
from fieldmap.infrastructure.types import find_type

Accept = Callable[[FieldConfiguration], bool]
_Resolver = Callable[[FieldDescriptor], FieldConfiguration | None]


def _accept_all(configuration: FieldConfiguration) -> bool:
    return True


class FieldMap:
    """Registry of field configurations."""

    def __init__(self, factory: ConfigurationFactory) -> None:
        self._factory = factory
        self._field_names = FieldNameTable()
        self._field_type_names = FieldTypeNameTable()
        self._type_matches = TypeMatchTable()
        self._resolvers: tuple[_Resolver, ...] = (
            self._by_field_name,
            self._by_field_type_name,
            self._by_type_key,
            self._by_field_type,
        )

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_type_match(
        self,
        type_name: str,
        setting_type: SettingType,
        attributes: Mapping[str, str],
        rule: FieldRule | None = None,
    ) -> FieldConfiguration:
        """Bind a configuration to a runtime type.

        Args:
            type_name: Runtime type identifier, e.g. "datetime.datetime"
            setting_type: Variant constructor
            attributes: Declarative settings
            rule: Source rule

        Raises:
            InvalidArgumentError: If type_name is empty
            ConfigurationError: If type_name does not resolve to a type
        """
        if not type_name:
            raise InvalidArgumentError("type_name must not be empty", argument="type_name")

        bound_type = find_type(type_name)
        if bound_type is None:
            context = rule.describe() if rule is not None else {}
            raise ConfigurationError(
                "Unable to process 'type_match' rule: type does not resolve",
                **{**context, "type": type_name},
            )
        configuration = self._factory.construct(
            setting_type,
            field_name=None,
            bound_type=bound_type,
            type_name=None,
            attributes=attributes,
            rule=rule,
        )
        self._type_matches.append(configuration)
        return configuration

    def add_field_by_field_name(
        self,
        field_name: str,
        setting_type: SettingType | None,
        attributes: Mapping[str, str],
        rule: FieldRule | None = None,
    ) -> FieldConfiguration:
        """Register a configuration for one field name (case-insensitive).

        Without a setting type the entry is a bare FieldConfiguration holding
        only the attributes and the source rule. A later registration for the same name replaces
        the earlier one.
        """
        if not field_name:
            raise InvalidArgumentError("field_name must not be empty", argument="field_name")

        if setting_type is None:
            configuration = self._factory.construct(
                FieldConfiguration,
                field_name=None,
                bound_type=None,
                type_name=None,
                attributes=attributes,
                rule=rule,
            )
        else:
            configuration = self._factory.construct(
                setting_type,
                field_name=field_name,
                bound_type=None,
                type_name=None,
                attributes=attributes,
                rule=rule,
            )
        self._field_names.set(field_name, configuration)
        return configuration

    def add_field_by_field_type_name(
        self,
        setting_type: SettingType,
        type_names: Iterable[str],
        attributes: Mapping[str, str],
        rule: FieldRule | None = None,
    ) -> list[FieldConfiguration]:
        """Register one configuration per declared type identifier.

        Each identifier gets its own instance sharing the same attributes.
        """
        configurations: list[FieldConfiguration] = []
        for type_name in type_names:
            configuration = self._factory.construct(
                setting_type,
                field_name=None,
                bound_type=None,
                type_name=type_name,
                attributes=attributes,
                rule=rule,
            )
            self.add(configuration)
            configurations.append(configuration)
        return configurations

    def add(self, configuration: FieldConfiguration) -> None:
        """Insert a configuration keyed by its type name.

        Raises:
            InvalidArgumentError: If the configuration has no type name
        """
        if not configuration.type_name:
            raise InvalidArgumentError("Configuration has no type_name", argument="type_name")
        self._field_type_names.set(configuration.type_name, configuration)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def get_field_configuration(
        self,
        field: FieldDescriptor,
        accept: Accept | None = None,
    ) -> FieldConfiguration | None:
        """Resolve the configuration governing a field.

        Tries, in order: field name, declared type identifier, a registered
        runtime type the identifier names, and the field's native type. A candidate
        rejected by ``accept`` only rules out that step.

        Returns:
            The first accepted configuration, or None.
        """
        accept = accept or _accept_all
        for resolver in self._resolvers:
            candidate = resolver(field)
            if candidate is not None and accept(candidate):
                return candidate
        return None

    def get_field_configuration_by_name(self, field_name: str) -> FieldConfiguration | None:
        """Look up a configuration by field name only."""
        return self._field_names.get(field_name)

    def get_field_configuration_by_type(self, return_type: type[Any]) -> FieldConfiguration | None:
        """First configuration bound to exactly ``return_type``."""
        return self._type_matches.lookup(return_type)

    def get_field_configuration_by_field_type_name(
        self, field_type_name: str
    ) -> FieldConfiguration | None:
        """Look up a configuration by declared type identifier only."""
        return self._field_type_names.get(field_type_name)

    @property
    def available_types(self) -> tuple[FieldConfiguration, ...]:
        """All type-match entries in registration order."""
        return tuple(self._type_matches)

    def field_name_entries(self) -> list[tuple[str, FieldConfiguration]]:
        return list(self._field_names.items())

    def field_type_name_entries(self) -> list[tuple[str, FieldConfiguration]]:
        return list(self._field_type_names.items())

    def _by_field_name(self, field: FieldDescriptor) -> FieldConfiguration | None:
        if not field.name:
            return None
        return self._field_names.get(field.name)

    def _by_field_type_name(self, field: FieldDescriptor) -> FieldConfiguration | None:
        if not field.type_key:
            return None
        return self._field_type_names.get(field.type_key)

    def _by_type_key(self, field: FieldDescriptor) -> FieldConfiguration | None:
        if not field.type_key:
            return None
        return self._type_matches.lookup_by_identifier(field.type_key)

    def _by_field_type(self, field: FieldDescriptor) -> FieldConfiguration | None:
        if field.field_type is None:
            return None
        return self._type_matches.lookup(field.field_type)
