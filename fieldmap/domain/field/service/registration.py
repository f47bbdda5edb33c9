"""FieldRegistrationService - populates a field map from declarative rules."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from fieldmap.domain.field.model.field_map import FieldMap
from fieldmap.domain.field.model.rule import FieldRule, RuleKind
from fieldmap.domain.field.port.factory import ConfigurationFactory, SettingType
from fieldmap.domain.shared.error import ConfigurationError, FactoryResolutionError

logger = logging.getLogger(__name__)


@dataclass
class FieldRegistrationService:
    """Turns declarative rules into field map registrations.

    Every rule is checked for the attributes its kind requires before its
    setting type is resolved, so a malformed rule fails with a
    ConfigurationError naming the rule rather than a lookup error.
    """

    field_map: FieldMap
    factory: ConfigurationFactory

    def register(self, rule: FieldRule) -> None:
        """Register a single rule.

        Raises:
            ConfigurationError: If the rule is incomplete or its setting type
                cannot be resolved or constructed.
        """
        logger.debug("Registering %s rule: %s", rule.kind.value, rule.describe())

        if rule.kind is RuleKind.TYPE_MATCH:
            self._register_type_match(rule)
        elif rule.kind is RuleKind.FIELD_NAME:
            self._register_field_name(rule)
        elif rule.kind is RuleKind.FIELD_TYPE_NAME:
            self._register_field_type_name(rule)

    def register_all(self, rules: Iterable[FieldRule]) -> int:
        """Register rules in order; the first failing rule aborts population.

        Returns:
            Number of rules registered.
        """
        count = 0
        for rule in rules:
            self.register(rule)
            count += 1

        logger.info(
            "Registered %d field rules (%d field names, %d field type names, %d type matches)",
            count,
            len(self.field_map.field_name_entries()),
            len(self.field_map.field_type_name_entries()),
            len(self.field_map.available_types),
        )
        return count

    def _register_type_match(self, rule: FieldRule) -> None:
        if not rule.setting_type or not rule.type:
            raise ConfigurationError(
                "Unable to process 'type_match' rule: 'setting_type' and 'type' are required",
                **rule.describe(),
            )
        setting_type = self._resolve(rule.setting_type, rule)
        self.field_map.add_type_match(rule.type, setting_type, rule.attributes, rule)

    def _register_field_name(self, rule: FieldRule) -> None:
        if not rule.field_name:
            raise ConfigurationError(
                "Unable to process 'field_name' rule: 'field_name' is required",
                **rule.describe(),
            )
        setting_type = self._resolve(rule.setting_type, rule) if rule.setting_type else None
        self.field_map.add_field_by_field_name(rule.field_name, setting_type, rule.attributes, rule)

    def _register_field_type_name(self, rule: FieldRule) -> None:
        if not rule.setting_type or not rule.field_type_names:
            raise ConfigurationError(
                "Unable to process 'field_type_name' rule: "
                "'setting_type' and 'field_type_name' are required",
                **rule.describe(),
            )
        setting_type = self._resolve(rule.setting_type, rule)
        self.field_map.add_field_by_field_type_name(
            setting_type, rule.field_type_names, rule.attributes, rule
        )

    def _resolve(self, name: str, rule: FieldRule) -> SettingType:
        try:
            return self.factory.resolve(name)
        except FactoryResolutionError as e:
            raise FactoryResolutionError(e.message, **rule.describe()) from e
