"""Registered-factory implementation of the configuration factory port."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from importlib.metadata import entry_points
from typing import Any


from fieldmap.domain.field.model.configuration import (
    DateFieldConfiguration,
    FieldConfiguration,
    NumericFieldConfiguration,
    TextFieldConfiguration,
)
from fieldmap.domain.field.model.rule import FieldRule
from fieldmap.domain.field.port.factory import ConfigurationFactory, SettingType
from fieldmap.domain.shared.error import (
    ConstructionError,
    FactoryResolutionError,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "fieldmap.settings"

BUILTIN_SETTING_TYPES: dict[str, type[FieldConfiguration]] = {
    "default": FieldConfiguration,
    "text": TextFieldConfiguration,
    "date": DateFieldConfiguration,
    "numeric": NumericFieldConfiguration,
}


class FactoryRegistry(ConfigurationFactory):
    """Mapping of setting type tags to configuration constructors.

    Populated once at startup, either explicitly through ``register`` or
    from installed plugins through ``discover``.
    """

    def __init__(self, setting_types: Mapping[str, SettingType] | None = None) -> None:
        self._setting_types: dict[str, Callable[..., FieldConfiguration]] = {}
        for name, setting_type in (setting_types or {}).items():
            self.register(name, setting_type)

    @classmethod
    def default(cls) -> FactoryRegistry:
        """Registry preloaded with the built-in variants."""
        return cls(BUILTIN_SETTING_TYPES)

    def register(self, name: str, setting_type: SettingType) -> None:
        """Register a variant under a tag.

        Args:
            name: Tag used by rules to select the variant
            setting_type: A FieldConfiguration subclass or constructor callable

        Raises:
            InvalidArgumentError: If the tag is empty or already registered
        """
        if not name:
            raise InvalidArgumentError("Setting type name must not be empty", argument="name")
        if name in self._setting_types:
            raise InvalidArgumentError(f"Setting type '{name}' is already registered", argument="name")
        self._setting_types[name] = setting_type

    def discover(self) -> list[str]:
        """Register variants exposed by installed packages.

        Scans the 'fieldmap.settings' entry point group. Each entry point
        should point at a FieldConfiguration subclass or a constructor.

        Returns:
            Tags registered by this call.

        Example pyproject.toml entry:
            [project.entry-points."fieldmap.settings"]
            geo = "my_package.fields:GeoPointFieldConfiguration"
        """
        discovered: list[str] = []
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._setting_types:
                logger.warning("Skipping setting type '%s': tag already registered", ep.name)
                continue
            try:
                setting_type = ep.load()
                _validate_setting_type(setting_type, ep.name)
            except Exception as e:
                logger.warning("Failed to load setting type '%s': %s", ep.name, e)
                continue
            self._setting_types[ep.name] = setting_type
            discovered.append(ep.name)
            logger.debug("Discovered setting type: %s -> %s", ep.name, setting_type)
        return discovered

    def names(self) -> list[str]:
        """List all registered setting type tags."""
        return list(self._setting_types.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._setting_types

    def resolve(self, name: str) -> SettingType:
        setting_type = self._setting_types.get(name)
        if setting_type is None:
            available = ", ".join(sorted(self._setting_types)) or "(none)"
            raise FactoryResolutionError(f"Unknown setting type '{name}'. Available: {available}")
        return setting_type

    def construct(
        self,
        setting_type: SettingType,
        *,
        field_name: str | None,
        bound_type: type[Any] | None,
        type_name: str | None,
        attributes: Mapping[str, str],
        rule: FieldRule | None,
    ) -> FieldConfiguration:
        constructor = _constructor_for(setting_type)
        context = {
            **(rule.describe() if rule is not None else {}),
            "setting_type": getattr(setting_type, "__name__", repr(setting_type)),
            "field_name": field_name,
            "type_name": type_name,
        }

        try:
            configuration = constructor(
                field_name=field_name,
                bound_type=bound_type,
                type_name=type_name,
                attributes=attributes,
                rule=rule,
            )
        except Exception as e:
            raise ConstructionError(f"Unable to create configuration: {e}", **context) from e

        if not isinstance(configuration, FieldConfiguration):
            raise ConstructionError(
                f"Unable to create configuration: got {type(configuration).__name__}", **context
            )
        return configuration


def _constructor_for(setting_type: SettingType) -> Callable[..., FieldConfiguration]:
    if isinstance(setting_type, type):
        if issubclass(setting_type, FieldConfiguration):
            return setting_type.create
        raise FactoryResolutionError(
            "Setting type is not a FieldConfiguration subclass",
            setting_type=setting_type.__name__,
        )
    if not callable(setting_type):
        raise FactoryResolutionError(
            "Setting type is not callable", setting_type=repr(setting_type)
        )
    return setting_type


def _validate_setting_type(setting_type: Any, name: str) -> None:
    """Validate that an entry point target can construct configurations.

    Raises:
        TypeError: If the target is neither a FieldConfiguration subclass nor callable.
    """
    if isinstance(setting_type, type):
        if not issubclass(setting_type, FieldConfiguration):
            raise TypeError(f"Setting type {name} must subclass FieldConfiguration")
    elif not callable(setting_type):
        raise TypeError(f"Setting type {name} must be a class or callable")
