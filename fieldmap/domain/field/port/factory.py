"""Configuration factory port."""

from abc import abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias

from fieldmap.domain.field.model.configuration import FieldConfiguration
from fieldmap.domain.field.model.rule import FieldRule

SettingType: TypeAlias = Callable[..., FieldConfiguration]
"""Constructor of a configuration variant.

Either a ``FieldConfiguration`` subclass (built through its ``create``
classmethod) or any callable accepting the keyword arguments of
``FieldConfiguration.create``.
"""


class ConfigurationFactory(Protocol):
    """Builds configuration variants from setting types.

    Decouples the field map from the set of available variants: new variants
    are added by registering them with the factory, not by changing the map.
    """

    @abstractmethod
    def resolve(self, name: str) -> SettingType:
        """Resolve a setting type tag to a constructor.

        Args:
            name: The tag used in declarative rules (e.g., "text", "date")

        Returns:
            The registered constructor

        Raises:
            FactoryResolutionError: If no variant is registered under ``name``
        """
        ...

    @abstractmethod
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
        """Build a configuration instance.

        Only one of ``field_name`` / ``type_name`` is meaningful for a given
        call site; the other is passed as None.

        Raises:
            FactoryResolutionError: If ``setting_type`` is not constructible
            ConstructionError: If the constructor raises or returns a non-configuration
        """
        ...
