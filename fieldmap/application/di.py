"""Dependency injection wiring for the field map.

The field map is built exactly once per container, in APP scope: all rules
are registered before the first consumer receives it, and consumers only
ever read from it.
"""

import logging

from dishka import Container, Provider, Scope, alias, from_context, make_container, provide

from fieldmap.config import Config
from fieldmap.domain.field.model.field_map import FieldMap
from fieldmap.domain.field.port.factory import ConfigurationFactory
from fieldmap.domain.field.service.registration import FieldRegistrationService
from fieldmap.infrastructure.factory.registry import FactoryRegistry

logger = logging.getLogger(__name__)


class FieldMapProvider(Provider):
    """Provides the configured factory registry and populated field map."""

    config = from_context(provides=Config, scope=Scope.APP)
    factory = alias(source=FactoryRegistry, provides=ConfigurationFactory)

    @provide(scope=Scope.APP)
    def get_factory_registry(self, config: Config) -> FactoryRegistry:
        """Built-in setting types plus any discovered from entry points."""
        registry = FactoryRegistry.default()
        if config.discover_plugins:
            discovered = registry.discover()
            if discovered:
                logger.info("Discovered setting types: %s", ", ".join(discovered))
        return registry

    @provide(scope=Scope.APP)
    def get_field_map(self, config: Config, factory: FactoryRegistry) -> FieldMap:
        """Build the field map from the configured rules.

        Raises:
            ConfigurationError: If any rule is malformed; nothing is published.
        """
        field_map = FieldMap(factory)
        FieldRegistrationService(field_map=field_map, factory=factory).register_all(config.rules)
        return field_map


def create_container(config: Config | None = None) -> Container:
    config = config or Config()

    return make_container(
        FieldMapProvider(),
        context={Config: config},
    )
