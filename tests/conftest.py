"""Global test fixtures."""

import pytest

from fieldmap.config import CONFIG_FILE_ENV, LOG_FILE_ENV
from fieldmap.domain.field.model.field_map import FieldMap
from fieldmap.infrastructure.factory.registry import FactoryRegistry


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep a developer's config file, log file and .env out of the tests."""
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.delenv(LOG_FILE_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def factory() -> FactoryRegistry:
    return FactoryRegistry.default()


@pytest.fixture
def field_map(factory: FactoryRegistry) -> FieldMap:
    return FieldMap(factory)
