"""Lookup tables backing the field map.

The string-keyed tables normalise keys to lower case and keep exactly one
configuration per key (last write wins). The type-match table is an ordered
sequence so that the first rule registered for a runtime type always wins.
"""

from collections.abc import Iterator
from typing import Any

from fieldmap.domain.field.model.configuration import FieldConfiguration
from fieldmap.infrastructure.types import normalize_identifier, type_identifiers


def normalize_key(key: str) -> str:
    return key.lower()


class _NamedTable:
    """Case-insensitive mapping of string keys to configurations."""

    def __init__(self) -> None:
        self._entries: dict[str, FieldConfiguration] = {}

    def set(self, key: str, configuration: FieldConfiguration) -> None:
        self._entries[normalize_key(key)] = configuration

    def get(self, key: str) -> FieldConfiguration | None:
        return self._entries.get(normalize_key(key))

    def __contains__(self, key: str) -> bool:
        return normalize_key(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[str, FieldConfiguration]]:
        """Iterate over (normalized key, configuration) pairs."""
        return iter(self._entries.items())


class FieldNameTable(_NamedTable):
    """Configurations keyed by exact field name."""


class FieldTypeNameTable(_NamedTable):
    """Configurations keyed by declared type identifier."""


class TypeMatchTable:
    """Configurations bound to runtime types, in registration order.

    Alongside the ordered entries, every bound type is indexed by its short
    and qualified names so that declared type identifiers resolve without
    importing anything.
    """

    def __init__(self) -> None:
        self._entries: list[FieldConfiguration] = []
        self._by_identifier: dict[str, FieldConfiguration] = {}

    def append(self, configuration: FieldConfiguration) -> None:
        self._entries.append(configuration)
        if configuration.bound_type is not None:
            for identifier in type_identifiers(configuration.bound_type):
                self._by_identifier.setdefault(identifier, configuration)

    def lookup(self, field_type: type[Any]) -> FieldConfiguration | None:
        """Return the first entry bound to exactly ``field_type``.

        Subclasses do not match: a rule for ``date`` never serves ``datetime``.
        """
        return next((entry for entry in self._entries if entry.bound_type is field_type), None)

    def lookup_by_identifier(self, identifier: str) -> FieldConfiguration | None:
        """Return the first entry whose bound type is named by ``identifier``.

        Matching is case-insensitive on the short ("OrderedDict") or qualified
        ("collections.OrderedDict", "collections:OrderedDict") name.
        """
        return self._by_identifier.get(normalize_identifier(identifier))

    def __iter__(self) -> Iterator[FieldConfiguration]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
