"""Resolution of runtime type identifiers to Python types.

Identifiers are either short names of common value types ("str",
"datetime"), their qualified names ("datetime.datetime", "decimal.Decimal"),
or an importable path ("package.module.Class" / "package.module:Class").
Short and qualified names of the common types match case-insensitively;
import paths are matched as written.

``find_type`` may import modules; the field map only calls it while
registering rules. Resolution at lookup time goes through the
``type_identifiers`` of the types already registered.
"""

import importlib
import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

logger = logging.getLogger(__name__)

_COMMON_TYPES: tuple[type[Any], ...] = (
    str,
    int,
    float,
    bool,
    bytes,
    list,
    dict,
    date,
    datetime,
    time,
    timedelta,
    Decimal,
    UUID,
)


def qualified_name(cls: type[Any]) -> str:
    """Return ``module.QualName`` for a type, e.g. "datetime.datetime"."""
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize_identifier(identifier: str) -> str:
    """Lower-case an identifier and treat "module:Class" like "module.Class"."""
    return identifier.strip().replace(":", ".").lower()


def type_identifiers(cls: type[Any]) -> tuple[str, ...]:
    """Normalized names a type can be referred to by: short and qualified."""
    return (cls.__name__.lower(), qualified_name(cls).lower())


_KNOWN_TYPES: dict[str, type[Any]] = {}
for _cls in _COMMON_TYPES:
    for _identifier in type_identifiers(_cls):
        _KNOWN_TYPES[_identifier] = _cls


def find_type(identifier: str | None) -> type[Any] | None:
    """Best-effort resolution; never raises.

    Returns:
        The resolved type, or None if the identifier names no known or
        importable type.
    """
    if not identifier:
        return None
    known = _KNOWN_TYPES.get(normalize_identifier(identifier))
    if known is not None:
        return known
    return _import_type(identifier.strip())


def _import_type(identifier: str) -> type[Any] | None:
    if ":" in identifier:
        module_name, _, attribute_path = identifier.partition(":")
    else:
        module_name, _, attribute_path = identifier.rpartition(".")
    if not module_name or not attribute_path:
        return None

    try:
        target: Any = importlib.import_module(module_name)
    except Exception as e:
        # Any import failure is a miss.
        logger.debug("Cannot import module for type %r: %s", identifier, e)
        return None

    for part in attribute_path.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None
    return target if isinstance(target, type) else None
