"""Field descriptors handed in by the indexing pipeline."""

from typing import Any, Protocol

from pydantic import ConfigDict

from fieldmap.domain.shared.model.value import ValueObject


class FieldDescriptor(Protocol):
    """Read-only view of a document field about to be indexed."""

    @property
    def name(self) -> str:
        """Field name, may be empty."""
        ...

    @property
    def type_key(self) -> str:
        """Declared storage/type identifier, e.g. "single-line text"."""
        ...

    @property
    def field_type(self) -> type[Any] | None:
        """Native runtime type of the field's values, if known."""
        ...


class IndexableField(ValueObject):
    """Plain field descriptor for callers without their own field model."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = ""
    type_key: str = ""
    field_type: type[Any] | None = None
