from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


class FieldType(Enum):
    """Value kinds a search document field can hold."""

    ATOM = "atom"
    TEXT = "text"
    HTML = "html"
    NUMBER = "number"
    DATE = "date"
    GEO_POINT = "geo_point"


@dataclass(frozen=True, slots=True)
class Field:
    """One named, typed value of a search document.

    Attributes:
        name: Field name. Several fields of a document may share a name.
        type: Kind of value stored.
        value: The value (str for ATOM/TEXT/HTML, float for NUMBER,
            datetime for DATE, (latitude, longitude) for GEO_POINT).
    """

    name: str
    type: FieldType
    value: Any


@dataclass(frozen=True, slots=True)
class Document:
    """Search document as accepted by a `SearchIndex`.

    Attributes:
        id: Document identifier, unique within an index.
        fields: Fields in insertion order.
    """

    id: str
    fields: Sequence[Field] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def get_fields(self, name: str) -> tuple[Field, ...]:
        """Return all fields named ``name``, possibly none."""
        return tuple(f for f in self.fields if f.name == name)

    def field_names(self) -> tuple[str, ...]:
        """Return distinct field names in first-seen order."""
        return tuple(dict.fromkeys(f.name for f in self.fields))
