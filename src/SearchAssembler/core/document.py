"""Search document field helpers.

Builders create typed `Field` values; booleans are stored as the atoms
``"1"``/``"0"`` because the index has no boolean type, and text fields are
tokenized for autocomplete by default. Readers return the first field value of
an accepted type.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from SearchAssembler.core.builder import FALSE, TRUE
from SearchAssembler.core.models import Document, Field, FieldType
from SearchAssembler.core.tokenizer import DEFAULT_MIN_SIZE, tokenize_autocomplete

_TEXT_TYPES = (FieldType.TEXT, FieldType.ATOM, FieldType.HTML)


def create_text_field(
    name: str,
    text: str,
    *,
    tokenize: bool = True,
    token_length: int = DEFAULT_MIN_SIZE,
) -> Field:
    """Create a text field.

    Args:
        name: Field name.
        text: Field text.
        tokenize: Whether to store autocomplete tokens instead of raw text.
        token_length: Minimum token length when tokenizing (at least 1).

    Returns:
        TEXT field.

    Raises:
        InvalidArgumentError: If ``token_length`` is lower than 1.
    """
    if tokenize:
        text = tokenize_autocomplete(text, token_length)
    return Field(name=name, type=FieldType.TEXT, value=text)


def create_bool_field(name: str, value: bool) -> Field:
    return Field(name=name, type=FieldType.ATOM, value=TRUE if value else FALSE)


def create_number_field(name: str, value: float) -> Field:
    return Field(name=name, type=FieldType.NUMBER, value=float(value))


def create_date_field(name: str, value: datetime) -> Field:
    return Field(name=name, type=FieldType.DATE, value=value)


def create_atom_field(name: str, atom: str) -> Field:
    return Field(name=name, type=FieldType.ATOM, value=atom)


def get_value(document: Document, name: str, *types: FieldType) -> Any:
    """Return the value of the first field named ``name``.

    Only the first field with that name is inspected, matching how the index
    returns single-valued fields.

    Args:
        document: Document to read.
        name: Field name.
        *types: Accepted field types.

    Returns:
        The value, or None if the field is missing or of another type.
    """
    for f in document.get_fields(name):
        return _field_value(f, types)
    return None


def get_values(document: Document, name: str, *types: FieldType) -> list[Any]:
    """Return values of every field named ``name`` with an accepted type."""
    values = []
    for f in document.get_fields(name):
        value = _field_value(f, types)
        if value is not None:
            values.append(value)
    return values


def get_text(document: Document, name: str) -> str | None:
    """Return text from a TEXT, ATOM or HTML field."""
    return get_value(document, name, *_TEXT_TYPES)


def get_texts(document: Document, name: str) -> list[str]:
    return get_values(document, name, *_TEXT_TYPES)


def get_boolean(document: Document, name: str) -> bool:
    """Return a boolean stored as an atom; missing fields read as False."""
    return get_value(document, name, FieldType.ATOM) == TRUE


def get_float(document: Document, name: str) -> float:
    """Return a number field as float; missing fields read as 0.0."""
    number = get_value(document, name, FieldType.NUMBER)
    return float(number) if number is not None else 0.0


def reindex_document(document: Document, *skip_fields: str) -> Document:
    """Copy a document without the fields named in ``skip_fields``.

    Args:
        document: Source document.
        *skip_fields: Field names to drop.

    Returns:
        New document with the same id.
    """
    skip = set(skip_fields)
    return Document(id=document.id, fields=[f for f in document.fields if f.name not in skip])


def _field_value(f: Field, types: tuple[FieldType, ...]) -> Any:
    if f.type in types:
        return f.value
    return None
