from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from SearchAssembler.core.builder import CombineOperator, FieldOperator


@dataclass(frozen=True, slots=True)
class FieldQuery:
    """Per-field text conditions.

    - `OR`: any term matches
    - `AND`: all terms must match

    Terms are raw strings (words or phrases); they are quoted when compiled.
    """

    OR: Sequence[str] = ()
    AND: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class PhraseQuery:
    """One phrase searched in several fields."""

    text: str
    fields: Sequence[str]
    operator: CombineOperator = CombineOperator.OR


@dataclass(frozen=True, slots=True)
class RangeQuery:
    """A comparison such as ``score>=10``."""

    field: str
    operator: FieldOperator
    value: Any


@dataclass(frozen=True, slots=True)
class QuerySpec:
    """Declarative description of one search query.

    This structure is designed for configuration readability; it is turned
    into a query string by `SearchAssembler.core.compiler.compile_query`.

    Attributes:
        name: Optional query name for display.
        combine: Keyword joining the top-level clauses.
        text: Free text terms appended verbatim.
        flags: Mapping of boolean field name to expected value.
        fields: Mapping of field name to `FieldQuery`.
        phrases: Phrases searched across several fields.
        ranges: Comparison clauses.
    """

    name: str | None = None
    combine: CombineOperator = CombineOperator.AND
    text: Sequence[str] = ()
    flags: Mapping[str, bool] = field(default_factory=dict)
    fields: Mapping[str, FieldQuery] = field(default_factory=dict)
    phrases: Sequence[PhraseQuery] = ()
    ranges: Sequence[RangeQuery] = ()
