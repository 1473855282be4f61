"""Query domain configuration and query DSL parsing.

A query is a mapping with uppercase keys:

    NAME: published games
    COMBINE: AND              # keyword between top-level clauses (default AND)
    TEXT: free text           # string or list, appended verbatim
    TRUE: [published]         # boolean fields that must be true
    FALSE: [deleted]          # boolean fields that must be false
    FIELDS:                   # per-field terms, each quoted
      name: {OR: [a, b]}
      tags: {AND: [x, y]}
    PHRASES:                  # one phrase across several fields
      - {TEXT: hello world, FIELDS: [name, description], OPERATOR: OR}
    RANGES:                   # comparisons
      - {FIELD: score, OP: ">=", VALUE: 10}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchAssembler.config.common import (
    expect_choice,
    expect_str,
    expect_str_list,
)
from SearchAssembler.core.builder import CombineOperator, FieldOperator
from SearchAssembler.core.query import FieldQuery, PhraseQuery, QuerySpec, RangeQuery

_ALLOWED_KEYS = {"NAME", "COMBINE", "TEXT", "TRUE", "FALSE", "FIELDS", "PHRASES", "RANGES"}
_ALLOWED_OPS = {"AND", "OR"}
_COMBINE_NAMES = {op.name for op in CombineOperator}
_FIELD_OPERATORS: dict[str, FieldOperator] = {
    **{op.value: op for op in FieldOperator},
    **{op.name: op for op in FieldOperator},
}


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Store validated scope and queries."""

    scope: QuerySpec | None
    queries: tuple[QuerySpec, ...]


def load_queries(raw: Mapping[str, Any]) -> QueryConfig:
    """Load ``scope`` and ``queries`` from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed query configuration; ``queries`` may be empty.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If query keys or operators are invalid.
    """
    scope_obj = raw.get("scope")
    scope = parse_query_spec(scope_obj, "scope") if scope_obj is not None else None

    queries_obj = raw.get("queries")
    if queries_obj is None:
        queries_obj = []
    if not isinstance(queries_obj, list):
        raise TypeError("queries must be a list")
    queries = tuple(parse_query_spec(item, f"queries[{idx}]") for idx, item in enumerate(queries_obj))
    return QueryConfig(scope=scope, queries=queries)


def check_queries(config: QueryConfig) -> None:
    """Validate query domain constraints.

    Raises:
        ValueError: If query names are duplicated.
    """
    names = [q.name for q in config.queries if q.name]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"queries have duplicate NAME values: {duplicates}")


def parse_query_spec(value: Any, config_key: str) -> QuerySpec:
    """Parse a query mapping into ``QuerySpec``.

    Args:
        value: Query mapping value.
        config_key: Full key path used in error messages.

    Returns:
        Parsed query object.

    Raises:
        TypeError: If query shape/types are invalid.
        ValueError: If query keys/operators are invalid.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")

    unknown = {str(k) for k in value.keys()} - _ALLOWED_KEYS
    if unknown:
        raise ValueError(f"{config_key} has unknown keys: {sorted(unknown)}")

    name = None
    if "NAME" in value:
        name = expect_str(value["NAME"], f"{config_key}.NAME").strip() or None

    combine = CombineOperator.AND
    if "COMBINE" in value:
        combine = CombineOperator[expect_choice(value["COMBINE"], _COMBINE_NAMES, f"{config_key}.COMBINE")]

    flags: dict[str, bool] = {}
    for key, flag_value in (("TRUE", True), ("FALSE", False)):
        for field in _as_terms(value.get(key), f"{config_key}.{key}"):
            if field in flags and flags[field] != flag_value:
                raise ValueError(f"{config_key} lists field in both TRUE and FALSE: {field}")
            flags[field] = flag_value

    spec = QuerySpec(
        name=name,
        combine=combine,
        text=tuple(_as_terms(value.get("TEXT"), f"{config_key}.TEXT")),
        flags=flags,
        fields=_parse_fields(value.get("FIELDS"), f"{config_key}.FIELDS"),
        phrases=_parse_phrases(value.get("PHRASES"), f"{config_key}.PHRASES"),
        ranges=_parse_ranges(value.get("RANGES"), f"{config_key}.RANGES"),
    )
    if not (spec.text or spec.flags or spec.fields or spec.phrases or spec.ranges):
        raise ValueError(f"{config_key} must include at least one clause")
    return spec


def _parse_fields(value: Any, config_key: str) -> dict[str, FieldQuery]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    fields: dict[str, FieldQuery] = {}
    for field, field_value in value.items():
        if not isinstance(field, str) or not field.strip():
            raise TypeError(f"{config_key} field names must be non-empty strings")
        fq = _parse_field_query(field_value, f"{config_key}.{field}")
        if fq.AND or fq.OR:
            fields[field.strip()] = fq
    return fields


def _parse_field_query(value: Any, config_key: str) -> FieldQuery:
    """Parse field-level AND/OR terms.

    Raises:
        TypeError: If field query type is invalid.
        ValueError: If unknown operators exist.
    """
    if value is None:
        return FieldQuery()
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object with AND/OR")

    unknown = {str(k) for k in value.keys()} - _ALLOWED_OPS
    if unknown:
        raise ValueError(f"{config_key} has unknown operators: {sorted(unknown)}")

    return FieldQuery(
        AND=tuple(_as_terms(value.get("AND"), f"{config_key}.AND")),
        OR=tuple(_as_terms(value.get("OR"), f"{config_key}.OR")),
    )


def _parse_phrases(value: Any, config_key: str) -> tuple[PhraseQuery, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    phrases: list[PhraseQuery] = []
    for idx, item in enumerate(value):
        item_key = f"{config_key}[{idx}]"
        if not isinstance(item, Mapping):
            raise TypeError(f"{item_key} must be an object with TEXT/FIELDS")
        if "TEXT" not in item or "FIELDS" not in item:
            raise ValueError(f"{item_key} requires TEXT and FIELDS")
        text = expect_str(item["TEXT"], f"{item_key}.TEXT").strip()
        fields = _as_terms(item["FIELDS"], f"{item_key}.FIELDS")
        operator = CombineOperator.OR
        if "OPERATOR" in item:
            operator = CombineOperator[expect_choice(item["OPERATOR"], _COMBINE_NAMES, f"{item_key}.OPERATOR")]
        if text and fields:
            phrases.append(PhraseQuery(text=text, fields=tuple(fields), operator=operator))
    return tuple(phrases)


def _parse_ranges(value: Any, config_key: str) -> tuple[RangeQuery, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    ranges: list[RangeQuery] = []
    for idx, item in enumerate(value):
        item_key = f"{config_key}[{idx}]"
        if not isinstance(item, Mapping):
            raise TypeError(f"{item_key} must be an object with FIELD/OP/VALUE")
        missing = [k for k in ("FIELD", "OP", "VALUE") if k not in item]
        if missing:
            raise ValueError(f"{item_key} is missing keys: {missing}")
        field = expect_str(item["FIELD"], f"{item_key}.FIELD").strip()
        op_name = expect_str(item["OP"], f"{item_key}.OP").strip()
        operator = _FIELD_OPERATORS.get(op_name) or _FIELD_OPERATORS.get(op_name.upper())
        if operator is None:
            raise ValueError(f"{item_key}.OP must be one of {sorted(_FIELD_OPERATORS)}")
        raw_value = item["VALUE"]
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float, str)):
            raise TypeError(f"{item_key}.VALUE must be a number or string")
        ranges.append(RangeQuery(field=field, operator=operator, value=raw_value))
    return tuple(ranges)


def _as_terms(value: Any, config_key: str) -> list[str]:
    """Normalize terms from string/list into stripped, non-empty list."""
    if value is None:
        return []
    out: list[str] = []
    for idx, item in enumerate(expect_str_list(value, config_key)):
        normalized = expect_str(item, f"{config_key}[{idx}]").strip()
        if normalized:
            out.append(normalized)
    return out
