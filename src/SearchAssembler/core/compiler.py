"""Query compiler.

Compiles a structured `QuerySpec` into a search index query string through
`QueryBuilder`.

Clause order
- free text terms
- boolean flags
- field terms: AND terms as one all-of group, then OR terms as one any-of group
- phrases across fields
- ranges

The clauses are joined with the query's combine keyword. A scope is compiled
first and joined to the query with AND; when both are present, each side with
more than one clause is wrapped in a group.
"""

from __future__ import annotations

from typing import Callable

from SearchAssembler.core.builder import CombineOperator, QueryBuilder
from SearchAssembler.core.query import QuerySpec

Clause = Callable[[QueryBuilder], QueryBuilder]


def _clauses(query: QuerySpec) -> list[Clause]:
    clauses: list[Clause] = []

    for term in query.text:
        if term.strip():
            clauses.append(lambda b, t=term.strip(): b.text(t))

    for flag, value in query.flags.items():
        clauses.append(lambda b, f=flag, v=value: b.bool(f, v))

    for field, fq in query.fields.items():
        and_terms = tuple(t for t in fq.AND if str(t).strip())
        or_terms = tuple(t for t in fq.OR if str(t).strip())
        if and_terms:
            clauses.append(lambda b, f=field, ts=and_terms: b.texts(f, *ts, operator=CombineOperator.AND))
        if or_terms:
            clauses.append(lambda b, f=field, ts=or_terms: b.texts(f, *ts, operator=CombineOperator.OR))

    for phrase in query.phrases:
        if phrase.fields and phrase.text.strip():
            clauses.append(lambda b, p=phrase: b.text_in_fields(p.text, p.operator, *p.fields))

    for rng in query.ranges:
        clauses.append(lambda b, r=rng: b.compare(r.field, r.operator, r.value))

    return clauses


def _emit(builder: QueryBuilder, clauses: list[Clause], operator: CombineOperator) -> None:
    for idx, clause in enumerate(clauses):
        if idx:
            builder.combine(operator)
        clause(builder)


def compile_query(query: QuerySpec, scope: QuerySpec | None = None) -> str:
    """Compile query + optional scope into a query string.

    Args:
        query: Main query.
        scope: Optional global scope applied to every query.

    Returns:
        Query string; empty when neither query nor scope has clauses.
    """
    builder = QueryBuilder()
    query_clauses = _clauses(query)
    scope_clauses = _clauses(scope) if scope is not None else []

    if scope_clauses:
        wrap_scope = len(scope_clauses) > 1 and bool(query_clauses)
        if wrap_scope:
            builder.push_group()
        _emit(builder, scope_clauses, scope.combine)
        if wrap_scope:
            builder.pop_group()
        if query_clauses:
            builder.and_()

    wrap_query = bool(scope_clauses) and len(query_clauses) > 1
    if wrap_query:
        builder.push_group()
    _emit(builder, query_clauses, query.combine)
    if wrap_query:
        builder.pop_group()

    return builder.build().text
