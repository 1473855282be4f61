"""Search query string builder.

Assembles a query string for the search index query language:

- field clauses: ``field:value``, ``field<value``, ``field>=value`` ...
- combine keywords: ``AND`` / ``OR``
- parenthesis groups
- double-quoted phrases

Whitespace
- Before a token is appended, one space is inserted unless the buffer is empty
  or already ends with a space or an opening parenthesis.

Quoting
- Free text (``text``) is appended verbatim and is never escaped.
- Values of field clauses are always double-quoted, so ``status:"a"``.
  A leading or trailing quote that is already present is not doubled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from SearchAssembler.core.errors import BuilderFinalizedError, UnbalancedGroupingError
from SearchAssembler.utils.log import log


TRUE = "1"
FALSE = "0"


class FieldOperator(Enum):
    """Comparison operators binding a field to a value."""

    EQUAL = ":"
    LESS = "<"
    LESS_OR_EQUAL = "<="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="

    def __str__(self) -> str:
        return self.value

    def combine(self, field: str, value: str) -> str:
        """Return the clause ``<field><symbol><value>``."""
        return f"{field}{self.value}{value}"


class CombineOperator(Enum):
    """Keywords joining two clauses."""

    AND = "AND"
    OR = "OR"

    def __str__(self) -> str:
        return self.value


def quote(text: str, *, always: bool = False) -> str:
    """Quote ``text`` as a phrase if necessary.

    The leading and trailing quote are checked independently, so a text that
    already starts with ``"`` only gets the closing quote.

    Args:
        text: Text to quote.
        always: Quote even when the text has no space.

    Returns:
        Quoted text, or ``text`` unchanged when no quoting is needed.
    """
    if not (always or " " in text):
        return text
    quoted = text
    if not quoted.startswith('"'):
        quoted = '"' + quoted
    if not text.endswith('"') or len(quoted) == 1:
        quoted += '"'
    return quoted


@dataclass(frozen=True, slots=True)
class BuiltQuery:
    """Finalized query string returned by ``QueryBuilder.build``."""

    text: str

    def __str__(self) -> str:
        return self.text

    def __bool__(self) -> bool:
        return bool(self.text)


class QueryBuilder:
    """Incrementally build a query string.

    Every composition method returns the builder for chaining. ``build``
    consumes the builder; any later call raises ``BuilderFinalizedError``.

    Example:
        >>> QueryBuilder().is_true("published").and_().texts("name", "a", "b").build().text
        'published:"1" AND (name:"a" OR name:"b")'
    """

    quote = staticmethod(quote)

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._last_char = ""
        self._depth = 0
        self._built = False

    @property
    def depth(self) -> int:
        """Number of currently open groups (negative if over-closed)."""
        return self._depth

    @property
    def built(self) -> bool:
        return self._built

    def _append(self, piece: str) -> None:
        if self._built:
            raise BuilderFinalizedError("QueryBuilder was already built")
        if not piece:
            return
        self._parts.append(piece)
        self._last_char = piece[-1]

    def _add_space(self) -> None:
        if self._last_char and self._last_char not in (" ", "("):
            self._append(" ")

    # --- combine keywords -------------------------------------------------

    def combine(self, operator: CombineOperator) -> QueryBuilder:
        """Append a combine keyword."""
        self._add_space()
        self._append(str(operator))
        return self

    def and_(self) -> QueryBuilder:
        return self.combine(CombineOperator.AND)

    def or_(self) -> QueryBuilder:
        return self.combine(CombineOperator.OR)

    # --- boolean fields ---------------------------------------------------

    def is_true(self, field: str) -> QueryBuilder:
        """Match documents whose boolean ``field`` is true."""
        return self._clause(field, FieldOperator.EQUAL, quote(TRUE, always=True))

    def is_false(self, field: str) -> QueryBuilder:
        """Match documents whose boolean ``field`` is false."""
        return self._clause(field, FieldOperator.EQUAL, quote(FALSE, always=True))

    def bool(self, field: str, value: bool) -> QueryBuilder:
        if value:
            return self.is_true(field)
        return self.is_false(field)

    # --- text -------------------------------------------------------------

    def text(self, value: str) -> QueryBuilder:
        """Append free text verbatim.

        Query syntax inside ``value`` is not escaped; only pass trusted text.
        Empty text appends nothing.
        """
        if not value:
            return self
        self._add_space()
        self._append(value)
        return self

    def text_in_field(self, value: str, field: str) -> QueryBuilder:
        """Search ``value`` as a phrase in one field."""
        return self._clause(field, FieldOperator.EQUAL, quote(value, always=True))

    def field_equals(self, field: str, value: str) -> QueryBuilder:
        return self.text_in_field(value, field)

    def texts(
        self,
        field: str,
        *values: str,
        operator: CombineOperator = CombineOperator.OR,
    ) -> QueryBuilder:
        """Search several values in the same field.

        More than one value is wrapped in a group; no values is a no-op.

        Args:
            field: Field to search in.
            *values: Values, each quoted as a phrase.
            operator: Keyword between the values.

        Returns:
            This builder.
        """
        return self._grouped(
            [(field, quote(value, always=True)) for value in values],
            operator,
        )

    def text_in_fields(
        self,
        value: str,
        operator: CombineOperator,
        *fields: str,
    ) -> QueryBuilder:
        """Search one value in several fields.

        More than one field is wrapped in a group; no fields is a no-op.

        Args:
            value: Value quoted once as a phrase.
            operator: Keyword between the field clauses.
            *fields: Fields to search in.

        Returns:
            This builder.
        """
        quoted = quote(value, always=True)
        return self._grouped([(field, quoted) for field in fields], operator)

    def compare(self, field: str, operator: FieldOperator, value: Any) -> QueryBuilder:
        """Append ``field<op>value``.

        Numbers and dates stay bare; a value containing a space is quoted.
        """
        return self._clause(field, operator, quote(str(value)))

    # --- groups -----------------------------------------------------------

    def push_group(self) -> QueryBuilder:
        """Open a parenthesis group."""
        self._add_space()
        self._append("(")
        self._depth += 1
        return self

    def pop_group(self) -> QueryBuilder:
        """Close the innermost parenthesis group.

        Closing more groups than were opened is not rejected here; ``build``
        reports it.
        """
        self._append(")")
        self._depth -= 1
        return self

    def build(self) -> BuiltQuery:
        """Finalize the query.

        Returns:
            The immutable query.

        Raises:
            UnbalancedGroupingError: If opened and closed groups do not match.
            BuilderFinalizedError: If the builder was already built.
        """
        if self._built:
            raise BuilderFinalizedError("QueryBuilder was already built")
        self._built = True
        if self._depth != 0:
            depth = self._depth
            self._parts.clear()
            raise UnbalancedGroupingError(depth)
        text = "".join(self._parts)
        self._parts.clear()
        log.debug("Built query: %s", text)
        return BuiltQuery(text)

    # --- helpers ----------------------------------------------------------

    def _clause(self, field: str, operator: FieldOperator, value: str) -> QueryBuilder:
        self._add_space()
        self._append(operator.combine(field, value))
        return self

    def _grouped(self, clauses: list[tuple[str, str]], operator: CombineOperator) -> QueryBuilder:
        if not clauses:
            return self
        grouped = len(clauses) > 1
        if grouped:
            self.push_group()
        for idx, (field, value) in enumerate(clauses):
            if idx:
                self.combine(operator)
            self._clause(field, FieldOperator.EQUAL, value)
        if grouped:
            self.pop_group()
        return self
