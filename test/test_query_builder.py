"""Tests for the search query builder."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchAssembler.core.builder import (
    BuiltQuery,
    CombineOperator,
    FieldOperator,
    QueryBuilder,
    quote,
)
from SearchAssembler.core.errors import BuilderFinalizedError, UnbalancedGroupingError


def _build(builder: QueryBuilder) -> str:
    return builder.build().text


class TestQuote(unittest.TestCase):
    def test_phrase_with_space_is_quoted(self) -> None:
        self.assertEqual(quote("hello world"), '"hello world"')

    def test_single_word_is_unchanged(self) -> None:
        self.assertEqual(quote("single"), "single")

    def test_already_quoted_is_unchanged(self) -> None:
        self.assertEqual(quote('"already"'), '"already"')
        self.assertEqual(quote('"hello world"'), '"hello world"')

    def test_missing_closing_quote_is_added(self) -> None:
        self.assertEqual(quote('"hello world'), '"hello world"')

    def test_missing_opening_quote_is_added(self) -> None:
        self.assertEqual(quote('hello world"'), '"hello world"')

    def test_always_quotes_single_word(self) -> None:
        self.assertEqual(quote("a", always=True), '"a"')
        self.assertEqual(quote('"a"', always=True), '"a"')
        self.assertEqual(quote("", always=True), '""')

    def test_builder_exposes_quote(self) -> None:
        self.assertEqual(QueryBuilder().quote("hello world"), '"hello world"')


class TestOperators(unittest.TestCase):
    def test_field_operator_symbols(self) -> None:
        self.assertEqual(
            [str(op) for op in FieldOperator],
            [":", "<", "<=", ">", ">="],
        )

    def test_field_operator_combine(self) -> None:
        self.assertEqual(FieldOperator.LESS_OR_EQUAL.combine("price", "10"), "price<=10")

    def test_combine_operator_names(self) -> None:
        self.assertEqual(str(CombineOperator.AND), "AND")
        self.assertEqual(str(CombineOperator.OR), "OR")


class TestQueryBuilder(unittest.TestCase):
    def test_is_true(self) -> None:
        self.assertEqual(_build(QueryBuilder().is_true("active")), 'active:"1"')

    def test_is_false(self) -> None:
        self.assertEqual(_build(QueryBuilder().is_false("active")), 'active:"0"')

    def test_bool_dispatches(self) -> None:
        self.assertEqual(_build(QueryBuilder().bool("a", True).bool("b", False)), 'a:"1" b:"0"')

    def test_first_token_has_no_leading_space(self) -> None:
        self.assertEqual(_build(QueryBuilder().and_().text("foo")), "AND foo")

    def test_tokens_separated_by_one_space(self) -> None:
        query = _build(QueryBuilder().text("foo").and_().text("bar").or_().is_true("x"))
        self.assertEqual(query, 'foo AND bar OR x:"1"')

    def test_free_text_is_verbatim(self) -> None:
        self.assertEqual(_build(QueryBuilder().text("hello world")), "hello world")

    def test_text_in_field_quotes_value(self) -> None:
        self.assertEqual(_build(QueryBuilder().text_in_field("dark forest", "name")), 'name:"dark forest"')
        self.assertEqual(_build(QueryBuilder().field_equals("status", "a")), 'status:"a"')

    def test_texts_multiple_values_grouped(self) -> None:
        query = _build(QueryBuilder().texts("status", "a", "b", operator=CombineOperator.OR))
        self.assertEqual(query, '(status:"a" OR status:"b")')

    def test_texts_default_operator_is_or(self) -> None:
        self.assertEqual(_build(QueryBuilder().texts("s", "a", "b", "c")), '(s:"a" OR s:"b" OR s:"c")')

    def test_texts_single_value_not_grouped(self) -> None:
        self.assertEqual(_build(QueryBuilder().texts("status", "a")), 'status:"a"')

    def test_texts_without_values_is_noop(self) -> None:
        builder = QueryBuilder().texts("status")
        self.assertEqual(builder.depth, 0)
        self.assertEqual(_build(builder), "")

    def test_text_in_fields(self) -> None:
        query = _build(QueryBuilder().text_in_fields("dark forest", CombineOperator.OR, "name", "description"))
        self.assertEqual(query, '(name:"dark forest" OR description:"dark forest")')

    def test_text_in_fields_single_field(self) -> None:
        query = _build(QueryBuilder().text_in_fields("x", CombineOperator.AND, "name"))
        self.assertEqual(query, 'name:"x"')

    def test_text_in_fields_without_fields_is_noop(self) -> None:
        self.assertEqual(_build(QueryBuilder().text("a").text_in_fields("x", CombineOperator.OR)), "a")

    def test_compare(self) -> None:
        query = _build(
            QueryBuilder()
            .compare("rating", FieldOperator.GREATER_OR_EQUAL, 3)
            .and_()
            .compare("price", FieldOperator.LESS, 9.5)
        )
        self.assertEqual(query, "rating>=3 AND price<9.5")

    def test_compare_quotes_value_with_space(self) -> None:
        query = _build(
            QueryBuilder().compare("title", FieldOperator.EQUAL, "dark forest").and_().is_true("x")
        )
        self.assertEqual(query, 'title:"dark forest" AND x:"1"')

    def test_empty_text_appends_nothing(self) -> None:
        self.assertEqual(_build(QueryBuilder().text("a").text("")), "a")
        self.assertEqual(_build(QueryBuilder().push_group().text("a").text("").pop_group()), "(a)")

    def test_group_after_text_is_spaced(self) -> None:
        query = _build(
            QueryBuilder().is_true("published").and_().texts("name", "a", "b")
        )
        self.assertEqual(query, 'published:"1" AND (name:"a" OR name:"b")')

    def test_nested_groups(self) -> None:
        query = _build(
            QueryBuilder()
            .push_group()
            .text("a")
            .or_()
            .push_group()
            .text("b")
            .and_()
            .text("c")
            .pop_group()
            .pop_group()
            .and_()
            .text("d")
        )
        self.assertEqual(query, "(a OR (b AND c)) AND d")

    def test_depth_is_inspectable(self) -> None:
        builder = QueryBuilder().push_group().push_group()
        self.assertEqual(builder.depth, 2)
        builder.pop_group()
        self.assertEqual(builder.depth, 1)

    def test_unclosed_group_fails_build(self) -> None:
        builder = QueryBuilder().push_group().text("a")
        with self.assertRaises(UnbalancedGroupingError) as ctx:
            builder.build()
        self.assertEqual(ctx.exception.depth, 1)

    def test_over_closed_group_fails_build(self) -> None:
        builder = QueryBuilder().text("a").pop_group()
        self.assertEqual(builder.depth, -1)
        with self.assertRaises(UnbalancedGroupingError) as ctx:
            builder.build()
        self.assertEqual(ctx.exception.depth, -1)

    def test_build_succeeds_only_when_balanced(self) -> None:
        sequences = [
            ("push", "pop"),
            ("push", "push", "pop", "pop"),
            ("push",),
            ("pop", "push"),
            ("push", "pop", "pop"),
        ]
        for seq in sequences:
            builder = QueryBuilder()
            for step in seq:
                if step == "push":
                    builder.push_group()
                else:
                    builder.pop_group()
            balanced = seq.count("push") == seq.count("pop")
            with self.subTest(seq=seq):
                if balanced:
                    self.assertIsInstance(builder.build(), BuiltQuery)
                else:
                    with self.assertRaises(UnbalancedGroupingError):
                        builder.build()

    def test_builder_is_consumed_by_build(self) -> None:
        builder = QueryBuilder().text("a")
        self.assertEqual(str(builder.build()), "a")
        self.assertTrue(builder.built)
        with self.assertRaises(BuilderFinalizedError):
            builder.text("b")
        with self.assertRaises(BuilderFinalizedError):
            builder.build()

    def test_failed_build_also_consumes_builder(self) -> None:
        builder = QueryBuilder().push_group()
        with self.assertRaises(UnbalancedGroupingError):
            builder.build()
        with self.assertRaises(BuilderFinalizedError):
            builder.pop_group()

    def test_built_query_is_immutable(self) -> None:
        built = QueryBuilder().text("a").build()
        with self.assertRaises(AttributeError):
            built.text = "b"  # type: ignore[misc]

    def test_empty_build(self) -> None:
        built = QueryBuilder().build()
        self.assertEqual(built.text, "")
        self.assertFalse(built)


if __name__ == "__main__":
    unittest.main()
