"""Command implementations for SearchAssembler CLI.

Encapsulates business logic for commands, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass

from SearchAssembler.config import AppConfig
from SearchAssembler.core.compiler import compile_query
from SearchAssembler.core.tokenizer import split_text_to_words, tokenize_autocomplete
from SearchAssembler.utils.log import log


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    name: str | None
    text: str


@dataclass(slots=True)
class CompileCommand:
    """Compile every configured query into a query string."""

    config: AppConfig

    def execute(self) -> list[CompiledQuery]:
        """Compile configured queries, applying the global scope to each.

        Returns:
            Compiled queries in configured order.
        """
        queries = self.config.query.queries
        scope = self.config.query.scope
        if not queries:
            log.warning("No queries configured")
            return []

        compiled: list[CompiledQuery] = []
        for idx, query in enumerate(queries, start=1):
            log.debug("Compiling query %d/%d name=%s", idx, len(queries), query.name)
            text = compile_query(query, scope)
            log.info("%s: %s", query.name or f"query {idx}", text)
            compiled.append(CompiledQuery(name=query.name, text=text))
        return compiled


@dataclass(slots=True)
class TokenizeCommand:
    """Tokenize text for an autocomplete field."""

    config: AppConfig
    min_size: int | None = None

    def execute(self, text: str) -> str:
        min_size = self.min_size if self.min_size is not None else self.config.tokenizer.min_size
        tokens = tokenize_autocomplete(text, min_size)
        log.info(
            "Tokenized %d words into %d tokens (min_size=%d)",
            len(split_text_to_words(text)),
            len(tokens.split()),
            min_size,
        )
        return tokens
