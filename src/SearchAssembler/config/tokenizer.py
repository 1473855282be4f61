"""Tokenizer domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchAssembler.config.common import expect_int, get_optional_value, get_section
from SearchAssembler.core.tokenizer import DEFAULT_MIN_SIZE


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """Store validated autocomplete tokenizer settings."""

    min_size: int


def load_tokenizer(raw: Mapping[str, Any]) -> TokenizerConfig:
    """Load the optional ``tokenizer`` section."""
    section = get_section(raw, "tokenizer", required=False)
    return TokenizerConfig(
        min_size=expect_int(get_optional_value(section, "min_size", DEFAULT_MIN_SIZE), "tokenizer.min_size"),
    )


def check_tokenizer(config: TokenizerConfig) -> None:
    if config.min_size <= 0:
        raise ValueError("tokenizer.min_size must be positive")
