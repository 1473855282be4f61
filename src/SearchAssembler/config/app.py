from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from SearchAssembler.config.index import IndexConfig, check_index, load_index
from SearchAssembler.config.query import QueryConfig, check_queries, load_queries
from SearchAssembler.config.runtime import RuntimeConfig, check_runtime, load_runtime
from SearchAssembler.config.tokenizer import TokenizerConfig, check_tokenizer, load_tokenizer


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    tokenizer: TokenizerConfig
    index: IndexConfig
    query: QueryConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    tokenizer = load_tokenizer(raw)
    index = load_index(raw)
    query = load_queries(raw)

    check_runtime(runtime)
    check_tokenizer(tokenizer)
    check_index(index)
    check_queries(query)

    config = AppConfig(
        runtime=runtime,
        tokenizer=tokenizer,
        index=index,
        query=query,
    )
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = Path("config/default.yml"),
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Load config by merging defaults and optional override.

    Args:
        config_path: Override config file.
        default_path: Defaults file.
        _defaults_text: Defaults YAML text used instead of reading
            ``default_path`` (tests).
    """
    if _defaults_text is None:
        if config_path == default_path:
            return parse_config_dict(parse_yaml(default_path.read_text(encoding="utf-8")))
        _defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(_defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    merged = merge_config_dicts(base, override)
    return parse_config_dict(merged)


def check_cross_domain(config: AppConfig) -> None:
    """Validate cross-domain constraints."""
    if config.query.scope is not None and not config.query.queries:
        raise ValueError("scope requires at least one entry in queries")


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; lists are replaced, not merged."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
