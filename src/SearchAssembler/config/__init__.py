from __future__ import annotations

"""Public configuration API for SearchAssembler."""

from SearchAssembler.config.app import (
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from SearchAssembler.config.index import IndexConfig
from SearchAssembler.config.query import QueryConfig, parse_query_spec
from SearchAssembler.config.runtime import RuntimeConfig
from SearchAssembler.config.tokenizer import TokenizerConfig

__all__ = [
    "RuntimeConfig",
    "TokenizerConfig",
    "IndexConfig",
    "QueryConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "parse_query_spec",
    "check_cross_domain",
]
