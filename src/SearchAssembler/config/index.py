"""Index domain configuration: batching, retry and paging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchAssembler.config.common import (
    expect_float,
    expect_int,
    get_optional_value,
    get_section,
)
from SearchAssembler.services.index import BASE_DELAY, MAX_ATTEMPTS, MAX_DELAY, PAGE_SIZE, PUT_LIMIT


@dataclass(frozen=True, slots=True)
class IndexConfig:
    """Store validated index service settings."""

    put_limit: int
    max_attempts: int
    retry_base_delay: float
    retry_max_delay: float
    page_size: int


def load_index(raw: Mapping[str, Any]) -> IndexConfig:
    """Load the optional ``index`` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed index configuration with defaults for missing keys.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "index", required=False)
    return IndexConfig(
        put_limit=expect_int(get_optional_value(section, "put_limit", PUT_LIMIT), "index.put_limit"),
        max_attempts=expect_int(get_optional_value(section, "max_attempts", MAX_ATTEMPTS), "index.max_attempts"),
        retry_base_delay=expect_float(
            get_optional_value(section, "retry_base_delay", BASE_DELAY),
            "index.retry_base_delay",
        ),
        retry_max_delay=expect_float(
            get_optional_value(section, "retry_max_delay", MAX_DELAY),
            "index.retry_max_delay",
        ),
        page_size=expect_int(get_optional_value(section, "page_size", PAGE_SIZE), "index.page_size"),
    )


def check_index(config: IndexConfig) -> None:
    """Validate index domain constraints.

    Raises:
        ValueError: If values violate index constraints.
    """
    if config.put_limit <= 0:
        raise ValueError("index.put_limit must be positive")
    if config.max_attempts <= 0:
        raise ValueError("index.max_attempts must be positive")
    if config.retry_base_delay < 0:
        raise ValueError("index.retry_base_delay must not be negative")
    if config.retry_max_delay < config.retry_base_delay:
        raise ValueError("index.retry_max_delay must be >= index.retry_base_delay")
    if config.page_size <= 0:
        raise ValueError("index.page_size must be positive")
