"""Service layer for SearchAssembler.

Provides the index service wrapping an external search index back-end and
its factory function.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SearchAssembler.services.index import IndexService, SearchIndex, SearchResults

if TYPE_CHECKING:
    from SearchAssembler.config import AppConfig


def create_index_service(config: AppConfig, index: SearchIndex) -> IndexService:
    """Create an index service with configured batching and retry.

    Args:
        config: Application configuration containing index settings.
        index: Search index back-end to wrap.

    Returns:
        Configured IndexService instance.
    """
    return IndexService(
        index=index,
        put_limit=config.index.put_limit,
        max_attempts=config.index.max_attempts,
        base_delay=config.index.retry_base_delay,
        max_delay=config.index.retry_max_delay,
        page_size=config.index.page_size,
    )


__all__ = [
    "IndexService",
    "SearchIndex",
    "SearchResults",
    "create_index_service",
]
