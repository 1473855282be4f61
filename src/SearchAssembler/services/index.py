"""Index service layer: batched, retried operations on a search index."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol, Sequence, TypeVar

from SearchAssembler.core.builder import BuiltQuery
from SearchAssembler.core.errors import IndexOperationError, InvalidArgumentError, TransientIndexError
from SearchAssembler.core.models import Document
from SearchAssembler.utils.log import log

PUT_LIMIT = 200
MAX_ATTEMPTS = 5
BASE_DELAY = 0.5
MAX_DELAY = 10.0
PAGE_SIZE = 20

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SearchResults:
    """One page of search results.

    Attributes:
        documents: Documents of this page in ranked order.
        cursor: Web-safe cursor for the next page, None on the last page.
    """

    documents: Sequence[Document] = ()
    cursor: str | None = None


class SearchIndex(Protocol):
    """Protocol for an external search index back-end.

    Implementations raise `TransientIndexError` for failures worth retrying.
    """

    name: str

    def put(self, documents: Sequence[Document]) -> None:
        """Add or replace documents."""
        raise NotImplementedError

    def get(self, doc_id: str) -> Document | None:
        """Return a document by id, None if missing."""
        raise NotImplementedError

    def delete(self, doc_ids: Sequence[str]) -> None:
        """Delete documents by id; unknown ids are ignored."""
        raise NotImplementedError

    def list_ids(self) -> Sequence[str]:
        """Return ids of all documents in the index."""
        raise NotImplementedError

    def is_valid_cursor(self, cursor: str) -> bool:
        """Return whether ``cursor`` is a cursor this index issued."""
        raise NotImplementedError

    def search(self, query: str, *, limit: int, cursor: str | None) -> SearchResults:
        """Run a query string and return one page."""
        raise NotImplementedError


@dataclass(slots=True)
class IndexService:
    """Application service wrapping a `SearchIndex`.

    Puts and deletes are split into batches of at most ``put_limit`` documents.
    Every index call is retried on `TransientIndexError` with capped
    exponential backoff.
    """

    index: SearchIndex
    put_limit: int = PUT_LIMIT
    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = BASE_DELAY
    max_delay: float = MAX_DELAY
    page_size: int = PAGE_SIZE
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.put_limit <= 0:
            raise InvalidArgumentError("put_limit must be positive")
        if self.max_attempts <= 0:
            raise InvalidArgumentError("max_attempts must be positive")
        if self.page_size <= 0:
            raise InvalidArgumentError("page_size must be positive")

    def get_document(self, doc_id: str) -> Document | None:
        return self._with_retry("get", lambda: self.index.get(doc_id))

    def index_document(self, document: Document) -> None:
        self.index_documents([document])

    def index_documents(self, documents: Iterable[Document]) -> int:
        """Index documents in batches.

        Args:
            documents: Documents to add or replace.

        Returns:
            Number of documents indexed.

        Raises:
            IndexOperationError: If a batch still fails after all attempts.
        """
        docs = list(documents)
        for batch in _batches(docs, self.put_limit):
            self._with_retry("put", lambda b=batch: self.index.put(b))
        log.debug("Indexed %d documents into %s", len(docs), self._index_name())
        return len(docs)

    def delete_document_by_id(self, doc_id: str) -> None:
        self.delete_documents_by_id([doc_id])

    def delete_documents(self, documents: Iterable[Document]) -> int:
        return self.delete_documents_by_id([doc.id for doc in documents])

    def delete_documents_by_id(self, doc_ids: Iterable[str]) -> int:
        """Delete documents by id in batches.

        Returns:
            Number of ids submitted for deletion.
        """
        ids = list(doc_ids)
        for batch in _batches(ids, self.put_limit):
            self._with_retry("delete", lambda b=batch: self.index.delete(b))
        log.debug("Deleted %d documents from %s", len(ids), self._index_name())
        return len(ids)

    def delete_all(self) -> int:
        """Delete every document in the index."""
        ids = self._with_retry("list", self.index.list_ids)
        return self.delete_documents_by_id(ids)

    def search(
        self,
        query: BuiltQuery | str,
        *,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> SearchResults:
        """Search the index.

        Args:
            query: Query built with `QueryBuilder`, or a raw query string.
            limit: Maximum number of documents in the page, defaults to
                ``page_size``.
            cursor: Cursor from a previous page. Blank or unknown cursors start
                a new search.

        Returns:
            One page of results.

        Raises:
            InvalidArgumentError: If ``limit`` is not positive.
            IndexOperationError: If the search still fails after all attempts.
        """
        if limit is None:
            limit = self.page_size
        if limit <= 0:
            raise InvalidArgumentError("limit must be positive")
        query_text = str(query)
        if cursor is not None and (not cursor.strip() or not self.index.is_valid_cursor(cursor)):
            log.debug("Ignoring invalid cursor, starting a new search: %r", cursor)
            cursor = None
        results = self._with_retry(
            "search",
            lambda: self.index.search(query_text, limit=limit, cursor=cursor),
        )
        log.debug(
            "Search on %s returned %d documents: query=%s",
            self._index_name(),
            len(results.documents),
            query_text,
        )
        return results

    def _index_name(self) -> str:
        return getattr(self.index, "name", "unknown")

    def _with_retry(self, operation: str, call: Callable[[], T]) -> T:
        last_err: TransientIndexError | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return call()
            except TransientIndexError as e:
                last_err = e
                if attempt < self.max_attempts:
                    log.warning(
                        "Index %s %s failed (attempt %d/%d): %s",
                        self._index_name(),
                        operation,
                        attempt,
                        self.max_attempts,
                        e,
                    )
                    self.sleep(self._backoff(attempt))
        raise IndexOperationError(
            f"Index {self._index_name()} {operation} failed after {self.max_attempts} attempts: {last_err}"
        ) from last_err

    def _backoff(self, attempt: int) -> float:
        delay = self.base_delay * (2 ** (attempt - 1)) + random.uniform(0, self.base_delay / 2)
        return min(delay, self.max_delay)


def _batches(items: Sequence[T], size: int) -> Iterable[Sequence[T]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]
