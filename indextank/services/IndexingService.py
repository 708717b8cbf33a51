"""Bulk indexing service.

Submits documents to an index in batches and resubmits, per batch, only the
documents the service reported as failed, until they are all added or the
retry budget is spent.
"""

import asyncio
from collections.abc import Iterable, Iterator

from pydantic import BaseModel

from indextank.clients.search.SearchClientInterface import SearchClientInterface
from indextank.clients.search.models.Document import Document
from indextank.helper.HelperConfig import HelperConfig

DEFAULT_BATCH_SIZE = 100
DEFAULT_MAX_RETRIES = 3
DEFAULT_CONCURRENCY = 4


def _split_batches(documents: Iterable[Document], batch_size: int) -> Iterator[list[Document]]:
    batch: list[Document] = []
    for document in documents:
        batch.append(document)
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


class IndexingSummary(BaseModel):
    """Outcome of a bulk indexing run.

    Attributes:
        submitted:  Number of distinct documents handed to the service.
        added:      Number of documents the service accepted.
        failed_ids: Ids of documents still failing after the last retry, in submission order.
        attempts:   Number of batch submit calls, retries included.
    """

    submitted: int = 0
    added: int = 0
    failed_ids: list[str] = []
    attempts: int = 0


class _BatchReport(BaseModel):
    submitted: int
    failed_ids: list[str]
    attempts: int


class IndexingService:
    """Adds large document collections to an index through batch submits."""

    def __init__(self, helper_config: HelperConfig, search_client: SearchClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._search_client = search_client
        self.batch_size = int(helper_config.get_number_val("INDEXING_BATCH_SIZE", default=DEFAULT_BATCH_SIZE))
        self.max_retries = int(helper_config.get_number_val("INDEXING_MAX_RETRIES", default=DEFAULT_MAX_RETRIES))
        self.concurrency = int(helper_config.get_number_val("INDEXING_CONCURRENCY", default=DEFAULT_CONCURRENCY))
        if self.batch_size < 1 or self.max_retries < 0 or self.concurrency < 1:
            raise ValueError(
                f"Invalid indexing configuration: batch_size={self.batch_size}, "
                f"max_retries={self.max_retries}, concurrency={self.concurrency}."
            )

    async def do_index_documents(self, index_name: str, documents: Iterable[Document]) -> IndexingSummary:
        """Adds all documents to the index.

        Args:
            index_name (str): Target index.
            documents (Iterable[Document]): Documents to add, in order.

        Returns:
            IndexingSummary: Counts and the ids that could not be added.

        Raises:
            IndexTankError: If a batch submit fails as a whole (e.g. the index does not exist).
        """
        batches = list(_split_batches(documents, self.batch_size))
        self.logging.info(
            "Indexing %d batches of up to %d documents into '%s'...", len(batches), self.batch_size, index_name
        )

        sem = asyncio.Semaphore(self.concurrency)
        outcomes = await asyncio.gather(
            *[self._index_batch(index_name, batch, sem) for batch in batches],
            return_exceptions=True,
        )

        errors = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if errors:
            self.logging.error(
                "Indexing into '%s' failed: %d of %d batches raised.", index_name, len(errors), len(batches)
            )
            raise errors[0]

        summary = IndexingSummary()
        for outcome in outcomes:
            summary.submitted += outcome.submitted
            summary.added += outcome.submitted - len(outcome.failed_ids)
            summary.failed_ids.extend(outcome.failed_ids)
            summary.attempts += outcome.attempts

        if summary.failed_ids:
            self.logging.warning(
                "Indexing into '%s' finished: %d added, %d failed.", index_name, summary.added, len(summary.failed_ids)
            )
        else:
            self.logging.info("Indexing into '%s' finished: %d added.", index_name, summary.added)
        return summary

    async def _index_batch(self, index_name: str, batch: list[Document], sem: asyncio.Semaphore) -> _BatchReport:
        async with sem:
            pending: Iterable[Document] = batch
            attempts = 0
            while True:
                results = await self._search_client.do_add_documents(index_name, pending)
                attempts += 1
                if not results.has_errors():
                    return _BatchReport(submitted=len(batch), failed_ids=[], attempts=attempts)

                for position in range(len(results)):
                    if not results.get_result(position):
                        self.logging.debug(
                            "Document '%s' not added: %s",
                            results.get_document(position).id, results.get_error_message(position),
                        )

                if attempts > self.max_retries:
                    failed_ids = [document.id for document in results.get_failed_documents()]
                    return _BatchReport(submitted=len(batch), failed_ids=failed_ids, attempts=attempts)

                pending = results.get_failed_documents()
