"""Batch results: the outcome of adding several documents in one request."""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from indextank.clients.search.models.Document import Document
from indextank.models.errors import InvalidArgumentError, StructuralMismatchError


class BatchOutcome(BaseModel):
    """
    Outcome of one document of a batch, aligned with its position in the request.

    A failed outcome always has an error message (empty when the service gave none),
    a successful one never has.
    """

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    error_message: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _align_error_message(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if data.get("succeeded"):
                data["error_message"] = None
            elif data.get("error_message") is None:
                data["error_message"] = ""
        return data

    @classmethod
    def from_response_item(cls, item: dict[str, Any]) -> "BatchOutcome":
        """Parses one {added, error?} record of a batch response."""
        if not isinstance(item, dict) or "added" not in item:
            raise StructuralMismatchError(f"Batch response item is not an outcome record: {item!r}")
        return cls(succeeded=bool(item["added"]), error_message=item.get("error"))


class FailedDocuments:
    """Restartable view over the documents of a batch that were not added.

    Every iteration walks the stored (document, outcome) pairs again, so the view
    can be passed straight back to SearchClientInterface.do_add_documents().
    """

    def __init__(self, entries: Sequence[tuple[Document, BatchOutcome]]):
        self._entries = entries

    def __iter__(self) -> Iterator[Document]:
        return (document for document, outcome in self._entries if not outcome.succeeded)

    def __repr__(self) -> str:
        return f"FailedDocuments({[document.id for document in self]!r})"


class BatchResults:
    """
    Aggregated outcome of adding every document of a batch.

    Documents and outcomes are paired by position once, at construction, and the
    pairs are never modified afterwards.
    """

    def __init__(self, documents: Iterable[Document], outcomes: Iterable[BatchOutcome]):
        documents = tuple(documents)
        outcomes = tuple(outcomes)
        if len(documents) != len(outcomes):
            raise StructuralMismatchError(
                f"Batch response has {len(outcomes)} outcomes for {len(documents)} submitted documents."
            )
        self._entries: tuple[tuple[Document, BatchOutcome], ...] = tuple(zip(documents, outcomes))
        self._has_errors = any(not outcome.succeeded for outcome in outcomes)

    @classmethod
    def from_response(cls, documents: Iterable[Document], raw_response: Any) -> "BatchResults":
        """Builds the results from the submitted documents and the raw [{added, error?}, ...] response.

        Raises:
            StructuralMismatchError: If the response is not a list of outcome records
                or its length differs from the number of submitted documents.
        """
        if not isinstance(raw_response, list):
            raise StructuralMismatchError(f"Batch response must be a list, got {type(raw_response).__name__}.")
        return cls(documents, [BatchOutcome.from_response_item(item) for item in raw_response])

    def _entry(self, position: int) -> tuple[Document, BatchOutcome]:
        if not 0 <= position < len(self._entries):
            raise InvalidArgumentError(f"Position off bounds ({position})")
        return self._entries[position]

    def get_result(self, position: int) -> bool:
        return self._entry(position)[1].succeeded

    def get_error_message(self, position: int) -> str | None:
        """Returns the error message for a position, None if that document was added."""
        return self._entry(position)[1].error_message

    def get_document(self, position: int) -> Document:
        return self._entry(position)[0]

    def has_errors(self) -> bool:
        """True if at least one document of the batch could not be added."""
        return self._has_errors

    def get_failed_documents(self) -> FailedDocuments:
        """Returns the documents that could not be added, in submission order.

        The result can be iterated any number of times and fed back into an add call.
        """
        return FailedDocuments(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        failed = sum(1 for _ in self.get_failed_documents())
        return f"BatchResults(size={len(self)}, failed={failed})"
