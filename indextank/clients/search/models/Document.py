"""Document model: one entry to be added to a search index."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from indextank.models.errors import InvalidArgumentError

MAX_DOCID_BYTES = 1024


def validate_document_id(document_id: Any) -> str:
    """Checks a document id the way the service expects it.

    Args:
        document_id (Any): The candidate id.

    Returns:
        str: The id, unchanged.

    Raises:
        InvalidArgumentError: If the id is None, not a string, or longer than 1024 bytes UTF-8 encoded.
    """
    if document_id is None:
        raise InvalidArgumentError("document id can not be null.")
    if not isinstance(document_id, str):
        raise InvalidArgumentError(f"document id must be a string, got {type(document_id).__name__}.")
    try:
        encoded = document_id.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidArgumentError("Illegal document id encoding.")
    if len(encoded) > MAX_DOCID_BYTES:
        raise InvalidArgumentError(f"document id can not be longer than {MAX_DOCID_BYTES} bytes when UTF-8 encoded.")
    return document_id


class Document(BaseModel):
    """
    A document to be added to an index.

    Attributes:
        id:         Unique identifier within the index, at most 1024 bytes UTF-8 encoded.
        fields:     Text fields, e.g. {"text": "...", "title": "..."}.
        variables:  Scoring variables by slot number.
        categories: Faceting categories, category name to value.

    Frozen shallowly: attributes can not be reassigned and the dicts passed in
    are copied on construction, but the stored dicts themselves stay mutable.
    to_document_map() hands out fresh copies.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    fields: dict[str, str] = {}
    variables: dict[int, float] | None = None
    categories: dict[str, str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _require_id(cls, data: Any) -> Any:
        # a missing id never reaches the field validator
        if isinstance(data, dict) and "id" not in data:
            validate_document_id(None)
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        return validate_document_id(value)

    def to_document_map(self) -> dict[str, Any]:
        """Returns the wire shape of the document: {docid, fields, variables?, categories?}."""
        document_map: dict[str, Any] = {"docid": self.id, "fields": dict(self.fields)}
        if self.variables is not None:
            document_map["variables"] = {str(k): v for k, v in self.variables.items()}
        if self.categories is not None:
            document_map["categories"] = dict(self.categories)
        return document_map
