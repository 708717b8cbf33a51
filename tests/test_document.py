import pytest

from indextank.clients.search.models.Document import MAX_DOCID_BYTES, Document
from indextank.models.errors import InvalidArgumentError


def test_document_map_omits_unset_optionals() -> None:
    document = Document(id="a", fields={"text": "hello"})

    assert document.to_document_map() == {"docid": "a", "fields": {"text": "hello"}}


def test_document_map_includes_variables_and_categories() -> None:
    document = Document(id="a", fields={"text": "hello"}, variables={0: 1.5, 2: 3}, categories={"type": "book"})

    assert document.to_document_map() == {
        "docid": "a",
        "fields": {"text": "hello"},
        "variables": {"0": 1.5, "2": 3.0},
        "categories": {"type": "book"},
    }


def test_id_of_exactly_the_byte_limit_is_accepted() -> None:
    assert Document(id="x" * MAX_DOCID_BYTES).id == "x" * MAX_DOCID_BYTES


def test_id_over_the_byte_limit_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        Document(id="x" * (MAX_DOCID_BYTES + 1))


def test_id_length_is_measured_in_utf8_bytes() -> None:
    # 342 * 3 bytes = 1026 bytes, but only 342 characters
    with pytest.raises(InvalidArgumentError):
        Document(id="€" * 342)
    assert Document(id="€" * 341).id == "€" * 341


def test_none_id_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        Document(id=None, fields={})


def test_documents_are_immutable() -> None:
    document = Document(id="a", fields={"text": "hello"})

    with pytest.raises(Exception):
        document.id = "b"


def test_missing_id_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        Document(fields={"text": "x"})


def test_document_does_not_share_dicts_with_the_caller() -> None:
    fields = {"text": "hello"}
    document = Document(id="a", fields=fields)

    fields["text"] = "changed"
    document.to_document_map()["fields"]["text"] = "changed too"

    assert document.fields == {"text": "hello"}
