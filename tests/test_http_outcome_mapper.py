"""Every row of the status-code decision table."""

import pytest

from indextank.clients.search.HttpOutcomeMapper import DECISION_TABLE, HttpOutcomeMapper, Operation
from indextank.models.errors import (
    IndexAlreadyExistsError,
    IndexDoesNotExistError,
    InvalidArgumentError,
    InvalidFunctionSyntaxError,
    InvalidQuerySyntaxError,
    QuotaExceededError,
    UnexpectedStatusError,
)

DECLARED_ROWS = [
    (Operation.CREATE_INDEX, 204, IndexAlreadyExistsError),
    (Operation.CREATE_INDEX, 409, QuotaExceededError),
    (Operation.DELETE_INDEX, 404, IndexDoesNotExistError),
    (Operation.GET_INDEX_METADATA, 404, IndexDoesNotExistError),
    (Operation.SEARCH, 400, InvalidQuerySyntaxError),
    (Operation.ADD_DOCUMENT, 400, InvalidArgumentError),
    (Operation.ADD_DOCUMENT, 404, IndexDoesNotExistError),
    (Operation.ADD_DOCUMENTS, 400, InvalidArgumentError),
    (Operation.ADD_DOCUMENTS, 404, IndexDoesNotExistError),
    (Operation.ADD_FUNCTION, 400, InvalidFunctionSyntaxError),
    (Operation.ADD_FUNCTION, 404, IndexDoesNotExistError),
    (Operation.DELETE_FUNCTION, 404, IndexDoesNotExistError),
    (Operation.LIST_FUNCTIONS, 404, IndexDoesNotExistError),
    (Operation.DELETE_DOCUMENT, 404, IndexDoesNotExistError),
    (Operation.UPDATE_VARIABLES, 404, IndexDoesNotExistError),
    (Operation.UPDATE_CATEGORIES, 404, IndexDoesNotExistError),
    (Operation.PROMOTE, 404, IndexDoesNotExistError),
]


def test_table_declares_exactly_the_documented_rows() -> None:
    declared = {(operation, status, error) for operation, rows in DECISION_TABLE.items() for status, error in rows.items()}

    assert declared == set(DECLARED_ROWS)
    assert set(DECISION_TABLE) == set(Operation)


@pytest.mark.parametrize("operation,status,error", DECLARED_ROWS)
def test_declared_rows_raise_their_error(operation: Operation, status: int, error: type) -> None:
    with pytest.raises(error) as excinfo:
        HttpOutcomeMapper.map_outcome(operation, status, '"detail"')

    assert type(excinfo.value) is error
    assert excinfo.value.status_code == status
    assert excinfo.value.body == '"detail"'


@pytest.mark.parametrize("operation", list(Operation))
@pytest.mark.parametrize("status", [200, 201])
def test_success_parses_json_body(operation: Operation, status: int) -> None:
    assert HttpOutcomeMapper.map_outcome(operation, status, '{"a": [1, 2]}') == {"a": [1, 2]}


@pytest.mark.parametrize("operation", list(Operation))
@pytest.mark.parametrize("body", ["", None, "  "])
def test_success_with_empty_body_is_none(operation: Operation, body) -> None:
    assert HttpOutcomeMapper.map_outcome(operation, 200, body) is None


UNDECLARED_ROWS = [
    (operation, status)
    for operation in Operation
    for status in (202, 204, 301, 400, 401, 404, 409, 500, 503)
    if status not in DECISION_TABLE[operation]
]


@pytest.mark.parametrize("operation,status", UNDECLARED_ROWS)
def test_undeclared_statuses_are_unexpected(operation: Operation, status: int) -> None:
    with pytest.raises(UnexpectedStatusError) as excinfo:
        HttpOutcomeMapper.map_outcome(operation, status, "Internal failure")

    assert excinfo.value.status_code == status
    assert excinfo.value.body == "Internal failure"


def test_list_indexes_declares_no_failure_rows() -> None:
    with pytest.raises(UnexpectedStatusError):
        HttpOutcomeMapper.map_outcome(Operation.LIST_INDEXES, 404, "")
