"""Maps HTTP status codes of the search service to results or errors, per operation."""

import json
from enum import Enum
from typing import Any

import httpx

from indextank.models.errors import (
    IndexAlreadyExistsError,
    IndexDoesNotExistError,
    IndexTankError,
    InvalidArgumentError,
    InvalidFunctionSyntaxError,
    InvalidQuerySyntaxError,
    QuotaExceededError,
    UnexpectedStatusError,
)

SUCCESS_STATUS_CODES = (200, 201)


class Operation(str, Enum):
    LIST_INDEXES = "list_indexes"
    CREATE_INDEX = "create_index"
    DELETE_INDEX = "delete_index"
    GET_INDEX_METADATA = "get_index_metadata"
    SEARCH = "search"
    ADD_DOCUMENT = "add_document"
    ADD_DOCUMENTS = "add_documents"
    DELETE_DOCUMENT = "delete_document"
    UPDATE_VARIABLES = "update_variables"
    UPDATE_CATEGORIES = "update_categories"
    PROMOTE = "promote"
    ADD_FUNCTION = "add_function"
    DELETE_FUNCTION = "delete_function"
    LIST_FUNCTIONS = "list_functions"


# Declared non-success statuses per operation. Anything else that is not 200/201
# becomes an UnexpectedStatusError.
DECISION_TABLE: dict[Operation, dict[int, type[IndexTankError]]] = {
    Operation.LIST_INDEXES: {},
    Operation.CREATE_INDEX: {204: IndexAlreadyExistsError, 409: QuotaExceededError},
    Operation.DELETE_INDEX: {404: IndexDoesNotExistError},
    Operation.GET_INDEX_METADATA: {404: IndexDoesNotExistError},
    Operation.SEARCH: {400: InvalidQuerySyntaxError},
    Operation.ADD_DOCUMENT: {400: InvalidArgumentError, 404: IndexDoesNotExistError},
    Operation.ADD_DOCUMENTS: {400: InvalidArgumentError, 404: IndexDoesNotExistError},
    Operation.DELETE_DOCUMENT: {404: IndexDoesNotExistError},
    Operation.UPDATE_VARIABLES: {404: IndexDoesNotExistError},
    Operation.UPDATE_CATEGORIES: {404: IndexDoesNotExistError},
    Operation.PROMOTE: {404: IndexDoesNotExistError},
    Operation.ADD_FUNCTION: {400: InvalidFunctionSyntaxError, 404: IndexDoesNotExistError},
    Operation.DELETE_FUNCTION: {404: IndexDoesNotExistError},
    Operation.LIST_FUNCTIONS: {404: IndexDoesNotExistError},
}


class HttpOutcomeMapper:
    """Single place where status codes of the search service turn into Python outcomes."""

    @staticmethod
    def map_outcome(operation: Operation, status_code: int, body: str | None) -> Any:
        """Interprets one fully read response.

        Args:
            operation (Operation): The operation that produced the response.
            status_code (int): HTTP status code.
            body (str | None): Response body text.

        Returns:
            Any: The parsed JSON body on 200/201, or None if the body is empty.

        Raises:
            IndexTankError: The error declared for this operation and status,
                or UnexpectedStatusError if the status is not declared.
        """
        if status_code in SUCCESS_STATUS_CODES:
            return json.loads(body) if body and body.strip() else None

        error_class = DECISION_TABLE[operation].get(status_code)
        if error_class is None:
            raise UnexpectedStatusError(
                f"Unexpected status {status_code} for {operation.value}: {body or ''}",
                status_code=status_code,
                body=body,
            )
        raise error_class(
            f"{operation.value} failed with status {status_code}: {body or ''}",
            status_code=status_code,
            body=body,
        )

    @classmethod
    def map_response(cls, operation: Operation, response: httpx.Response) -> Any:
        """Same as map_outcome, reading status and body from an httpx response."""
        return cls.map_outcome(operation, response.status_code, response.text)

    @staticmethod
    def is_success(status_code: int) -> bool:
        return status_code in SUCCESS_STATUS_CODES
