"""Exceptions raised by the search client.

Hierarchy:
  IndexTankError             : base class, carries the raw HTTP status and body when known.
  InvalidArgumentError       : malformed caller input, or a 400 on document ingestion.
  InvalidQuerySyntaxError    : the service rejected a search query (400).
  InvalidFunctionSyntaxError : the service rejected a scoring function definition (400).
  IndexAlreadyExistsError    : index creation answered 204.
  IndexDoesNotExistError     : the addressed index is unknown (404).
  QuotaExceededError         : the account reached its maximum number of indexes (409).
  UnexpectedStatusError      : any status the operation does not declare.
  StructuralMismatchError    : a batch response does not line up with its request.

Transport errors are not wrapped: httpx.TransportError propagates unmodified and
is exported here as TransportFailure for callers that want a single import.
"""

import httpx

TransportFailure = httpx.TransportError


class IndexTankError(Exception):
    """Base class for every error raised by the search client.

    None of these errors subclass ValueError, so pydantic validators let them
    propagate instead of wrapping them into a ValidationError.

    Attributes:
        status_code (int | None): HTTP status that caused the error, if any.
        body (str | None): Raw response body text, kept for diagnostics.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidArgumentError(IndexTankError):
    pass


class InvalidQuerySyntaxError(IndexTankError):
    pass


class InvalidFunctionSyntaxError(IndexTankError):
    pass


class IndexAlreadyExistsError(IndexTankError):
    pass


class IndexDoesNotExistError(IndexTankError):
    pass


class QuotaExceededError(IndexTankError):
    pass


class UnexpectedStatusError(IndexTankError):
    pass


class StructuralMismatchError(IndexTankError):
    pass
