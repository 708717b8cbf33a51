from abc import abstractmethod
from collections.abc import Iterable
from typing import Any
import json

import httpx

from indextank.clients.ClientInterface import ClientInterface
from indextank.clients.search.HttpOutcomeMapper import HttpOutcomeMapper, Operation
from indextank.clients.search.models.BatchResults import BatchResults
from indextank.clients.search.models.Document import Document, validate_document_id
from indextank.clients.search.models.IndexMetadata import IndexMetadata
from indextank.clients.search.models.Query import Query
from indextank.clients.search.models.SearchResults import SearchResults
from indextank.helper.HelperConfig import HelperConfig
from indextank.models.errors import InvalidArgumentError


class SearchClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(helper_config=helper_config, transport=transport)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "search"
        """
        return "search"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_indexes(self) -> str:
        """
        Returns the endpoint path listing all indexes (e.g. "/v1/indexes").
        """
        pass

    @abstractmethod
    def _get_endpoint_index(self, index_name: str) -> str:
        """
        Returns the endpoint path of a single index, used for create, delete and metadata.

        Args:
            index_name (str): The raw index name, encoded by the implementation.
        """
        pass

    @abstractmethod
    def _get_endpoint_search(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_documents(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_variables(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_categories(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_promote(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_functions(self, index_name: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_function(self, index_name: str, function_index: int) -> str:
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_documents_payload(self, documents: list[Document]) -> list[dict[str, Any]]:
        """
        Builds the batch submission payload, one entry per document in submission order.

        Args:
            documents (list[Document]): The documents to submit.

        Returns:
            list[dict[str, Any]]: The payload, positionally aligned with documents.
        """
        pass

    @abstractmethod
    def get_search_params(self, query: Query) -> dict[str, str]:
        """
        Compiles a query into the URL parameters of a search request.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def extract_batch_results(self, documents: list[Document], raw_response: Any) -> BatchResults:
        """
        Correlates the raw batch response with the submitted documents.

        Raises:
            StructuralMismatchError: If the response does not line up with the documents.
        """
        pass

    @abstractmethod
    def extract_search_results(self, raw_response: dict) -> SearchResults:
        pass

    @abstractmethod
    def extract_index_metadata(self, index_name: str, raw_response: dict | None) -> IndexMetadata:
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def _call(self, operation: Operation, method: str, endpoint: str, params: dict | None = None, payload: Any = None) -> Any:
        """Sends one request and maps its status for the given operation.

        Returns:
            Any: The parsed JSON body, None for an empty body.

        Raises:
            IndexTankError: As declared by the decision table of HttpOutcomeMapper.
        """
        content = json.dumps(payload) if payload is not None else None
        resp = await self.do_request(
            method=method,
            content=content,
            params=params,
            endpoint=endpoint,
            additional_headers={"Content-Type": "application/json"} if content is not None else None,
        )
        if not HttpOutcomeMapper.is_success(resp.status_code):
            self.logging.warning(
                "%s on %s '%s' returned status %d: %s",
                operation.value, self.get_engine_name(), endpoint, resp.status_code, resp.text,
            )
        return HttpOutcomeMapper.map_response(operation, resp)

    ################ INDEXES ##################
    async def do_list_indexes(self) -> list[IndexMetadata]:
        """Lists all indexes of the account with their metadata."""
        raw = await self._call(Operation.LIST_INDEXES, "GET", self._get_endpoint_indexes())
        return [self.extract_index_metadata(name, metadata) for name, metadata in (raw or {}).items()]

    async def do_create_index(self, index_name: str) -> IndexMetadata:
        """Creates an index.

        Raises:
            IndexAlreadyExistsError: If an index with that name exists.
            QuotaExceededError: If the account cannot hold more indexes.
        """
        raw = await self._call(Operation.CREATE_INDEX, "PUT", self._get_endpoint_index(index_name))
        self.logging.info("Created index '%s' on %s", index_name, self.get_engine_name())
        return self.extract_index_metadata(index_name, raw)

    async def do_delete_index(self, index_name: str) -> None:
        await self._call(Operation.DELETE_INDEX, "DELETE", self._get_endpoint_index(index_name))
        self.logging.info("Deleted index '%s' on %s", index_name, self.get_engine_name())

    async def do_fetch_index_metadata(self, index_name: str) -> IndexMetadata:
        raw = await self._call(Operation.GET_INDEX_METADATA, "GET", self._get_endpoint_index(index_name))
        return self.extract_index_metadata(index_name, raw)

    ################ SEARCH ##################
    async def do_search(self, index_name: str, query: Query | str) -> SearchResults:
        """Runs a search on an index.

        Args:
            index_name (str): The index to search.
            query (Query | str): A query builder, or a raw query string.

        Raises:
            InvalidQuerySyntaxError: If the service rejects the query.
        """
        if isinstance(query, str) or query is None:
            query = Query.for_string(query)
        raw = await self._call(
            Operation.SEARCH, "GET", self._get_endpoint_search(index_name), params=self.get_search_params(query)
        )
        return self.extract_search_results(raw or {})

    ################ DOCUMENTS ##################
    async def do_add_document(self, index_name: str, document: Document) -> None:
        """Adds or replaces a single document.

        Raises:
            InvalidArgumentError: If the service rejects the document.
            IndexDoesNotExistError: If the index does not exist.
        """
        await self._call(
            Operation.ADD_DOCUMENT, "PUT", self._get_endpoint_documents(index_name), payload=document.to_document_map()
        )

    async def do_add_documents(self, index_name: str, documents: Iterable[Document]) -> BatchResults:
        """Adds or replaces several documents in one request.

        Documents the service could not add are reported in the returned results,
        not raised. Their get_failed_documents() can be passed back to this method.

        Raises:
            InvalidArgumentError: If the service rejects the whole batch.
            IndexDoesNotExistError: If the index does not exist.
            StructuralMismatchError: If the response does not line up with the batch.
        """
        documents = list(documents)
        raw = await self._call(
            Operation.ADD_DOCUMENTS, "PUT", self._get_endpoint_documents(index_name),
            payload=self.get_documents_payload(documents),
        )
        results = self.extract_batch_results(documents, raw)
        if results.has_errors():
            failed = sum(1 for _ in results.get_failed_documents())
            self.logging.warning("%d of %d documents could not be added to '%s'", failed, len(results), index_name)
        return results

    async def do_delete_document(self, index_name: str, document_id: str) -> None:
        validate_document_id(document_id)
        await self._call(
            Operation.DELETE_DOCUMENT, "DELETE", self._get_endpoint_documents(index_name), params={"docid": document_id}
        )

    async def do_update_variables(self, index_name: str, document_id: str, variables: dict[int, float]) -> None:
        """Replaces the scoring variables of an indexed document."""
        validate_document_id(document_id)
        if variables is None:
            raise InvalidArgumentError("variables must be non-null")
        payload = {"docid": document_id, "variables": {str(k): v for k, v in variables.items()}}
        await self._call(Operation.UPDATE_VARIABLES, "PUT", self._get_endpoint_variables(index_name), payload=payload)

    async def do_update_categories(self, index_name: str, document_id: str, categories: dict[str, str]) -> None:
        """Replaces the faceting categories of an indexed document."""
        validate_document_id(document_id)
        if categories is None:
            raise InvalidArgumentError("categories must be non-null")
        payload = {"docid": document_id, "categories": dict(categories)}
        await self._call(Operation.UPDATE_CATEGORIES, "PUT", self._get_endpoint_categories(index_name), payload=payload)

    async def do_promote(self, index_name: str, document_id: str, query: str) -> None:
        """Makes a document the first result for an exact query."""
        validate_document_id(document_id)
        payload = {"docid": document_id, "query": query}
        await self._call(Operation.PROMOTE, "PUT", self._get_endpoint_promote(index_name), payload=payload)

    ################ FUNCTIONS ##################
    async def do_add_function(self, index_name: str, function_index: int, definition: str) -> None:
        """Defines or replaces a scoring function.

        Raises:
            InvalidFunctionSyntaxError: If the service rejects the definition.
        """
        await self._call(
            Operation.ADD_FUNCTION, "PUT", self._get_endpoint_function(index_name, function_index),
            payload={"definition": definition},
        )

    async def do_delete_function(self, index_name: str, function_index: int) -> None:
        await self._call(Operation.DELETE_FUNCTION, "DELETE", self._get_endpoint_function(index_name, function_index))

    async def do_list_functions(self, index_name: str) -> dict[str, str]:
        """Returns the scoring functions of an index: function number (as string) to definition."""
        raw = await self._call(Operation.LIST_FUNCTIONS, "GET", self._get_endpoint_functions(index_name))
        return {str(key): str(value) for key, value in (raw or {}).items()}
