"""Handle on a single index of the search service."""

from collections.abc import Iterable
from datetime import datetime

from indextank.clients.search.SearchClientInterface import SearchClientInterface
from indextank.clients.search.models.BatchResults import BatchResults
from indextank.clients.search.models.Document import Document
from indextank.clients.search.models.IndexMetadata import IndexMetadata
from indextank.clients.search.models.Query import Query
from indextank.clients.search.models.SearchResults import SearchResults
from indextank.models.errors import IndexDoesNotExistError


class SearchIndex:
    """Binds a client to one index name and caches the index metadata.

    The metadata is fetched lazily on first access and only refreshed on
    refresh_metadata() or has_started().
    """

    def __init__(self, client: SearchClientInterface, name: str, metadata: IndexMetadata | None = None):
        self._client = client
        self.name = name
        self._metadata = metadata

    @classmethod
    async def list_all(cls, client: SearchClientInterface) -> list["SearchIndex"]:
        """Returns a handle per index of the account, metadata already filled."""
        return [cls(client, metadata.name, metadata) for metadata in await client.do_list_indexes()]

    ##########################################
    ############### LIFECYCLE ################
    ##########################################

    async def create(self) -> "SearchIndex":
        self._metadata = await self._client.do_create_index(self.name)
        return self

    async def delete(self) -> None:
        await self._client.do_delete_index(self.name)
        self._metadata = None

    async def exists(self) -> bool:
        try:
            await self.refresh_metadata()
            return True
        except IndexDoesNotExistError:
            return False

    ##########################################
    ################ METADATA ################
    ##########################################

    async def refresh_metadata(self) -> IndexMetadata:
        self._metadata = await self._client.do_fetch_index_metadata(self.name)
        return self._metadata

    async def get_metadata(self) -> IndexMetadata:
        if self._metadata is None:
            await self.refresh_metadata()
        return self._metadata

    async def has_started(self) -> bool:
        return (await self.refresh_metadata()).started

    async def get_code(self) -> str | None:
        return (await self.get_metadata()).code

    async def get_creation_time(self) -> datetime | None:
        return (await self.get_metadata()).creation_time

    ##########################################
    ########### SEARCH & DOCUMENTS ###########
    ##########################################

    async def search(self, query: Query | str) -> SearchResults:
        return await self._client.do_search(self.name, query)

    async def add_document(self, document: Document) -> None:
        await self._client.do_add_document(self.name, document)

    async def add_documents(self, documents: Iterable[Document]) -> BatchResults:
        return await self._client.do_add_documents(self.name, documents)

    async def delete_document(self, document_id: str) -> None:
        await self._client.do_delete_document(self.name, document_id)

    async def update_variables(self, document_id: str, variables: dict[int, float]) -> None:
        await self._client.do_update_variables(self.name, document_id, variables)

    async def update_categories(self, document_id: str, categories: dict[str, str]) -> None:
        await self._client.do_update_categories(self.name, document_id, categories)

    async def promote(self, document_id: str, query: str) -> None:
        await self._client.do_promote(self.name, document_id, query)

    ##########################################
    ################ FUNCTIONS ###############
    ##########################################

    async def add_function(self, function_index: int, definition: str) -> None:
        await self._client.do_add_function(self.name, function_index, definition)

    async def delete_function(self, function_index: int) -> None:
        await self._client.do_delete_function(self.name, function_index)

    async def list_functions(self) -> dict[str, str]:
        return await self._client.do_list_functions(self.name)

    def __repr__(self) -> str:
        return f"SearchIndex({self.name!r})"
