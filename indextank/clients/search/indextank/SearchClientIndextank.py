import base64
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from indextank.clients.search.SearchClientInterface import SearchClientInterface
from indextank.clients.search.models.BatchResults import BatchResults
from indextank.clients.search.models.Document import Document
from indextank.clients.search.models.IndexMetadata import IndexMetadata
from indextank.clients.search.models.Query import Query
from indextank.clients.search.models.SearchResults import SearchResults
from indextank.helper.HelperConfig import HelperConfig
from indextank.models.config import EnvConfig


def split_api_url(api_url: str) -> tuple[str, str]:
    """Splits "http://:secret@host/" into the credential-free base URL and the raw user-info.

    Returns:
        tuple[str, str]: (base URL, user-info), user-info is "" when the URL carries none.
    """
    parts = urlsplit(api_url)
    userinfo, _, hostport = parts.netloc.rpartition("@")
    return urlunsplit((parts.scheme, hostport, parts.path, "", "")), userinfo


class SearchClientIndextank(SearchClientInterface):
    def __init__(self, helper_config: HelperConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(helper_config=helper_config, transport=transport)
        api_url = self.get_config_val("API_URL", default=None, val_type="string")
        self._base_url, userinfo = split_api_url(api_url)
        self._private_pass = self.get_config_val("PRIVATE_PASS", default="", val_type="string") or userinfo

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Indextank"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="API_URL", val_type="string", default=None),
            EnvConfig(env_key="PRIVATE_PASS", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._private_pass:
            token = base64.b64encode(self._private_pass.encode("utf-8")).decode("ascii")
            return {"Authorization": f"Basic {token}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_indexes(self) -> str:
        return "/v1/indexes"

    def _get_endpoint_index(self, index_name: str) -> str:
        return f"/v1/indexes/{quote(index_name, safe='')}"

    def _get_endpoint_search(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/search"

    def _get_endpoint_documents(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/docs"

    def _get_endpoint_variables(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/docs/variables"

    def _get_endpoint_categories(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/docs/categories"

    def _get_endpoint_promote(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/promote"

    def _get_endpoint_functions(self, index_name: str) -> str:
        return f"{self._get_endpoint_index(index_name)}/functions"

    def _get_endpoint_function(self, index_name: str, function_index: int) -> str:
        return f"{self._get_endpoint_functions(index_name)}/{int(function_index)}"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_documents_payload(self, documents: list[Document]) -> list[dict[str, Any]]:
        return [document.to_document_map() for document in documents]

    def get_search_params(self, query: Query) -> dict[str, str]:
        return query.to_parameter_map()

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def extract_batch_results(self, documents: list[Document], raw_response: Any) -> BatchResults:
        return BatchResults.from_response(documents, raw_response)

    def extract_search_results(self, raw_response: dict) -> SearchResults:
        return SearchResults.from_response(raw_response)

    def extract_index_metadata(self, index_name: str, raw_response: dict | None) -> IndexMetadata:
        return IndexMetadata.from_response(index_name, raw_response)
