"""Search results model."""

from typing import Any

from pydantic import BaseModel


class SearchResults(BaseModel):
    """A page of sorted search results, as returned by a search call.

    Attributes:
        matches:     Total number of matching documents.
        search_time: Seconds the service spent on the query.
        results:     One dict per result, with "docid" and any fetched fields or snippets.
        facets:      Category name to value counts, when the index has categories.
    """

    matches: int
    search_time: float
    results: list[dict[str, Any]] = []
    facets: dict[str, dict[str, int]] | None = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "SearchResults":
        # search_time arrives as a decimal string, e.g. "0.012"
        return cls(
            matches=response.get("matches", 0),
            search_time=float(response.get("search_time", 0)),
            results=response.get("results") or [],
            facets=response.get("facets"),
        )

    def get_doc_ids(self) -> list[str]:
        return [result.get("docid") for result in self.results]
