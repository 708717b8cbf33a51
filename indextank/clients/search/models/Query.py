"""Query builder: accumulates search parameters and compiles them into the wire parameter map."""

import json
import math
from collections.abc import Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from indextank.models.errors import InvalidArgumentError


def _render_float(value: float) -> str:
    return str(float(value))


class Range(BaseModel):
    """A numeric range filter over a document variable or a scoring function.

    Attributes:
        id:    Variable slot or function number the filter applies to.
        floor: Lower bound, -inf for an open lower end.
        ceil:  Upper bound, +inf for an open upper end.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    floor: float
    ceil: float

    def get_filter_docvar(self) -> str:
        return f"filter_docvar{self.id}"

    def get_filter_function(self) -> str:
        return f"filter_function{self.id}"

    def get_value(self) -> str:
        """Renders the range as "<floor>:<ceil>", open ends as "*"."""
        floor = "*" if self.floor == -math.inf else _render_float(self.floor)
        ceil = "*" if self.ceil == math.inf else _render_float(self.ceil)
        return f"{floor}:{ceil}"


class Query:
    """Fluent builder for a search request.

    Scalar settings (start, length, scoring function) overwrite on every call.
    Field lists and filters accumulate. Nothing is sent until the client compiles
    the builder with to_parameter_map().

    Example::

        query = (Query.for_string("title:python")
                 .with_length(20)
                 .with_fetch_fields(["title", "url"])
                 .with_document_variable_filter(0, 1.0, math.inf))
    """

    def __init__(self, query_string: str):
        self.query_string = query_string
        self.start: int | None = None
        self.length: int | None = None
        self.scoring_function: int | None = None
        self.snippet_fields: list[str] | None = None
        self.fetch_fields: list[str] | None = None
        self.category_filters: dict[str, list[str]] | None = None
        self.document_variable_filters: list[Range] | None = None
        self.function_filters: list[Range] | None = None
        self.query_variables: dict[int, float] | None = None

    @classmethod
    def for_string(cls, query_string: str) -> "Query":
        """Creates a builder for a raw query string.

        Raises:
            InvalidArgumentError: If query_string is None.
        """
        if query_string is None:
            raise InvalidArgumentError("query string must be non-null")
        return cls(query_string)

    ##########################################
    ################ SCALARS #################
    ##########################################

    def with_start(self, start: int | None) -> "Query":
        self.start = start
        return self

    def with_length(self, length: int | None) -> "Query":
        self.length = length
        return self

    def with_scoring_function(self, scoring_function: int | None) -> "Query":
        self.scoring_function = scoring_function
        return self

    ##########################################
    ############### FIELD LISTS ##############
    ##########################################

    @staticmethod
    def _as_field_list(fields: Iterable[str] | str | None, name: str) -> list[str]:
        if fields is None:
            raise InvalidArgumentError(f"{name} must be non-null")
        if isinstance(fields, str):
            return [fields]
        return list(fields)

    def with_snippet_fields(self, snippet_fields: Iterable[str] | str) -> "Query":
        """Appends fields to return snippets for. A bare string counts as one field."""
        fields = self._as_field_list(snippet_fields, "snippet_fields")
        if fields:
            if self.snippet_fields is None:
                self.snippet_fields = []
            self.snippet_fields.extend(fields)
        return self

    def with_fetch_fields(self, fetch_fields: Iterable[str] | str) -> "Query":
        """Appends fields to fetch with every result. A bare string counts as one field."""
        fields = self._as_field_list(fetch_fields, "fetch_fields")
        if fields:
            if self.fetch_fields is None:
                self.fetch_fields = []
            self.fetch_fields.extend(fields)
        return self

    ##########################################
    ################ FILTERS #################
    ##########################################

    def with_category_filters(self, category_filters: Mapping[str, Iterable[str]]) -> "Query":
        """Merges category filters: category name to the list of accepted values.

        A category given again replaces its previous value list. A bare string
        value counts as one accepted value.
        """
        if category_filters is None:
            raise InvalidArgumentError("category_filters must be non-null")
        if not category_filters:
            return self
        accepted = {
            category: self._as_field_list(values, f"category_filters[{category!r}]")
            for category, values in category_filters.items()
        }
        if self.category_filters is None:
            self.category_filters = {}
        self.category_filters.update(accepted)
        return self

    def with_document_variable_filter(self, variable_index: int, floor: float, ceil: float) -> "Query":
        if self.document_variable_filters is None:
            self.document_variable_filters = []
        self.document_variable_filters.append(Range(id=variable_index, floor=floor, ceil=ceil))
        return self

    def with_function_filter(self, function_index: int, floor: float, ceil: float) -> "Query":
        if self.function_filters is None:
            self.function_filters = []
        self.function_filters.append(Range(id=function_index, floor=floor, ceil=ceil))
        return self

    ##########################################
    ############ QUERY VARIABLES #############
    ##########################################

    def with_query_variables(self, query_variables: Mapping[int, float]) -> "Query":
        if query_variables is None:
            raise InvalidArgumentError("query_variables must be non-null")
        if not query_variables:
            return self
        if self.query_variables is None:
            self.query_variables = {}
        self.query_variables.update(query_variables)
        return self

    def with_query_variable(self, name: int, value: float) -> "Query":
        if name is None or value is None:
            raise InvalidArgumentError("Both name and value must be non-null")
        if self.query_variables is None:
            self.query_variables = {}
        self.query_variables[name] = value
        return self

    ##########################################
    ############### COMPILATION ##############
    ##########################################

    @staticmethod
    def _put_ranges(params: dict[str, str], ranges: list[Range] | None, key_of: Callable[[Range], str]) -> None:
        # repeated ids are OR-ed by the service: "1.0:2.0,5.0:*"
        for range_filter in ranges or []:
            key = key_of(range_filter)
            value = range_filter.get_value()
            params[key] = f"{params[key]},{value}" if key in params else value

    def to_parameter_map(self) -> dict[str, str]:
        """Compiles the builder into the flat parameter map sent as the URL query string.

        Returns:
            dict[str, str]: A fresh map; later changes to the builder do not affect it.
        """
        params: dict[str, str] = {"q": self.query_string}

        if self.start is not None:
            params["start"] = str(self.start)
        if self.length is not None:
            params["len"] = str(self.length)
        if self.scoring_function is not None:
            params["function"] = str(self.scoring_function)
        if self.snippet_fields is not None:
            params["snippet"] = ",".join(self.snippet_fields)
        if self.fetch_fields is not None:
            params["fetch"] = ",".join(self.fetch_fields)
        if self.category_filters is not None:
            params["category_filters"] = json.dumps(self.category_filters)

        self._put_ranges(params, self.document_variable_filters, Range.get_filter_docvar)
        self._put_ranges(params, self.function_filters, Range.get_filter_function)

        for variable, value in (self.query_variables or {}).items():
            params[f"var{variable}"] = _render_float(value)

        return params

    def __repr__(self) -> str:
        return f"Query({self.query_string!r})"
