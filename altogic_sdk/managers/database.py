"""Manager for the app's database: model queries and single objects."""

from typing import Any, Literal

from altogic_sdk._internal.fetcher import Fetcher
from altogic_sdk.exceptions import ClientError
from altogic_sdk.managers.base import APIBase, as_list, compact, require
from altogic_sdk.models.response import APIError, APIResponse, ResolveType

MODEL_PATH = "/_api/rest/v1/db/model"
OBJECT_PATH = "/_api/rest/v1/db/object"

SortDirection = Literal["asc", "desc"]
FieldUpdate = dict[str, Any]


def _as_updates(field_updates: FieldUpdate | list[FieldUpdate]) -> list[FieldUpdate]:
    if isinstance(field_updates, dict):
        return [field_updates]
    return list(field_updates)


class QueryBuilder(APIBase):
    """Builds and runs queries against one model.

    Modifiers (``filter``, ``lookup``, ``page``, ``limit``, ``sort``, ``omit``,
    ``group``) return the builder so calls chain; the async terminal methods
    send the accumulated query. Nothing is sent until a terminal method runs.

    Example:
        users = await client.db.model("users").filter("age > 18").limit(10).get()
    """

    def __init__(self, model_name: str, fetcher: Fetcher) -> None:
        super().__init__(fetcher)
        self._model_name = require(model_name, "model_name")
        self._filter: str | None = None
        self._lookups: list[dict[str, Any]] = []
        self._page: int | None = None
        self._limit: int | None = None
        self._sort: list[dict[str, str]] = []
        self._omit: list[str] = []
        self._group: str | list[str] | None = None

    @property
    def model_name(self) -> str:
        return self._model_name

    # =========================================================================
    # Modifiers
    # =========================================================================

    def filter(self, expression: str) -> "QueryBuilder":
        """Only objects matching ``expression`` are affected or returned."""
        self._filter = require(expression, "expression")
        return self

    def lookup(self, field: str | None = None, *, name: str | None = None, query: str | None = None) -> "QueryBuilder":
        """Join a referenced object (by ``field``) or a model (``name`` + ``query``)."""
        if field is None and name is None:
            raise ClientError("missing_required_value", "lookup needs a field or a name")
        self._lookups.append(compact({"field": field, "name": name, "query": query}))
        return self

    def page(self, page: int) -> "QueryBuilder":
        if page < 1:
            raise ClientError("invalid_value", "page must be a positive integer")
        self._page = page
        return self

    def limit(self, limit: int) -> "QueryBuilder":
        if limit < 1:
            raise ClientError("invalid_value", "limit must be a positive integer")
        self._limit = limit
        return self

    def sort(self, field: str, direction: SortDirection = "asc") -> "QueryBuilder":
        """Add a sort key. Calls accumulate: the first key sorts first."""
        if direction not in ("asc", "desc"):
            raise ClientError("invalid_value", "direction must be 'asc' or 'desc'")
        self._sort.append({"field": require(field, "field"), "direction": direction})
        return self

    def omit(self, *fields: str) -> "QueryBuilder":
        """Leave ``fields`` out of returned objects."""
        self._omit.extend(fields)
        return self

    def group(self, fields_or_expression: str | list[str]) -> "QueryBuilder":
        """Group by a list of field names or a grouping expression."""
        self._group = fields_or_expression
        return self

    def _query(self) -> dict[str, Any]:
        return compact({
            "filter": self._filter,
            "lookups": self._lookups or None,
            "page": self._page,
            "limit": self._limit,
            "sort": self._sort or None,
            "omit": self._omit or None,
            "group": self._group,
        })

    async def _call(
        self,
        action: str,
        resolve_type: ResolveType = ResolveType.JSON,
        **params: Any,
    ) -> APIResponse[Any]:
        body = compact(params)
        body["model"] = self._model_name
        query = self._query()
        if query:
            body["query"] = query
        return await self._fetcher.post(
            f"{MODEL_PATH}/{action}",
            body=body,
            resolve_type=resolve_type,
        )

    # =========================================================================
    # Terminal operations
    # =========================================================================

    async def create(self, values: dict[str, Any] | list[dict[str, Any]]) -> APIResponse[Any]:
        """Create one object, or several when ``values`` is a list."""
        return await self._fetcher.post(
            f"{MODEL_PATH}/create",
            body={"model": self._model_name, "values": values},
        )

    async def get(self, return_count_info: bool = False) -> APIResponse[Any]:
        """Run the query.

        With ``return_count_info`` the data is ``{"info", "data"}`` where
        ``info`` carries the total count and page count.
        """
        return await self._call("get", returnCountInfo=return_count_info or None)

    async def get_random(self, count: int) -> APIResponse[list[dict[str, Any]]]:
        """Return up to ``count`` random objects matching the query."""
        if count < 1:
            raise ClientError("invalid_value", "count must be a positive integer")
        return await self._call("get-random", count=count)

    async def search_text(self, text: str) -> APIResponse[list[dict[str, Any]]]:
        """Full-text search over the model's text-indexed fields."""
        return await self._call("search-text", text=require(text, "text"))

    async def search_fuzzy(self, field: str, text: str) -> APIResponse[list[dict[str, Any]]]:
        """Fuzzy search on a single text field."""
        return await self._call(
            "search-fuzzy",
            field=require(field, "field"),
            text=require(text, "text"),
        )

    async def compute(self, computations: dict[str, Any] | list[dict[str, Any]]) -> APIResponse[Any]:
        """Run aggregations, per group when ``group`` is set."""
        return await self._call("compute", computations=computations)

    async def update(self, values: dict[str, Any]) -> APIResponse[dict[str, Any]]:
        """Set ``values`` on every matching object. Data holds the update count."""
        return await self._call("update", values=values)

    async def update_fields(self, field_updates: FieldUpdate | list[FieldUpdate]) -> APIResponse[dict[str, Any]]:
        """Apply field-level updates (set, unset, increment, push, ...)."""
        return await self._call("update-fields", updates=_as_updates(field_updates))

    async def delete(self) -> APIError | None:
        """Delete every object matching the query."""
        response = await self._call("delete", resolve_type=ResolveType.NONE)
        return response.errors


class ObjectManager(APIBase):
    """Operations on a single object of a model.

    ``object_id`` may be omitted when the manager is only used to create.
    """

    def __init__(self, model_name: str, object_id: str | None, fetcher: Fetcher) -> None:
        super().__init__(fetcher)
        self._model_name = require(model_name, "model_name")
        self._object_id = object_id

    @property
    def object_id(self) -> str | None:
        return self._object_id

    def _id(self) -> str:
        if not self._object_id:
            raise ClientError("missing_required_value", "object_id is required for this operation")
        return self._object_id

    async def _call(
        self,
        action: str,
        resolve_type: ResolveType = ResolveType.JSON,
        **params: Any,
    ) -> APIResponse[Any]:
        body = compact(params)
        body["model"] = self._model_name
        return await self._fetcher.post(
            f"{OBJECT_PATH}/{action}",
            body=body,
            resolve_type=resolve_type,
        )

    async def get(self, lookups: str | list[str] | None = None) -> APIResponse[dict[str, Any]]:
        """Fetch the object, joining the referenced ``lookups`` fields."""
        return await self._call(
            "get",
            id=self._id(),
            lookups=as_list(lookups) if lookups is not None else None,
        )

    async def create(self, values: dict[str, Any]) -> APIResponse[dict[str, Any]]:
        """Create the object; an ``object_id`` given at construction is used as its id."""
        return await self._call("create", id=self._object_id, values=values)

    async def update(self, values: dict[str, Any]) -> APIResponse[dict[str, Any]]:
        return await self._call("update", id=self._id(), values=values)

    async def update_fields(self, field_updates: FieldUpdate | list[FieldUpdate]) -> APIResponse[dict[str, Any]]:
        return await self._call("update-fields", id=self._id(), updates=_as_updates(field_updates))

    async def delete(self) -> APIError | None:
        response = await self._call("delete", resolve_type=ResolveType.NONE, id=self._id())
        return response.errors


class DatabaseManager(APIBase):
    """Entry point for database operations."""

    def model(self, model_name: str) -> QueryBuilder:
        """Start a query on ``model_name``. Sub-models use dot notation."""
        return QueryBuilder(model_name, self._fetcher)

    def object(self, model_name: str, object_id: str | None = None) -> ObjectManager:
        return ObjectManager(model_name, object_id, self._fetcher)
