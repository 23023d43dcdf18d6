"""
Pagination Helix (curseurs `after` / `before`).

HelixPaginatedRequest est un itérateur asynchrone paresseux : une page n'est
demandée à Helix que quand la précédente a été consommée. Chaque `async for`
repart de la première page avec son propre curseur.
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Dict, Generic, List, Optional, TypeVar

from helixapi.api_client import ApiCallOptions

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


@dataclass
class HelixPagination:
    """Manual pagination parameters."""
    limit: Optional[int] = None   # Envoyé comme `first`
    after: Optional[str] = None
    before: Optional[str] = None


def create_pagination_query(pagination: Optional[HelixPagination] = None) -> Dict[str, Any]:
    if pagination is None:
        return {}
    query: Dict[str, Any] = {}
    if pagination.limit is not None:
        query["first"] = str(pagination.limit)
    if pagination.after is not None:
        query["after"] = pagination.after
    if pagination.before is not None:
        query["before"] = pagination.before
    return query


@dataclass
class HelixPaginatedResult(Generic[T]):
    """One page of results plus the cursor to the next one."""
    data: List[T]
    cursor: Optional[str] = None


@dataclass
class HelixPaginatedResultWithTotal(HelixPaginatedResult[T]):
    total: int = 0


def extract_cursor(response: Dict[str, Any]) -> Optional[str]:
    pagination = response.get("pagination") or {}
    return pagination.get("cursor") or None


class HelixPaginatedRequest(Generic[T]):
    """
    Lazy, forward-only walk over a paginated Helix endpoint.

    Two ways to consume it:
        - `async for item in request` : restarts from page one on every loop
        - `get_next()` / `get_all()`  : explicit pull, state kept on the object

    Args:
        client: object exposing `async call_api(ApiCallOptions)`
        url: endpoint relative to the Helix base URL
        query: fixed query parameters (filters)
        mapper: turns one raw `data` item into a T
        user_id: user context of the request
        page_size: value of `first`
    """

    def __init__(
        self,
        client,
        url: str,
        mapper: Callable[[Dict[str, Any]], T],
        query: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._client = client
        self._url = url
        self._mapper = mapper
        self._query = dict(query or {})
        self._user_id = user_id
        self._page_size = page_size

        self._cursor: Optional[str] = None
        self._finished = False
        self._last_response: Dict[str, Any] = {}

    @property
    def current_cursor(self) -> Optional[str]:
        return self._cursor

    @property
    def is_finished(self) -> bool:
        return self._finished

    async def _fetch_page(self, cursor: Optional[str]) -> Dict[str, Any]:
        query = {**self._query, "first": str(self._page_size)}
        if cursor is not None:
            query["after"] = cursor
        response = await self._client.call_api(ApiCallOptions(
            url=self._url,
            query=query,
            user_id=self._user_id,
        ))
        self._last_response = response or {}
        return self._last_response

    def reset(self) -> None:
        self._cursor = None
        self._finished = False

    async def get_next(self) -> List[T]:
        """Récupère la page suivante ([] quand tout a été lu)."""
        if self._finished:
            return []

        response = await self._fetch_page(self._cursor)
        data = response.get("data", [])
        self._cursor = extract_cursor(response)
        if not data or self._cursor is None:
            self._finished = True

        return [self._mapper(item) for item in data]

    async def get_all(self) -> List[T]:
        """Lit toutes les pages depuis le début."""
        self.reset()
        items: List[T] = []
        while not self._finished:
            items.extend(await self.get_next())
        self.reset()
        return items

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        cursor: Optional[str] = None
        page = 0
        while True:
            response = await self._fetch_page(cursor)
            data = response.get("data", [])
            page += 1
            LOGGER.debug(f"[HELIX] {self._url} page {page}: {len(data)} items")

            for item in data:
                yield self._mapper(item)

            cursor = extract_cursor(response)
            if not data or cursor is None:
                return


class HelixPaginatedRequestWithTotal(HelixPaginatedRequest[T]):
    """Paginated request whose endpoint also reports a `total` count."""

    async def get_total_count(self) -> int:
        if not self._last_response:
            await self._fetch_page(None)
        return self._last_response.get("total", 0)
