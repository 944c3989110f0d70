"""Named response caches keyed by request URL.

Mirrors the browser Cache Storage model: a storage holds named buckets and
each bucket maps a GET request URL to a stored response.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class CacheAddError(Exception):
    """Raised when a URL cannot be added to a cache."""


def _cache_key(request: httpx.Request | httpx.URL | str) -> str:
    """Key requests by URL without fragment."""
    url = request.url if isinstance(request, httpx.Request) else httpx.URL(request)
    return str(url).split("#", 1)[0]


def copy_response(response: httpx.Response) -> httpx.Response:
    """Copy a fully read response so the copy can be served again later.

    The body is stored decoded, so encoding headers are dropped.
    """
    headers = httpx.Headers(response.headers)
    headers.pop("content-encoding", None)
    headers.pop("content-length", None)
    return httpx.Response(
        status_code=response.status_code,
        headers=headers,
        content=response.content,
        request=response.request,
    )


class Cache:
    """A single named bucket of request -> response entries."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[str, httpx.Response] = {}

    def put(self, request: httpx.Request | httpx.URL | str, response: httpx.Response):
        """Store a copy of a response."""
        self._entries[_cache_key(request)] = copy_response(response)

    def match(self, request: httpx.Request | httpx.URL | str) -> httpx.Response | None:
        """Return a copy of the stored response, if any."""
        cached = self._entries.get(_cache_key(request))
        return copy_response(cached) if cached is not None else None

    def delete(self, request: httpx.Request | httpx.URL | str) -> bool:
        return self._entries.pop(_cache_key(request), None) is not None

    def keys(self) -> list[str]:
        return list(self._entries)

    async def add(
        self,
        client: httpx.AsyncClient,
        url: httpx.URL | str,
        timeout: httpx.Timeout | float | None = None,
    ) -> None:
        """Fetch a URL and store the response.

        Raises:
            CacheAddError: The fetch failed or did not return a 2xx status.
        """
        try:
            if timeout is None:
                response = await client.get(url)
            else:
                response = await client.get(url, timeout=timeout)
        except httpx.HTTPError as e:
            raise CacheAddError(f"Request for {url} failed: {e}") from e

        if not response.is_success:
            raise CacheAddError(f"Request for {url} returned {response.status_code}")

        self.put(url, response)

    def __len__(self) -> int:
        return len(self._entries)


class CacheStorage:
    """All named caches of one client origin."""

    def __init__(self) -> None:
        self._caches: dict[str, Cache] = {}

    def open(self, name: str) -> Cache:
        """Return the named cache, creating it when missing."""
        if name not in self._caches:
            self._caches[name] = Cache(name)
        return self._caches[name]

    def has(self, name: str) -> bool:
        return name in self._caches

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def keys(self) -> list[str]:
        return list(self._caches)

    def match(self, request: httpx.Request | httpx.URL | str) -> httpx.Response | None:
        """Look a request up in every cache, oldest cache first."""
        for cache in self._caches.values():
            response = cache.match(request)
            if response is not None:
                return response
        return None
