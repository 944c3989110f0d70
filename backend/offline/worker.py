"""Offline request cache for the web client.

Lifecycle: install -> activate -> fetch.

- install: precache the static app shell into the versioned cache, then
  skip waiting so the new version activates immediately.
- activate: delete caches from older versions and take control of open
  clients.
- fetch: network-first for GET requests to the app's own hosts. Live 200
  responses refresh the cache; when the network is down the cached copy is
  served, and navigations fall back to the cached root document.
"""

import logging
from enum import Enum

import httpx

from config import Settings, get_settings
from offline.storage import CacheAddError, CacheStorage

logger = logging.getLogger(__name__)

ROOT_DOCUMENT = "./index.html"


class WorkerState(str, Enum):
    """Lifecycle states of the cache worker."""

    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"


def is_navigation(request: httpx.Request) -> bool:
    """Whether the request loads a page rather than a subresource."""
    return request.headers.get("sec-fetch-mode", "").lower() == "navigate"


class OfflineCacheWorker:
    """Network-first cache with an install/activate/fetch lifecycle."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        storage: CacheStorage | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.client = client
        self.storage = storage or CacheStorage()
        self.cache_name = settings.cache_name
        self.origin = httpx.URL(settings.cache_origin)
        self.precache_urls = list(settings.precache_urls)
        self.excluded_hosts = list(settings.excluded_hosts)
        self.fetch_timeout = httpx.Timeout(settings.cache_fetch_timeout)

        self.state = WorkerState.PARSED
        self.waiting = True
        self.controls_clients = False

    def resolve(self, url: str) -> httpx.URL:
        """Resolve an app-relative URL against the client origin."""
        return self.origin.join(url)

    # --- Lifecycle ---

    async def install(self) -> None:
        """Precache the app shell. Individual asset failures are skipped."""
        self.state = WorkerState.INSTALLING
        cache = self.storage.open(self.cache_name)
        logger.info("Opened cache %s", self.cache_name)

        for url in self.precache_urls:
            try:
                await cache.add(
                    self.client, self.resolve(url), timeout=self.fetch_timeout
                )
            except CacheAddError as e:
                logger.warning("Failed to cache %s: %s", url, e)

        self.state = WorkerState.INSTALLED
        self.skip_waiting()

    def skip_waiting(self) -> None:
        """Activate without waiting for older worker instances to finish."""
        self.waiting = False

    async def activate(self) -> None:
        """Drop caches from other versions and claim clients."""
        self.state = WorkerState.ACTIVATING
        for name in self.storage.keys():
            if name != self.cache_name:
                logger.info("Deleting old cache: %s", name)
                self.storage.delete(name)

        self.state = WorkerState.ACTIVATED
        self.claim_clients()

    def claim_clients(self) -> None:
        self.controls_clients = True

    # --- Fetch ---

    def should_handle(self, request: httpx.Request) -> bool:
        """Only GET requests to hosts outside the exclude list are cached."""
        if request.method != "GET":
            return False
        host = request.url.host
        return not any(excluded in host for excluded in self.excluded_hosts)

    async def handle_fetch(self, request: httpx.Request) -> httpx.Response | None:
        """Answer a request network-first.

        Returns:
            The response to serve, or None when the request is not
            intercepted or nothing can answer it offline.
        """
        if not self.should_handle(request):
            return None

        request.extensions["timeout"] = self.fetch_timeout.as_dict()
        try:
            response = await self.client.send(request)
        except httpx.TransportError as e:
            logger.debug("Network failed for %s, trying cache: %s", request.url, e)
            return self._match_offline(request)

        if response.status_code == 200:
            self.storage.open(self.cache_name).put(request, response)
        return response

    def _match_offline(self, request: httpx.Request) -> httpx.Response | None:
        cached = self.storage.match(request)
        if cached is not None:
            return cached
        if is_navigation(request):
            return self.storage.match(self.resolve(ROOT_DOCUMENT))
        return None
