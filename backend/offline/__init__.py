"""Offline request cache for the web client.

Usage:
    from offline import OfflineCacheWorker

    async with httpx.AsyncClient() as client:
        worker = OfflineCacheWorker(client)
        await worker.install()
        await worker.activate()
        response = await worker.handle_fetch(client.build_request("GET", url))
"""

from offline.storage import Cache, CacheAddError, CacheStorage
from offline.worker import OfflineCacheWorker, WorkerState, is_navigation

__all__ = [
    "Cache",
    "CacheAddError",
    "CacheStorage",
    "OfflineCacheWorker",
    "WorkerState",
    "is_navigation",
]
