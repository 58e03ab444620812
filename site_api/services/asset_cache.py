"""
Cache-first storage for the static site assets.

On install, every asset in `URLS_TO_CACHE` is fetched and written to the cache named `CACHE_NAME`. On fetch, a
cached response is returned without touching the network; anything else is passed through to the network and
returned unmodified. Bumping `CACHE_NAME` is the only way to invalidate entries: the old cache is left behind.
"""

import asyncio

import httpx

from ..logger import get_logger
from ..settings import Settings


logger = get_logger(__name__)


CACHE_NAME = "site-cache-v1"
URLS_TO_CACHE = [
    "/",
    "/index.html",
    "/cv.html",
    "/resume.html",
    "/terms.html",
    "/site.css",
    "/images/og-banner-1200x630-v4.jpg",
    "/images/og-banner-1200x630-v4.webp",
]

RequestInfo = httpx.Request | str


class AssetFetchError(Exception):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Could not fetch {url} (status {status_code})")
        self.url = url
        self.status_code = status_code


class Cache:
    def __init__(self, name: str, client: httpx.AsyncClient) -> None:
        self.name = name
        self._client = client
        self._entries: dict[str, httpx.Response] = {}

    def _request(self, request: RequestInfo) -> httpx.Request:
        if isinstance(request, httpx.Request):
            return request
        return self._client.build_request("GET", request)

    def _key(self, request: RequestInfo) -> str:
        return str(self._request(request).url)

    def match(self, request: RequestInfo) -> httpx.Response | None:
        request = self._request(request)
        if request.method != "GET":
            return None
        return self._entries.get(str(request.url))

    def put(self, request: RequestInfo, response: httpx.Response) -> None:
        self._entries[self._key(request)] = response

    async def add_all(self, requests: list[RequestInfo]) -> None:
        """
        Fetch every request and store the responses.

        All or nothing: if any fetch fails or returns a non-2xx status, nothing is written.
        """

        prepared = [self._request(request) for request in requests]
        responses = await asyncio.gather(*(self._client.send(request) for request in prepared))
        for request, response in zip(prepared, responses):
            if not response.is_success:
                raise AssetFetchError(str(request.url), response.status_code)

        for request, response in zip(prepared, responses):
            self.put(request, response)

    def keys(self) -> list[str]:
        return list(self._entries)

    def delete(self, request: RequestInfo) -> bool:
        return self._entries.pop(self._key(request), None) is not None


class CacheStorage:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._caches: dict[str, Cache] = {}

    def open(self, name: str) -> Cache:
        if name not in self._caches:
            self._caches[name] = Cache(name, self._client)
        return self._caches[name]

    def has(self, name: str) -> bool:
        return name in self._caches

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def keys(self) -> list[str]:
        return list(self._caches)

    def match(self, request: RequestInfo) -> httpx.Response | None:
        for cache in self._caches.values():
            if (response := cache.match(request)) is not None:
                return response
        return None


class AssetCacheWorker:
    def __init__(
        self,
        client: httpx.AsyncClient,
        storage: CacheStorage | None = None,
        cache_name: str = CACHE_NAME,
        urls: list[str] | None = None,
    ) -> None:
        self.client = client
        self.storage = storage or CacheStorage(client)
        self.cache_name = cache_name
        self.urls = URLS_TO_CACHE if urls is None else urls

    @classmethod
    def create(cls, settings: Settings) -> "AssetCacheWorker":
        return cls(httpx.AsyncClient(base_url=settings.asset_origin or settings.allowed_origin))

    async def install(self) -> Cache:
        cache = self.storage.open(self.cache_name)
        await cache.add_all(list(self.urls))
        logger.info(f"Cached {len(self.urls)} assets in {self.cache_name}")
        return cache

    async def fetch(self, request: RequestInfo) -> httpx.Response:
        if (response := self.storage.match(request)) is not None:
            return response

        if not isinstance(request, httpx.Request):
            request = self.client.build_request("GET", request)
        return await self.client.send(request)

    async def aclose(self) -> None:
        await self.client.aclose()
