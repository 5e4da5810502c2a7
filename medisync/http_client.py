from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from medisync.config import Config

logger = logging.getLogger(__name__)


class ApiClient:
    """
    The one client every backend call goes through.

    Holds a single ``httpx.AsyncClient`` bound to ``cfg.api_url`` with a
    JSON content type. There is no retry or timeout: transport errors,
    non-2xx responses (``httpx.HTTPStatusError``) and JSON decode errors
    reach the caller unchanged.
    """

    def __init__(self, cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.cfg = cfg
        self._client = httpx.AsyncClient(
            base_url=_with_trailing_slash(cfg.api_url),
            headers={"Content-Type": cfg.content_type},
            timeout=None,
            transport=transport,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        response = await self._client.request(method, path, params=params, json=json)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _with_trailing_slash(url: str) -> str:
    # httpx joins relative paths onto base_url; "chats" must land under /api/.
    return url if url.endswith("/") else url + "/"


def create_http_client(
    cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ApiClient:
    logger.info("HTTP client base URL: %s", cfg.api_url)
    return ApiClient(cfg, transport=transport)
