"""Cliente del proxy de módulos (GOPROXY) sobre httpx.

Notas:
- 200 => el recurso existe
- cualquier otro status => "no encontrado" (`None`)
- errores de red => `TransportError`
"""

from __future__ import annotations

from typing import AsyncIterator

import httpx

from core.errors import TransportError
from core.logging import get_logger

logger = get_logger(__name__)


class HttpArchiveDownload:
    """Respuesta `.zip` en modo streaming; el llamador debe cerrarla."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.url = str(response.url)

    async def iter_chunks(self, chunk_size: int) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes(chunk_size=chunk_size):
                yield chunk
        except httpx.HTTPError as exc:
            raise TransportError(self.url, f"archive download failed: {exc}") from exc

    async def aclose(self) -> None:
        await self._response.aclose()


class ProxyClient:
    """Implementa `core.interfaces.proxy.ModuleProxy` contra una base URL."""

    def __init__(self, base_url: str, client: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client

    def url_for(self, module_path: str, suffix: str) -> str:
        return f"{self._base_url}/{module_path}/{suffix}"

    async def _get(self, url: str, *, stream: bool = False) -> httpx.Response:
        request = self._client.build_request("GET", url)
        try:
            return await self._client.send(request, stream=stream)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

    async def _get_body(self, url: str) -> bytes | None:
        response = await self._get(url)
        logger.debug("GET %s -> %s", url, response.status_code)
        if response.status_code != 200:
            return None
        return response.content

    async def open_zip(self, module_path: str, version: str) -> HttpArchiveDownload | None:
        url = self.url_for(module_path, f"@v/{version}.zip")
        response = await self._get(url, stream=True)
        logger.debug("GET %s -> %s", url, response.status_code)
        if response.status_code != 200:
            await response.aclose()
            return None
        return HttpArchiveDownload(response)

    async def fetch_list(self, module_path: str) -> str | None:
        body = await self._get_body(self.url_for(module_path, "@v/list"))
        if body is None:
            return None
        return body.decode("utf-8")

    async def fetch_info(self, module_path: str, version: str) -> bytes | None:
        return await self._get_body(self.url_for(module_path, f"@v/{version}.info"))

    async def fetch_latest(self, module_path: str) -> bytes | None:
        return await self._get_body(self.url_for(module_path, "@latest"))
