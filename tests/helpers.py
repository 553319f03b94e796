"""Test doubles: an in-memory module proxy and archive downloads."""

from __future__ import annotations

import asyncio
import io
import json
import zipfile
from typing import AsyncIterator, Callable

import httpx

from core.domain.module_path import decode_path
from core.errors import TransportError

PROXY_URL = "https://proxy.test"


def zip_bytes(entries: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def make_zip(module_path: str, version: str, files: dict[str, str | bytes]) -> bytes:
    """Build a module zip the way the proxy lays it out (`<module>@<version>/...`).

    `module_path` is the escaped form used in proxy URLs; entry names carry
    the decoded path.
    """

    root = decode_path(module_path)
    return zip_bytes(
        {
            f"{root}@{version}/{name}": content.encode("utf-8") if isinstance(content, str) else content
            for name, content in files.items()
        }
    )


class BytesDownload:
    """`ArchiveDownload` over an in-memory body."""

    def __init__(self, data: bytes) -> None:
        self.url = "memory://archive.zip"
        self._data = data
        self.closed = False

    async def iter_chunks(self, chunk_size: int) -> AsyncIterator[bytes]:
        for start in range(0, len(self._data), chunk_size):
            yield self._data[start : start + chunk_size]

    async def aclose(self) -> None:
        self.closed = True


class FailingDownload(BytesDownload):
    def __init__(self) -> None:
        super().__init__(b"PK")

    async def iter_chunks(self, chunk_size: int) -> AsyncIterator[bytes]:
        yield b"PK"
        raise TransportError(self.url, "connection reset")


class SlowStream(httpx.AsyncByteStream):
    """Response body that waits before yielding, to simulate a slow download."""

    def __init__(self, data: bytes, delay: float, on_done: Callable[[], None] | None = None) -> None:
        self._data = data
        self._delay = delay
        self._on_done = on_done

    async def __aiter__(self) -> AsyncIterator[bytes]:
        await asyncio.sleep(self._delay)
        yield self._data
        if self._on_done:
            self._on_done()

    async def aclose(self) -> None:
        return None


class FakeProxy:
    """Minimal GOPROXY: zips, version lists, .info and @latest."""

    def __init__(self) -> None:
        self.zips: dict[tuple[str, str], bytes] = {}
        self.lists: dict[str, str] = {}
        self.infos: dict[tuple[str, str], dict[str, str]] = {}
        self.requests: list[str] = []
        self.events: list[str] = []
        self.list_status = 200
        self.list_error = False
        self.list_delay = 0.0
        self.zip_error = False
        self.zip_delay = 0.0

    def add_module(
        self,
        module_path: str,
        version: str,
        files: dict[str, str | bytes],
        time: str = "2023-01-02T03:04:05Z",
    ) -> None:
        self.zips[(module_path, version)] = make_zip(module_path, version, files)
        self.lists[module_path] = self.lists.get(module_path, "") + version + "\n"
        self.infos[(module_path, version)] = {"Version": version, "Time": time}

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        self.requests.append(path)

        if path.endswith("/@latest"):
            module = path[: -len("/@latest")]
            known = [v for (m, v) in self.infos if m == module]
            if not known:
                return httpx.Response(404)
            return httpx.Response(200, json=self.infos[(module, sorted(known)[-1])])

        module, _, tail = path.partition("/@v/")
        if tail == "list":
            self.events.append("list-start")
            if self.list_delay:
                await asyncio.sleep(self.list_delay)
            if self.list_error:
                raise httpx.ConnectError("list unavailable", request=request)
            if self.list_status != 200:
                return httpx.Response(self.list_status)
            if module not in self.lists:
                return httpx.Response(404)
            self.events.append("list-done")
            return httpx.Response(200, text=self.lists[module])

        if tail.endswith(".info"):
            info = self.infos.get((module, tail[: -len(".info")]))
            if info is None:
                return httpx.Response(404)
            return httpx.Response(200, content=json.dumps(info).encode())

        if tail.endswith(".zip"):
            if self.zip_error:
                raise httpx.ConnectError("zip unavailable", request=request)
            data = self.zips.get((module, tail[: -len(".zip")]))
            if data is None:
                return httpx.Response(404, text="not found")
            self.events.append("zip-found")
            if self.zip_delay:
                return httpx.Response(
                    200,
                    stream=SlowStream(data, self.zip_delay, lambda: self.events.append("zip-done")),
                )
            return httpx.Response(200, content=data)

        return httpx.Response(404)
