"""Version listing and per-version metadata.

Both are enrichment: a failure here never fails the documentation request,
it only leaves the version list (or the publish time) empty. Each lookup
runs as a background task the moment the module root is known and hands
its result over through a `ResultSlot`.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Generic, TypeVar

from pydantic import ValidationError

from core.domain.models import VersionInfo, VersionMetadata
from core.errors import TransportError
from core.interfaces.proxy import ModuleProxy
from core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ResultSlot(Generic[T]):
    """Single-producer, single-consumer result slot.

    The producer task writes the value at most once. `wait()` returns that
    value, or `default` when the producer failed or was abandoned with
    `cancel()`. Cancelling the *consumer* while it waits propagates as usual
    and leaves the producer running; the owner must call `cancel()`.
    """

    def __init__(self, producer: Awaitable[T], default: T, *, name: str | None = None) -> None:
        self._default = default
        self._task: asyncio.Task[T] = asyncio.ensure_future(producer)
        if name:
            self._task.set_name(name)

    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()

    async def wait(self) -> T:
        await asyncio.wait({self._task})
        if self._task.cancelled():
            return self._default
        exc = self._task.exception()
        if exc is not None:
            logger.warning("background lookup %s failed: %s", self._task.get_name(), exc)
            return self._default
        return self._task.result()


def parse_version_list(body: str) -> list[str]:
    """Split the `@v/list` body on newlines, dropping the terminal empty entry."""

    if not body:
        return []
    versions = body.split("\n")
    if versions and versions[-1] == "":
        versions = versions[:-1]
    return versions


class VersionLister:
    def __init__(self, proxy: ModuleProxy) -> None:
        self._proxy = proxy

    async def list_versions(self, module_root: str) -> list[str]:
        try:
            body = await self._proxy.fetch_list(module_root)
        except TransportError as exc:
            logger.warning("could not list versions of %s: %s", module_root, exc)
            return []
        except UnicodeDecodeError as exc:
            logger.warning("undecodable version list for %s: %s", module_root, exc)
            return []
        if body is None:
            logger.debug("no version list for %s", module_root)
            return []
        return parse_version_list(body)

    def start(self, module_root: str) -> ResultSlot[list[str]]:
        return ResultSlot(self.list_versions(module_root), [], name=f"versions:{module_root}")


def _decode_info(raw: bytes | None) -> VersionInfo | None:
    if raw is None:
        return None
    try:
        return VersionInfo.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug("invalid version info payload: %s", exc)
        return None


class MetadataLister:
    """Publish time of the requested version and the latest known version."""

    def __init__(self, proxy: ModuleProxy) -> None:
        self._proxy = proxy

    async def fetch_metadata(self, module_root: str, version: str) -> VersionMetadata:
        results = await asyncio.gather(
            self._proxy.fetch_info(module_root, version),
            self._proxy.fetch_latest(module_root),
            return_exceptions=True,
        )
        payloads: list[bytes | None] = []
        for result in results:
            if isinstance(result, TransportError):
                logger.warning("could not fetch metadata of %s@%s: %s", module_root, version, result)
                payloads.append(None)
            elif isinstance(result, BaseException):
                raise result
            else:
                payloads.append(result)

        info = _decode_info(payloads[0])
        latest = _decode_info(payloads[1])
        return VersionMetadata(
            published_time=info.time if info else None,
            latest_version=latest.version if latest else None,
        )

    def start(self, module_root: str, version: str) -> ResultSlot[VersionMetadata]:
        return ResultSlot(
            self.fetch_metadata(module_root, version),
            VersionMetadata(),
            name=f"metadata:{module_root}@{version}",
        )
