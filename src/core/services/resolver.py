"""Module resolution.

An import path may point at any sub-directory of a module, but the proxy
only serves whole-module archives and has no "which module owns this path"
endpoint. The resolver therefore probes the zip endpoint for the full path
and then for each parent, stopping at the first (deepest) prefix the proxy
answers with 200.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.models import ResolvedModule
from core.domain.module_path import normalize_import_path, parent_path
from core.errors import ResolutionExhausted
from core.interfaces.proxy import ArchiveDownload, ModuleProxy
from core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ResolvedArchive:
    """The winning prefix plus its archive response, still unread."""

    module: ResolvedModule
    download: ArchiveDownload


def subpackage_of(import_path: str, module_root: str) -> str:
    """Suffix of `import_path` after `module_root`, without the leading slash."""

    if import_path == module_root:
        return ""
    return import_path[len(module_root) + 1 :]


class ModuleResolver:
    def __init__(self, proxy: ModuleProxy) -> None:
        self._proxy = proxy

    async def resolve(self, import_path: str, version: str) -> ResolvedArchive:
        """Find the module that contains `import_path` at `version`.

        Raises `ResolutionExhausted` when no prefix is served; transport
        errors propagate unchanged.
        """

        path = normalize_import_path(import_path)
        candidate = path
        while candidate not in ("", "."):
            download = await self._proxy.open_zip(candidate, version)
            if download is not None:
                module = ResolvedModule(
                    module_root=candidate,
                    subpackage=subpackage_of(path, candidate),
                )
                logger.debug("resolved %s@%s to module %s", path, version, candidate)
                return ResolvedArchive(module=module, download=download)
            logger.debug("%s@%s is not a module, trying parent", candidate, version)
            candidate = parent_path(candidate)

        raise ResolutionExhausted(import_path, version)
