"""Documentation assembly.

`DocService.get_doc` is the single entry point for callers (CLI, web
handlers, tests). It resolves the module that owns an import path, starts
the version lookups in the background, downloads and extracts the module
archive, runs the documentation builder and the license detector, and
merges everything into one `Documentation`.

Every request owns its HTTP client, its scratch directory and its file
list; nothing is shared between concurrent calls.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Mapping, Sequence

import httpx

from adapters.archive import ExtractedArchive, create_scratch_dir, fetch_and_extract, release_scratch_dir
from adapters.doc_builder import SourceDocBuilder
from adapters.http_client import build_async_client
from adapters.license_detector import FileLicenseDetector
from adapters.proxy_client import ProxyClient
from core.config import AppSettings
from core.domain.models import Documentation, ExtractedFile, License, ResolvedModule
from core.domain.module_path import display_path, normalize_import_path
from core.errors import BuildError, RequestTimeout
from core.interfaces.builder import DocumentationBuilder
from core.interfaces.licenses import LicenseDetectorFactory
from core.logging import get_logger
from core.services.resolver import ModuleResolver
from core.services.versions import MetadataLister, ResultSlot, VersionLister

logger = get_logger(__name__)


class DocService:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        builder: DocumentationBuilder | None = None,
        license_detector: LicenseDetectorFactory | None = None,
        license_overrides: Mapping[str, list[str]] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._builder = builder or SourceDocBuilder()
        self._license_detector = license_detector or FileLicenseDetector
        self._license_overrides = license_overrides
        self._transport = transport

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def get_doc(self, import_path: str, version: str) -> Documentation:
        """Documentation for `import_path` at `version`.

        The whole request is bound to `settings.request_timeout_seconds`;
        when it expires in-flight calls are cancelled, the scratch directory
        is still removed and `RequestTimeout` is raised.
        """

        try:
            return await asyncio.wait_for(
                self._get_doc(import_path, version),
                timeout=self._settings.request_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise RequestTimeout(
                f"{import_path}@{version}",
                f"request deadline of {self._settings.request_timeout_seconds}s exceeded",
            ) from exc

    async def _get_doc(self, import_path: str, version: str) -> Documentation:
        path = normalize_import_path(import_path)
        scratch_dir: Path | None = None
        archive: ExtractedArchive | None = None
        slots: list[ResultSlot] = []

        async with build_async_client(self._settings, transport=self._transport) as client:
            proxy = ProxyClient(self._settings.proxy_url, client)
            try:
                scratch_dir = create_scratch_dir(path, version, self._settings.scratch_root)
                resolved = await ModuleResolver(proxy).resolve(path, version)
                module = resolved.module

                versions_slot = VersionLister(proxy).start(module.module_root)
                metadata_slot = MetadataLister(proxy).start(module.module_root, version)
                slots = [versions_slot, metadata_slot]

                archive = await fetch_and_extract(
                    resolved.download,
                    scratch_dir,
                    module.module_root,
                    version,
                    chunk_size=self._settings.download_chunk_size,
                )
                logger.info(
                    "extracted %d files from %s@%s",
                    len(archive.files),
                    module.module_root,
                    version,
                )

                doc, licenses = await asyncio.to_thread(
                    self._build_and_detect, path, version, module, archive
                )

                versions = await versions_slot.wait()
                metadata = await metadata_slot.wait()
            finally:
                for slot in slots:
                    slot.cancel()
                for slot in slots:
                    await slot.wait()
                if archive is not None:
                    archive.close()
                release_scratch_dir(scratch_dir)

        latest = metadata.latest_version
        return doc.model_copy(
            update={
                "import_path": display_path(path),
                "module_root": display_path(module.module_root),
                "module_version": version,
                "versions": versions,
                "licenses": licenses,
                "published_time": metadata.published_time or doc.published_time,
                "latest": latest == version if latest else doc.latest,
            }
        )

    def _build_and_detect(
        self,
        import_path: str,
        version: str,
        module: ResolvedModule,
        archive: ExtractedArchive,
    ) -> tuple[Documentation, list[License]]:
        doc = self._build(import_path, version, module, archive.files)
        detector = self._license_detector(
            module.module_root,
            version,
            archive.reader,
            self._license_overrides,
        )
        return doc, detector.module_licenses()

    def _build(
        self,
        import_path: str,
        version: str,
        module: ResolvedModule,
        files: Sequence[ExtractedFile],
    ) -> Documentation:
        try:
            return self._builder.build(import_path, version, module.subpackage, files)
        except BuildError:
            raise
        except Exception as exc:
            raise BuildError(module.module_root, version, f"{exc.__class__.__name__}: {exc}") from exc
