"""Contrato del proxy de módulos (protocolo GOPROXY).

Reglas de diseño:
- Todas las operaciones son asíncronas porque hacen I/O (HTTP).
- Una respuesta distinta de 200 significa "no encontrado" y se devuelve
  como `None`; solo los fallos de red lanzan `TransportError`.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable


@runtime_checkable
class ArchiveDownload(Protocol):
    """Cuerpo de un `.zip` todavía abierto, listo para volcarse a disco."""

    url: str

    def iter_chunks(self, chunk_size: int) -> AsyncIterator[bytes]:
        ...

    async def aclose(self) -> None:
        ...


@runtime_checkable
class ModuleProxy(Protocol):
    async def open_zip(self, module_path: str, version: str) -> ArchiveDownload | None:
        """`GET {base}/{module}/@v/{version}.zip` sin leer el cuerpo."""

        ...

    async def fetch_list(self, module_path: str) -> str | None:
        """`GET {base}/{module}/@v/list` como texto."""

        ...

    async def fetch_info(self, module_path: str, version: str) -> bytes | None:
        """`GET {base}/{module}/@v/{version}.info` (JSON crudo)."""

        ...

    async def fetch_latest(self, module_path: str) -> bytes | None:
        """`GET {base}/{module}/@latest` (JSON crudo)."""

        ...
