"""Descarga y extracción del zip de un módulo.

Flujo:
- `create_scratch_dir` crea un directorio temporal exclusivo de la petición.
- `fetch_and_extract` vuelca el cuerpo del `.zip` a `source.zip` con un
  buffer de tamaño fijo, lo abre con `zipfile` y lee todas las entradas.
- `release_scratch_dir` lo borra; el servicio lo llama siempre en `finally`.

El lector `zipfile.ZipFile` se devuelve abierto porque el detector de
licencias recorre el archivo completo.
"""

from __future__ import annotations

import asyncio
import shutil
import tempfile
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from core.domain.models import ExtractedFile
from core.errors import ArchiveFormatError, FilesystemError
from core.interfaces.proxy import ArchiveDownload
from core.logging import get_logger

logger = get_logger(__name__)

ARCHIVE_NAME = "source.zip"
DEFAULT_CHUNK_SIZE = 1024 * 1024
# mkdtemp appends a random suffix; keep the name under NAME_MAX.
MAX_PREFIX_LENGTH = 100


@dataclass
class ExtractedArchive:
    path: Path
    reader: zipfile.ZipFile
    files: list[ExtractedFile] = field(default_factory=list)

    def close(self) -> None:
        self.reader.close()


def sanitize_for_filename(value: str) -> str:
    """Generate a filesystem-friendly slug for the scratch directory prefix."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_", "."):
            out.append(ch)
        else:
            out.append("_")
    cleaned = "".join(out).strip("-_")
    return cleaned or "module"


def create_scratch_dir(import_path: str, version: str, root: Path | None = None) -> Path:
    prefix = sanitize_for_filename(f"{import_path}{version}")[:MAX_PREFIX_LENGTH] + "-"
    try:
        if root is not None:
            root.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix=prefix, dir=str(root) if root else None))
    except OSError as exc:
        raise FilesystemError(str(root or tempfile.gettempdir()), f"cannot create scratch dir: {exc}") from exc


def release_scratch_dir(path: Path | None) -> None:
    if path is None:
        return
    shutil.rmtree(path, ignore_errors=True)
    if path.exists():
        logger.warning("scratch dir %s could not be removed", path)


def read_entries(reader: zipfile.ZipFile, module_path: str, version: str) -> list[ExtractedFile]:
    """Lee todas las entradas; un fallo en cualquiera aborta la extracción."""

    files: list[ExtractedFile] = []
    for info in reader.infolist():
        try:
            with reader.open(info) as fh:
                content = fh.read()
        except (zipfile.BadZipFile, zipfile.LargeZipFile, RuntimeError, OSError, ValueError) as exc:
            raise ArchiveFormatError(module_path, version, f"{info.filename}: {exc}") from exc
        files.append(ExtractedFile(name=info.filename, content=content))
    return files


def open_archive(target: Path, module_path: str, version: str) -> tuple[zipfile.ZipFile, list[ExtractedFile]]:
    try:
        reader = zipfile.ZipFile(target)
    except zipfile.BadZipFile as exc:
        raise ArchiveFormatError(module_path, version, str(exc)) from exc
    except OSError as exc:
        raise FilesystemError(str(target), f"cannot open archive: {exc}") from exc

    try:
        files = read_entries(reader, module_path, version)
    except BaseException:
        reader.close()
        raise
    return reader, files


async def save_archive(download: ArchiveDownload, target: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Vuelca el cuerpo a `target` y devuelve el número de bytes escritos."""

    written = 0
    try:
        with target.open("wb") as fh:
            async for chunk in download.iter_chunks(chunk_size):
                fh.write(chunk)
                written += len(chunk)
    except OSError as exc:
        raise FilesystemError(str(target), f"cannot write archive: {exc}") from exc
    finally:
        await download.aclose()
    return written


async def fetch_and_extract(
    download: ArchiveDownload,
    scratch_dir: Path,
    module_path: str,
    version: str,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ExtractedArchive:
    target = scratch_dir / ARCHIVE_NAME
    size = await save_archive(download, target, chunk_size)
    logger.debug("saved %s@%s archive (%d bytes) to %s", module_path, version, size, target)

    # Fuera del event loop.
    reader, files = await asyncio.to_thread(open_archive, target, module_path, version)
    return ExtractedArchive(path=target, reader=reader, files=files)
