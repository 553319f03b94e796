"""Errores del Core.

Todas las excepciones heredan de `ModdocError` para que la CLI (u otro
entrypoint) pueda capturarlas en un solo punto. Cada una lleva el contexto
(módulo, versión, URL o ruta) necesario para diagnosticar el fallo.
"""

from __future__ import annotations


class ModdocError(Exception):
    """Base de todos los errores del proyecto."""


class ResolutionExhausted(ModdocError):
    """Ningún prefijo del import path es un módulo servido por el proxy."""

    def __init__(self, import_path: str, version: str | None = None) -> None:
        self.import_path = import_path
        self.version = version
        suffix = f"@{version}" if version else ""
        super().__init__(f"no module found for import path {import_path}{suffix}")


class TransportError(ModdocError):
    """Fallo de red/conexión contra el proxy."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")


class RequestTimeout(TransportError):
    """El deadline global de la petición expiró."""


class ArchiveFormatError(ModdocError):
    """El zip descargado no es válido o una entrada no se puede leer."""

    def __init__(self, module_path: str, version: str, message: str) -> None:
        self.module_path = module_path
        self.version = version
        super().__init__(f"{module_path}@{version}: invalid archive: {message}")


class FilesystemError(ModdocError):
    """Fallo creando/escribiendo el directorio temporal."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class BuildError(ModdocError):
    """El constructor de documentación falló."""

    def __init__(self, module_path: str, version: str, message: str) -> None:
        self.module_path = module_path
        self.version = version
        super().__init__(f"could not build documentation for {module_path}@{version}: {message}")


class InvalidModulePath(ModdocError):
    """Ruta de módulo mal codificada (p.ej. mayúsculas sin escapar)."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"invalid module path {path!r}: {message}")
