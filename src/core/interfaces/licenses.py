"""Contrato del detector de licencias.

El detector recorre el zip completo (no los archivos ya extraídos), por eso
recibe el lector del archivo todavía abierto.
"""

from __future__ import annotations

import zipfile
from typing import Mapping, Protocol, runtime_checkable

from core.domain.models import License


@runtime_checkable
class LicenseDetector(Protocol):
    def module_licenses(self) -> list[License]:
        ...


class LicenseDetectorFactory(Protocol):
    def __call__(
        self,
        module_path: str,
        version: str,
        reader: zipfile.ZipFile,
        overrides: Mapping[str, list[str]] | None = None,
    ) -> LicenseDetector:
        ...
