"""Detector de licencias por defecto.

Implementación:
- Busca archivos de licencia (LICENSE, LICENCE, COPYING, ...) en la raíz del
  módulo dentro del zip.
- Clasifica el texto por frases características de cada licencia.

Notas:
- Un archivo con texto no reconocido se reporta con `types=[]`.
- `overrides` permite fijar los tipos de un módulo conocido
  (`{"<module>": ["MIT"]}`), por encima de la clasificación. La clave puede
  ir escapada o sin escapar.
- Las entradas del zip usan la ruta del módulo sin escapar.
"""

from __future__ import annotations

import posixpath
import re
import zipfile
from typing import Mapping

from core.domain.models import License
from core.domain.module_path import display_path
from core.logging import get_logger

logger = get_logger(__name__)

MAX_LICENSE_SIZE = 1024 * 1024

_LICENSE_FILE_RE = re.compile(
    r"^(?:un)?(?:licen[cs]e|copying)(?:[.-].*)?$",
    re.IGNORECASE,
)

# Orden importante: la primera coincidencia gana.
_CLASSIFIERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Apache-2.0", ("apache license", "version 2.0")),
    ("MPL-2.0", ("mozilla public license", "2.0")),
    ("AGPL-3.0", ("gnu affero general public license",)),
    ("LGPL-3.0", ("gnu lesser general public license", "version 3")),
    ("LGPL-2.1", ("gnu lesser general public license", "version 2.1")),
    ("GPL-3.0", ("gnu general public license", "version 3")),
    ("GPL-2.0", ("gnu general public license", "version 2")),
    ("BSD-3-Clause", ("redistribution and use in source and binary forms", "neither the name")),
    ("BSD-2-Clause", ("redistribution and use in source and binary forms",)),
    ("MIT", ("permission is hereby granted, free of charge",)),
    ("ISC", ("permission to use, copy, modify, and/or distribute this software",)),
    ("Unlicense", ("this is free and unencumbered software released into the public domain",)),
    ("CC0-1.0", ("cc0 1.0 universal",)),
)


def classify_license(text: str) -> list[str]:
    normalized = " ".join(text.lower().split())
    for spdx, phrases in _CLASSIFIERS:
        if all(phrase in normalized for phrase in phrases):
            return [spdx]
    return []


def is_license_file(name: str) -> bool:
    return bool(_LICENSE_FILE_RE.match(posixpath.basename(name)))


class FileLicenseDetector:
    """Implementa `core.interfaces.licenses.LicenseDetector`."""

    def __init__(
        self,
        module_path: str,
        version: str,
        reader: zipfile.ZipFile,
        overrides: Mapping[str, list[str]] | None = None,
    ) -> None:
        self._module_path = module_path
        self._version = version
        self._reader = reader
        self._overrides = overrides or {}
        self._prefix = f"{display_path(module_path)}@{version}/"

    def _root_license_files(self) -> list[zipfile.ZipInfo]:
        found: list[zipfile.ZipInfo] = []
        for info in self._reader.infolist():
            if info.is_dir() or not info.filename.startswith(self._prefix):
                continue
            rel = info.filename[len(self._prefix) :]
            if "/" in rel or not is_license_file(rel):
                continue
            if info.file_size > MAX_LICENSE_SIZE:
                logger.warning("skipping oversized license file %s", info.filename)
                continue
            found.append(info)
        return found

    def module_licenses(self) -> list[License]:
        licenses: list[License] = []
        override = self._overrides.get(self._module_path)
        if override is None:
            override = self._overrides.get(display_path(self._module_path))
        for info in self._root_license_files():
            text = self._reader.read(info).decode("utf-8", errors="replace")
            types = list(override) if override is not None else classify_license(text)
            licenses.append(
                License(
                    types=types,
                    file_path=info.filename[len(self._prefix) :],
                    contents=text,
                )
            )
        return sorted(licenses, key=lambda lic: lic.file_path)
