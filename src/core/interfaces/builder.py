"""Contrato del constructor de documentación.

Traduce los archivos extraídos de un módulo en entidades de documentación
(funciones, tipos, valores, ejemplos). El servicio solo lo invoca y luego
completa el resultado con versiones y licencias.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import Documentation, ExtractedFile


@runtime_checkable
class DocumentationBuilder(Protocol):
    def build(
        self,
        import_path: str,
        version: str,
        subpackage: str,
        files: Sequence[ExtractedFile],
    ) -> Documentation:
        """Construye la documentación del paquete `subpackage` del módulo.

        Cualquier excepción se considera un fallo de construcción y el
        servicio la envuelve en `BuildError`.
        """

        ...
