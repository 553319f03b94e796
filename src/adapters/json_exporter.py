"""Exportación JSON de la documentación.

Permite persistir/compartir el resultado de `get_doc` sin depender de un
renderizador HTML.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Documentation


def export_documentation_json(*, doc: Documentation, output_path: Path) -> Path:
    """Exporta `Documentation` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = doc.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
