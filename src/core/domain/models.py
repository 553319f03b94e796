"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* es la información de un módulo (archivos,
versiones, licencias, documentación), no *cómo* se obtiene del proxy.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResolvedModule(BaseModel):
    """Resultado de la resolución import path -> módulo.

    `module_root` es el prefijo más largo del import path que el proxy sirve;
    `subpackage` el resto (vacío si el import path es la raíz del módulo).
    """

    model_config = ConfigDict(frozen=True)

    module_root: str = Field(..., min_length=1)
    subpackage: str = Field(default="")

    @property
    def import_path(self) -> str:
        if not self.subpackage:
            return self.module_root
        return f"{self.module_root}/{self.subpackage}"


class ExtractedFile(BaseModel):
    """Una entrada del zip: nombre completo dentro del archivo y bytes."""

    name: str
    content: bytes


class VersionInfo(BaseModel):
    """Payload de `@v/<version>.info` y `@latest`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: str = Field(..., alias="Version")
    time: datetime | None = Field(default=None, alias="Time")


class VersionMetadata(BaseModel):
    """Metadatos por versión (enriquecimiento, puede venir vacío)."""

    published_time: datetime | None = None
    latest_version: str | None = None


class License(BaseModel):
    types: list[str] = Field(
        default_factory=list,
        description="Identificadores SPDX detectados (vacío si no se reconoce).",
    )
    file_path: str = Field(..., description="Ruta del archivo relativa a la raíz del módulo.")
    contents: str = ""


class Example(BaseModel):
    id: str = ""
    name: str = ""
    doc: str = ""
    code: str = ""
    output: str = ""


class Value(BaseModel):
    """Una constante/variable o un grupo de ellas."""

    signature_string: str = ""
    name: str = ""
    value: str = ""
    type: str = ""
    doc: str = ""
    is_group: bool = False
    values: list[Value] = Field(default_factory=list)


class Func(BaseModel):
    """Función o método."""

    id: str = Field(default="", description="Nombre, o Tipo+Nombre para métodos.")
    name: str
    signature_string: str = ""
    doc: str = ""
    method_receiver_string: str = ""
    examples: list[Example] = Field(default_factory=list)


class TypeField(BaseModel):
    name: str
    type: str = ""
    doc: str = ""
    struct_tag: str = ""


class Type(BaseModel):
    name: str
    doc: str = ""
    type: str = ""
    signature_string: str = ""
    fields: list[TypeField] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)
    methods: list[Func] = Field(default_factory=list)
    funcs: list[Func] = Field(default_factory=list)
    constants: list[Value] = Field(default_factory=list)
    variables: list[Value] = Field(default_factory=list)


class File(BaseModel):
    name: str


class Subdir(BaseModel):
    """Posible sub-paquete; quien renderiza sabe cómo enlazarlo."""

    name: str
    synopsis: str = ""
    link: str = ""


class Documentation(BaseModel):
    """Agregado principal: la página completa de un paquete de un módulo.

    El constructor de documentación rellena la parte estructural; el servicio
    añade versiones, licencias, raíz del módulo y metadatos de publicación.
    """

    package_name: str = ""
    module_version: str = ""
    published_time: datetime | None = None
    latest: bool = False
    versions: list[str] = Field(default_factory=list)
    module_root: str = ""
    import_path: str = ""
    package_doc: str = ""
    examples: list[Example] = Field(default_factory=list)
    constants: list[Value] = Field(default_factory=list)
    variables: list[Value] = Field(default_factory=list)
    funcs: list[Func] = Field(default_factory=list)
    types: list[Type] = Field(default_factory=list)
    files: list[File] = Field(default_factory=list)
    subdirs: list[Subdir] = Field(default_factory=list)
    nav_links: list[str] = Field(default_factory=list)
    go_mod: str = ""
    readme: str = ""
    licenses: list[License] = Field(default_factory=list)
    create_time: datetime = Field(default_factory=_utcnow)
    update_time: datetime = Field(default_factory=_utcnow)
