"""Constructor de documentación por defecto (Go, basado en líneas).

No es un parser de Go: reconoce la cláusula `package`, los comentarios de
documentación y las declaraciones exportadas de nivel superior escritas en
el estilo de `gofmt`. Suficiente para una página de referencia; un builder
con análisis completo puede sustituirlo vía `DocumentationBuilder`.

Las entradas del zip del proxy tienen la forma `<module>@<version>/<ruta>`,
con la ruta del módulo sin escapar (`github.com/BurntSushi/toml@v1.3.2/...`).
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from typing import Sequence

from core.domain.models import (
    Documentation,
    ExtractedFile,
    File,
    Func,
    Subdir,
    Type,
    TypeField,
    Value,
)
from core.domain.module_path import display_path
from core.errors import BuildError

_PACKAGE_RE = re.compile(r"^package\s+(\w+)")
_FUNC_RE = re.compile(r"^func\s+(?:\((?P<recv>[^)]*)\)\s*)?(?P<name>[A-Z]\w*)\s*(?P<rest>[\[(].*?)\s*\{?\s*$")
_TYPE_RE = re.compile(r"^type\s+(?P<name>[A-Z]\w*)\s+(?P<rest>.*?)\s*$")
_VALUE_RE = re.compile(r"^(?P<kind>const|var)\s+(?P<name>[A-Z]\w*)\b(?P<rest>.*)$")
_GROUP_RE = re.compile(r"^(?P<kind>const|var)\s*\(\s*$")
_GROUP_ITEM_RE = re.compile(r"^\s+(?P<name>[A-Z]\w*)\b(?P<rest>.*)$")
_FIELD_RE = re.compile(r"^\s+(?P<name>[A-Z]\w*)\s+(?P<type>[^`/]+?)\s*(?:`(?P<tag>[^`]*)`)?\s*(?://\s*(?P<doc>.*))?$")
_README_NAMES = ("README.md", "README", "README.txt", "README.markdown", "readme.md")


def _comment_text(lines: list[str]) -> str:
    return "\n".join(line[2:].removeprefix(" ") for line in lines).strip()


def synopsis(doc: str) -> str:
    """First sentence of a doc comment."""

    text = " ".join(doc.split("\n\n", 1)[0].split())
    match = re.search(r"\.(\s|$)", text)
    if match:
        return text[: match.start() + 1]
    return text


def _receiver_type(recv: str) -> str:
    parts = recv.strip().split()
    raw = parts[-1] if parts else ""
    return raw.lstrip("*").split("[", 1)[0]


@dataclass
class _GoFile:
    name: str
    source: str
    package: str = ""
    package_doc: str = ""
    funcs: list[Func] = field(default_factory=list)
    methods: list[Func] = field(default_factory=list)
    types: list[Type] = field(default_factory=list)
    constants: list[Value] = field(default_factory=list)
    variables: list[Value] = field(default_factory=list)


def parse_go_file(name: str, source: str) -> _GoFile:
    parsed = _GoFile(name=name, source=source)
    lines = source.splitlines()
    comment: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if line.startswith("//"):
            comment.append(line)
            i += 1
            continue

        doc = _comment_text(comment)
        comment = []

        if not parsed.package:
            match = _PACKAGE_RE.match(line)
            if match:
                parsed.package = match.group(1)
                parsed.package_doc = doc
                i += 1
                continue

        match = _FUNC_RE.match(line)
        if match:
            name_ = match.group("name")
            recv = match.group("recv")
            signature = stripped.rstrip("{").rstrip()
            if recv:
                type_name = _receiver_type(recv)
                parsed.methods.append(
                    Func(
                        id=f"{type_name}.{name_}",
                        name=name_,
                        signature_string=signature,
                        doc=doc,
                        method_receiver_string=recv.strip(),
                    )
                )
            else:
                parsed.funcs.append(Func(id=name_, name=name_, signature_string=signature, doc=doc))
            i += 1
            continue

        match = _TYPE_RE.match(line)
        if match:
            rest = match.group("rest")
            decl = Type(
                name=match.group("name"),
                doc=doc,
                type=rest.split()[0].split("{")[0] if rest else "",
                signature_string=stripped,
            )
            if rest.endswith("{"):
                body = [stripped]
                i += 1
                while i < len(lines) and lines[i].strip() != "}":
                    body.append(lines[i])
                    field_match = _FIELD_RE.match(lines[i])
                    if field_match and decl.type == "struct":
                        decl.fields.append(
                            TypeField(
                                name=field_match.group("name"),
                                type=field_match.group("type").strip(),
                                struct_tag=field_match.group("tag") or "",
                                doc=field_match.group("doc") or "",
                            )
                        )
                    i += 1
                body.append("}")
                decl.signature_string = "\n".join(body)
            parsed.types.append(decl)
            i += 1
            continue

        match = _VALUE_RE.match(line)
        if match:
            value = Value(
                name=match.group("name"),
                signature_string=stripped,
                doc=doc,
                value=match.group("rest").partition("=")[2].strip(),
                type=match.group("rest").partition("=")[0].strip(),
            )
            target = parsed.constants if match.group("kind") == "const" else parsed.variables
            target.append(value)
            i += 1
            continue

        match = _GROUP_RE.match(line)
        if match:
            group = Value(is_group=True, doc=doc, signature_string=stripped)
            body = [stripped]
            i += 1
            while i < len(lines) and lines[i].strip() != ")":
                body.append(lines[i])
                item = _GROUP_ITEM_RE.match(lines[i])
                if item:
                    rest = item.group("rest")
                    group.values.append(
                        Value(
                            name=item.group("name"),
                            value=rest.partition("=")[2].split("//")[0].strip(),
                            type=rest.partition("=")[0].strip(),
                        )
                    )
                i += 1
            body.append(")")
            group.signature_string = "\n".join(body)
            if group.values:
                group.name = group.values[0].name
                target = parsed.constants if match.group("kind") == "const" else parsed.variables
                target.append(group)
            i += 1
            continue

        i += 1
    return parsed


def _decode(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


class SourceDocBuilder:
    """Implementa `core.interfaces.builder.DocumentationBuilder`."""

    def build(
        self,
        import_path: str,
        version: str,
        subpackage: str,
        files: Sequence[ExtractedFile],
    ) -> Documentation:
        module_root = import_path
        if subpackage:
            module_root = import_path[: len(import_path) - len(subpackage)].rstrip("/")
        shown_root = display_path(module_root)
        shown_path = display_path(import_path)
        prefix = f"{shown_root}@{version}/"

        tree: dict[str, bytes] = {}
        for entry in files:
            if entry.name.endswith("/"):
                continue
            rel = entry.name[len(prefix) :] if entry.name.startswith(prefix) else entry.name
            tree[rel] = entry.content

        pkg_dir = display_path(subpackage.strip("/"))
        in_dir = {
            rel: content
            for rel, content in tree.items()
            if posixpath.dirname(rel) == pkg_dir
        }
        if pkg_dir and not any(rel.startswith(pkg_dir + "/") for rel in tree):
            raise BuildError(module_root, version, f"package directory {pkg_dir!r} not found in module")

        go_sources = sorted(
            rel for rel in in_dir if rel.endswith(".go") and not rel.endswith("_test.go")
        )
        parsed = [parse_go_file(posixpath.basename(rel), _decode(in_dir[rel])) for rel in go_sources]

        doc = Documentation(
            module_version=version,
            module_root=shown_root,
            import_path=shown_path,
            files=[File(name=p.name) for p in parsed],
        )

        doc_file = next((p for p in parsed if p.name == "doc.go" and p.package_doc), None)
        for p in parsed:
            if p.package and not doc.package_name:
                doc.package_name = p.package
            if doc_file is None and p.package_doc and not doc.package_doc:
                doc.package_doc = p.package_doc
        if doc_file is not None:
            doc.package_doc = doc_file.package_doc

        types = {t.name: t for p in parsed for t in p.types}
        for p in parsed:
            doc.funcs.extend(p.funcs)
            doc.constants.extend(p.constants)
            doc.variables.extend(p.variables)
            for method in p.methods:
                owner = types.get(_receiver_type(method.method_receiver_string))
                if owner is not None:
                    owner.methods.append(method)
        doc.types = sorted(types.values(), key=lambda t: t.name)
        doc.funcs.sort(key=lambda f: f.name)

        doc.subdirs = self._subdirs(tree, pkg_dir, shown_path)
        doc.nav_links = self._nav_links(shown_root, pkg_dir)
        doc.go_mod = _decode(tree.get("go.mod", b""))
        doc.readme = self._readme(tree, pkg_dir)
        return doc

    @staticmethod
    def _subdirs(tree: dict[str, bytes], pkg_dir: str, import_path: str) -> list[Subdir]:
        base = pkg_dir + "/" if pkg_dir else ""
        packages: dict[str, str] = {}
        for rel, content in sorted(tree.items()):
            directory = posixpath.dirname(rel)
            if not rel.endswith(".go") or rel.endswith("_test.go"):
                continue
            if not directory.startswith(base) or directory == pkg_dir:
                continue
            name = directory[len(base) :]
            if "testdata" in name.split("/"):
                continue
            parsed = parse_go_file(posixpath.basename(rel), _decode(content))
            if not packages.get(name):
                packages[name] = synopsis(parsed.package_doc)
        return [
            Subdir(name=name, synopsis=packages[name], link=f"{import_path}/{name}")
            for name in sorted(packages)
        ]

    @staticmethod
    def _nav_links(module_root: str, pkg_dir: str) -> list[str]:
        links = [module_root]
        current = module_root
        for part in pkg_dir.split("/") if pkg_dir else []:
            current = f"{current}/{part}"
            links.append(current)
        return links

    @staticmethod
    def _readme(tree: dict[str, bytes], pkg_dir: str) -> str:
        for directory in (pkg_dir, ""):
            for name in _README_NAMES:
                rel = posixpath.join(directory, name) if directory else name
                if rel in tree:
                    return _decode(tree[rel])
        return ""
