"""Module path helpers.

The proxy protocol case-encodes module paths so they survive
case-insensitive filesystems: every upper-case letter is written as `!`
followed by its lower-case form (`github.com/Azure` -> `github.com/!azure`).
Import paths may arrive escaped or in their canonical case; both are
normalized to the escaped form before any request and decoded only for
display.
"""

from __future__ import annotations

import posixpath

from core.errors import InvalidModulePath


def escape_path(path: str) -> str:
    """Case-encode `path` for use in a proxy URL."""

    out: list[str] = []
    for ch in path:
        if ch == "!":
            raise InvalidModulePath(path, "'!' is not allowed in a module path")
        if "A" <= ch <= "Z":
            out.append("!" + ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def decode_path(escaped: str) -> str:
    """Undo the proxy case-encoding.

    Raises `InvalidModulePath` for upper-case letters (they must be escaped)
    or a `!` that is not followed by a lower-case letter.
    """

    out: list[str] = []
    bang = False
    for ch in escaped:
        if bang:
            if not "a" <= ch <= "z":
                raise InvalidModulePath(escaped, "'!' must be followed by a lower-case letter")
            out.append(ch.upper())
            bang = False
            continue
        if ch == "!":
            bang = True
            continue
        if "A" <= ch <= "Z":
            raise InvalidModulePath(escaped, "upper-case letters must be escaped")
        out.append(ch)
    if bang:
        raise InvalidModulePath(escaped, "trailing '!'")
    return "".join(out)


def display_path(escaped: str) -> str:
    """Decoded path, or the raw one when it does not decode."""

    try:
        return decode_path(escaped)
    except InvalidModulePath:
        return escaped


def parent_path(path: str) -> str:
    """Drop the last `/` component; the root degrades to `"."`."""

    parent = posixpath.dirname(path)
    return parent or "."


def normalize_import_path(path: str) -> str:
    """Trim whitespace and slashes and escape upper-case letters.

    `github.com/BurntSushi/toml` becomes `github.com/!burnt!sushi/toml`;
    an already escaped path is returned as is.
    """

    path = path.strip().strip("/")
    if any("A" <= ch <= "Z" for ch in path):
        return escape_path(path)
    return path
