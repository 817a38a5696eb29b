"""Minimal import-specifier scanner for generated JS/TS sources.

Tokenises just enough of the language (comments, string and template
literals, identifiers, punctuation) to find the module specifiers of

* ``import x from "mod"`` / ``export { x } from "mod"``
* ``import "mod"``
* ``import("mod")`` and ``require("mod")``

Specifiers may be quoted with single, double or back quotes; a template
literal containing ``${...}`` is not a static specifier and is skipped.

Strings in any other position (JSX attributes, call arguments) are ignored.
Regular-expression literals are not recognised.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterator
from dataclasses import dataclass

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<string>'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*")
    | (?P<template>`(?:[^`\\]|\\.)*`)
    | (?P<ident>[A-Za-z_$][\w$]*)
    | (?P<punct>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_SKIP = {"ws", "line_comment", "block_comment"}


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int


@dataclass(frozen=True)
class ImportSpecifier:
    """A module specifier found in an import position."""

    value: str
    quote: str
    start: int
    line: int


def _tokens(text: str) -> list[_Token]:
    out: list[_Token] = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup or "punct"
        if kind in _SKIP:
            continue
        out.append(_Token(kind, match.group(), match.start()))
    return out


def _is_literal(tok: _Token) -> bool:
    """Plain strings, and template literals without substitutions."""
    if tok.kind == "string":
        return True
    return tok.kind == "template" and "${" not in tok.text


def iter_import_specifiers(text: str) -> Iterator[ImportSpecifier]:
    """Yield every import/require specifier in *text*, in source order."""
    tokens = _tokens(text)
    for i, tok in enumerate(tokens):
        if not _is_literal(tok):
            continue
        prev = tokens[i - 1] if i >= 1 else None
        prev2 = tokens[i - 2] if i >= 2 else None
        if prev is None:
            continue
        is_import = (
            (prev.kind == "ident" and prev.text in ("from", "import"))
            or (
                prev.text == "("
                and prev2 is not None
                and prev2.kind == "ident"
                and prev2.text in ("import", "require")
            )
        )
        if not is_import:
            continue
        yield ImportSpecifier(
            value=tok.text[1:-1],
            quote=tok.text[0],
            start=tok.start,
            line=text.count("\n", 0, tok.start) + 1,
        )


def specifiers_with_prefix(text: str, alias: str) -> list[ImportSpecifier]:
    """Return specifiers that import through *alias* (``<alias>/...``)."""
    prefix = alias + "/"
    return [s for s in iter_import_specifiers(text) if s.value.startswith(prefix)]


def resolve_specifier(specifier: str, importer: str, alias: str) -> str | None:
    """Map *specifier* to a tree path, or ``None`` for package imports.

    Alias imports resolve against ``src/``; relative imports resolve against
    the directory of *importer*.  Extensions are not added.
    """
    prefix = alias + "/"
    if specifier.startswith(prefix):
        return posixpath.normpath("src/" + specifier[len(prefix):])
    if specifier.startswith(("./", "../")):
        base = posixpath.dirname(importer)
        return posixpath.normpath(posixpath.join(base, specifier))
    return None


def imports_into(text: str, importer: str, directory: str, alias: str) -> list[ImportSpecifier]:
    """Return the specifiers in *text* that point inside *directory*."""
    directory = directory.rstrip("/")
    hits: list[ImportSpecifier] = []
    for spec in iter_import_specifiers(text):
        resolved = resolve_specifier(spec.value, importer, alias)
        if resolved is None:
            continue
        if resolved == directory or resolved.startswith(directory + "/"):
            hits.append(spec)
    return hits
