"""Import-alias rewriting.

When a non-default alias token is configured, three places must agree:

1. the Vite ``resolve.alias`` key,
2. the ``compilerOptions.paths`` key in ``tsconfig.app.json`` (ts/hybrid) or
   ``jsconfig.json`` (js),
3. every quoted ``@/`` import prefix in ``src/``.

Source rewriting only touches a default token that directly follows a quote
and precedes ``/``, so scoped packages such as ``@archway/valet`` are left
alone.  A verification pass then rescans imports with the specifier scanner.
"""

from __future__ import annotations

import json
import re

from create_valet_app.config import DEFAULT_ALIAS_TOKEN, GenerationConfig, TemplateKind
from create_valet_app.utils import dump_json, parse_json_object

from .errors import AliasVerificationFailed, StageWarning, alias_rewrite_degraded
from .specifiers import specifiers_with_prefix
from .tree import ProjectTree


def vite_config_path(kind: TemplateKind) -> str:
    return "vite.config.js" if kind.is_js else "vite.config.ts"


def type_config_path(kind: TemplateKind) -> str:
    return "jsconfig.json" if kind.is_js else "tsconfig.app.json"


def rewrite_vite_alias(text: str, alias: str, default: str = DEFAULT_ALIAS_TOKEN) -> str:
    """Rename the ``"<default>": path.resolve(...)`` alias key to *alias*."""
    pattern = re.compile(
        r"""(['"])""" + re.escape(default) + r"""(['"])\s*:\s*path\.resolve"""
    )
    return pattern.sub(
        lambda m: f"{m.group(1)}{alias}{m.group(2)}: path.resolve", text
    )


def rewrite_path_mapping(
    text: str, alias: str, default: str = DEFAULT_ALIAS_TOKEN
) -> tuple[str, str | None]:
    """Rename the ``<default>/*`` path mapping to ``<alias>/*``.

    The entry keeps its position and value list.  Returns the new text and,
    when the input was not a JSON object and a literal key swap was used
    instead, the parse error message.

    Raises:
        AliasVerificationFailed: If a mapping for ``<alias>/*`` already exists
            alongside ``<default>/*``.
    """
    old_key = f"{default}/*"
    new_key = f"{alias}/*"
    try:
        data = parse_json_object(text)
    except (json.JSONDecodeError, TypeError) as exc:
        if f'"{old_key}"' in text and f'"{new_key}"' in text:
            raise _mapping_collision(old_key, new_key)
        swapped = text.replace(f'"{old_key}"', f'"{new_key}"')
        return swapped, str(exc)

    options = data.get("compilerOptions")
    paths = options.get("paths") if isinstance(options, dict) else None
    if isinstance(paths, dict) and old_key in paths:
        if new_key in paths:
            raise _mapping_collision(old_key, new_key)
        options["paths"] = {
            (new_key if key == old_key else key): value for key, value in paths.items()
        }
    return dump_json(data), None


def _mapping_collision(old_key: str, new_key: str) -> AliasVerificationFailed:
    return AliasVerificationFailed(
        f"Path mapping '{new_key}' already exists; refusing to replace '{old_key}'"
    )


def rewrite_source_imports(text: str, alias: str, default: str = DEFAULT_ALIAS_TOKEN) -> str:
    """Replace quoted or backquoted ``<default>/`` prefixes with ``<alias>/``."""
    pattern = re.compile(r"""(['"`])""" + re.escape(default) + "/")
    return pattern.sub(lambda m: f"{m.group(1)}{alias}/", text)


def rewrite_alias(
    tree: ProjectTree, config: GenerationConfig
) -> tuple[ProjectTree, list[StageWarning]]:
    """Apply the alias token from *config* across *tree*.

    Returns the rewritten tree and any non-fatal warnings.  A default alias
    returns *tree* unchanged.

    Raises:
        AliasVerificationFailed: If a source still imports through the
            default token after rewriting.
    """
    if not config.alias_customized:
        return tree, []

    alias = config.alias_token
    warnings: list[StageWarning] = []
    updates: dict[str, str] = {}

    vite_path = vite_config_path(config.template)
    if vite_path in tree:
        updates[vite_path] = rewrite_vite_alias(tree.read_text(vite_path), alias)

    type_path = type_config_path(config.template)
    if type_path in tree:
        new_text, error = rewrite_path_mapping(tree.read_text(type_path), alias)
        if error is not None:
            warnings.append(alias_rewrite_degraded(type_path, error))
        updates[type_path] = new_text

    for path, text in tree.source_files():
        rewritten = rewrite_source_imports(text, alias)
        if rewritten != text:
            updates[path] = rewritten

    result = tree.with_files(updates)
    verify_alias(result)
    return result, warnings


def verify_alias(tree: ProjectTree, default: str = DEFAULT_ALIAS_TOKEN) -> None:
    """Fail if any source file still imports through *default*."""
    residual: list[str] = []
    for path, text in tree.source_files():
        for spec in specifiers_with_prefix(text, default):
            residual.append(f"{path}:{spec.line} '{spec.value}'")
    if residual:
        raise AliasVerificationFailed(
            "Default alias imports remain after rewriting: " + ", ".join(residual)
        )
