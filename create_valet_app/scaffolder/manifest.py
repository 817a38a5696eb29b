"""Manifest merging for generated projects.

Patches the copied ``package.json``: the package name is derived from the
target directory, the Valet dependency is pinned to the generator's minor
line, and dependencies for disabled features are dropped.
"""

from __future__ import annotations

import copy
import json
from typing import Any

from create_valet_app.config import GenerationConfig
from create_valet_app.utils import dump_json, parse_json_object

from .errors import ManifestInvalid
from .tree import ProjectTree

MANIFEST_PATH = "package.json"

VALET_PACKAGE = "@archway/valet"
ROUTER_PACKAGE = "react-router-dom"
STORE_PACKAGE = "zustand"


class ManifestDescriptor:
    """Mutable view over a parsed ``package.json`` object.

    Unknown keys are preserved and key order is kept on serialisation.
    """

    def __init__(self, data: dict[str, Any]) -> None:
        self.data = data

    @classmethod
    def parse(cls, raw: str) -> "ManifestDescriptor":
        """Parse manifest text.

        Raises:
            ManifestInvalid: If *raw* is not JSON or not an object.
        """
        try:
            return cls(parse_json_object(raw))
        except (json.JSONDecodeError, TypeError) as exc:
            raise ManifestInvalid(f"Template package.json missing or invalid: {exc}") from exc

    def copy(self) -> "ManifestDescriptor":
        return ManifestDescriptor(copy.deepcopy(self.data))

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    @name.setter
    def name(self, value: str) -> None:
        self.data["name"] = value

    @property
    def dependencies(self) -> dict[str, str]:
        deps = self.data.get("dependencies")
        if not isinstance(deps, dict):
            deps = {}
            self.data["dependencies"] = deps
        return deps

    def set_dependency(self, package: str, version_range: str) -> None:
        self.dependencies[package] = version_range

    def remove_dependency(self, package: str) -> bool:
        """Drop *package* from ``dependencies``.

        Returns ``True`` if an entry was removed.  Removing an absent package
        is a no-op.
        """
        deps = self.data.get("dependencies")
        if isinstance(deps, dict) and package in deps:
            del deps[package]
            return True
        return False

    def dumps(self) -> str:
        return dump_json(self.data)


def merge_manifest(
    tree: ProjectTree,
    config: GenerationConfig,
    project_name: str,
    valet_range: str,
) -> ProjectTree:
    """Return *tree* with a patched ``package.json``.

    Args:
        tree: Tree holding the copied template manifest.
        config: Resolved generation flags.
        project_name: Already-normalised package name.
        valet_range: Caret range for ``@archway/valet`` (e.g. ``^0.30.0``).

    Raises:
        ManifestInvalid: If the manifest is missing or malformed.
    """
    if MANIFEST_PATH not in tree:
        raise ManifestInvalid("Template package.json missing or invalid: file not found")
    try:
        raw = tree.read_text(MANIFEST_PATH)
    except UnicodeDecodeError as exc:
        raise ManifestInvalid(f"Template package.json missing or invalid: {exc}") from exc

    manifest = ManifestDescriptor.parse(raw)
    manifest.name = project_name
    manifest.set_dependency(VALET_PACKAGE, valet_range)
    prune_dependencies(manifest, config)
    return tree.with_file(MANIFEST_PATH, manifest.dumps())


def prune_dependencies(manifest: ManifestDescriptor, config: GenerationConfig) -> None:
    """Remove dependencies of disabled features from *manifest* in place."""
    if not config.store:
        manifest.remove_dependency(STORE_PACKAGE)
    if not config.router:
        manifest.remove_dependency(ROUTER_PACKAGE)
