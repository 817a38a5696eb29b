"""Main scaffolding orchestrator.

Loads a skeleton, runs the composition stages in order, and writes the
result into an empty target directory:

    load template -> .gitignore -> package.json -> feature toggles
    -> import alias -> AGENTS.md -> write

The stages themselves are pure functions over ``ProjectTree`` (see
:func:`compose`); only loading and writing touch the filesystem.  There is
no rollback: a failure while writing leaves whatever was already written.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from create_valet_app.config import GenerationConfig, Settings, valet_minor_range
from create_valet_app.utils import ensure_dir, is_empty_or_missing, normalize_package_name

from .alias import rewrite_alias
from .docs import DOC_PATH, apply_docs
from .errors import (
    PreconditionFailed,
    StageWarning,
    TargetNotEmpty,
    ToggleApplicationFailed,
    UnknownTemplate,
)
from .gitignore import ensure_gitignore
from .manifest import merge_manifest
from .templates import TemplateRenderer, TemplateRepository, TemplateSet
from .toggles import FeatureShape, apply_feature_toggles, resolve_delta
from .tree import ProjectTree, write_tree


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


@dataclass
class GenerationResult:
    """What a finished generation produced."""

    project_root: Path
    package_name: str
    valet_range: str
    shape: FeatureShape
    files: list[str] = field(default_factory=list)
    warnings: list[StageWarning] = field(default_factory=list)

    @property
    def has_docs(self) -> bool:
        return DOC_PATH in self.files


# ---------------------------------------------------------------------------
# Pure pipeline
# ---------------------------------------------------------------------------


def compose(
    template_set: TemplateSet,
    config: GenerationConfig,
    package_name: str,
    valet_range: str,
    *,
    renderer: TemplateRenderer | None = None,
    repository: TemplateRepository | None = None,
) -> tuple[ProjectTree, list[StageWarning]]:
    """Run every composition stage on *template_set* without any writes.

    Returns the final tree and the warnings collected along the way.
    """
    if template_set.kind is not config.template:
        raise UnknownTemplate(
            f"Loaded template '{template_set.kind.value}' does not match "
            f"requested template '{config.template.value}'"
        )

    tree = ensure_gitignore(template_set.tree)
    tree = merge_manifest(tree, config, package_name, valet_range)
    tree = apply_feature_toggles(tree, config, renderer)
    tree, warnings = rewrite_alias(tree, config)
    tree = apply_docs(tree, config, repository)
    return tree, warnings


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Scaffolds one project from a ``GenerationConfig``."""

    def __init__(
        self,
        config: GenerationConfig,
        settings: Settings | None = None,
        repository: TemplateRepository | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.settings = settings if settings is not None else Settings.from_env()
        self.repository = repository or TemplateRepository()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(
        self, target_dir: str | Path, valet_minor: str | None = None
    ) -> GenerationResult:
        """Generate the project into *target_dir*.

        Args:
            target_dir: Directory to create.  It must not exist or be empty.
            valet_minor: Optional explicit Valet minor line (e.g. ``"0.31"``).

        Raises:
            GenerationError: Any fatal stage failure; see
                :mod:`create_valet_app.scaffolder.errors`.
        """
        try:
            valet_range = valet_minor_range(self.settings.resolve_valet_minor(valet_minor))
        except ValueError as exc:
            raise PreconditionFailed(f"Invalid Valet minor line: {exc}") from exc

        target = Path(target_dir).resolve()
        await asyncio.to_thread(self._check_target, target)

        template_set = await asyncio.to_thread(self.repository.load, self.config.template)
        package_name = normalize_package_name(target)

        tree, warnings = await asyncio.to_thread(
            compose,
            template_set,
            self.config,
            package_name,
            valet_range,
            renderer=self.renderer,
            repository=self.repository,
        )

        try:
            await asyncio.to_thread(ensure_dir, target)
            await asyncio.to_thread(write_tree, tree, target)
        except OSError as exc:
            raise ToggleApplicationFailed(
                f"Could not write project files to {target}: {exc}", stage="write"
            ) from exc

        return GenerationResult(
            project_root=target,
            package_name=package_name,
            valet_range=valet_range,
            shape=resolve_delta(self.config).shape,
            files=list(tree),
            warnings=warnings,
        )

    # -- Preconditions -----------------------------------------------------

    @staticmethod
    def _check_target(target: Path) -> None:
        if target.exists() and not target.is_dir():
            raise PreconditionFailed(f"Target '{target}' exists and is not a directory.")
        if not is_empty_or_missing(target):
            raise TargetNotEmpty(f"Target directory '{target}' is not empty.")
