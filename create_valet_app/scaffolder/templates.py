"""Template assets for project scaffolding.

Two kinds of assets ship with the package:

* **Skeletons** -- complete starter projects under ``skeletons/<kind>/``,
  copied verbatim as the base of every generated project, plus the shared
  ``skeletons/AGENTS.base.md`` documentation template.
* **Variant templates** -- Jinja2 ``.j2`` files under
  ``scaffolder/templates/`` holding the whole-file replacements used by the
  feature toggle engine.  Each renders in a JS or TS flavour.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from create_valet_app.config import TemplateKind

from .errors import DocTemplateMissing, UnknownTemplate
from .tree import ProjectTree


# ---------------------------------------------------------------------------
# Asset directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_DEFAULT_SKELETON_DIR = Path(__file__).parent.parent / "skeletons"

DOC_TEMPLATE_NAME = "AGENTS.base.md"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 variant templates used for whole-file replacements.

    Output is returned as text; the toggle engine places it into a
    ``ProjectTree``.  Sources are JSX, so autoescaping stays off.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render the variant *name* (e.g. ``"main_direct.j2"``) with *context*."""
        return self.env.get_template(name).render(context)

    def list_templates(self) -> list[str]:
        """Sorted names of the available ``.j2`` variants."""
        return sorted(self.env.list_templates(extensions=["j2"]))


# ---------------------------------------------------------------------------
# TemplateRepository
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateSet:
    """A loaded skeleton: its kind and full file tree."""

    kind: TemplateKind
    tree: ProjectTree


class TemplateRepository:
    """Read-only access to the packaged skeletons and documentation template."""

    def __init__(self, skeleton_dir: str | Path | None = None) -> None:
        if skeleton_dir is None:
            skeleton_dir = _DEFAULT_SKELETON_DIR
        self.skeleton_dir = Path(skeleton_dir)

    def available(self) -> list[TemplateKind]:
        """Kinds whose skeleton directory is present."""
        return [k for k in TemplateKind if (self.skeleton_dir / k.value).is_dir()]

    def load(self, kind: TemplateKind | str) -> TemplateSet:
        """Load the skeleton tree for *kind*.

        Raises:
            UnknownTemplate: If *kind* is not a known template or its
                skeleton directory is missing.
        """
        try:
            resolved = TemplateKind(kind)
        except ValueError:
            choices = " | ".join(k.value for k in TemplateKind)
            raise UnknownTemplate(f"Unknown template '{kind}'. Use: {choices}") from None

        root = self.skeleton_dir / resolved.value
        if not root.is_dir():
            raise UnknownTemplate(f"Template '{resolved.value}' is not installed at {root}")
        return TemplateSet(kind=resolved, tree=ProjectTree.from_directory(root))

    def load_doc_template(self) -> str:
        """Return the shared ``AGENTS.base.md`` text.

        Raises:
            DocTemplateMissing: If the asset cannot be read.
        """
        path = self.skeleton_dir / DOC_TEMPLATE_NAME
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocTemplateMissing(
                f"Documentation template unreadable at {path}: {exc}"
            ) from exc
