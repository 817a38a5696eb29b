"""Feature toggle engine.

Maps the resolved ``(router, minimal, store)`` flags onto one of six
reachable tree shapes.  Affected files are replaced wholesale with content
rendered from the variant templates; they are never patched line by line.

=========  =======  =====  ================================================
router     minimal  store  shape
=========  =======  =====  ================================================
off        any      any    DIRECT: entry renders ``App`` without a router,
                           ``App`` renders the landing page, second page
                           removed
on         off      any    ROUTED: skeleton kept as shipped
on         on       any    ROUTED_MINIMAL: one lazily loaded route, second
                           page removed
any        any      off    store directory removed
=========  =======  =====  ================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from jinja2 import TemplateError

from create_valet_app.config import DEFAULT_ALIAS_TOKEN, GenerationConfig, TemplateKind

from .errors import ToggleApplicationFailed
from .specifiers import imports_into
from .templates import TemplateRenderer
from .tree import ProjectTree

SECOND_PAGE_DIR = "src/pages/second"
STORE_DIR = "src/store"


class FeatureShape(str, Enum):
    """Router/minimal combinations that produce distinct trees."""
    DIRECT = "direct"
    ROUTED = "routed"
    ROUTED_MINIMAL = "routed-minimal"

    @classmethod
    def from_flags(cls, router: bool, minimal: bool) -> "FeatureShape":
        if not router:
            return cls.DIRECT
        return cls.ROUTED_MINIMAL if minimal else cls.ROUTED


@dataclass(frozen=True)
class SourceLayout:
    """File locations of the toggled sources for one template flavour."""

    main: str
    app: str
    quickstart: str

    @classmethod
    def for_kind(cls, kind: TemplateKind) -> "SourceLayout":
        ext = "jsx" if kind.is_js else "tsx"
        return cls(
            main=f"src/main.{ext}",
            app=f"src/App.{ext}",
            quickstart=f"src/pages/start/Quickstart.{ext}",
        )


@dataclass(frozen=True)
class FeatureDelta:
    """The writes and deletes implied by one flag combination.

    ``writes`` pairs a tree path with the variant template that supplies its
    full content.
    """

    shape: FeatureShape
    store: bool
    writes: tuple[tuple[str, str], ...]
    deletes: tuple[str, ...]


def resolve_delta(config: GenerationConfig) -> FeatureDelta:
    """Return the ``FeatureDelta`` for *config*."""
    shape = FeatureShape.from_flags(config.router, config.minimal)
    layout = SourceLayout.for_kind(config.template)

    writes: tuple[tuple[str, str], ...]
    deletes: list[str] = []
    if shape is FeatureShape.DIRECT:
        writes = (
            (layout.main, "main_direct.j2"),
            (layout.app, "app_direct.j2"),
            (layout.quickstart, "landing_plain.j2"),
        )
        deletes.append(SECOND_PAGE_DIR)
    elif shape is FeatureShape.ROUTED_MINIMAL:
        writes = (
            (layout.app, "app_routed_minimal.j2"),
            (layout.quickstart, "landing_plain.j2"),
        )
        deletes.append(SECOND_PAGE_DIR)
    else:
        writes = ()

    if not config.store:
        deletes.append(STORE_DIR)

    return FeatureDelta(
        shape=shape,
        store=config.store,
        writes=writes,
        deletes=tuple(deletes),
    )


def reachable_deltas(kind: TemplateKind = TemplateKind.TS) -> list[FeatureDelta]:
    """Every distinct delta for *kind* (six in total)."""
    seen: dict[tuple[FeatureShape, bool], FeatureDelta] = {}
    for router in (True, False):
        for minimal in (False, True):
            for store in (True, False):
                config = GenerationConfig(
                    template=kind, router=router, minimal=minimal, store=store
                )
                delta = resolve_delta(config)
                seen.setdefault((delta.shape, delta.store), delta)
    return list(seen.values())


def apply_feature_toggles(
    tree: ProjectTree,
    config: GenerationConfig,
    renderer: TemplateRenderer | None = None,
) -> ProjectTree:
    """Return *tree* reshaped to the delta selected by *config*.

    Raises:
        ToggleApplicationFailed: If a variant template cannot be rendered or
            a remaining source still imports a removed directory.
    """
    renderer = renderer or TemplateRenderer()
    delta = resolve_delta(config)
    context = {"typed": not config.template.is_js}

    updates: dict[str, str] = {}
    for path, template_name in delta.writes:
        try:
            updates[path] = renderer.render(template_name, context)
        except TemplateError as exc:
            raise ToggleApplicationFailed(
                f"Could not render {template_name} for {path}: {exc}"
            ) from exc

    result = tree.with_files(updates)
    for directory in delta.deletes:
        result = result.without_dir(directory)

    check_no_dangling_imports(result, delta.deletes)
    return result


def check_no_dangling_imports(
    tree: ProjectTree,
    removed: tuple[str, ...],
    alias: str = DEFAULT_ALIAS_TOKEN,
) -> None:
    """Fail if any source in *tree* imports one of the *removed* directories."""
    problems: list[str] = []
    for directory in removed:
        for path, text in tree.source_files():
            for spec in imports_into(text, path, directory, alias):
                problems.append(f"{path}:{spec.line} imports '{spec.value}'")
    if problems:
        raise ToggleApplicationFailed(
            "Removed directories are still imported: " + "; ".join(problems)
        )
