"""AGENTS.md rendering.

Fills the four placeholders of the shared ``AGENTS.base.md`` template from the
resolved generation flags.  Each placeholder is replaced once; a placeholder
missing from the template is simply left out.
"""

from __future__ import annotations

from create_valet_app.config import GenerationConfig, TemplateKind

from .templates import TemplateRepository
from .tree import ProjectTree

DOC_PATH = "AGENTS.md"

LANG_NOTES: dict[TemplateKind, str] = {
    TemplateKind.TS: "This is a TypeScript template.",
    TemplateKind.JS: "This is a JavaScript-only template; there is no typecheck step.",
    TemplateKind.HYBRID: (
        "This is a hybrid template: TypeScript by default, JavaScript files allowed."
    ),
}


def lang_note(config: GenerationConfig) -> str:
    return LANG_NOTES[config.template]


def agent_commands(config: GenerationConfig) -> str:
    lines = [
        "- Lint: `npm run -s lint:agent`",
        "- Fix lint: `npm run -s lint:fix:agent`",
    ]
    if not config.template.is_js:
        lines.append("- Typecheck: `npm run -s typecheck:agent`")
    lines.extend([
        "- Format check: `npm run -s format:agent`",
        "- Format write: `npm run -s format:fix:agent`",
        "- Build: `npm run -s build:agent`",
    ])
    return "\n".join(lines)


def features_list(config: GenerationConfig) -> str:
    alias = config.alias_token
    return "\n".join([
        f"- Router: {'enabled' if config.router else 'disabled'}",
        f"- Zustand: {'enabled' if config.store else 'disabled'}",
        f"- Minimal mode: {'on' if config.minimal else 'off'}",
        f"- Path alias token: `{alias}` (import from `{alias}/...`)",
    ])


def definition_of_done(config: GenerationConfig) -> str:
    first = (
        "- Typecheck: n/a for JS template."
        if config.template.is_js
        else "- TypeScript typechecks clean."
    )
    return "\n".join([
        first,
        "- Build succeeds.",
        "- Lint/format clean or auto-fixed.",
    ])


def render_agents_doc(base: str, config: GenerationConfig) -> str:
    """Substitute every placeholder in *base* once."""
    substitutions = (
        ("{{LANG_NOTE}}", lang_note(config)),
        ("{{AGENT_COMMANDS}}", agent_commands(config)),
        ("{{FEATURES_LIST}}", features_list(config)),
        ("{{DOD_LIST}}", definition_of_done(config)),
    )
    rendered = base
    for placeholder, value in substitutions:
        rendered = rendered.replace(placeholder, value, 1)
    return rendered


def apply_docs(
    tree: ProjectTree,
    config: GenerationConfig,
    repository: TemplateRepository | None = None,
) -> ProjectTree:
    """Add or remove ``AGENTS.md`` according to ``config.include_docs``.

    Raises:
        DocTemplateMissing: If docs are requested and the template is
            unreadable.
    """
    if not config.include_docs:
        return tree.without(DOC_PATH)
    repository = repository or TemplateRepository()
    base = repository.load_doc_template()
    return tree.with_file(DOC_PATH, render_agents_doc(base, config))
