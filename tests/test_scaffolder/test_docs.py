"""Tests for AGENTS.md rendering (create_valet_app.scaffolder.docs)."""

from __future__ import annotations

import pytest

from create_valet_app.scaffolder.docs import (
    DOC_PATH,
    agent_commands,
    apply_docs,
    definition_of_done,
    features_list,
    lang_note,
    render_agents_doc,
)
from create_valet_app.scaffolder.errors import DocTemplateMissing
from create_valet_app.scaffolder.templates import TemplateRepository

PLACEHOLDERS = ("{{LANG_NOTE}}", "{{AGENT_COMMANDS}}", "{{FEATURES_LIST}}", "{{DOD_LIST}}")


class TestSections:
    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["ts", "js", "hybrid"])
    def test_lang_note_per_kind(self, make_config, kind):
        assert lang_note(make_config(template=kind))

    @pytest.mark.unit
    def test_js_has_no_typecheck_command(self, make_config):
        assert "typecheck" not in agent_commands(make_config(template="js"))

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["ts", "hybrid"])
    def test_typed_kinds_list_typecheck(self, make_config, kind):
        assert "- Typecheck: `npm run -s typecheck:agent`" in agent_commands(
            make_config(template=kind)
        )

    @pytest.mark.unit
    def test_features_list(self, make_config):
        config = make_config(router=False, store=False, minimal=True, alias_token="app")
        assert features_list(config) == (
            "- Router: disabled\n"
            "- Zustand: disabled\n"
            "- Minimal mode: on\n"
            "- Path alias token: `app` (import from `app/...`)"
        )

    @pytest.mark.unit
    def test_definition_of_done(self, make_config):
        assert definition_of_done(make_config(template="js")).startswith(
            "- Typecheck: n/a for JS template."
        )
        assert definition_of_done(make_config()).startswith("- TypeScript typechecks clean.")


class TestRenderAgentsDoc:
    @pytest.mark.unit
    def test_all_placeholders_filled(self, repository, make_config):
        rendered = render_agents_doc(repository.load_doc_template(), make_config())
        for placeholder in PLACEHOLDERS:
            assert placeholder not in rendered
        assert "- Router: enabled" in rendered

    @pytest.mark.unit
    def test_each_placeholder_replaced_once(self, make_config):
        rendered = render_agents_doc("{{LANG_NOTE}}\n{{LANG_NOTE}}\n", make_config())
        assert rendered == "This is a TypeScript template.\n{{LANG_NOTE}}\n"

    @pytest.mark.unit
    def test_missing_placeholder_skipped(self, make_config):
        assert render_agents_doc("# Plain\n", make_config()) == "# Plain\n"


class TestApplyDocs:
    @pytest.mark.unit
    def test_docs_added(self, small_tree, make_config, repository):
        tree = apply_docs(small_tree, make_config(template="js"), repository)
        assert DOC_PATH in tree
        assert "typecheck:agent" not in tree[DOC_PATH]

    @pytest.mark.unit
    def test_docs_disabled(self, small_tree, make_config):
        tree = apply_docs(small_tree.with_file(DOC_PATH, "stale"), make_config(include_docs=False))
        assert DOC_PATH not in tree

    @pytest.mark.unit
    def test_disabled_skips_template_lookup(self, small_tree, make_config, tmp_path):
        missing = TemplateRepository(tmp_path / "nowhere")
        assert apply_docs(small_tree, make_config(include_docs=False), missing) == small_tree

    @pytest.mark.unit
    def test_missing_template_is_fatal(self, small_tree, make_config, tmp_path):
        missing = TemplateRepository(tmp_path / "nowhere")
        with pytest.raises(DocTemplateMissing) as exc_info:
            apply_docs(small_tree, make_config(), missing)
        assert exc_info.value.stage == "docs"
