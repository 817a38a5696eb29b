"""Unit tests for utility functions (create_valet_app.utils).

Tests cover:
- normalize_package_name (rule output and fallback)
- parse_json_object / dump_json
- ensure_dir / is_empty_or_missing
- Rich output helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from create_valet_app.utils import (
    DEFAULT_PACKAGE_NAME,
    create_progress,
    dump_json,
    ensure_dir,
    is_empty_or_missing,
    normalize_package_name,
    parse_json_object,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# normalize_package_name
# ---------------------------------------------------------------------------


class TestNormalizePackageName:
    @pytest.mark.unit
    def test_spaces_and_punctuation(self):
        assert normalize_package_name("My Cool App!") == "my-cool-app-"

    @pytest.mark.unit
    def test_uses_basename(self):
        assert normalize_package_name("apps/nested/Dash.Board") == "dash.board"

    @pytest.mark.unit
    def test_path_object(self):
        assert normalize_package_name(Path("/tmp/Valet_App")) == "valet_app"

    @pytest.mark.unit
    def test_allowed_characters_kept(self):
        assert normalize_package_name("a-b_c.d9") == "a-b_c.d9"

    @pytest.mark.unit
    def test_each_invalid_char_replaced(self):
        # No collapsing: one hyphen per invalid character.
        assert normalize_package_name("a  b") == "a--b"

    @pytest.mark.unit
    def test_non_ascii_replaced(self):
        assert normalize_package_name("café") == "caf-"

    @pytest.mark.unit
    def test_empty_falls_back(self):
        assert normalize_package_name("") == DEFAULT_PACKAGE_NAME

    @pytest.mark.unit
    def test_all_invalid_falls_back(self):
        assert normalize_package_name("!!!") == DEFAULT_PACKAGE_NAME

    @pytest.mark.unit
    def test_only_separators_fall_back(self):
        assert normalize_package_name("-_.") == DEFAULT_PACKAGE_NAME


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------


class TestJsonHelpers:
    @pytest.mark.unit
    def test_parse_object(self):
        assert parse_json_object('{"a": 1}') == {"a": 1}

    @pytest.mark.unit
    def test_parse_rejects_array(self):
        with pytest.raises(TypeError):
            parse_json_object("[1, 2]")

    @pytest.mark.unit
    def test_parse_rejects_garbage(self):
        with pytest.raises(json.JSONDecodeError):
            parse_json_object("{nope")

    @pytest.mark.unit
    def test_dump_format(self):
        assert dump_json({"a": {"b": [1]}}) == '{\n  "a": {\n    "b": [\n      1\n    ]\n  }\n}\n'

    @pytest.mark.unit
    def test_dump_keeps_unicode(self):
        assert "Loading…" in dump_json({"text": "Loading…"})


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileSystemHelpers:
    @pytest.mark.unit
    def test_ensure_dir_creates(self, tmp_path):
        path = ensure_dir(tmp_path / "a" / "b")
        assert path.is_dir()

    @pytest.mark.unit
    def test_missing_is_empty(self, tmp_path):
        assert is_empty_or_missing(tmp_path / "absent")

    @pytest.mark.unit
    def test_empty_dir(self, tmp_path):
        assert is_empty_or_missing(tmp_path)

    @pytest.mark.unit
    def test_non_empty_dir(self, tmp_path):
        (tmp_path / "file.txt").write_text("x", encoding="utf-8")
        assert not is_empty_or_missing(tmp_path)

    @pytest.mark.unit
    def test_file_is_not_empty_dir(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x", encoding="utf-8")
        assert not is_empty_or_missing(f)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_helpers_use_console(self):
        with patch("create_valet_app.utils.console") as mock_console:
            print_success("ok")
            print_error("bad")
            print_warning("careful")
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        assert "[bold green]ok[/bold green]" in printed
        assert "[bold red]bad[/bold red]" in printed
        assert "[bold yellow]careful[/bold yellow]" in printed

    @pytest.mark.unit
    def test_summary_table(self):
        with patch("create_valet_app.utils.console") as mock_console:
            print_summary_table({"Package": "my-app"}, title="Result")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "Result"
        assert table.row_count == 1

    @pytest.mark.unit
    def test_create_progress(self):
        progress = create_progress()
        assert len(progress.columns) == 3
