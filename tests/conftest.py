"""Shared pytest fixtures for the create-valet-app test suite.

Provides reusable fixtures for:
- Packaged template assets (repository, renderer, loaded skeletons)
- Generation configs for every template kind
- Small in-memory trees for stage-level tests
- Isolated environment for settings resolution
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from create_valet_app.config import GenerationConfig, Settings, TemplateKind
from create_valet_app.scaffolder.templates import (
    TemplateRenderer,
    TemplateRepository,
    TemplateSet,
)
from create_valet_app.scaffolder.tree import ProjectTree


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CVA_* variables from the developer shell out of every test."""
    monkeypatch.delenv("CVA_VALET_MINOR", raising=False)


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the 0.30 line regardless of package version."""
    return Settings(valet_minor="0.30")


# ---------------------------------------------------------------------------
# Template assets
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def repository() -> TemplateRepository:
    return TemplateRepository()


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture(scope="session")
def ts_template(repository: TemplateRepository) -> TemplateSet:
    return repository.load(TemplateKind.TS)


@pytest.fixture(scope="session")
def js_template(repository: TemplateRepository) -> TemplateSet:
    return repository.load(TemplateKind.JS)


@pytest.fixture(scope="session")
def hybrid_template(repository: TemplateRepository) -> TemplateSet:
    return repository.load(TemplateKind.HYBRID)


@pytest.fixture
def make_config() -> Callable[..., GenerationConfig]:
    """Factory for ``GenerationConfig`` with keyword overrides."""

    def _make(**overrides: Any) -> GenerationConfig:
        return GenerationConfig(**overrides)

    return _make


# ---------------------------------------------------------------------------
# In-memory trees
# ---------------------------------------------------------------------------

SAMPLE_MANIFEST = """{
  "name": "valet-app-ts",
  "private": true,
  "dependencies": {
    "@archway/valet": "^0.29.4",
    "react": "^19.1.0",
    "react-router-dom": "^7.6.0",
    "zustand": "^5.0.5"
  }
}
"""


@pytest.fixture
def sample_manifest() -> str:
    return SAMPLE_MANIFEST


@pytest.fixture
def small_tree() -> ProjectTree:
    """A hand-built tree shaped like the TS skeleton, trimmed to essentials."""
    return ProjectTree({
        "package.json": SAMPLE_MANIFEST,
        "vite.config.ts": (
            'import path from "node:path";\n'
            "export default {\n"
            '  resolve: { alias: { "@": path.resolve(__dirname, "./src") } },\n'
            "};\n"
        ),
        "tsconfig.app.json": (
            '{\n  "compilerOptions": {\n    "baseUrl": ".",\n'
            '    "paths": {\n      "@/*": [\n        "src/*"\n      ]\n    }\n  }\n}\n'
        ),
        "src/main.tsx": 'import { App } from "@/App";\nimport "@/presets/globalPresets";\n',
        "src/App.tsx": (
            'import { Button } from "@archway/valet";\n'
            'const Second = lazy(() => import("@/pages/second/SecondPage"));\n'
        ),
        "src/pages/start/Quickstart.tsx": "export default function QuickstartPage() {}\n",
        "src/pages/second/SecondPage.tsx": "export default function SecondPage() {}\n",
        "src/store/useAppStore.ts": 'import { create } from "zustand";\n',
        "public/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
    })


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """A not-yet-existing target directory."""
    return tmp_path / "my-app"
