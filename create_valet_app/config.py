"""create-valet-app configuration.

Typed configuration for a single generation run. ``GenerationConfig`` holds
the fully resolved feature flags consumed by the composition engine;
``Settings`` holds tool-level knobs (currently the Valet minor line) that can
be supplied through the environment or the packaged ``defaults.json``.
"""

from __future__ import annotations

import json
import os
import re
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from create_valet_app import __version__

DEFAULT_ALIAS_TOKEN = "@"

# Scopes used by first-party dependencies. An alias equal to one of these
# would collide with real package specifiers such as ``@archway/valet``.
RESERVED_SCOPES: tuple[str, ...] = ("@archway",)

PACKAGED_DEFAULTS_PATH = Path(__file__).parent / "defaults.json"

_MINOR_RE = re.compile(r"^\d+\.\d+$")


def check_valet_minor(value: str) -> str:
    """Return *value* stripped, or raise ``ValueError`` unless it is ``MAJOR.MINOR``."""
    value = str(value).strip()
    if not _MINOR_RE.match(value):
        raise ValueError(f"valet minor must look like 'MAJOR.MINOR', got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateKind(str, Enum):
    """Closed set of base project skeletons."""
    TS = "ts"
    JS = "js"
    HYBRID = "hybrid"

    @property
    def is_js(self) -> bool:
        return self is TemplateKind.JS


# ---------------------------------------------------------------------------
# Generation config
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """Resolved feature flags for one scaffold run.

    Instances are frozen: the engine reads them but never mutates them.
    """

    model_config = ConfigDict(frozen=True)

    template: TemplateKind = Field(default=TemplateKind.TS)
    router: bool = Field(default=True, description="Include React Router")
    store: bool = Field(default=True, description="Include the Zustand store")
    minimal: bool = Field(
        default=False,
        description="Single reachable page; only meaningful when router is on",
    )
    alias_token: str = Field(
        default=DEFAULT_ALIAS_TOKEN,
        description="Import alias prefix that maps to src/",
    )
    include_docs: bool = Field(default=True, description="Render AGENTS.md")

    @field_validator("alias_token")
    @classmethod
    def _check_alias_token(cls, value: str) -> str:
        token = value.strip()
        if not token:
            raise ValueError("alias token must not be empty")
        if re.search(r"[\s'\"`/\\]", token):
            raise ValueError(
                f"alias token {value!r} must not contain whitespace, quotes or slashes"
            )
        for scope in RESERVED_SCOPES:
            if token == scope or token.startswith(scope + "/"):
                raise ValueError(
                    f"alias token {value!r} collides with reserved scope {scope!r}"
                )
        return token

    @property
    def alias_customized(self) -> bool:
        """``True`` when the alias differs from the default ``@``."""
        return self.alias_token != DEFAULT_ALIAS_TOKEN


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Tool-level settings.

    ``valet_minor`` pins the ``@archway/valet`` line written into generated
    manifests.  When unset, the minor is derived from this package's version.
    """

    valet_minor: Optional[str] = Field(default=None)

    @field_validator("valet_minor")
    @classmethod
    def _check_minor(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return check_valet_minor(value)

    @classmethod
    def load_packaged(cls, path: Path | None = None) -> "Settings":
        """Read ``defaults.json`` shipped with the package.

        A missing file yields default settings.
        """
        target = path or PACKAGED_DEFAULTS_PATH
        if not target.exists():
            return cls()
        data = json.loads(target.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, path: Path | None = None) -> "Settings":
        """Build settings from packaged defaults overlaid with the environment.

        Recognised variables: ``CVA_VALET_MINOR``.
        """
        settings = cls.load_packaged(path)
        if os.environ.get("CVA_VALET_MINOR"):
            return cls(valet_minor=os.environ["CVA_VALET_MINOR"])
        return settings

    def resolve_valet_minor(self, override: str | None = None) -> str:
        """Return the Valet minor line, e.g. ``"0.30"``.

        Precedence: *override*, then ``valet_minor``, then the major.minor
        of this tool's own version.

        Raises:
            ValueError: If *override* is not ``MAJOR.MINOR``.
        """
        if override:
            return check_valet_minor(override)
        if self.valet_minor:
            return self.valet_minor
        parts = __version__.split(".")
        major = parts[0] if parts and parts[0] else "0"
        minor = parts[1] if len(parts) > 1 and parts[1] else "30"
        return f"{major}.{minor}"


def valet_minor_range(minor: str) -> str:
    """Caret range anchored at patch zero of *minor*: ``"0.30"`` -> ``"^0.30.0"``."""
    return f"^{minor}.0"
