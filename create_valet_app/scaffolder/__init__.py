"""Template composition engine.

Takes a template kind and a set of feature flags and produces a finished,
internally consistent project tree: patched ``package.json``, exactly one of
the reachable router/minimal/store shapes, a consistent import alias, and an
optional ``AGENTS.md``.

Quick usage::

    from create_valet_app.config import GenerationConfig, TemplateKind
    from create_valet_app.scaffolder import ProjectGenerator

    config = GenerationConfig(template=TemplateKind.TS, minimal=True)
    result = await ProjectGenerator(config).generate("./my-app")
"""

from create_valet_app.scaffolder.errors import (
    AliasVerificationFailed,
    DocTemplateMissing,
    GenerationError,
    ManifestInvalid,
    PreconditionFailed,
    StageWarning,
    TargetNotEmpty,
    ToggleApplicationFailed,
    UnknownTemplate,
)
from create_valet_app.scaffolder.generator import GenerationResult, ProjectGenerator, compose
from create_valet_app.scaffolder.templates import TemplateRenderer, TemplateRepository, TemplateSet
from create_valet_app.scaffolder.toggles import FeatureDelta, FeatureShape, resolve_delta
from create_valet_app.scaffolder.tree import ProjectTree

__all__ = [
    "AliasVerificationFailed",
    "DocTemplateMissing",
    "FeatureDelta",
    "FeatureShape",
    "GenerationError",
    "GenerationResult",
    "ManifestInvalid",
    "PreconditionFailed",
    "ProjectGenerator",
    "ProjectTree",
    "StageWarning",
    "TargetNotEmpty",
    "TemplateRenderer",
    "TemplateRepository",
    "TemplateSet",
    "ToggleApplicationFailed",
    "UnknownTemplate",
    "compose",
    "resolve_delta",
]
