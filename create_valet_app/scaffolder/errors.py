"""Error taxonomy for the composition engine.

Every fatal condition is a ``GenerationError`` carrying the stage it was
raised in, so the CLI can print a single message naming stage and cause.
Non-fatal conditions are recorded as ``StageWarning`` objects and returned
with the generation result.
"""

from __future__ import annotations

from dataclasses import dataclass


class GenerationError(Exception):
    """Raised when a generation stage fails irrecoverably."""

    stage = "generate"

    def __init__(self, message: str, stage: str | None = None) -> None:
        if stage is not None:
            self.stage = stage
        self.message = message
        super().__init__(f"[{self.stage}] {message}")


class PreconditionFailed(GenerationError):
    """Raised before any write when the inputs cannot be used."""

    stage = "precondition"


class TargetNotEmpty(PreconditionFailed):
    """The target directory exists and already contains files."""


class UnknownTemplate(PreconditionFailed):
    """The requested template kind is not part of the template set."""


class ManifestInvalid(GenerationError):
    """The copied ``package.json`` is missing, unparseable, or not an object."""

    stage = "manifest"


class ToggleApplicationFailed(GenerationError):
    """A feature delta could not be applied or left the tree inconsistent."""

    stage = "toggles"


class AliasVerificationFailed(GenerationError):
    """Source files still import through the default alias after rewriting."""

    stage = "alias"


class DocTemplateMissing(GenerationError):
    """The documentation template could not be read."""

    stage = "docs"


@dataclass(frozen=True)
class StageWarning:
    """A non-fatal condition surfaced to the caller."""

    stage: str
    message: str

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


def alias_rewrite_degraded(path: str, reason: str) -> StageWarning:
    """Warning for a type-resolution config rewritten by literal substitution."""
    return StageWarning(
        stage="alias",
        message=f"{path} is not valid JSON ({reason}); rewrote the path mapping key literally",
    )
