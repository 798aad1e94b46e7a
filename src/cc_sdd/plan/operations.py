"""Classify every planned artifact against the current filesystem.

This module only reads: it stats targets and compares their bytes with the
rendered content. Nothing is written here.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from cc_sdd.config import ResolutionContext
from cc_sdd.errors import FilesystemError
from cc_sdd.manifest.models import PROJECT_MEMORY_CATEGORY, ProcessedArtifact, SourceMode
from cc_sdd.plan.render import render_artifact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileOperation:
    """One planned write and the state of its target.

    ``identical`` is only ever true for an existing target whose bytes equal
    ``content`` exactly. ``error`` is set when the existing target could not
    be inspected; the executor reports it instead of touching the file.
    """

    artifact: ProcessedArtifact
    target: Path
    content: bytes
    existing: bool
    identical: bool
    error: FilesystemError | None = None

    def __post_init__(self) -> None:
        if self.identical and not self.existing:
            raise ValueError(f"{self.target}: identical requires an existing target")

    @property
    def category(self) -> str:
        return self.artifact.category

    @property
    def source_mode(self) -> SourceMode:
        return self.artifact.source_mode

    @property
    def rel_target(self) -> str:
        return self.artifact.target

    @property
    def conflicting(self) -> bool:
        """Existing, readable target with different content."""
        return self.existing and not self.identical and self.error is None

    @property
    def allows_append(self) -> bool:
        return self.category == PROJECT_MEMORY_CATEGORY and self.source_mode != "template-json"


def classify_target(target: Path, content: bytes) -> tuple[bool, bool]:
    """Return (existing, identical) for a target path.

    A target whose parent directory does not exist yet is simply absent.

    Raises:
        FilesystemError: If the target is not a regular file or cannot be read
    """
    if not target.exists():
        return (False, False)
    if not target.is_file():
        raise FilesystemError(target, "exists but is not a regular file")

    try:
        current = target.read_bytes()
    except OSError as e:
        raise FilesystemError(target, f"cannot read existing file ({e.strerror})") from e
    return (True, current == content)


def build_file_operations(
    plan: tuple[ProcessedArtifact, ...],
    context: ResolutionContext,
    *,
    cwd: Path,
    templates_root: Path,
) -> tuple[FileOperation, ...]:
    """Render each artifact and classify its target.

    Args:
        plan: Processed artifacts in manifest order
        context: Resolution context used for content rendering
        cwd: Working root that relative targets are resolved against
        templates_root: Directory that template sources are relative to

    Returns:
        One FileOperation per artifact, in plan order. Targets that exist but
        cannot be read carry the FilesystemError on ``error``.
    """
    operations: list[FileOperation] = []
    for artifact in plan:
        content = render_artifact(artifact, context, templates_root)
        # Absolute targets (global installs) stay absolute under the join
        target = cwd / artifact.target
        error: FilesystemError | None = None
        try:
            existing, identical = classify_target(target, content)
        except FilesystemError as e:
            logger.debug("Cannot inspect %s: %s", artifact.target, e)
            existing, identical, error = True, False, e
        logger.debug(
            "%s: existing=%s identical=%s (%s)", artifact.target, existing, identical, artifact.category
        )
        operations.append(
            FileOperation(
                artifact=artifact,
                target=target,
                content=content,
                existing=existing,
                identical=identical,
                error=error,
            )
        )
    return tuple(operations)
