"""Resolve a manifest into the ordered list of processed artifacts.

Placeholders use the ``{{NAME}}`` syntax and are restricted to the names in
ResolutionContext.variables(). Any unknown or malformed token fails the whole
plan before filesystem writes can happen.
"""

import logging
import re
from pathlib import Path

from cc_sdd.config import ResolutionContext
from cc_sdd.errors import ManifestError
from cc_sdd.manifest.loader import load_manifest
from cc_sdd.manifest.models import (
    CategoryEntry,
    DirectoryDescriptor,
    Manifest,
    ProcessedArtifact,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


def substitute_placeholders(pattern: str, variables: dict[str, str], *, where: str) -> str:
    """Replace every ``{{NAME}}`` token in a path pattern.

    Raises:
        ManifestError: If a token is not a known placeholder, or a stray
            ``{{``/``}}`` remains after substitution
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in variables:
            raise ManifestError(f"{where}: unknown placeholder {{{{{name}}}}} in '{pattern}'")
        return variables[name]

    resolved = PLACEHOLDER_PATTERN.sub(_replace, pattern)
    if "{{" in resolved or "}}" in resolved:
        raise ManifestError(f"{where}: malformed placeholder in '{pattern}'")
    return resolved


def _join(base: str, relative: str) -> str:
    if base in ("", "."):
        return relative
    return f"{base.rstrip('/')}/{relative}"


def _expand_directory(
    descriptor: DirectoryDescriptor,
    entry: CategoryEntry,
    variables: dict[str, str],
    templates_root: Path,
    where: str,
) -> list[ProcessedArtifact]:
    source_dir = substitute_placeholders(descriptor.source_dir, variables, where=where)
    target_dir = substitute_placeholders(descriptor.target_dir, variables, where=where)

    source_root = templates_root / source_dir
    if not source_root.is_dir():
        raise ManifestError(f"{where}: template directory not found: {source_root}")

    relative_files = sorted(
        path.relative_to(source_root).as_posix()
        for path in source_root.rglob("*")
        if path.is_file()
    )
    return [
        ProcessedArtifact(
            category=entry.category,
            source_mode=entry.mode,
            source=_join(source_dir, rel),
            target=_join(target_dir, rel),
            values=None,
        )
        for rel in relative_files
    ]


def plan_manifest(
    manifest: Manifest,
    context: ResolutionContext,
    templates_root: Path,
) -> tuple[ProcessedArtifact, ...]:
    """Resolve all placeholders of a parsed manifest.

    Args:
        manifest: Parsed manifest
        context: Values for the placeholders
        templates_root: Directory that template sources are relative to;
            only consulted to expand directory descriptors

    Returns:
        Processed artifacts in manifest declaration order
    """
    variables = context.variables()
    plan: list[ProcessedArtifact] = []

    for entry in manifest.categories:
        for index, descriptor in enumerate(entry.artifacts):
            where = f"{entry.category}[{index}]"
            if isinstance(descriptor, DirectoryDescriptor):
                plan.extend(
                    _expand_directory(descriptor, entry, variables, templates_root, where)
                )
                continue

            values = descriptor.values
            plan.append(
                ProcessedArtifact(
                    category=entry.category,
                    source_mode=entry.mode,
                    source=substitute_placeholders(descriptor.source, variables, where=where),
                    target=substitute_placeholders(descriptor.target, variables, where=where),
                    values=(
                        substitute_placeholders(values, variables, where=where)
                        if values is not None
                        else None
                    ),
                )
            )

    logger.debug("Planned %d artifacts across %d categories", len(plan), len(manifest.categories))
    return tuple(plan)


def plan_from_file(
    manifest_path: Path,
    context: ResolutionContext,
    templates_root: Path,
) -> tuple[ProcessedArtifact, ...]:
    """Load a manifest file and resolve it into a processed plan.

    Raises:
        ManifestError: If the manifest cannot be loaded or resolved
    """
    logger.debug("Loading manifest %s", manifest_path)
    return plan_manifest(load_manifest(manifest_path), context, templates_root)
