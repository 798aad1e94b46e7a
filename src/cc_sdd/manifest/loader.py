"""Manifest file I/O and shape validation."""

import json
from pathlib import Path
from typing import Any, cast

from cc_sdd.errors import ManifestError
from cc_sdd.manifest.models import (
    SOURCE_MODES,
    ArtifactDescriptor,
    CategoryEntry,
    DirectoryDescriptor,
    FileDescriptor,
    Manifest,
    SourceMode,
)


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ManifestError(f"{where}: '{key}' must be a non-empty string")
    return value


def _parse_descriptor(raw: object, mode: SourceMode, where: str) -> ArtifactDescriptor:
    if not isinstance(raw, dict):
        raise ManifestError(f"{where}: artifact must be an object")

    if "source_dir" in raw or "target_dir" in raw:
        return DirectoryDescriptor(
            source_dir=_require_str(raw, "source_dir", where),
            target_dir=_require_str(raw, "target_dir", where),
        )

    values = raw.get("values")
    if values is not None:
        if mode != "template-json":
            raise ManifestError(f"{where}: 'values' is only allowed in template-json categories")
        if not isinstance(values, str) or not values:
            raise ManifestError(f"{where}: 'values' must be a non-empty string")

    return FileDescriptor(
        source=_require_str(raw, "source", where),
        target=_require_str(raw, "target", where),
        values=values,
    )


def _parse_category(raw: object, index: int) -> CategoryEntry:
    where = f"categories[{index}]"
    if not isinstance(raw, dict):
        raise ManifestError(f"{where}: category must be an object")

    category = _require_str(raw, "id", where)
    mode = raw.get("mode", "template")
    if mode not in SOURCE_MODES:
        raise ManifestError(f"{where}: unknown mode '{mode}' (expected {', '.join(SOURCE_MODES)})")

    artifacts_raw = raw.get("artifacts")
    if not isinstance(artifacts_raw, list):
        raise ManifestError(f"{where}: 'artifacts' must be a list")

    artifacts = tuple(
        _parse_descriptor(item, cast(SourceMode, mode), f"{where}.artifacts[{i}]")
        for i, item in enumerate(artifacts_raw)
    )
    return CategoryEntry(category=category, mode=cast(SourceMode, mode), artifacts=artifacts)


def parse_manifest(data: object) -> Manifest:
    """Validate decoded manifest JSON and build a Manifest.

    Raises:
        ManifestError: On any shape error or duplicate category id
    """
    if not isinstance(data, dict):
        raise ManifestError("manifest root must be an object")

    version = data.get("version", 1)
    if not isinstance(version, int):
        raise ManifestError("'version' must be an integer")

    categories_raw = data.get("categories")
    if not isinstance(categories_raw, list):
        raise ManifestError("'categories' must be a list")

    categories = tuple(_parse_category(raw, i) for i, raw in enumerate(categories_raw))

    seen: set[str] = set()
    for entry in categories:
        if entry.category in seen:
            raise ManifestError(f"duplicate category id: {entry.category}")
        seen.add(entry.category)

    return Manifest(version=version, categories=categories)


def load_manifest(manifest_path: Path) -> Manifest:
    """Load and validate a manifest JSON file.

    Raises:
        ManifestError: If the file is missing, not JSON, or malformed
    """
    if not manifest_path.is_file():
        raise ManifestError(f"Manifest not found: {manifest_path}")

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid manifest JSON in {manifest_path}: {e}") from e

    try:
        return parse_manifest(data)
    except ManifestError as e:
        raise ManifestError(f"{manifest_path}: {e}") from e
