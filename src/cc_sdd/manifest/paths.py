"""Locate bundled templates and pick the manifest for a run."""

from functools import cache
from pathlib import Path

from cc_sdd.config import Profile

DEFAULT_MANIFEST_NAME = "default"


@cache
def get_bundled_templates_dir() -> Path:
    """Get the templates directory shipped inside the cc_sdd package."""
    # __file__ is .../cc_sdd/manifest/paths.py, so parent.parent is cc_sdd/
    return Path(__file__).parent.parent / "data" / "templates"


def _manifest_candidates(agent: str, suffix: str) -> list[str]:
    return [f"{agent}{suffix}.json", f"{DEFAULT_MANIFEST_NAME}{suffix}.json"]


def _first_existing(manifests_dir: Path, names: list[str]) -> Path | None:
    for name in names:
        candidate = manifests_dir / name
        if candidate.is_file():
            return candidate
    return None


def resolve_manifest_path(
    agent: str,
    *,
    profile: Profile | None,
    manifest_arg: str | None,
    templates_root: Path,
    is_global: bool,
) -> Path:
    """Choose which manifest file drives the run.

    Lookup order:
    - an explicit --manifest path, used as-is
    - global install: <agent>-global.json, then default-global.json
    - minimal profile: <agent>-min.json, then default-min.json, then the full manifest
    - otherwise: <agent>.json, then default.json

    A path is returned even when nothing exists so that the planner reports
    the missing manifest.
    """
    if manifest_arg is not None:
        return Path(manifest_arg)

    manifests_dir = templates_root / "manifests"

    if is_global:
        names = _manifest_candidates(agent, "-global")
    elif profile == "minimal":
        names = _manifest_candidates(agent, "-min") + _manifest_candidates(agent, "")
    else:
        names = _manifest_candidates(agent, "")

    found = _first_existing(manifests_dir, names)
    if found is not None:
        return found
    return manifests_dir / names[0]
