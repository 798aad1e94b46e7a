"""Render the bytes that an artifact would write."""

import json
from pathlib import Path

from cc_sdd.config import ResolutionContext
from cc_sdd.errors import ManifestError
from cc_sdd.manifest.models import ProcessedArtifact
from cc_sdd.manifest.planner import PLACEHOLDER_PATTERN

FALLBACK_LANG = "en"


def load_template_values(values_path: Path, lang: str) -> dict[str, str]:
    """Load a JSON values file for a template-json artifact.

    Each value is either a string or an object keyed by language code, in
    which case the entry for ``lang`` is used, falling back to English.

    Raises:
        ManifestError: If the file is missing, not JSON, or a value cannot be
            resolved for the language
    """
    if not values_path.is_file():
        raise ManifestError(f"Template values not found: {values_path}")

    try:
        data = json.loads(values_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid template values JSON in {values_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{values_path}: values root must be an object")

    resolved: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            localized = value.get(lang, value.get(FALLBACK_LANG))
            if not isinstance(localized, str):
                raise ManifestError(f"{values_path}: no '{lang}' or '{FALLBACK_LANG}' text for {key}")
            resolved[key] = localized
        elif isinstance(value, str):
            resolved[key] = value
        else:
            raise ManifestError(f"{values_path}: value for {key} must be a string or object")
    return resolved


def render_template(text: str, variables: dict[str, str]) -> str:
    """Substitute known ``{{NAME}}`` tokens; unknown tokens are kept verbatim."""
    return PLACEHOLDER_PATTERN.sub(lambda m: variables.get(m.group(1), m.group(0)), text)


def render_artifact(
    artifact: ProcessedArtifact,
    context: ResolutionContext,
    templates_root: Path,
) -> bytes:
    """Produce the final content for an artifact.

    Raises:
        ManifestError: If the template or its values file cannot be read
    """
    template_path = templates_root / artifact.source
    if not template_path.is_file():
        raise ManifestError(f"Template not found: {template_path}")

    variables = context.variables()
    if artifact.values is not None:
        values = load_template_values(templates_root / artifact.values, context.lang)
        # Resolution variables take precedence over template values
        variables = {**values, **variables}

    text = template_path.read_text(encoding="utf-8")
    return render_template(text, variables).encode("utf-8")
