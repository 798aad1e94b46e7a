"""Tests for template rendering."""

from pathlib import Path

import pytest

from cc_sdd.errors import ManifestError
from cc_sdd.manifest.models import ProcessedArtifact
from cc_sdd.plan.render import load_template_values, render_artifact, render_template
from tests.test_utils.builders import make_context


def _artifact(source: str, *, values: str | None = None) -> ProcessedArtifact:
    return ProcessedArtifact(
        category="project-memory",
        source_mode="template-json" if values else "template",
        source=source,
        target="CLAUDE.md",
        values=values,
    )


def test_render_template_keeps_unknown_tokens() -> None:
    text = render_template("{{KIRO_DIR}} and {{SOMETHING_ELSE}}", {"KIRO_DIR": ".kiro"})

    assert text == ".kiro and {{SOMETHING_ELSE}}"


def test_render_artifact_substitutes_context(templates_root: Path) -> None:
    content = render_artifact(
        _artifact("commands/spec-init.md"), make_context(lang="ja"), templates_root
    )

    assert content == b"Init spec in .kiro/specs (ja)\n"


def test_render_artifact_uses_localized_values(templates_root: Path) -> None:
    artifact = _artifact("docs/CLAUDE.md", values="docs/guidelines.json")

    content = render_artifact(artifact, make_context(lang="ja"), templates_root)

    assert content == b"# Memory\nAnswer in Japanese.\n"


def test_render_artifact_values_fall_back_to_english(templates_root: Path) -> None:
    artifact = _artifact("docs/CLAUDE.md", values="docs/guidelines.json")

    content = render_artifact(artifact, make_context(lang="ko"), templates_root)

    assert content == b"# Memory\nAnswer in English.\n"


def test_context_variables_override_values(tmp_path: Path) -> None:
    (tmp_path / "t.md").write_text("{{KIRO_DIR}}", encoding="utf-8")
    (tmp_path / "v.json").write_text('{"KIRO_DIR": "elsewhere"}', encoding="utf-8")

    content = render_artifact(_artifact("t.md", values="v.json"), make_context(), tmp_path)

    assert content == b".kiro"


def test_render_is_deterministic(templates_root: Path) -> None:
    artifact = _artifact("docs/AGENTS.md")
    context = make_context()

    assert render_artifact(artifact, context, templates_root) == render_artifact(
        artifact, context, templates_root
    )


def test_missing_template(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Template not found"):
        render_artifact(_artifact("gone.md"), make_context(), tmp_path)


class TestLoadTemplateValues:
    def test_plain_string_values(self, tmp_path: Path) -> None:
        path = tmp_path / "v.json"
        path.write_text('{"NAME": "value"}', encoding="utf-8")

        assert load_template_values(path, "en") == {"NAME": "value"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="Template values not found"):
            load_template_values(tmp_path / "v.json", "en")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "v.json"
        path.write_text("[", encoding="utf-8")

        with pytest.raises(ManifestError, match="Invalid template values JSON"):
            load_template_values(path, "en")

    def test_no_text_for_language(self, tmp_path: Path) -> None:
        path = tmp_path / "v.json"
        path.write_text('{"NAME": {"ja": "x"}}', encoding="utf-8")

        with pytest.raises(ManifestError, match="no 'de' or 'en' text for NAME"):
            load_template_values(path, "de")

    def test_non_string_value(self, tmp_path: Path) -> None:
        path = tmp_path / "v.json"
        path.write_text('{"NAME": 1}', encoding="utf-8")

        with pytest.raises(ManifestError, match="must be a string or object"):
            load_template_values(path, "en")
