"""Shared fixtures for cc-sdd tests."""

import json
from pathlib import Path

import pytest

from cc_sdd.config import ResolutionContext
from tests.test_utils.builders import make_context


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Alias for a fresh project directory that targets are written into."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A small templates tree covering both source modes and a directory."""
    root = tmp_path / "templates"
    (root / "commands").mkdir(parents=True)
    (root / "commands" / "spec-init.md").write_text(
        "Init spec in {{KIRO_DIR}}/specs ({{LANG_CODE}})\n", encoding="utf-8"
    )
    (root / "commands" / "steering.md").write_text("Steering for {{AGENT_DIR}}\n", encoding="utf-8")
    (root / "commands" / "status.md").write_text("Status\n", encoding="utf-8")

    (root / "settings" / "rules").mkdir(parents=True)
    (root / "settings" / "rules" / "ears.md").write_text("EARS rules\n", encoding="utf-8")
    (root / "settings" / "templates").mkdir(parents=True)
    (root / "settings" / "templates" / "design.md").write_text("Design\n", encoding="utf-8")

    (root / "docs").mkdir()
    (root / "docs" / "AGENTS.md").write_text("# Memory\nLang: {{LANG_CODE}}\n", encoding="utf-8")
    (root / "docs" / "CLAUDE.md").write_text("# Memory\n{{DEV_GUIDELINES}}\n", encoding="utf-8")
    (root / "docs" / "guidelines.json").write_text(
        '{"DEV_GUIDELINES": {"en": "Answer in English.", "ja": "Answer in Japanese."}}',
        encoding="utf-8",
    )
    return root


@pytest.fixture
def resolution_context() -> ResolutionContext:
    return make_context()


SAMPLE_MANIFEST = {
    "version": 1,
    "categories": [
        {
            "id": "commands",
            "mode": "template",
            "artifacts": [
                {"source": "commands/spec-init.md", "target": "{{AGENT_COMMANDS_DIR}}/spec-init.md"},
                {"source": "commands/steering.md", "target": "{{AGENT_COMMANDS_DIR}}/steering.md"},
                {"source": "commands/status.md", "target": "{{AGENT_COMMANDS_DIR}}/status.md"},
            ],
        },
        {
            "id": "settings",
            "artifacts": [{"source_dir": "settings", "target_dir": "{{KIRO_DIR}}/settings"}],
        },
        {
            "id": "project-memory",
            "mode": "template",
            "artifacts": [{"source": "docs/AGENTS.md", "target": "{{AGENT_DOC}}"}],
        },
    ],
}


@pytest.fixture
def manifest_path(templates_root: Path) -> Path:
    """Sample manifest planning six artifacts over three categories."""
    path = templates_root / "manifests" / "sample.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_MANIFEST), encoding="utf-8")
    return path
