"""Tests for file operation building and target classification."""

from pathlib import Path

import pytest

from cc_sdd.config import ResolutionContext
from cc_sdd.errors import FilesystemError
from cc_sdd.manifest.planner import plan_from_file
from cc_sdd.plan.operations import FileOperation, build_file_operations, classify_target
from tests.test_utils.builders import make_operation, write_file


def _build(manifest_path: Path, templates_root: Path, context: ResolutionContext, cwd: Path):
    plan = plan_from_file(manifest_path, context, templates_root)
    return build_file_operations(plan, context, cwd=cwd, templates_root=templates_root)


def test_fresh_project_has_no_existing_targets(
    tmp_project: Path,
    manifest_path: Path,
    templates_root: Path,
    resolution_context: ResolutionContext,
) -> None:
    operations = _build(manifest_path, templates_root, resolution_context, tmp_project)

    assert len(operations) == 6
    assert all(not op.existing and not op.identical for op in operations)
    assert operations[0].target == tmp_project / ".claude/commands/kiro/spec-init.md"
    assert operations[0].content == b"Init spec in .kiro/specs (en)\n"


def test_identical_and_conflicting_targets(
    tmp_project: Path,
    manifest_path: Path,
    templates_root: Path,
    resolution_context: ResolutionContext,
) -> None:
    write_file(tmp_project, ".claude/commands/kiro/steering.md", b"Steering for .claude\n")
    write_file(tmp_project, ".claude/commands/kiro/status.md", b"Local edits\n")

    operations = _build(manifest_path, templates_root, resolution_context, tmp_project)
    by_target = {op.rel_target: op for op in operations}

    steering = by_target[".claude/commands/kiro/steering.md"]
    assert steering.existing and steering.identical and not steering.conflicting

    status = by_target[".claude/commands/kiro/status.md"]
    assert status.existing and not status.identical and status.conflicting


def test_classify_is_byte_exact(tmp_path: Path) -> None:
    target = write_file(tmp_path, "a.md", b"line\r\n")

    assert classify_target(target, b"line\n") == (True, False)
    assert classify_target(target, b"line\r\n") == (True, True)


def test_classify_missing_parent(tmp_path: Path) -> None:
    assert classify_target(tmp_path / "no" / "such" / "file.md", b"x") == (False, False)


def test_unreadable_target_is_recorded_on_operation(
    tmp_project: Path,
    manifest_path: Path,
    templates_root: Path,
    resolution_context: ResolutionContext,
) -> None:
    (tmp_project / "CLAUDE.md").mkdir()

    operations = _build(manifest_path, templates_root, resolution_context, tmp_project)
    by_target = {op.rel_target: op for op in operations}

    memory = by_target["CLAUDE.md"]
    assert isinstance(memory.error, FilesystemError)
    assert "not a regular file" in str(memory.error)
    assert memory.existing and not memory.identical and not memory.conflicting
    assert all(op.error is None for op in operations if op is not memory)


def test_identical_requires_existing(tmp_path: Path) -> None:
    op = make_operation(tmp_path, "a.md", b"x")

    with pytest.raises(ValueError, match="identical requires an existing target"):
        FileOperation(
            artifact=op.artifact, target=op.target, content=b"x", existing=False, identical=True
        )


def test_append_only_for_plain_project_memory(tmp_path: Path) -> None:
    memory = make_operation(tmp_path, "AGENTS.md", b"x", category="project-memory")
    memory_json = make_operation(
        tmp_path, "CLAUDE.md", b"x", category="project-memory", source_mode="template-json"
    )
    command = make_operation(tmp_path, "cmd.md", b"x", category="commands")

    assert memory.allows_append
    assert not memory_json.allows_append
    assert not command.allows_append


def test_building_operations_writes_nothing(
    tmp_project: Path,
    manifest_path: Path,
    templates_root: Path,
    resolution_context: ResolutionContext,
) -> None:
    _build(manifest_path, templates_root, resolution_context, tmp_project)

    assert list(tmp_project.iterdir()) == []
