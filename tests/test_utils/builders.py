"""Builders for the value objects most tests need."""

import hashlib
from pathlib import Path

from cc_sdd.agents.layout import AgentLayout
from cc_sdd.config import OverwritePolicy, ResolutionContext, ResolvedConfig
from cc_sdd.manifest.models import ProcessedArtifact, SourceMode
from cc_sdd.plan.operations import FileOperation, classify_target


def make_context(
    *,
    lang: str = "en",
    kiro_dir: str = ".kiro",
    commands_dir: str = ".claude/commands/kiro",
    is_global: bool = False,
) -> ResolutionContext:
    """Build a ResolutionContext with Claude Code's layout by default."""
    return ResolutionContext(
        agent="claude-code",
        layout=AgentLayout(commands_dir=commands_dir, agent_dir=".claude", doc_file="CLAUDE.md"),
        lang=lang,
        kiro_dir=kiro_dir,
        is_global=is_global,
    )


def make_config(
    *,
    overwrite: OverwritePolicy = "prompt",
    backup_dir: Path | None = None,
    dry_run: bool = False,
    context: ResolutionContext | None = None,
) -> ResolvedConfig:
    return ResolvedConfig(
        context=context if context is not None else make_context(),
        overwrite=overwrite,
        backup_dir=backup_dir,
        dry_run=dry_run,
    )


def make_operation(
    root: Path,
    target: str,
    content: bytes,
    *,
    category: str = "commands",
    source_mode: SourceMode = "template",
) -> FileOperation:
    """Build a FileOperation for ``root/target``, classified against the disk."""
    artifact = ProcessedArtifact(
        category=category,
        source_mode=source_mode,
        source=f"src/{Path(target).name}",
        target=target,
        values=None,
    )
    path = root / target
    existing, identical = classify_target(path, content)
    return FileOperation(
        artifact=artifact,
        target=path,
        content=content,
        existing=existing,
        identical=identical,
    )


def write_file(root: Path, rel: str, content: bytes) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def snapshot_tree(root: Path) -> dict[str, str]:
    """Relative path -> sha256 of every file under root."""
    return {
        path.relative_to(root).as_posix(): hashlib.sha256(path.read_bytes()).hexdigest()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
