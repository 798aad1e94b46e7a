"""Run pipeline: manifest -> plan -> operations -> policies -> execution."""

import logging
from dataclasses import dataclass
from pathlib import Path

from cc_sdd.config import ResolvedConfig
from cc_sdd.errors import InteractionUnavailableError
from cc_sdd.gateway.console.abc import Console
from cc_sdd.gateway.terminal.abc import Terminal
from cc_sdd.manifest.models import ProcessedArtifact
from cc_sdd.manifest.planner import plan_from_file
from cc_sdd.plan.conflicts import ConflictHandler, create_conflict_handler
from cc_sdd.plan.executor import BackupSettings, RunResult, execute_operations
from cc_sdd.plan.operations import FileOperation, build_file_operations
from cc_sdd.plan.policies import (
    CategorySummary,
    PolicyResolution,
    determine_category_policies,
    summarize_categories,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedRun:
    """Everything computed before the first write."""

    plan: tuple[ProcessedArtifact, ...]
    operations: tuple[FileOperation, ...]
    summaries: tuple[CategorySummary, ...]

    @property
    def has_conflicts(self) -> bool:
        return any(summary.conflicting for summary in self.summaries)


@dataclass(frozen=True)
class RunOutcome:
    """Execution result plus the warnings raised while resolving policies."""

    result: RunResult
    policies: PolicyResolution
    warnings: tuple[str, ...]


def prepare_run(
    config: ResolvedConfig,
    manifest_path: Path,
    *,
    cwd: Path,
    templates_root: Path,
) -> PreparedRun:
    """Plan the run and classify every target. Read-only.

    Targets that exist but cannot be read are recorded on their operation and
    reported when the run is applied.

    Raises:
        ManifestError: If the manifest, a template, or a values file is invalid
    """
    plan = plan_from_file(manifest_path, config.context, templates_root)
    operations = build_file_operations(
        plan, config.context, cwd=cwd, templates_root=templates_root
    )
    return PreparedRun(plan=plan, operations=operations, summaries=summarize_categories(operations))


def resolve_dry_run_policies(
    prepared: PreparedRun,
    config: ResolvedConfig,
    terminal: Terminal,
) -> PolicyResolution:
    """Policies a real run would use, for the dry-run report."""
    return determine_category_policies(
        prepared.summaries,
        config.overwrite,
        interactive=terminal.is_stdin_interactive(),
    )


def apply_run(
    prepared: PreparedRun,
    config: ResolvedConfig,
    *,
    console: Console,
    terminal: Terminal,
    cwd: Path,
    home: Path,
) -> RunOutcome:
    """Resolve policies, prompt where needed, and execute all operations."""
    handler: ConflictHandler | None = None

    if config.overwrite == "prompt" and prepared.has_conflicts:
        try:
            handler = create_conflict_handler(console, terminal, prepared.summaries)
        except InteractionUnavailableError as e:
            # determine_category_policies warns per category with the counts
            logger.debug("Falling back to skip: %s", e)

    resolution = determine_category_policies(
        prepared.summaries,
        config.overwrite,
        interactive=handler is not None,
    )

    backup = (
        BackupSettings(backup_dir=config.backup_dir, cwd=cwd, home=home)
        if config.backup_dir is not None
        else None
    )

    result = execute_operations(
        prepared.operations,
        resolution.policies,
        conflict_handler=handler,
        backup=backup,
    )
    logger.debug("Run finished: written=%d skipped=%d", result.written, result.skipped)
    return RunOutcome(result=result, policies=resolution, warnings=resolution.warnings)
