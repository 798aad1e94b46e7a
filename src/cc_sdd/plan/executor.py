"""Apply file operations and tally the outcome.

Operations run sequentially in plan order. Per-file errors (unreadable
targets, failed backups or writes, decisions that were not offered) are
recorded and the run continues; already-written files are never rolled back.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from cc_sdd.errors import CcSddError, ConflictDecisionError, FilesystemError
from cc_sdd.plan.backup import backup_file
from cc_sdd.plan.conflicts import ConflictHandler, ConflictInfo
from cc_sdd.plan.operations import FileOperation
from cc_sdd.plan.policies import CategoryPolicy

logger = logging.getLogger(__name__)

APPEND_SEPARATOR = b"\n\n"


@dataclass(frozen=True)
class RunResult:
    """Final counts of one run."""

    written: int
    skipped: int
    errors: tuple[CcSddError, ...]

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class BackupSettings:
    """Where backups go; ``cwd`` and ``home`` anchor relative backup paths."""

    backup_dir: Path
    cwd: Path
    home: Path


def _write(target: Path, content: bytes) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as e:
        raise FilesystemError(target, f"write failed ({e.strerror})") from e


def _overwrite(op: FileOperation, backup: BackupSettings | None) -> None:
    if backup is not None:
        dest = backup_file(op.target, backup_dir=backup.backup_dir, cwd=backup.cwd, home=backup.home)
        logger.debug("Backed up %s to %s", op.target, dest)
    _write(op.target, op.content)


def _append(op: FileOperation) -> None:
    try:
        existing = op.target.read_bytes()
    except OSError as e:
        raise FilesystemError(op.target, f"cannot read existing file ({e.strerror})") from e
    _write(op.target, existing.rstrip(b"\n") + APPEND_SEPARATOR + op.content)


def _resolve_decision(
    op: FileOperation,
    policy: CategoryPolicy,
    conflict_handler: ConflictHandler | None,
) -> str:
    if policy != "prompt":
        return "overwrite" if policy == "force" else "skip"
    if conflict_handler is None:
        return "skip"

    info = ConflictInfo.for_operation(op)
    decision = conflict_handler.resolve(info)
    if decision not in info.choices:
        raise ConflictDecisionError(
            f"'{decision}' is not available for {op.rel_target} "
            f"(choices: {', '.join(info.choices)})"
        )
    return decision


def execute_operations(
    operations: tuple[FileOperation, ...],
    policies: dict[str, CategoryPolicy],
    *,
    conflict_handler: ConflictHandler | None,
    backup: BackupSettings | None,
) -> RunResult:
    """Apply every operation according to its category policy.

    Args:
        operations: File operations in plan order
        policies: Policy per category; categories missing here are skipped
        conflict_handler: Resolves files in ``prompt`` categories; None means
            no interactive surface, so those files are kept
        backup: Backup settings, or None when backups are disabled

    Returns:
        RunResult with written/skipped counts and per-file errors. A handler
        decision that was not offered for a file is recorded as a
        ConflictDecisionError and the file is left untouched.
    """
    written = 0
    skipped = 0
    errors: list[CcSddError] = []

    for op in operations:
        if op.error is not None:
            errors.append(op.error)
            continue

        if not op.existing:
            try:
                _write(op.target, op.content)
            except FilesystemError as e:
                errors.append(e)
                continue
            logger.debug("Created %s", op.rel_target)
            written += 1
            continue

        if op.identical:
            continue

        try:
            decision = _resolve_decision(op, policies.get(op.category, "skip"), conflict_handler)
        except ConflictDecisionError as e:
            errors.append(e)
            continue
        if decision == "skip":
            logger.debug("Kept %s", op.rel_target)
            skipped += 1
            continue

        try:
            if decision == "append":
                _append(op)
            else:
                _overwrite(op, backup)
        except FilesystemError as e:
            errors.append(e)
            continue
        logger.debug("%s %s", "Appended" if decision == "append" else "Overwrote", op.rel_target)
        written += 1

    return RunResult(written=written, skipped=skipped, errors=tuple(errors))
