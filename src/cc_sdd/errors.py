"""Error types raised while planning and applying a scaffold run.

Planning errors (ConfigError, ManifestError) abort the run before any write.
Execution errors (FilesystemError, BackupError) are recorded per file and
reported in the final summary.
"""

from pathlib import Path


class CcSddError(Exception):
    """Base class for all user-facing cc-sdd errors."""


class ConfigError(CcSddError):
    """Contradictory or invalid resolution input (agent, language, layout)."""


class ManifestError(CcSddError):
    """Manifest missing, malformed, or referencing an unknown placeholder."""


class FilesystemError(CcSddError):
    """Reading or writing a target file failed.

    Attributes:
        path: The file the failed operation was acting on
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class BackupError(FilesystemError):
    """Backing up a file before overwrite failed; the file was left untouched."""


class InteractionUnavailableError(CcSddError):
    """A category needs interactive resolution but no terminal is attached."""


class ConflictDecisionError(CcSddError):
    """A conflict handler returned a decision not offered for that file."""
