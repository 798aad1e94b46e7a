"""Copy files aside before they are overwritten."""

import shutil
from pathlib import Path

from cc_sdd.errors import BackupError


def backup_destination(target: Path, *, backup_dir: Path, cwd: Path, home: Path) -> Path:
    """Map a target file to its location inside the backup directory.

    Targets under the working directory keep their relative path. Targets
    elsewhere (global installs) are placed relative to the home directory,
    or with the filesystem root stripped.
    """
    for base in (cwd, home):
        if target.is_relative_to(base):
            return backup_dir / target.relative_to(base)
    return backup_dir / Path(*target.parts[1:])


def backup_file(target: Path, *, backup_dir: Path, cwd: Path, home: Path) -> Path:
    """Copy ``target`` into the backup directory, preserving its bytes.

    Returns:
        Path of the backup copy

    Raises:
        BackupError: If the copy cannot be written
    """
    dest = backup_destination(target, backup_dir=backup_dir, cwd=cwd, home=home)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(target, dest)
    except OSError as e:
        raise BackupError(target, f"backup to {dest} failed ({e.strerror})") from e
    return dest
