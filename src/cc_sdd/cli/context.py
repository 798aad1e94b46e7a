"""Collaborators of the CLI, injectable for tests."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from cc_sdd.gateway.console.abc import Console
from cc_sdd.gateway.console.real import InteractiveConsole
from cc_sdd.gateway.terminal.abc import Terminal
from cc_sdd.gateway.terminal.real import RealTerminal
from cc_sdd.manifest.paths import get_bundled_templates_dir


@dataclass(frozen=True)
class CliContext:
    """Environment of one CLI invocation.

    ``now`` pins the timestamp of default backup directories; None uses the
    current time.
    """

    cwd: Path
    home: Path
    console: Console
    terminal: Terminal
    templates_root: Path
    now: datetime | None


def create_context() -> CliContext:
    """Build the production context from the real process environment."""
    return CliContext(
        cwd=Path.cwd(),
        home=Path.home(),
        console=InteractiveConsole(),
        terminal=RealTerminal(),
        templates_root=get_bundled_templates_dir(),
        now=None,
    )
