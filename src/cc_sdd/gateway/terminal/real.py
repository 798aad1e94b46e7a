"""Real terminal implementation using sys.stdin.isatty()."""

import sys

from cc_sdd.gateway.terminal.abc import Terminal


class RealTerminal(Terminal):
    """Production implementation backed by the process's stdin."""

    def is_stdin_interactive(self) -> bool:
        return sys.stdin.isatty()
