"""Fake Terminal implementation for testing."""

from cc_sdd.gateway.terminal.abc import Terminal


class FakeTerminal(Terminal):
    """In-memory fake that reports a fixed interactive state.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, *, is_interactive: bool) -> None:
        self._is_interactive = is_interactive

    def is_stdin_interactive(self) -> bool:
        return self._is_interactive
