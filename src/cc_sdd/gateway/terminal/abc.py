"""Terminal detection abstraction.

Lets the conflict handler factory decide whether prompting is possible
without tests depending on the real TTY state.
"""

from abc import ABC, abstractmethod


class Terminal(ABC):
    """Abstract terminal state for dependency injection."""

    @abstractmethod
    def is_stdin_interactive(self) -> bool:
        """Check if stdin is connected to an interactive terminal (TTY)."""
        ...
