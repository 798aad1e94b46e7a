"""Console prompting abstraction.

The conflict handler asks its questions through a Console so that tests can
script the answers instead of driving a real terminal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Choice:
    """One selectable answer of a multiple-choice prompt."""

    value: str
    label: str
    description: str


class Console(ABC):
    """Abstract interactive prompts."""

    @abstractmethod
    def choose(self, message: str, choices: tuple[Choice, ...], default_index: int) -> str:
        """Ask the user to pick one of the choices.

        Args:
            message: Question shown above the choices
            choices: Available answers, in display order
            default_index: Index of the answer used when the user just presses enter

        Returns:
            The ``value`` of the selected choice
        """
        ...

    @abstractmethod
    def confirm(self, message: str, *, default: bool) -> bool:
        """Ask a yes/no question."""
        ...
