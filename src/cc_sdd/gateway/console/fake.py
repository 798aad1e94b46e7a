"""Fake Console implementation for testing."""

from cc_sdd.gateway.console.abc import Choice, Console


class FakeConsole(Console):
    """Replays scripted answers and records every prompt shown.

    This class has NO public setup methods. All state is provided via constructor.
    Running out of scripted answers is a test bug and raises AssertionError.
    """

    def __init__(self, *, choices: list[str], confirms: list[bool]) -> None:
        self._choices = list(choices)
        self._confirms = list(confirms)
        self._choice_prompts: list[tuple[str, tuple[str, ...]]] = []
        self._confirm_prompts: list[str] = []

    @property
    def choice_prompts(self) -> list[tuple[str, tuple[str, ...]]]:
        """(message, offered values) for every choose() call."""
        return list(self._choice_prompts)

    @property
    def confirm_prompts(self) -> list[str]:
        return list(self._confirm_prompts)

    def choose(self, message: str, choices: tuple[Choice, ...], default_index: int) -> str:
        self._choice_prompts.append((message, tuple(c.value for c in choices)))
        if not self._choices:
            raise AssertionError(f"Unexpected choice prompt: {message}")
        return self._choices.pop(0)

    def confirm(self, message: str, *, default: bool) -> bool:
        self._confirm_prompts.append(message)
        if not self._confirms:
            raise AssertionError(f"Unexpected confirm prompt: {message}")
        return self._confirms.pop(0)
