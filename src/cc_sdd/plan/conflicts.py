"""Interactive resolution of conflicting files.

The handler is called once per conflicting operation in a ``prompt``
category, in plan order. Sticky per-category decisions live in an explicit
StickyDecisions object so the executor can be driven by a scripted handler
in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from cc_sdd.errors import InteractionUnavailableError
from cc_sdd.gateway.console.abc import Choice, Console
from cc_sdd.gateway.terminal.abc import Terminal
from cc_sdd.manifest.models import SourceMode
from cc_sdd.plan.operations import FileOperation
from cc_sdd.plan.policies import CategorySummary

ConflictDecision = Literal["overwrite", "skip", "append"]

_OVERWRITE = Choice(
    value="overwrite",
    label="Overwrite this file",
    description="Replace with the latest template content.",
)
_APPEND = Choice(
    value="append",
    label="Append template content",
    description="Add new sections after the existing project memory file.",
)
_KEEP = Choice(
    value="skip",
    label="Keep existing file",
    description="Leave the current file unchanged.",
)


@dataclass(frozen=True)
class ConflictInfo:
    """What the handler needs to know about one conflicting file."""

    category: str
    source_mode: SourceMode
    rel_target: str
    choices: tuple[ConflictDecision, ...]

    @classmethod
    def for_operation(cls, op: FileOperation) -> "ConflictInfo":
        choices: tuple[ConflictDecision, ...] = (
            ("overwrite", "append", "skip") if op.allows_append else ("overwrite", "skip")
        )
        return cls(
            category=op.category,
            source_mode=op.source_mode,
            rel_target=op.rel_target,
            choices=choices,
        )


class StickyDecisions:
    """Per-category session state for one run.

    Tracks how many conflicts are still to come in each category and the
    decision the user chose to apply to all of them.
    """

    def __init__(self, remaining: dict[str, int]) -> None:
        self._remaining = dict(remaining)
        self._decisions: dict[str, ConflictDecision] = {}

    @classmethod
    def from_summaries(cls, summaries: tuple[CategorySummary, ...]) -> "StickyDecisions":
        return cls({summary.category: summary.conflicting for summary in summaries})

    def get(self, category: str) -> ConflictDecision | None:
        return self._decisions.get(category)

    def remember(self, category: str, decision: ConflictDecision) -> None:
        self._decisions[category] = decision

    def consume(self, category: str) -> int:
        """Count one conflict as handled; return how many were pending before it."""
        pending = self._remaining.get(category, 1)
        self._remaining[category] = max(pending - 1, 0)
        return pending


class ConflictHandler(ABC):
    """Decides what to do with one conflicting file."""

    @abstractmethod
    def resolve(self, info: ConflictInfo) -> ConflictDecision:
        """Return a decision; it must be one of ``info.choices``."""
        ...


class InteractiveConflictHandler(ConflictHandler):
    """Asks the user through a Console, honoring sticky decisions."""

    def __init__(self, console: Console, sticky: StickyDecisions) -> None:
        self._console = console
        self._sticky = sticky

    def resolve(self, info: ConflictInfo) -> ConflictDecision:
        cached = self._sticky.get(info.category)
        if cached is not None and cached in info.choices:
            return cached

        pending = self._sticky.consume(info.category)

        by_value = {"overwrite": _OVERWRITE, "append": _APPEND, "skip": _KEEP}
        choices = tuple(by_value[value] for value in info.choices)
        default_index = info.choices.index("skip")
        decision: ConflictDecision = self._console.choose(  # type: ignore[assignment]
            f"Update {info.rel_target}?", choices, default_index
        )

        if pending > 1:
            apply_to_rest = self._console.confirm(
                "Apply this choice to remaining files in this category?", default=True
            )
            if apply_to_rest:
                self._sticky.remember(info.category, decision)

        return decision


def create_conflict_handler(
    console: Console,
    terminal: Terminal,
    summaries: tuple[CategorySummary, ...],
) -> InteractiveConflictHandler:
    """Build the interactive handler for a run.

    Raises:
        InteractionUnavailableError: If stdin is not an interactive terminal
    """
    if not terminal.is_stdin_interactive():
        raise InteractionUnavailableError("Prompt mode unavailable: stdin is not a terminal")
    return InteractiveConflictHandler(console, StickyDecisions.from_summaries(summaries))
