"""Per-category summaries and overwrite policies."""

from dataclasses import dataclass
from typing import Literal

from cc_sdd.config import OverwritePolicy
from cc_sdd.plan.operations import FileOperation

CategoryPolicy = Literal["force", "skip", "prompt"]


@dataclass(frozen=True)
class CategorySummary:
    """Counts for all operations sharing a category.

    ``failed`` counts existing targets that could not be read; they are part
    of ``existing`` but never conflicting.
    """

    category: str
    total: int
    existing: int
    identical: int
    failed: int = 0

    @property
    def conflicting(self) -> int:
        """Existing files whose content differs from the rendered template."""
        return self.existing - self.identical - self.failed

    @property
    def new(self) -> int:
        return self.total - self.existing


@dataclass(frozen=True)
class PolicyResolution:
    """Policy for each category, plus warnings to surface to the user."""

    policies: dict[str, CategoryPolicy]
    warnings: tuple[str, ...]


def summarize_categories(operations: tuple[FileOperation, ...]) -> tuple[CategorySummary, ...]:
    """Aggregate operations by category, in first-seen (manifest) order."""
    order: list[str] = []
    counts: dict[str, list[int]] = {}
    for op in operations:
        if op.category not in counts:
            order.append(op.category)
            counts[op.category] = [0, 0, 0, 0]
        bucket = counts[op.category]
        bucket[0] += 1
        if op.existing:
            bucket[1] += 1
        if op.identical:
            bucket[2] += 1
        if op.error is not None:
            bucket[3] += 1

    return tuple(
        CategorySummary(
            category=category,
            total=counts[category][0],
            existing=counts[category][1],
            identical=counts[category][2],
            failed=counts[category][3],
        )
        for category in order
    )


def determine_category_policies(
    summaries: tuple[CategorySummary, ...],
    overwrite: OverwritePolicy,
    *,
    interactive: bool,
) -> PolicyResolution:
    """Derive the execution policy for each category.

    - force / skip apply to every category unchanged
    - prompt only survives for categories with real conflicts; categories
      with nothing to ask are skipped
    - without an interactive surface, prompt degrades to skip with a warning
    """
    policies: dict[str, CategoryPolicy] = {}
    warnings: list[str] = []

    for summary in summaries:
        if overwrite != "prompt":
            policies[summary.category] = overwrite
            continue

        if summary.conflicting == 0:
            policies[summary.category] = "skip"
            continue

        if not interactive:
            policies[summary.category] = "skip"
            warnings.append(
                f"{summary.category}: {summary.conflicting} existing file(s) differ but prompting "
                "is unavailable; keeping them. Use --yes or --overwrite=force to replace."
            )
            continue

        policies[summary.category] = "prompt"

    return PolicyResolution(policies=policies, warnings=tuple(warnings))
