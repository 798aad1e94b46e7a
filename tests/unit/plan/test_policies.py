"""Tests for category summaries and policy resolution."""

from pathlib import Path

import pytest

from cc_sdd.plan.policies import (
    CategorySummary,
    determine_category_policies,
    summarize_categories,
)
from tests.test_utils.builders import make_operation, write_file


def test_summarize_counts_per_category(tmp_path: Path) -> None:
    write_file(tmp_path, "a.md", b"same")
    write_file(tmp_path, "b.md", b"old")
    operations = (
        make_operation(tmp_path, "a.md", b"same"),
        make_operation(tmp_path, "b.md", b"new"),
        make_operation(tmp_path, "c.md", b"new"),
        make_operation(tmp_path, "s.md", b"x", category="settings"),
    )

    summaries = summarize_categories(operations)

    assert summaries == (
        CategorySummary(category="commands", total=3, existing=2, identical=1),
        CategorySummary(category="settings", total=1, existing=0, identical=0),
    )
    assert summaries[0].conflicting == 1
    assert summaries[0].new == 1


def test_summarize_keeps_first_seen_order(tmp_path: Path) -> None:
    operations = (
        make_operation(tmp_path, "m.md", b"x", category="project-memory"),
        make_operation(tmp_path, "a.md", b"x", category="commands"),
        make_operation(tmp_path, "n.md", b"x", category="project-memory"),
    )

    assert [s.category for s in summarize_categories(operations)] == ["project-memory", "commands"]


def test_summarize_invariants_hold(tmp_path: Path) -> None:
    write_file(tmp_path, "a.md", b"x")
    summaries = summarize_categories(
        (make_operation(tmp_path, "a.md", b"x"), make_operation(tmp_path, "b.md", b"x"))
    )

    for summary in summaries:
        assert 0 <= summary.identical <= summary.existing <= summary.total


SUMMARIES = (
    CategorySummary(category="commands", total=3, existing=2, identical=0),
    CategorySummary(category="settings", total=2, existing=2, identical=2),
    CategorySummary(category="project-memory", total=1, existing=0, identical=0),
)


@pytest.mark.parametrize("overwrite", ["force", "skip"])
def test_force_and_skip_apply_to_every_category(overwrite: str) -> None:
    resolution = determine_category_policies(SUMMARIES, overwrite, interactive=True)  # type: ignore[arg-type]

    assert resolution.policies == {
        "commands": overwrite,
        "settings": overwrite,
        "project-memory": overwrite,
    }
    assert resolution.warnings == ()


def test_prompt_only_where_conflicts_exist() -> None:
    resolution = determine_category_policies(SUMMARIES, "prompt", interactive=True)

    assert resolution.policies == {
        "commands": "prompt",
        "settings": "skip",
        "project-memory": "skip",
    }
    assert resolution.warnings == ()


def test_prompt_without_terminal_degrades_to_skip() -> None:
    resolution = determine_category_policies(SUMMARIES, "prompt", interactive=False)

    assert set(resolution.policies.values()) == {"skip"}
    assert len(resolution.warnings) == 1
    assert resolution.warnings[0].startswith("commands: 2 existing file(s) differ")


def test_unreadable_targets_are_not_conflicts() -> None:
    summary = CategorySummary(category="project-memory", total=2, existing=2, identical=0, failed=1)

    resolution = determine_category_policies((summary,), "prompt", interactive=True)

    assert summary.conflicting == 1
    assert resolution.policies == {"project-memory": "prompt"}


def test_category_with_only_unreadable_targets_is_not_prompted() -> None:
    summary = CategorySummary(category="project-memory", total=1, existing=1, identical=0, failed=1)

    resolution = determine_category_policies((summary,), "prompt", interactive=False)

    assert resolution.policies == {"project-memory": "skip"}
    assert resolution.warnings == ()
